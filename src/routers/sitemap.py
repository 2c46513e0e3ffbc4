"""Sitemap router."""

import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.dependencies import get_site_url, get_storage
from src.sitemap import build_sitemap
from src.storage import IStorage

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Sitemap"])

XML_MEDIA_TYPE = "application/xml"


# GET /sitemap.xml
@router.get("/sitemap.xml")
def static_sitemap(site_url: str = Depends(get_site_url)):
    """Sitemap of the fixed site pages."""
    try:
        sitemap_xml = build_sitemap(site_url)
    except Exception as e:
        logger.error(f"Failed to generate sitemap: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate sitemap"
        )

    return Response(content=sitemap_xml, media_type=XML_MEDIA_TYPE)


# GET /api/sitemap
@router.get("/api/sitemap")
def dynamic_sitemap(
    site_url: str = Depends(get_site_url),
    storage: IStorage = Depends(get_storage),
):
    """
    Sitemap of the fixed pages plus every published post.

    Returns:
        Response: XML sitemap with one entry per published post

    Raises:
        HTTPException: If generation fails
    """
    try:
        posts = storage.list_posts(published=True)
        sitemap_xml = build_sitemap(site_url, posts)
    except Exception as e:
        logger.error(f"Failed to generate sitemap: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate sitemap"
        )

    logger.info(f"Generated sitemap with {len(posts)} posts")
    return Response(content=sitemap_xml, media_type=XML_MEDIA_TYPE)
