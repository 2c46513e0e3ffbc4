"""Admin router for the editor's password gate and content import."""

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from src.auth import verify_admin_password
from src.dependencies import get_admin_password
from src.schemas import AdminVerifyRequest, ImportContentRequest, ImportContentResponse, SuccessResponse

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Admin"])


# POST /api/admin/verify
@router.post("/admin/verify", response_model=SuccessResponse)
def verify_admin(request: AdminVerifyRequest, admin_password: str = Depends(get_admin_password)):
    """
    Check the shared admin password.

    The browser records the result itself; nothing is issued here.

    Args:
        request: Submitted password
        admin_password: Configured secret

    Returns:
        SuccessResponse: On a match

    Raises:
        HTTPException: If the password does not match
    """
    if not verify_admin_password(request.password, admin_password):
        logger.warning("Admin verification failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password"
        )

    logger.info("Admin verification succeeded")
    return SuccessResponse()


# POST /api/import-content
@router.post("/import-content", response_model=ImportContentResponse)
def import_content(request: ImportContentRequest):
    """
    Acknowledge a content import request.

    Importing is not implemented; the URL is echoed back.

    Raises:
        HTTPException: If no URL was supplied
    """
    if not request.url:
        logger.warning("Content import requested without a URL")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Valid URL is required"
        )

    logger.info(f"Content import requested for {request.url}")
    return ImportContentResponse(
        message="Content import functionality would be implemented here",
        url=request.url,
    )
