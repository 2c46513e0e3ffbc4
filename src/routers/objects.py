"""Objects router for image uploads and serving uploaded objects."""

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from src.dependencies import get_object_storage
from src.object_storage import ObjectNotFoundError, ObjectStorageService
from src.schemas import UploadURLResponse

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Objects"])


# POST /api/objects/upload
@router.post("/api/objects/upload", response_model=UploadURLResponse)
def get_upload_url(object_storage: ObjectStorageService = Depends(get_object_storage)):
    """
    Issue a presigned URL the browser can PUT an image to.

    Returns:
        UploadURLResponse: The upload URL
    """
    try:
        upload_url = object_storage.get_object_entity_upload_url()
    except Exception as e:
        logger.error(f"Error issuing upload URL: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to issue upload URL"
        )

    return UploadURLResponse(upload_url=upload_url)


# GET /objects/{object_path}
@router.get("/objects/{object_path:path}")
def serve_object(object_path: str, object_storage: ObjectStorageService = Depends(get_object_storage)):
    """
    Stream a previously uploaded object.

    Args:
        object_path: Path below /objects/
        object_storage: Object storage adapter

    Returns:
        StreamingResponse: Object bytes

    Raises:
        HTTPException: If the object is missing or not accessible
    """
    full_path = f"/objects/{object_path}"
    logger.info(f"Object request: {full_path}")

    try:
        object_file = object_storage.get_object_entity_file(full_path)
        return object_storage.download_object(object_file)
    except ObjectNotFoundError:
        logger.warning(f"Object not found: {full_path}")
    except Exception as e:
        logger.error(f"Error accessing object {full_path}: {e}", exc_info=True)

    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Object not found"
    )
