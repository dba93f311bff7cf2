"""
Input image endpoints: register a URL or upload a file to Cloud Storage.
"""
import logging
from uuid import UUID
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from typing import List, Optional

from planvision.api.deps import get_input_image_service, get_storage
from planvision.models.schemas import CreateInputImageRequest, InputImageResponse, UrlResponse, UserSession
from planvision.services.auth import require_session
from planvision.services.input_images import InputImageService
from planvision.services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/input-images", dependencies=[Depends(require_session)])


@router.post("", response_model=InputImageResponse, status_code=status.HTTP_201_CREATED)
async def register_input_image(
    body: CreateInputImageRequest,
    session: UserSession = Depends(require_session),
    service: InputImageService = Depends(get_input_image_service),
):
    """
    Register an already uploaded image URL for the current user.

    **Authentication Required:** Bearer token in Authorization header
    """
    try:
        return service.create_owned(body.to_row(), session)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error registering input image: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to register input image: {str(e)}")


@router.post("/upload", response_model=InputImageResponse, status_code=status.HTTP_201_CREATED)
async def upload_input_image(
    file: Optional[UploadFile] = File(None, description="Image file to upload"),
    session: UserSession = Depends(require_session),
    service: InputImageService = Depends(get_input_image_service),
    storage: StorageService = Depends(get_storage),
):
    """
    Upload a file to Google Cloud Storage and register it.

    **Authentication Required:** Bearer token in Authorization header

    Raises:
        HTTPException 400: If the file part is missing
        HTTPException 500: If the upload or insert fails
    """
    if file is None:
        raise HTTPException(status_code=400, detail="File upload missing")

    try:
        logger.info(f"🔐 User {session.user.id[:8]}... uploading '{file.filename}'")
        file_bytes = await file.read()
        return service.create_from_upload(
            storage,
            file.filename or "upload",
            file_bytes,
            file.content_type or "application/octet-stream",
            session,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Upload error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Upload failed: {str(e)}")


@router.get("/{image_id}/url", response_model=UrlResponse)
async def get_signed_url(
    image_id: UUID,
    session: UserSession = Depends(require_session),
    service: InputImageService = Depends(get_input_image_service),
    storage: StorageService = Depends(get_storage),
):
    """Generate a signed URL for downloading the image."""
    try:
        return UrlResponse(url=service.get_signed_url(storage, str(image_id), session))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error signing URL: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to sign URL: {str(e)}")


@router.get("", response_model=List[InputImageResponse])
async def list_input_images(
    session: UserSession = Depends(require_session),
    service: InputImageService = Depends(get_input_image_service),
):
    """List input images for the current user, newest first."""
    try:
        return service.find_all_owned(session)
    except Exception as e:
        logger.error(f"❌ Error fetching input images: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch input images: {str(e)}")


@router.get("/{image_id}", response_model=InputImageResponse)
async def get_input_image(
    image_id: UUID,
    session: UserSession = Depends(require_session),
    service: InputImageService = Depends(get_input_image_service),
):
    return service.find_one_owned(str(image_id), session)


@router.delete("/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_input_image(
    image_id: UUID,
    session: UserSession = Depends(require_session),
    service: InputImageService = Depends(get_input_image_service),
):
    """Delete an uploaded image record. The stored object is left in the bucket."""
    try:
        service.remove_owned(str(image_id), session)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error deleting input image: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete input image: {str(e)}")
