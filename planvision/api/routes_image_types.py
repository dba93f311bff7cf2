"""
Image type catalogue endpoints.

Image types are shared reference data (admin use); no session is required.
"""
import logging
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from planvision.api.deps import get_image_type_service
from planvision.models.schemas import CreateImageTypeRequest, ImageTypeResponse, UpdateImageTypeRequest
from planvision.services.image_types import ImageTypeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/image-types")


@router.post("", response_model=ImageTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_image_type(
    body: CreateImageTypeRequest,
    service: ImageTypeService = Depends(get_image_type_service),
):
    """Create a new image type (admin use)."""
    try:
        return service.create(body.to_row())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error creating image type: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to create image type: {str(e)}")


@router.get("", response_model=List[ImageTypeResponse])
async def list_image_types(service: ImageTypeService = Depends(get_image_type_service)):
    """List all image types ordered by id."""
    try:
        return service.find_all()
    except Exception as e:
        logger.error(f"❌ Error fetching image types: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch image types: {str(e)}")


@router.get("/{image_type_id}", response_model=ImageTypeResponse)
async def get_image_type(
    image_type_id: UUID,
    service: ImageTypeService = Depends(get_image_type_service),
):
    """
    Get a single image type by ID.

    Raises:
        HTTPException 404: If the image type does not exist
    """
    return service.find_one(str(image_type_id))


@router.patch("/{image_type_id}", response_model=ImageTypeResponse)
async def update_image_type(
    image_type_id: UUID,
    body: UpdateImageTypeRequest,
    service: ImageTypeService = Depends(get_image_type_service),
):
    """Update label/value/description."""
    try:
        return service.update(str(image_type_id), body.to_patch())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error updating image type: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to update image type: {str(e)}")


@router.delete("/{image_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_image_type(
    image_type_id: UUID,
    service: ImageTypeService = Depends(get_image_type_service),
):
    """Delete an image type."""
    try:
        service.remove(str(image_type_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error deleting image type: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete image type: {str(e)}")
