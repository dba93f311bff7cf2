"""
Design style endpoints.
"""
import logging
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional

from planvision.api.deps import get_style_service
from planvision.models.schemas import CreateStyleRequest, StyleResponse, UpdateStyleRequest
from planvision.services.styles import StyleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/styles")


@router.post("", response_model=StyleResponse, status_code=status.HTTP_201_CREATED)
async def create_style(body: CreateStyleRequest, service: StyleService = Depends(get_style_service)):
    """Create a new style entry."""
    try:
        return service.create(body.to_row())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error creating style: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to create style: {str(e)}")


@router.get("", response_model=List[StyleResponse])
async def list_styles(
    image_type_id: Optional[UUID] = Query(
        None,
        alias="imageTypeId",
        description="Filter styles by image type and use the contextual thumbnail for that type",
    ),
    service: StyleService = Depends(get_style_service),
):
    """List all styles alphabetically."""
    try:
        return service.find_all(str(image_type_id) if image_type_id else None)
    except Exception as e:
        logger.error(f"❌ Error fetching styles: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch styles: {str(e)}")


@router.get("/{style_id}", response_model=StyleResponse)
async def get_style(style_id: UUID, service: StyleService = Depends(get_style_service)):
    return service.find_one(str(style_id))


@router.patch("/{style_id}", response_model=StyleResponse)
async def update_style(
    style_id: UUID,
    body: UpdateStyleRequest,
    service: StyleService = Depends(get_style_service),
):
    """Update style fields. A given ``imageTypeIds`` replaces the existing links."""
    try:
        return service.update(str(style_id), body.to_patch())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error updating style: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to update style: {str(e)}")


@router.delete("/{style_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_style(style_id: UUID, service: StyleService = Depends(get_style_service)):
    try:
        service.remove(str(style_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error deleting style: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete style: {str(e)}")
