"""
Project template endpoints for the home screen.
"""
import logging
from uuid import UUID
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from typing import List, Optional

from planvision.api.deps import get_project_template_service, get_storage
from planvision.models.schemas import CreateProjectTemplateRequest, ProjectTemplateResponse, UrlResponse
from planvision.services.project_templates import ProjectTemplateService
from planvision.services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/project-templates")


@router.post("", response_model=ProjectTemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_project_template(
    body: CreateProjectTemplateRequest,
    service: ProjectTemplateService = Depends(get_project_template_service),
):
    try:
        return service.create(body.to_row())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error creating project template: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to create project template: {str(e)}")


@router.get("", response_model=List[ProjectTemplateResponse])
async def list_project_templates(service: ProjectTemplateService = Depends(get_project_template_service)):
    """List all templates ordered by id."""
    try:
        return service.find_all()
    except Exception as e:
        logger.error(f"❌ Error fetching project templates: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch project templates: {str(e)}")


@router.post("/upload", response_model=UrlResponse, status_code=status.HTTP_201_CREATED)
async def upload_template_asset(
    file: Optional[UploadFile] = File(None, description="Template image to upload"),
    service: ProjectTemplateService = Depends(get_project_template_service),
    storage: StorageService = Depends(get_storage),
):
    """Upload a template image and return its public URL."""
    if file is None:
        raise HTTPException(status_code=400, detail="File upload missing")
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed")

    try:
        file_bytes = await file.read()
        return service.upload_asset(storage, file.filename or "template", file_bytes, file.content_type)
    except Exception as e:
        logger.error(f"❌ Template asset upload error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Upload failed: {str(e)}")


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project_template(
    template_id: UUID,
    service: ProjectTemplateService = Depends(get_project_template_service),
):
    try:
        service.remove(str(template_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error deleting project template: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete project template: {str(e)}")
