"""
Render config endpoints and generation status polling.
"""
import logging
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List

from planvision.api.deps import get_generation_service, get_render_config_service
from planvision.models.schemas import (
    CreateRenderConfigRequest,
    GenerationStatusResponse,
    RenderConfigResponse,
    UpdateRenderConfigRequest,
    UserSession,
)
from planvision.services.auth import require_session
from planvision.services.generations import GenerationService
from planvision.services.render_configs import RenderConfigService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/render-configs", dependencies=[Depends(require_session)])


@router.post("", response_model=RenderConfigResponse, status_code=status.HTTP_201_CREATED)
async def create_render_config(
    body: CreateRenderConfigRequest,
    session: UserSession = Depends(require_session),
    service: RenderConfigService = Depends(get_render_config_service),
):
    """
    Create a render job with the specified settings.

    **Authentication Required:** Bearer token in Authorization header

    The project must belong to the caller; the input image, image type and
    style (if given) must exist. The render itself is picked up by the
    generation worker.

    Raises:
        HTTPException 404: If any referenced record is missing
    """
    try:
        config = service.create_for_session(body.to_row(), session)
        logger.info(f"🎨 Render config {config['id']} queued for project {config['project_id']}")
        return config
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error creating render config: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to create render config: {str(e)}")


@router.get("/{config_id}/generation", response_model=GenerationStatusResponse)
async def get_generation_status(
    config_id: UUID,
    session: UserSession = Depends(require_session),
    service: RenderConfigService = Depends(get_render_config_service),
    generations: GenerationService = Depends(get_generation_service),
):
    """Get the latest generation status for a config; pending if none exists yet."""
    service.find_one_for_session(str(config_id), session)
    generation = generations.get_latest(str(config_id))
    if not generation:
        return GenerationStatusResponse(id="", status="pending")
    return generation


@router.get("/{config_id}/generations", response_model=List[GenerationStatusResponse])
async def list_generations(
    config_id: UUID,
    session: UserSession = Depends(require_session),
    service: RenderConfigService = Depends(get_render_config_service),
    generations: GenerationService = Depends(get_generation_service),
):
    """Get all generations for a config, newest first."""
    service.find_one_for_session(str(config_id), session)
    return generations.get_history(str(config_id))


@router.get("", response_model=List[RenderConfigResponse])
async def list_render_configs(
    project_id: UUID = Query(..., alias="projectId"),
    session: UserSession = Depends(require_session),
    service: RenderConfigService = Depends(get_render_config_service),
):
    """List render configs for a project."""
    return service.find_all_by_project(str(project_id), session)


@router.get("/{config_id}", response_model=RenderConfigResponse)
async def get_render_config(
    config_id: UUID,
    session: UserSession = Depends(require_session),
    service: RenderConfigService = Depends(get_render_config_service),
):
    return service.find_one_for_session(str(config_id), session)


@router.patch("/{config_id}", response_model=RenderConfigResponse)
async def update_render_config(
    config_id: UUID,
    body: UpdateRenderConfigRequest,
    session: UserSession = Depends(require_session),
    service: RenderConfigService = Depends(get_render_config_service),
):
    """Update metadata, instructions, or parameters."""
    try:
        return service.update_for_session(str(config_id), body.to_patch(), session)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error updating render config: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to update render config: {str(e)}")


@router.delete("/{config_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_render_config(
    config_id: UUID,
    session: UserSession = Depends(require_session),
    service: RenderConfigService = Depends(get_render_config_service),
):
    try:
        service.remove_for_session(str(config_id), session)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error deleting render config: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete render config: {str(e)}")
