"""
User-specific project endpoints.

Projects are linked to the authenticated user; every lookup is scoped to the
session's user id.
"""
import logging
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from planvision.api.deps import get_project_service
from planvision.models.schemas import CreateProjectRequest, ProjectResponse, UpdateProjectRequest, UserSession
from planvision.services.auth import require_session
from planvision.services.projects import ProjectService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", dependencies=[Depends(require_session)])


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: CreateProjectRequest,
    session: UserSession = Depends(require_session),
    service: ProjectService = Depends(get_project_service),
):
    """
    Create a new project for the authenticated user.

    **Authentication Required:** Bearer token in Authorization header

    Raises:
        HTTPException 401: If no session is attached
        HTTPException 500: If database operation fails
    """
    try:
        logger.info(f"🔐 User {session.user.id[:8]}... creating project '{body.name}'")
        return service.create_owned(body.to_row(), session)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error creating project: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to create project: {str(e)}")


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    session: UserSession = Depends(require_session),
    service: ProjectService = Depends(get_project_service),
):
    """
    Get all projects for the authenticated user, newest first.

    **Authentication Required:** Bearer token in Authorization header
    """
    try:
        projects = service.find_all_owned(session)
        logger.info(f"✅ Retrieved {len(projects)} projects for user {session.user.id[:8]}...")
        return projects
    except Exception as e:
        logger.error(f"❌ Error fetching projects: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch projects: {str(e)}")


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    session: UserSession = Depends(require_session),
    service: ProjectService = Depends(get_project_service),
):
    """
    Get a single project (only if owned by the authenticated user).

    Raises:
        HTTPException 404: If project not found or not owned by user
    """
    return service.find_one_owned(str(project_id), session)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    body: UpdateProjectRequest,
    session: UserSession = Depends(require_session),
    service: ProjectService = Depends(get_project_service),
):
    try:
        return service.update_owned(str(project_id), body.to_patch(), session)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error updating project: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to update project: {str(e)}")


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    session: UserSession = Depends(require_session),
    service: ProjectService = Depends(get_project_service),
):
    """
    Delete a project (only if owned by the authenticated user).

    Raises:
        HTTPException 404: If project not found or not owned by user
    """
    try:
        service.remove_owned(str(project_id), session)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error deleting project: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete project: {str(e)}")
