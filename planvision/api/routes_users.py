"""
Current user profile endpoint.
"""
import logging
from fastapi import APIRouter, Depends

from planvision.api.deps import get_user_service
from planvision.models.schemas import UserResponse, UserSession
from planvision.services.auth import require_session
from planvision.services.users import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")


@router.get("/me", response_model=UserResponse)
async def get_me(
    session: UserSession = Depends(require_session),
    service: UserService = Depends(get_user_service),
):
    """
    Get the current user's profile.

    **Authentication Required:** Bearer token in Authorization header

    Raises:
        HTTPException 401: If no session is attached
        HTTPException 404: If the session has no email or no user row matches it
    """
    logger.info(f"🔐 User {session.user.id[:8]}... fetching profile")
    return service.get_profile_from_session(session)
