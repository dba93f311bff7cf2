"""
User profile lookup for the authenticated session.
"""
import logging
from fastapi import HTTPException, status
from typing import Dict, Any

from planvision.models.schemas import UserSession
from planvision.services.repository import RepositoryFactory

logger = logging.getLogger(__name__)


class UserService:
    table = "users"

    def __init__(self, repositories: RepositoryFactory):
        self.repo = repositories.get(self.table)

    def get_profile_from_session(self, session: UserSession) -> Dict[str, Any]:
        email = session.user.email
        if not email:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Session does not include an email address",
            )

        user = self.repo.find_first({"email": email})
        if not user:
            # live session without a row: users table out of sync
            logger.error(f"❌ No user row for session user {session.user.id[:8]}...")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found in database despite active session.",
            )
        return user
