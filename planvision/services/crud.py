"""
Shared create/read/update/delete behaviour for table-backed resources.
"""
import logging
from fastapi import HTTPException, status
from typing import Optional, List, Dict, Any

from planvision.models.schemas import UserSession
from planvision.services.repository import RepositoryFactory, RecordNotFoundError

logger = logging.getLogger(__name__)


class CrudService:
    """
    Existence-checked CRUD over one repository.

    Subclasses set ``table``, ``entity`` (used in log lines) and the listing
    order. ``update`` and ``remove`` check existence first; a row that
    vanishes between the check and the write is reported as the same 404.
    """

    table: str
    entity: str
    order_by: str = "id"
    descending: bool = False

    def __init__(self, repositories: RepositoryFactory):
        self.repositories = repositories
        self.repo = repositories.get(self.table)

    def not_found(self, record_id: str) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{self.entity} {record_id} not found",
        )

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        record = self.repo.create(data)
        logger.info(f"✅ {self.entity} created: ID={record.get('id')}")
        return record

    def find_all(self) -> List[Dict[str, Any]]:
        return self.repo.find_many(order_by=self.order_by, descending=self.descending)

    def find_one(self, record_id: str) -> Dict[str, Any]:
        record = self.repo.find_unique(record_id)
        if not record:
            raise self.not_found(record_id)
        return record

    def update(self, record_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        existing = self.find_one(record_id)
        if not patch:
            return existing
        try:
            return self.repo.update(record_id, patch)
        except RecordNotFoundError:
            logger.warning(f"⚠️  {self.entity} ID={record_id} vanished before update")
            raise self.not_found(record_id)

    def remove(self, record_id: str) -> None:
        self.find_one(record_id)
        try:
            self.repo.delete(record_id)
        except RecordNotFoundError:
            logger.warning(f"⚠️  {self.entity} ID={record_id} vanished before delete")
            raise self.not_found(record_id)
        logger.info(f"✅ {self.entity} ID={record_id} deleted")


class OwnedCrudService(CrudService):
    """CRUD over rows that carry a ``user_id`` owner column."""

    order_by = "created_at"
    descending = True

    def _owned_where(self, session: UserSession, record_id: Optional[str] = None) -> Dict[str, Any]:
        where = {"user_id": session.user.id}
        if record_id is not None:
            where["id"] = record_id
        return where

    def create_owned(self, data: Dict[str, Any], session: UserSession) -> Dict[str, Any]:
        return self.create({**data, "user_id": session.user.id})

    def find_all_owned(self, session: UserSession) -> List[Dict[str, Any]]:
        return self.repo.find_many(
            where=self._owned_where(session),
            order_by=self.order_by,
            descending=self.descending,
        )

    def find_one_owned(self, record_id: str, session: UserSession) -> Dict[str, Any]:
        record = self.repo.find_first(self._owned_where(session, record_id))
        if not record:
            logger.warning(f"⚠️  {self.entity} ID={record_id} not found or not owned by user {session.user.id[:8]}...")
            raise self.not_found(record_id)
        return record

    def update_owned(self, record_id: str, patch: Dict[str, Any], session: UserSession) -> Dict[str, Any]:
        existing = self.find_one_owned(record_id, session)
        if not patch:
            return existing
        try:
            return self.repo.update(record_id, patch)
        except RecordNotFoundError:
            raise self.not_found(record_id)

    def remove_owned(self, record_id: str, session: UserSession) -> None:
        self.find_one_owned(record_id, session)
        try:
            self.repo.delete(record_id)
        except RecordNotFoundError:
            raise self.not_found(record_id)
        logger.info(f"✅ {self.entity} ID={record_id} deleted for user {session.user.id[:8]}...")
