"""
Supabase client wrapper and the Postgres-backed repository implementation.
"""
import os
import logging
from typing import Optional, List, Dict, Any
from supabase import create_client, Client
from postgrest.exceptions import APIError

from planvision.services.repository import Repository, RepositoryFactory, RecordNotFoundError

logger = logging.getLogger(__name__)

# PostgREST code for "no rows" on single-row queries
NO_ROWS_CODE = "PGRST116"


class SupabaseRepository(Repository):
    """Repository for one table, backed by the Supabase query builder."""

    def __init__(self, client: Client, table: str):
        self.client = client
        self.table = table

    def _query(self):
        return self.client.table(self.table)

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        res = self._query().insert(data).execute()
        if not res.data:
            raise Exception(f"No data returned from insert into {self.table}")
        return res.data[0]

    def find_many(
        self,
        where: Optional[Dict[str, Any]] = None,
        order_by: str = "id",
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        query = self._query().select("*")
        for column, value in (where or {}).items():
            query = query.eq(column, value)
        res = query.order(order_by, desc=descending).execute()
        return res.data if res.data else []

    def find_first(self, where: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        query = self._query().select("*")
        for column, value in where.items():
            query = query.eq(column, value)
        res = query.limit(1).execute()
        return res.data[0] if res.data else None

    def update(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            res = self._query().update(data).eq("id", record_id).execute()
        except APIError as e:
            if e.code == NO_ROWS_CODE:
                raise RecordNotFoundError(self.table, record_id) from e
            raise
        if not res.data:
            raise RecordNotFoundError(self.table, record_id)
        return res.data[0]

    def delete(self, record_id: str) -> Dict[str, Any]:
        try:
            res = self._query().delete().eq("id", record_id).execute()
        except APIError as e:
            if e.code == NO_ROWS_CODE:
                raise RecordNotFoundError(self.table, record_id) from e
            raise
        if not res.data:
            raise RecordNotFoundError(self.table, record_id)
        return res.data[0]


class SupabaseRepositoryFactory(RepositoryFactory):
    """Hands out table repositories sharing one lazily created client."""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    def get(self, table: str) -> Repository:
        return SupabaseRepository(self.client, table)


# Singleton instance
_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client instance for direct database access."""
    global _supabase_client
    if _supabase_client is None:
        url = os.getenv("SUPABASE_URL")
        key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        logger.info("Creating Supabase client")
        _supabase_client = create_client(url, key)
    return _supabase_client
