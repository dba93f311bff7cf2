"""
Storage-agnostic repository interface used by the CRUD services.

A repository wraps one table. Rows are plain dicts keyed by snake_case column
names; ``id`` is the primary key.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any


class RecordNotFoundError(Exception):
    """Raised when an update or delete targets a row that no longer exists."""

    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table} row {record_id} not found")


class Repository(ABC):
    table: str

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def find_many(
        self,
        where: Optional[Dict[str, Any]] = None,
        order_by: str = "id",
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def find_first(self, where: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def update(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Patch a row. Raises RecordNotFoundError if it is gone."""

    @abstractmethod
    def delete(self, record_id: str) -> Dict[str, Any]:
        """Delete a row and return it. Raises RecordNotFoundError if it is gone."""

    def find_unique(self, record_id: str) -> Optional[Dict[str, Any]]:
        return self.find_first({"id": record_id})


class RepositoryFactory(ABC):
    @abstractmethod
    def get(self, table: str) -> Repository:
        ...


class MemoryRepository(Repository):
    """In-process table, used by tests and for running without a database."""

    def __init__(self, table: str):
        self.table = table
        self.rows: Dict[str, Dict[str, Any]] = {}

    @staticmethod
    def _matches(row: Dict[str, Any], where: Dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in where.items())

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        row = dict(data)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self.rows[row["id"]] = row
        return dict(row)

    def find_many(
        self,
        where: Optional[Dict[str, Any]] = None,
        order_by: str = "id",
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        rows = [dict(r) for r in self.rows.values() if self._matches(r, where or {})]
        # NULLs last ascending, first descending (Postgres default)
        rows.sort(key=lambda r: (r.get(order_by) is None, r.get(order_by) or ""), reverse=descending)
        return rows

    def find_first(self, where: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for row in self.rows.values():
            if self._matches(row, where):
                return dict(row)
        return None

    def update(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        if record_id not in self.rows:
            raise RecordNotFoundError(self.table, record_id)
        self.rows[record_id].update(data)
        return dict(self.rows[record_id])

    def delete(self, record_id: str) -> Dict[str, Any]:
        if record_id not in self.rows:
            raise RecordNotFoundError(self.table, record_id)
        return self.rows.pop(record_id)


class MemoryRepositoryFactory(RepositoryFactory):
    def __init__(self):
        self.tables: Dict[str, MemoryRepository] = {}

    def get(self, table: str) -> MemoryRepository:
        if table not in self.tables:
            self.tables[table] = MemoryRepository(table)
        return self.tables[table]
