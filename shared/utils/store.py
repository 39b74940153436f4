"""
Record storage abstraction

Services depend on RecordStore only; InMemoryRecordStore is the process-lifetime
backend used in development and tests. A persistent backend implements the
same four async methods (plus delete for resources that support removal).
"""

from abc import ABC, abstractmethod
from typing import Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class RecordStore(ABC, Generic[T]):
    """Keyed collection of records that preserves insertion order"""

    @abstractmethod
    async def list(self) -> List[T]:
        """Return all records in insertion order"""

    @abstractmethod
    async def get(self, record_id: str) -> Optional[T]:
        """Return the record or None"""

    @abstractmethod
    async def insert(self, record_id: str, record: T) -> T:
        """Append a new record; raises KeyError if the id is taken"""

    @abstractmethod
    async def update(self, record_id: str, record: T) -> Optional[T]:
        """Replace an existing record in place; returns None if absent"""

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Remove a record; returns False if absent"""


class InMemoryRecordStore(RecordStore[T]):
    """Dict-backed store; dicts keep insertion order and in-place replacement keeps position"""

    def __init__(self):
        self._records: Dict[str, T] = {}

    async def list(self) -> List[T]:
        return list(self._records.values())

    async def get(self, record_id: str) -> Optional[T]:
        return self._records.get(record_id)

    async def insert(self, record_id: str, record: T) -> T:
        if record_id in self._records:
            raise KeyError(f"Record {record_id} already exists")
        self._records[record_id] = record
        return record

    async def update(self, record_id: str, record: T) -> Optional[T]:
        if record_id not in self._records:
            return None
        self._records[record_id] = record
        return record

    async def delete(self, record_id: str) -> bool:
        return self._records.pop(record_id, None) is not None

    def __len__(self) -> int:
        return len(self._records)
