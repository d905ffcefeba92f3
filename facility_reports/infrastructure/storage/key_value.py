"""Durable key-value storage holding serialized collections"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Iterator, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session

from facility_reports.domain.models import StorageRecord
from facility_reports.infrastructure.database import get_engine, get_session, init_db


class KeyValueStorage(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Stored value, or None when the key is absent"""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the key; absent keys are ignored"""


class MemoryKeyValueStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqlKeyValueStorage(KeyValueStorage):
    """Key-value pairs in the ``storage_records`` table"""

    def __init__(self, engine: Optional[Engine] = None, create_tables: bool = True):
        self._engine = engine or get_engine()
        if create_tables:
            init_db(self._engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        yield from get_session(self._engine)

    def get(self, key: str) -> Optional[str]:
        with self._session() as session:
            record = session.get(StorageRecord, key)
            return record.value if record is not None else None

    def set(self, key: str, value: str) -> None:
        with self._session() as session:
            record = session.get(StorageRecord, key)
            if record is None:
                record = StorageRecord(key=key, value=value)
            else:
                record.value = value
                record.updated_at = datetime.now(timezone.utc)
            session.add(record)

    def delete(self, key: str) -> None:
        with self._session() as session:
            record = session.get(StorageRecord, key)
            if record is not None:
                session.delete(record)
