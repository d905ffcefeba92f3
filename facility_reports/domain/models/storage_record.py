"""Storage record - one durable key/value pair"""
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageRecord(SQLModel, table=True):
    __tablename__ = "storage_records"

    key: str = Field(primary_key=True, max_length=128)
    value: str
    updated_at: datetime = Field(default_factory=_utcnow)
