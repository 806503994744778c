"""
Column types shared by the models.

UTCDateTime stores timezone-aware UTC datetimes. PostgreSQL keeps the
offset itself; SQLite returns naive values, which are read back as UTC so a
record's timestamp serializes the same way before and after a reload.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import TIMESTAMP
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    impl = TIMESTAMP(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
