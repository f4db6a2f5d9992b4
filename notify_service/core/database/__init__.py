"""Core database package: declarative base, mixins and a thin repository.

Base Classes and Mixins:
    - Base: declarative base with constraint naming convention
    - UUIDv7PKMixin: time-sortable UUID primary key
    - CreatedAtMixin, TimestampMixin: created_at / updated_at tracking
    - UUIDv7TimestampedBase: UUID v7 PK + timestamps

Repository:
    - BaseRepository[T]: generic CRUD with explicit session passing
"""

from notify_service.core.database.base import (
    NAMING_CONVENTION,
    Base,
    CreatedAtMixin,
    TimestampMixin,
    UUIDv7PKMixin,
    UUIDv7TimestampedBase,
    generate_uuid7,
)
from notify_service.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDv7PKMixin",
    "UUIDv7TimestampedBase",
    "generate_uuid7",
]
