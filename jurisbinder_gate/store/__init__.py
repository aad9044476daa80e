"""Record storage for cases, documents and trace events."""
from __future__ import annotations

from typing import Optional

from ..config import Settings, get_settings
from .base import RecordStore
from .memory import InMemoryRecordStore


def create_record_store(settings: Optional[Settings] = None) -> RecordStore:
    """Factory function to create the configured RecordStore.

    Args:
        settings: Application settings (defaults to the global settings)

    Returns:
        RecordStore for STORE_BACKEND ("memory" or "sql")

    Raises:
        ValueError: If the backend is not supported
    """
    settings = settings or get_settings()

    if settings.store_backend == "memory":
        return InMemoryRecordStore()

    elif settings.store_backend == "sql":
        from ..db.store import SqlRecordStore

        return SqlRecordStore.from_url(settings.database_url)

    else:
        raise ValueError(
            f"Unsupported store backend: {settings.store_backend}. "
            f"Supported: memory, sql"
        )


__all__ = ["InMemoryRecordStore", "RecordStore", "create_record_store"]
