"""SQL persistence for the JurisBinder record store."""

from .base import Base, create_db_engine, get_database_url, init_database
from .models import CaseModel, DocumentModel, TraceEventModel
from .store import SqlRecordStore

__all__ = [
    "Base",
    "CaseModel",
    "DocumentModel",
    "SqlRecordStore",
    "TraceEventModel",
    "create_db_engine",
    "get_database_url",
    "init_database",
]
