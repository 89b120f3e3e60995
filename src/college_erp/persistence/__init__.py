"""Persistence - SQLite key-value storage for the Directory aggregate."""

from college_erp.persistence.database import Database
from college_erp.persistence.models import KeyValueEntry
from college_erp.persistence.repository import SESSION_KEY, STORAGE_KEY, SnapshotRepository
from college_erp.persistence.schemas import DirectorySnapshot
from college_erp.persistence.writer import SnapshotWriter

__all__ = [
    "SESSION_KEY",
    "STORAGE_KEY",
    "Database",
    "DirectorySnapshot",
    "KeyValueEntry",
    "SnapshotRepository",
    "SnapshotWriter",
]
