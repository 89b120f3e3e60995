"""SnapshotRepository - load and save the aggregate and the session slot."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from college_erp.directory.seed import seed_directory
from college_erp.persistence.database import Database
from college_erp.persistence.models import KeyValueEntry
from college_erp.persistence.schemas import DirectorySnapshot

if TYPE_CHECKING:
    from college_erp.directory.models import Directory

logger = logging.getLogger(__name__)

STORAGE_KEY = "college-erp-data"
SESSION_KEY = "college-erp-user"


class SnapshotRepository:
    """Key-value persistence for the Directory aggregate.

    The aggregate is stored as one JSON document; the signed-in account ID is
    stored under a separate key.
    """

    def __init__(self, db_path: str = "college_erp.db") -> None:
        """Initialize the repository, creating tables if needed.

        Args:
            db_path: Path to SQLite database file, or ":memory:"
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Raw key-value access ---

    def read(self, key: str) -> str | None:
        """Read a stored value, or None if the key is absent."""
        session = self._db.get_session()
        try:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry is not None else None
        finally:
            session.close()

    def write(self, key: str, value: str) -> None:
        """Insert or replace a stored value."""
        session = self._db.get_session()
        try:
            session.merge(KeyValueEntry(key=key, value=value))
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # --- Aggregate ---

    def load(self) -> Directory:
        """Load the saved aggregate.

        Returns:
            The saved Directory, or the seed dataset when nothing is saved or
            the saved document is unreadable
        """
        raw = self.read(STORAGE_KEY)
        if raw is None:
            logger.info("No saved directory, using seed data")
            return seed_directory()
        try:
            return DirectorySnapshot.model_validate_json(raw).to_directory()
        except ValidationError as e:
            logger.warning("Falling back to seed data: %s", e)
            return seed_directory()

    def save(self, directory: Directory) -> None:
        """Save the aggregate, replacing any previous save."""
        self.write(STORAGE_KEY, DirectorySnapshot.from_directory(directory).model_dump_json())

    # --- Session slot ---

    def load_session(self) -> str | None:
        """Load the saved session's account ID, if any."""
        raw = self.read(SESSION_KEY)
        if raw is None:
            return None
        try:
            account_id = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable session slot")
            return None
        return account_id if isinstance(account_id, str) else None

    def save_session(self, account_id: str | None) -> None:
        """Save the session's account ID; None records a signed-out client."""
        self.write(SESSION_KEY, json.dumps(account_id))
