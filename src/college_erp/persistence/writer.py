"""Fire-and-forget background writer for the SnapshotRepository."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

if TYPE_CHECKING:
    from collections.abc import Callable

    from college_erp.directory.models import Directory
    from college_erp.persistence.repository import SnapshotRepository

logger = logging.getLogger(__name__)


class SnapshotWriter:
    """Queues saves on a single background thread.

    Callers never wait for a save. Saves run in submission order; a failed
    save is logged and dropped, with no retry.
    """

    def __init__(self, repository: SnapshotRepository) -> None:
        self._repository = repository
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="college-erp-save")
        self._last: Future[None] | None = None
        self._lock = threading.Lock()

    def save(self, directory: Directory) -> None:
        """Queue a save of the aggregate."""
        self._submit(self._repository.save, directory)

    def save_session(self, account_id: str | None) -> None:
        """Queue a save of the session slot."""
        self._submit(self._repository.save_session, account_id)

    def _submit(self, fn: Callable[..., None], *args: object) -> None:
        with self._lock:
            self._last = self._executor.submit(self._run, fn, *args)

    @staticmethod
    def _run(fn: Callable[..., None], *args: object) -> None:
        try:
            fn(*args)
        except (SQLAlchemyError, ValidationError):
            logger.exception("Background save failed; in-memory state kept")

    def flush(self) -> None:
        """Block until every queued save has run."""
        with self._lock:
            last = self._last
        if last is not None:
            last.result()

    def close(self) -> None:
        """Drain queued saves and stop the worker thread."""
        self._executor.shutdown(wait=True)
