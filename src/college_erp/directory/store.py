"""DirectoryStore - owner of the current Directory aggregate."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, TypeVar

from college_erp.directory.seed import seed_directory

if TYPE_CHECKING:
    from collections.abc import Callable

    from college_erp.directory.models import Directory

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DirectoryStore:
    """Holds the single authoritative Directory for a running client.

    Components never mutate the aggregate; they compute a new Directory from
    ``snapshot()`` and hand it back through ``apply`` or ``commit``. A lock
    serializes transitions so a multi-threaded host still has one writer.
    """

    def __init__(self, directory: Directory | None = None) -> None:
        """Initialize the store.

        Args:
            directory: Initial aggregate. Defaults to the seed dataset.
        """
        self._directory = directory if directory is not None else seed_directory()
        self._lock = threading.Lock()

    def snapshot(self) -> Directory:
        """Return the current aggregate."""
        with self._lock:
            return self._directory

    def commit(self, directory: Directory) -> Directory:
        """Replace the current aggregate with a new one."""
        with self._lock:
            self._directory = directory
        return directory

    def apply(self, transition: Callable[[Directory], Directory]) -> Directory:
        """Run a transition against the current aggregate and commit its result.

        If the transition raises, nothing is committed.

        Args:
            transition: Pure function from the current Directory to a new one

        Returns:
            The committed Directory
        """
        with self._lock:
            updated = transition(self._directory)
            self._directory = updated
        logger.debug(
            "Committed directory (accounts=%d, courses=%d)",
            len(updated.accounts),
            len(updated.courses),
        )
        return updated

    def apply_with_result(self, transition: Callable[[Directory], tuple[Directory, T]]) -> T:
        """Like ``apply`` for transitions that also produce a record.

        Args:
            transition: Pure function returning ``(new_directory, result)``

        Returns:
            The transition's result; the new Directory is committed
        """
        with self._lock:
            updated, result = transition(self._directory)
            self._directory = updated
        return result
