"""Unit tests for DirectoryStore."""

import threading

import pytest

from college_erp.directory import SEED_STUDENT_ID, DirectoryStore, Role
from college_erp.enrollment import enroll
from college_erp.exceptions import CapacityReachedError, CourseNotFoundError
from college_erp.identity import create_account


@pytest.mark.unit
class TestDirectoryStore:
    def test_defaults_to_seed(self) -> None:
        assert SEED_STUDENT_ID in DirectoryStore().snapshot().students

    def test_apply_commits(self, store: DirectoryStore) -> None:
        updated = store.apply(lambda d: enroll(d, SEED_STUDENT_ID, "HS103"))

        assert store.snapshot() is updated
        assert SEED_STUDENT_ID in store.snapshot().courses["HS103"].enrolled

    def test_failed_transition_commits_nothing(self, store: DirectoryStore) -> None:
        before = store.snapshot()

        with pytest.raises(CourseNotFoundError):
            store.apply(lambda d: enroll(d, SEED_STUDENT_ID, "XX999"))

        assert store.snapshot() is before

    def test_apply_with_result(self, store: DirectoryStore) -> None:
        result = store.apply_with_result(lambda d: (d, "done"))
        assert result == "done"

    def test_commit_replaces(self, store: DirectoryStore) -> None:
        other = DirectoryStore().snapshot()
        store.commit(other)
        assert store.snapshot() is other

    def test_concurrent_transitions_serialize(self, store: DirectoryStore) -> None:
        """Threads racing to fill HS103 never exceed its capacity."""
        ids = []
        for i in range(60):
            ids.append(
                store.apply_with_result(
                    lambda d, i=i: create_account(
                        d, name="S", email=f"t{i}@college.edu", credential="pw", role=Role.STUDENT
                    )
                ).id
            )

        def worker(student_id: str) -> None:
            try:
                store.apply(lambda d: enroll(d, student_id, "HS103"))
            except CapacityReachedError:
                pass

        threads = [threading.Thread(target=worker, args=(sid,)) for sid in ids]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store.snapshot().courses["HS103"].enrolled) == 50
