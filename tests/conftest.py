"""Shared pytest fixtures and configuration."""

import pytest

from college_erp.directory import Directory, DirectoryStore, seed_directory


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def directory() -> Directory:
    """The seed aggregate."""
    return seed_directory()


@pytest.fixture
def store(directory: Directory) -> DirectoryStore:
    """A store holding the seed aggregate."""
    return DirectoryStore(directory)


def _assert_consistent(directory: Directory) -> None:
    for course in directory.courses.values():
        assert len(course.enrolled) <= course.capacity
        for student_id in course.enrolled:
            assert course.id in directory.students[student_id].course_ids
    for student in directory.students.values():
        assert student.fees_due >= 0
        rostered = {c.id for c in directory.courses.values() if student.id in c.enrolled}
        assert student.course_ids == rostered


@pytest.fixture
def assert_consistent():
    """Assertion helper for the roster, membership and balance invariants."""
    return _assert_consistent
