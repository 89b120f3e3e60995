"""Unit tests for derived Directory views."""

import pytest

from college_erp.directory import SEED_ADMIN_ID, SEED_STUDENT_ID, Directory
from college_erp.directory.queries import (
    TimetableEntry,
    available_courses,
    faculty_for_course,
    roster_summary,
    seats_taken,
    student_courses,
    student_profile_for,
    timetable,
)
from college_erp.enrollment import enroll


@pytest.mark.unit
class TestStudentViews:
    def test_available_courses(self, directory: Directory) -> None:
        assert [c.id for c in available_courses(directory, SEED_STUDENT_ID)] == ["HS103"]

    def test_student_courses(self, directory: Directory) -> None:
        assert [c.id for c in student_courses(directory, SEED_STUDENT_ID)] == ["CS101", "MA102"]

    def test_timetable_flattens_slots(self, directory: Directory) -> None:
        entries = timetable(directory, SEED_STUDENT_ID)

        assert len(entries) == 3
        assert entries[0] == TimetableEntry(
            day="Mon",
            time="09:00-11:00",
            room="Lab 2",
            course_title="Data Structures",
            course_code="CS101",
        )

    def test_views_recomputed_after_enroll(self, directory: Directory) -> None:
        updated = enroll(directory, SEED_STUDENT_ID, "HS103")

        assert available_courses(updated, SEED_STUDENT_ID) == []
        assert len(timetable(updated, SEED_STUDENT_ID)) == 4

    def test_student_profile_for(self, directory: Directory) -> None:
        student_account = directory.accounts[SEED_STUDENT_ID]
        assert student_profile_for(directory, student_account).id == SEED_STUDENT_ID
        assert student_profile_for(directory, directory.accounts[SEED_ADMIN_ID]) is None
        assert student_profile_for(directory, None) is None


@pytest.mark.unit
class TestCourseViews:
    def test_faculty_for_course(self, directory: Directory) -> None:
        assert faculty_for_course(directory, directory.courses["CS101"]).name == "Dr. Mehta"
        assert faculty_for_course(directory, directory.courses["HS103"]) is None

    def test_seats_taken(self, directory: Directory) -> None:
        assert seats_taken(directory.courses["MA102"]) == "1/40"
        assert seats_taken(directory.courses["HS103"]) == "0/50"

    def test_roster_summary(self, directory: Directory) -> None:
        summary = roster_summary(directory)
        assert (summary.students, summary.faculty, summary.courses) == (1, 2, 3)
