"""Read-only views derived from the Directory on every call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from college_erp.directory.models import Role

if TYPE_CHECKING:
    from college_erp.directory.models import (
        Account,
        CourseRecord,
        Directory,
        FacultyRecord,
        StudentRecord,
    )


@dataclass(frozen=True)
class TimetableEntry:
    """A schedule slot labelled with its course."""

    day: str
    time: str
    room: str
    course_title: str
    course_code: str


@dataclass(frozen=True)
class RosterSummary:
    """Headline counts for the admin dashboard."""

    students: int
    faculty: int
    courses: int


def student_profile_for(directory: Directory, account: Account | None) -> StudentRecord | None:
    """Return the student record behind an account, or None for admins and unknown ids."""
    if account is None or account.role is not Role.STUDENT:
        return None
    return directory.students.get(account.id)


def student_courses(directory: Directory, student_id: str) -> list[CourseRecord]:
    """Courses the student is enrolled in, in directory order."""
    student = directory.get_student(student_id)
    return [c for c in directory.courses.values() if c.id in student.course_ids]


def available_courses(directory: Directory, student_id: str) -> list[CourseRecord]:
    """Courses the student is not enrolled in, including full ones."""
    student = directory.get_student(student_id)
    return [c for c in directory.courses.values() if c.id not in student.course_ids]


def timetable(directory: Directory, student_id: str) -> list[TimetableEntry]:
    """Flatten the schedules of the student's courses."""
    return [
        TimetableEntry(
            day=slot.day,
            time=slot.time,
            room=slot.room,
            course_title=course.title,
            course_code=course.code,
        )
        for course in student_courses(directory, student_id)
        for slot in course.schedule
    ]


def faculty_for_course(directory: Directory, course: CourseRecord) -> FacultyRecord | None:
    """Assigned faculty member, or None when the course is unassigned."""
    if course.faculty_id is None:
        return None
    return directory.faculty.get(course.faculty_id)


def seats_taken(course: CourseRecord) -> str:
    """Occupancy label, e.g. ``"12/30"``."""
    return f"{len(course.enrolled)}/{course.capacity}"


def roster_summary(directory: Directory) -> RosterSummary:
    return RosterSummary(
        students=len(directory.students),
        faculty=len(directory.faculty),
        courses=len(directory.courses),
    )
