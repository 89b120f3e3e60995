"""Directory administration - admin-only roster operations.

These functions build records and delegate enrollment and fines to the
Enrollment Engine and Financial Ledger instead of re-implementing them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from college_erp.directory.models import (
    CourseRecord,
    FacultyRecord,
    Role,
    ScheduleSlot,
    StudentRecord,
    generate_id,
)
from college_erp.enrollment import enroll
from college_erp.exceptions import DuplicateCourseCodeError, InvalidCapacityError
from college_erp.identity import create_account
from college_erp.ledger import COURSE_FEE, apply_fine, coerce_balance, whole_number

if TYPE_CHECKING:
    from collections.abc import Iterable

    from college_erp.directory.models import Directory

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 30
DEFAULT_PASSWORD = "welcome123"
SCHEDULE_DELIMITER = "|"
PLACEHOLDER_SLOT = ScheduleSlot(day="TBD", time="TBD", room="TBD")


@dataclass(frozen=True)
class StudentProfile:
    """Admin "add student" form."""

    name: str
    email: str
    program: str = ""
    year: str = "1"
    credential: str = ""
    fees_due: int | str | None = 0


def parse_schedule(lines: str | Iterable[str]) -> tuple[ScheduleSlot, ...]:
    """Parse ``day | time | room`` lines into schedule slots.

    Blank lines are skipped and missing fields become ``Day``, ``Time`` or
    ``Room``. A course always meets at least once, so an empty result
    becomes a single TBD slot.
    """
    if isinstance(lines, str):
        lines = lines.split("\n")

    slots = []
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        parts = [p.strip() for p in line.split(SCHEDULE_DELIMITER)] + ["", "", ""]
        slots.append(
            ScheduleSlot(day=parts[0] or "Day", time=parts[1] or "Time", room=parts[2] or "Room")
        )
    return tuple(slots) or (PLACEHOLDER_SLOT,)


def _coerce_capacity(capacity: int | str | None, default: int) -> int:
    if capacity is None or (isinstance(capacity, str) and not capacity.strip()):
        return default
    seats = whole_number(capacity)
    if seats is None:
        raise InvalidCapacityError(f"Capacity {capacity!r} is not a whole number")
    if seats < 1:
        raise InvalidCapacityError(f"Capacity must be at least 1, got {seats}")
    return seats


def create_faculty(
    directory: Directory, name: str, department: str, email: str
) -> tuple[Directory, FacultyRecord]:
    """Add a faculty member. Always succeeds."""
    member = FacultyRecord(id=generate_id("fac"), name=name, department=department, email=email)
    logger.info("Created faculty %s (%s)", member.id, department)
    return directory.with_faculty(member), member


def create_course(
    directory: Directory,
    code: str,
    title: str,
    capacity: int | str | None = None,
    faculty_id: str | None = None,
    schedule_lines: str | Iterable[str] = "",
    default_capacity: int = DEFAULT_CAPACITY,
) -> tuple[Directory, CourseRecord]:
    """Create a course. The code doubles as the course ID.

    Args:
        directory: Current aggregate
        code: Unique course code, e.g. "CS101"
        title: Display title
        capacity: Seat limit; blank uses ``default_capacity``
        faculty_id: Assigned faculty; blank means unassigned
        schedule_lines: Raw ``day | time | room`` lines
        default_capacity: Seat limit used when capacity is blank

    Returns:
        Tuple of (new Directory, created CourseRecord)

    Raises:
        DuplicateCourseCodeError: If the code exists, ignoring case
        InvalidCapacityError: If capacity is not a whole number >= 1
        FacultyNotFoundError: If faculty_id doesn't exist
    """
    code = code.strip()
    if any(c.code.lower() == code.lower() for c in directory.courses.values()):
        raise DuplicateCourseCodeError(f"Course with code '{code}' already exists")
    seats = _coerce_capacity(capacity, default_capacity)
    if faculty_id:
        directory.get_faculty(faculty_id)

    course = CourseRecord(
        id=code,
        code=code,
        title=title,
        capacity=seats,
        schedule=parse_schedule(schedule_lines),
        faculty_id=faculty_id or None,
    )
    logger.info("Created course %s (capacity=%d)", code, seats)
    return directory.with_courses(course), course


def create_student(
    directory: Directory,
    profile: StudentProfile,
    default_password: str = DEFAULT_PASSWORD,
) -> tuple[Directory, StudentRecord]:
    """Create a student account and record on an admin's behalf.

    Returns:
        Tuple of (new Directory, created StudentRecord)

    Raises:
        EmailAlreadyExistsError: If the email is taken, ignoring case
        InvalidAmountError: If the opening balance is non-numeric or negative
    """
    fees_due = coerce_balance(profile.fees_due)
    updated, account = create_account(
        directory,
        name=profile.name,
        email=profile.email,
        credential=profile.credential or default_password,
        role=Role.STUDENT,
        program=profile.program,
        year=profile.year,
        fees_due=fees_due,
    )
    return updated, updated.get_student(account.id)


def enroll_student(
    directory: Directory,
    student_id: str,
    course_id: str,
    course_fee: int = COURSE_FEE,
) -> Directory:
    """Enroll any student in any course.

    Raises:
        StudentNotFoundError: If the student doesn't exist
        CourseNotFoundError: If the course doesn't exist
        AlreadyEnrolledError: If the student is already enrolled
        CapacityReachedError: If the course is full
    """
    directory.get_student(student_id)
    directory.get_course(course_id)
    return enroll(directory, student_id, course_id, course_fee)


def fine_student(
    directory: Directory,
    student_id: str,
    amount: object,
    note: str | None = None,
) -> Directory:
    """Fine a student.

    Raises:
        StudentNotFoundError: If the student doesn't exist
        InvalidAmountError: If amount is not a positive whole number
    """
    student = directory.get_student(student_id)
    return directory.with_students(apply_fine(student, amount, note))
