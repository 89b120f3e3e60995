"""Typed records and the Directory aggregate."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import date  # noqa: TC003 - used at runtime in dataclass fields
from enum import StrEnum
from typing import TYPE_CHECKING

from college_erp.exceptions import (
    CourseNotFoundError,
    FacultyNotFoundError,
    StudentNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


class Role(StrEnum):
    """Account role enum."""

    STUDENT = "student"
    ADMIN = "admin"


class PaymentMethod(StrEnum):
    """Accepted payment methods."""

    CARD = "Card"
    UPI = "UPI"
    NETBANKING = "Netbanking"
    CASH = "Cash"


def generate_id(prefix: str) -> str:
    """Generate a new prefixed record ID, e.g. ``stu-1a2b3c4d5e6f``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def normalize_email(email: str) -> str:
    """Trim and lower-case an email for comparison and storage."""
    return email.strip().lower()


@dataclass(frozen=True)
class Account:
    """Login identity. Credentials are opaque and compared for equality only."""

    id: str
    name: str
    email: str
    credential: str
    role: Role

    def __repr__(self) -> str:
        return f"<Account(id={self.id!r}, email={self.email!r}, role={self.role.value!r})>"


@dataclass(frozen=True)
class PaymentEntry:
    """A single recorded payment."""

    amount: int
    date: date
    method: PaymentMethod


@dataclass(frozen=True)
class StudentRecord:
    """Academic and financial record owned by a student account."""

    id: str
    program: str
    year: str
    fees_due: int = 0
    course_ids: frozenset[str] = frozenset()
    payments: tuple[PaymentEntry, ...] = ()


@dataclass(frozen=True)
class FacultyRecord:
    """Faculty member. Immutable once created."""

    id: str
    name: str
    department: str
    email: str


@dataclass(frozen=True)
class ScheduleSlot:
    """One weekly meeting of a course."""

    day: str
    time: str
    room: str


@dataclass(frozen=True)
class CourseRecord:
    """Course offering with a fixed capacity and weekly schedule."""

    id: str
    code: str
    title: str
    capacity: int
    schedule: tuple[ScheduleSlot, ...]
    faculty_id: str | None = None
    enrolled: frozenset[str] = frozenset()

    @property
    def seats_left(self) -> int:
        return self.capacity - len(self.enrolled)

    @property
    def is_full(self) -> bool:
        return len(self.enrolled) >= self.capacity

    def __repr__(self) -> str:
        return (
            f"<CourseRecord(id={self.id!r}, title={self.title!r}, "
            f"enrolled={len(self.enrolled)}/{self.capacity})>"
        )


@dataclass(frozen=True)
class Directory:
    """The aggregate: every account, student, faculty member and course.

    Instances are never mutated. The ``with_*`` helpers return a new
    Directory with the given records inserted or replaced by ID.
    """

    accounts: Mapping[str, Account] = field(default_factory=dict)
    students: Mapping[str, StudentRecord] = field(default_factory=dict)
    faculty: Mapping[str, FacultyRecord] = field(default_factory=dict)
    courses: Mapping[str, CourseRecord] = field(default_factory=dict)

    # --- Lookups ---

    def find_account_by_email(self, email: str) -> Account | None:
        """Find an account by email, ignoring case and surrounding whitespace."""
        wanted = normalize_email(email)
        for account in self.accounts.values():
            if normalize_email(account.email) == wanted:
                return account
        return None

    def get_student(self, student_id: str) -> StudentRecord:
        """Get student record by ID.

        Raises:
            StudentNotFoundError: If the student doesn't exist
        """
        student = self.students.get(student_id)
        if student is None:
            raise StudentNotFoundError(f"Student with id '{student_id}' not found")
        return student

    def get_course(self, course_id: str) -> CourseRecord:
        """Get course by ID.

        Raises:
            CourseNotFoundError: If the course doesn't exist
        """
        course = self.courses.get(course_id)
        if course is None:
            raise CourseNotFoundError(f"Course with id '{course_id}' not found")
        return course

    def get_faculty(self, faculty_id: str) -> FacultyRecord:
        """Get faculty member by ID.

        Raises:
            FacultyNotFoundError: If the faculty member doesn't exist
        """
        member = self.faculty.get(faculty_id)
        if member is None:
            raise FacultyNotFoundError(f"Faculty with id '{faculty_id}' not found")
        return member

    # --- Copy-on-write helpers ---

    def with_accounts(self, *accounts: Account) -> Directory:
        return replace(self, accounts={**self.accounts, **{a.id: a for a in accounts}})

    def with_students(self, *students: StudentRecord) -> Directory:
        return replace(self, students={**self.students, **{s.id: s for s in students}})

    def with_faculty(self, *faculty: FacultyRecord) -> Directory:
        return replace(self, faculty={**self.faculty, **{f.id: f for f in faculty}})

    def with_courses(self, *courses: CourseRecord) -> Directory:
        return replace(self, courses={**self.courses, **{c.id: c for c in courses}})
