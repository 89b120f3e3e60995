"""Pydantic schema for the persisted aggregate document."""

from datetime import date
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from college_erp.directory.models import (
    Account,
    CourseRecord,
    Directory,
    FacultyRecord,
    PaymentEntry,
    PaymentMethod,
    Role,
    ScheduleSlot,
    StudentRecord,
    normalize_email,
)


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")


class AccountSchema(_Record):
    id: str = Field(..., min_length=1)
    name: str
    email: str
    credential: str
    role: Role


class PaymentSchema(_Record):
    amount: int = Field(..., gt=0)
    date: date
    method: PaymentMethod


class StudentSchema(_Record):
    id: str = Field(..., min_length=1)
    program: str
    year: str
    fees_due: int = Field(..., ge=0)
    course_ids: list[str] = Field(default_factory=list)
    payments: list[PaymentSchema] = Field(default_factory=list)


class FacultySchema(_Record):
    id: str = Field(..., min_length=1)
    name: str
    department: str
    email: str


class ScheduleSlotSchema(_Record):
    day: str
    time: str
    room: str


class CourseSchema(_Record):
    id: str = Field(..., min_length=1)
    code: str
    title: str
    faculty_id: str | None = None
    capacity: int = Field(..., ge=1)
    schedule: list[ScheduleSlotSchema] = Field(..., min_length=1)
    enrolled: list[str] = Field(default_factory=list)


def _check_unique(kind: str, values: list[str]) -> None:
    seen: set[str] = set()
    for value in values:
        if value in seen:
            raise ValueError(f"Duplicate {kind} '{value}'")
        seen.add(value)


class DirectorySnapshot(BaseModel):
    """The whole aggregate as one structured document.

    Validation rejects documents that break the aggregate's invariants, so a
    damaged save is treated like a missing one.
    """

    accounts: list[AccountSchema]
    students: list[StudentSchema]
    faculty: list[FacultySchema]
    courses: list[CourseSchema]

    @model_validator(mode="after")
    def check_consistency(self) -> Self:
        for kind, records in (
            ("account", self.accounts),
            ("student", self.students),
            ("faculty", self.faculty),
            ("course", self.courses),
        ):
            _check_unique(kind, [r.id for r in records])
        _check_unique("email", [normalize_email(a.email) for a in self.accounts])

        student_ids = {s.id for s in self.students}
        account_ids = {a.id for a in self.accounts}
        if not student_ids <= account_ids:
            raise ValueError("Student record without a matching account")
        for account in self.accounts:
            if account.role is Role.STUDENT and account.id not in student_ids:
                raise ValueError(f"Student account '{account.id}' has no student record")

        course_ids = {c.id for c in self.courses}
        roster_pairs = set()
        for course in self.courses:
            if course.id != course.code:
                raise ValueError(f"Course id '{course.id}' differs from its code '{course.code}'")
            if len(set(course.enrolled)) > course.capacity:
                raise ValueError(f"Course '{course.id}' is over capacity")
            roster_pairs.update((sid, course.id) for sid in course.enrolled)

        student_pairs = set()
        for student in self.students:
            if not set(student.course_ids) <= course_ids:
                raise ValueError(f"Student '{student.id}' references an unknown course")
            student_pairs.update((student.id, cid) for cid in student.course_ids)

        if roster_pairs != student_pairs:
            raise ValueError("Course rosters and student enrollments disagree")
        return self

    @classmethod
    def from_directory(cls, directory: Directory) -> Self:
        """Serialize an aggregate."""
        return cls(
            accounts=[AccountSchema.model_validate(a) for a in directory.accounts.values()],
            students=[
                StudentSchema(
                    id=s.id,
                    program=s.program,
                    year=s.year,
                    fees_due=s.fees_due,
                    course_ids=sorted(s.course_ids),
                    payments=[PaymentSchema.model_validate(p) for p in s.payments],
                )
                for s in directory.students.values()
            ],
            faculty=[FacultySchema.model_validate(f) for f in directory.faculty.values()],
            courses=[
                CourseSchema(
                    id=c.id,
                    code=c.code,
                    title=c.title,
                    faculty_id=c.faculty_id,
                    capacity=c.capacity,
                    schedule=[ScheduleSlotSchema.model_validate(slot) for slot in c.schedule],
                    enrolled=sorted(c.enrolled),
                )
                for c in directory.courses.values()
            ],
        )

    def to_directory(self) -> Directory:
        """Rebuild the aggregate."""
        return (
            Directory()
            .with_accounts(*(Account(**a.model_dump()) for a in self.accounts))
            .with_students(
                *(
                    StudentRecord(
                        id=s.id,
                        program=s.program,
                        year=s.year,
                        fees_due=s.fees_due,
                        course_ids=frozenset(s.course_ids),
                        payments=tuple(PaymentEntry(**p.model_dump()) for p in s.payments),
                    )
                    for s in self.students
                )
            )
            .with_faculty(*(FacultyRecord(**f.model_dump()) for f in self.faculty))
            .with_courses(
                *(
                    CourseRecord(
                        id=c.id,
                        code=c.code,
                        title=c.title,
                        faculty_id=c.faculty_id,
                        capacity=c.capacity,
                        schedule=tuple(ScheduleSlot(**slot.model_dump()) for slot in c.schedule),
                        enrolled=frozenset(c.enrolled),
                    )
                    for c in self.courses
                )
            )
        )
