"""Default dataset used when no persisted state exists or it is unreadable."""

from __future__ import annotations

from datetime import date

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
)

SEED_ADMIN_ID = "admin-1"
SEED_STUDENT_ID = "stu-1001"


def seed_directory() -> Directory:
    """Build the seed aggregate.

    One admin, one student enrolled in CS101 and MA102 with 1500 due and a
    prior payment, two faculty, and HS103 left unassigned with an empty roster.
    """
    accounts = [
        Account(
            id=SEED_ADMIN_ID,
            name="Registrar",
            email="admin@college.edu",
            credential="admin123",
            role=Role.ADMIN,
        ),
        Account(
            id=SEED_STUDENT_ID,
            name="Ananya Sharma",
            email="ananya@college.edu",
            credential="student123",
            role=Role.STUDENT,
        ),
    ]
    students = [
        StudentRecord(
            id=SEED_STUDENT_ID,
            program="B.Tech CSE",
            year="2",
            fees_due=1500,
            course_ids=frozenset({"CS101", "MA102"}),
            payments=(PaymentEntry(amount=500, date=date(2024, 12, 1), method=PaymentMethod.UPI),),
        ),
    ]
    faculty = [
        FacultyRecord(
            id="fac-1",
            name="Dr. Mehta",
            department="Computer Science",
            email="mehta@college.edu",
        ),
        FacultyRecord(
            id="fac-2",
            name="Prof. Rao",
            department="Mathematics",
            email="rao@college.edu",
        ),
    ]
    courses = [
        CourseRecord(
            id="CS101",
            code="CS101",
            title="Data Structures",
            faculty_id="fac-1",
            capacity=30,
            schedule=(
                ScheduleSlot(day="Mon", time="09:00-11:00", room="Lab 2"),
                ScheduleSlot(day="Wed", time="10:00-11:00", room="Room 204"),
            ),
            enrolled=frozenset({SEED_STUDENT_ID}),
        ),
        CourseRecord(
            id="MA102",
            code="MA102",
            title="Linear Algebra",
            faculty_id="fac-2",
            capacity=40,
            schedule=(ScheduleSlot(day="Tue", time="11:00-12:00", room="Room 201"),),
            enrolled=frozenset({SEED_STUDENT_ID}),
        ),
        CourseRecord(
            id="HS103",
            code="HS103",
            title="Psychology Basics",
            faculty_id=None,
            capacity=50,
            schedule=(ScheduleSlot(day="Thu", time="14:00-15:00", room="Room 105"),),
        ),
    ]
    return (
        Directory()
        .with_accounts(*accounts)
        .with_students(*students)
        .with_faculty(*faculty)
        .with_courses(*courses)
    )
