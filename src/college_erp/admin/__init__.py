"""Directory Administration - admin roster operations."""

from college_erp.admin.administration import (
    DEFAULT_CAPACITY,
    DEFAULT_PASSWORD,
    PLACEHOLDER_SLOT,
    StudentProfile,
    create_course,
    create_faculty,
    create_student,
    enroll_student,
    fine_student,
    parse_schedule,
)

__all__ = [
    "DEFAULT_CAPACITY",
    "DEFAULT_PASSWORD",
    "PLACEHOLDER_SLOT",
    "StudentProfile",
    "create_course",
    "create_faculty",
    "create_student",
    "enroll_student",
    "fine_student",
    "parse_schedule",
]
