"""Directory Store - typed records, the aggregate and its in-process owner."""

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
    generate_id,
    normalize_email,
)
from college_erp.directory.seed import SEED_ADMIN_ID, SEED_STUDENT_ID, seed_directory
from college_erp.directory.store import DirectoryStore

__all__ = [
    "SEED_ADMIN_ID",
    "SEED_STUDENT_ID",
    "Account",
    "CourseRecord",
    "Directory",
    "DirectoryStore",
    "FacultyRecord",
    "PaymentEntry",
    "PaymentMethod",
    "Role",
    "ScheduleSlot",
    "StudentRecord",
    "generate_id",
    "normalize_email",
    "seed_directory",
]
