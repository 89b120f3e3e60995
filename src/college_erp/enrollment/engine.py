"""Enrollment engine - the only code that edits course rosters.

A (student, course) pair is either NotEnrolled or Enrolled. ``enroll`` moves
it forward and charges the course fee; ``drop`` moves it back and refunds it.
Both sides of the membership (``CourseRecord.enrolled`` and
``StudentRecord.course_ids``) and the balance change in one new Directory.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from college_erp.exceptions import AlreadyEnrolledError, CapacityReachedError
from college_erp.ledger import COURSE_FEE, charge_course_fee, refund_course_fee

if TYPE_CHECKING:
    from college_erp.directory.models import Directory

logger = logging.getLogger(__name__)


def is_enrolled(directory: Directory, student_id: str, course_id: str) -> bool:
    """Check whether the pair is currently enrolled."""
    course = directory.courses.get(course_id)
    return course is not None and student_id in course.enrolled


def enroll(
    directory: Directory,
    student_id: str,
    course_id: str,
    course_fee: int = COURSE_FEE,
) -> Directory:
    """Add a student to a course roster and charge the course fee.

    Checks run in order and the first failure wins; nothing changes on failure.

    Args:
        directory: Current aggregate
        student_id: The student's ID
        course_id: The course's ID
        course_fee: Amount charged for the course

    Returns:
        New Directory with the student enrolled and charged

    Raises:
        CourseNotFoundError: If the course doesn't exist
        StudentNotFoundError: If the student record doesn't exist
        AlreadyEnrolledError: If the student is already on the roster
        CapacityReachedError: If the roster is full
    """
    course = directory.get_course(course_id)
    student = directory.get_student(student_id)
    if student_id in course.enrolled:
        raise AlreadyEnrolledError(
            f"Student '{student_id}' is already enrolled in course '{course_id}'"
        )
    if not len(course.enrolled) < course.capacity:
        raise CapacityReachedError(
            f"Course '{course_id}' is full ({len(course.enrolled)}/{course.capacity})"
        )

    course = replace(course, enrolled=course.enrolled | {student_id})
    student = charge_course_fee(
        replace(student, course_ids=student.course_ids | {course_id}),
        course_fee,
    )
    logger.info("Enrolled student %s in %s", student_id, course_id)
    return directory.with_courses(course).with_students(student)


def drop(
    directory: Directory,
    student_id: str,
    course_id: str,
    course_fee: int = COURSE_FEE,
) -> Directory:
    """Remove a student from a course roster and refund the course fee.

    Dropping a pair that is not enrolled, including unknown IDs, returns the
    Directory unchanged.

    Args:
        directory: Current aggregate
        student_id: The student's ID
        course_id: The course's ID
        course_fee: Amount refunded for the course

    Returns:
        New Directory, or the same one if nothing was enrolled
    """
    course = directory.courses.get(course_id)
    student = directory.students.get(student_id)
    if course is None or student is None or student_id not in course.enrolled:
        logger.debug("Drop of %s from %s ignored: not enrolled", student_id, course_id)
        return directory

    course = replace(course, enrolled=course.enrolled - {student_id})
    student = refund_course_fee(
        replace(student, course_ids=student.course_ids - {course_id}),
        course_fee,
    )
    logger.info("Dropped student %s from %s", student_id, course_id)
    return directory.with_courses(course).with_students(student)
