"""Enrollment Engine - capacity and roster membership transitions."""

from college_erp.enrollment.engine import drop, enroll, is_enrolled

__all__ = ["drop", "enroll", "is_enrolled"]
