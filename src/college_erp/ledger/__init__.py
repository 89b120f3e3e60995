"""Financial Ledger - balance arithmetic for student records."""

from college_erp.ledger.ledger import (
    COURSE_FEE,
    apply_fine,
    charge_course_fee,
    coerce_amount,
    coerce_balance,
    coerce_method,
    record_payment,
    refund_course_fee,
    total_paid,
    whole_number,
)

__all__ = [
    "COURSE_FEE",
    "apply_fine",
    "charge_course_fee",
    "coerce_amount",
    "coerce_balance",
    "coerce_method",
    "record_payment",
    "refund_course_fee",
    "total_paid",
    "whole_number",
]
