"""Financial ledger - fees, fines and payments on a single StudentRecord.

Every function here is pure: it takes a StudentRecord and returns a new one.
None of them look at other students or at the rest of the Directory.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import UTC, date, datetime

from college_erp.directory.models import PaymentEntry, PaymentMethod, StudentRecord
from college_erp.exceptions import InvalidAmountError, InvalidPaymentMethodError

logger = logging.getLogger(__name__)

COURSE_FEE = 500


def coerce_amount(value: object) -> int:
    """Coerce user input into a positive whole currency amount.

    Accepts ints, integral floats and numeric strings such as ``"2000"``.

    Raises:
        InvalidAmountError: If the value is non-numeric, fractional, or not positive
    """
    amount = whole_number(value)
    if amount is None or amount <= 0:
        raise InvalidAmountError(f"Amount {value!r} must be a positive whole number")
    return amount


def coerce_balance(value: object) -> int:
    """Coerce an initial balance. Blank means zero; negatives are rejected.

    Raises:
        InvalidAmountError: If the value is non-numeric, fractional, or negative
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    amount = whole_number(value)
    if amount is None or amount < 0:
        raise InvalidAmountError(f"Balance {value!r} must be a non-negative whole number")
    return amount


def whole_number(value: object) -> int | None:
    """Return ``value`` as an int if it is integral, else None.

    Booleans, fractional or non-finite floats and non-numeric strings are
    not whole numbers.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def coerce_method(method: object) -> PaymentMethod:
    """Resolve a payment method name, ignoring case.

    Raises:
        InvalidPaymentMethodError: If the method is not one of PaymentMethod
    """
    if isinstance(method, PaymentMethod):
        return method
    if isinstance(method, str):
        wanted = method.strip().lower()
        for candidate in PaymentMethod:
            if candidate.value.lower() == wanted:
                return candidate
    raise InvalidPaymentMethodError(f"Unknown payment method {method!r}")


def charge_course_fee(student: StudentRecord, fee: int = COURSE_FEE) -> StudentRecord:
    """Add one course fee to the balance."""
    return replace(student, fees_due=student.fees_due + fee)


def refund_course_fee(student: StudentRecord, fee: int = COURSE_FEE) -> StudentRecord:
    """Remove one course fee from the balance, never going below zero."""
    return replace(student, fees_due=max(0, student.fees_due - fee))


def record_payment(
    student: StudentRecord,
    amount: object,
    method: PaymentMethod | str,
    on: date | None = None,
) -> StudentRecord:
    """Record a payment against the balance.

    Overpayment clears the balance; the excess is not kept as credit.

    Args:
        student: The paying student
        amount: Payment amount (coerced with ``coerce_amount``)
        method: Payment method
        on: Payment date, defaults to today (UTC)

    Returns:
        Updated StudentRecord with the payment appended

    Raises:
        InvalidAmountError: If amount is not a positive whole number
        InvalidPaymentMethodError: If method is unknown
    """
    paid = coerce_amount(amount)
    entry = PaymentEntry(
        amount=paid,
        date=on if on is not None else datetime.now(UTC).date(),
        method=coerce_method(method),
    )
    if paid > student.fees_due:
        logger.info(
            "Student %s overpaid by %d; excess discarded", student.id, paid - student.fees_due
        )
    return replace(
        student,
        fees_due=max(0, student.fees_due - paid),
        payments=(*student.payments, entry),
    )


def apply_fine(student: StudentRecord, amount: object, note: str | None = None) -> StudentRecord:
    """Add a fine to the balance.

    The note is only logged; it is not stored on the record.

    Raises:
        InvalidAmountError: If amount is not a positive whole number
    """
    fine = coerce_amount(amount)
    if note:
        logger.info("Fine of %d for student %s: %s", fine, student.id, note)
    return replace(student, fees_due=student.fees_due + fine)


def total_paid(student: StudentRecord) -> int:
    """Sum of all recorded payments."""
    return sum(p.amount for p in student.payments)
