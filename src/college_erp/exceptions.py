"""Custom exceptions for the College ERP core."""


class CampusError(Exception):
    """Base exception for recoverable domain failures."""


class InvalidCredentialsError(CampusError):
    """Email and credential do not match any account."""


class EmailAlreadyExistsError(CampusError):
    """An account with the given email already exists."""


class CourseNotFoundError(CampusError):
    """Course with given ID does not exist."""


class StudentNotFoundError(CampusError):
    """Student with given ID does not exist."""


class FacultyNotFoundError(CampusError):
    """Faculty member with given ID does not exist."""


class AlreadyEnrolledError(CampusError):
    """Student is already on the course roster."""


class CapacityReachedError(CampusError):
    """Course roster is full."""


class InvalidAmountError(CampusError):
    """Amount is not a positive whole number."""


class InvalidPaymentMethodError(CampusError):
    """Payment method is not one of the accepted methods."""


class InvalidCapacityError(CampusError):
    """Course capacity must be at least one seat."""


class DuplicateCourseCodeError(CampusError):
    """Course with the same code already exists."""


class NotAuthenticatedError(CampusError):
    """Operation requires an active session."""


class PermissionDeniedError(CampusError):
    """Active session's role may not perform the operation."""
