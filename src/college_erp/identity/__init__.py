"""Identity & Session Manager."""

from college_erp.identity.models import SignupProfile
from college_erp.identity.session import DEFAULT_NAME, SessionManager, create_account

__all__ = ["DEFAULT_NAME", "SessionManager", "SignupProfile", "create_account"]
