"""Identity & Session Manager - authentication, signup and the session slot."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from college_erp.directory.models import (
    Account,
    Role,
    StudentRecord,
    generate_id,
    normalize_email,
)
from college_erp.exceptions import EmailAlreadyExistsError, InvalidCredentialsError

if TYPE_CHECKING:
    from college_erp.directory.models import Directory
    from college_erp.identity.models import SignupProfile

logger = logging.getLogger(__name__)

DEFAULT_NAME = "New User"

_ID_PREFIXES = {Role.STUDENT: "stu", Role.ADMIN: "admin"}


def create_account(
    directory: Directory,
    name: str,
    email: str,
    credential: str,
    role: Role,
    program: str = "",
    year: str = "",
    fees_due: int = 0,
) -> tuple[Directory, Account]:
    """Create an account, plus its StudentRecord when the role is student.

    Args:
        directory: Current aggregate
        name: Display name
        email: Login email; stored trimmed and lower-cased
        credential: Opaque secret
        role: Account role
        program: Student program (students only)
        year: Student year (students only)
        fees_due: Opening balance (students only)

    Returns:
        Tuple of (new Directory, created Account)

    Raises:
        EmailAlreadyExistsError: If the email is taken, ignoring case
    """
    if directory.find_account_by_email(email) is not None:
        raise EmailAlreadyExistsError(f"An account with email '{email.strip()}' already exists")

    account = Account(
        id=generate_id(_ID_PREFIXES[role]),
        name=name,
        email=normalize_email(email),
        credential=credential,
        role=role,
    )
    updated = directory.with_accounts(account)
    if role is Role.STUDENT:
        updated = updated.with_students(
            StudentRecord(id=account.id, program=program, year=year, fees_due=fees_due)
        )
    logger.info("Created %s account %s", role.value, account.id)
    return updated, account


class SessionManager:
    """Tracks the single active session of a running client.

    The session is just an account ID; it is resolved against whatever
    Directory the caller passes in.
    """

    def __init__(self, account_id: str | None = None) -> None:
        self._account_id = account_id

    @property
    def account_id(self) -> str | None:
        """ID of the signed-in account, if any."""
        return self._account_id

    def current_account(self, directory: Directory) -> Account | None:
        """Resolve the session to an Account. Returns None if signed out or unknown."""
        if self._account_id is None:
            return None
        return directory.accounts.get(self._account_id)

    def restore(self, account_id: str | None) -> None:
        """Re-establish a persisted session slot."""
        self._account_id = account_id

    def authenticate(self, directory: Directory, email: str, credential: str) -> Account:
        """Sign in with email and credential.

        Raises:
            InvalidCredentialsError: If no account matches
        """
        account = directory.find_account_by_email(email)
        if account is None or account.credential != credential:
            logger.info("Failed login for %s", normalize_email(email))
            raise InvalidCredentialsError("Invalid email or password")
        self._account_id = account.id
        logger.info("Account %s signed in", account.id)
        return account

    def register(self, directory: Directory, profile: SignupProfile) -> tuple[Directory, Account]:
        """Create an account from a signup form and sign it in.

        Returns:
            Tuple of (new Directory, created Account)

        Raises:
            EmailAlreadyExistsError: If the email is taken, ignoring case
        """
        updated, account = create_account(
            directory,
            name=profile.name.strip() or DEFAULT_NAME,
            email=profile.email,
            credential=profile.credential,
            role=profile.role,
            program=profile.program,
            year=profile.year,
        )
        self._account_id = account.id
        return updated, account

    def end_session(self) -> None:
        """Sign out. Safe to call when already signed out."""
        if self._account_id is not None:
            logger.info("Account %s signed out", self._account_id)
        self._account_id = None
