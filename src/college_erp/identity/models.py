"""Input models for account creation."""

from __future__ import annotations

from dataclasses import dataclass

from college_erp.directory.models import Role


@dataclass(frozen=True)
class SignupProfile:
    """Self-service signup form."""

    email: str
    credential: str
    name: str = ""
    role: Role = Role.STUDENT
    program: str = "B.Tech CSE"
    year: str = "1"
