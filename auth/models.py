"""
auth/models.py -- Domain dataclasses for account entities.

Pattern: Data class (pure data container, zero logic). Stores and services do
the work; these only own the domain shape.

Layer rule: no imports from api/, core/, or accounts/.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

MAX_INTERESTS = 6


@dataclass(frozen=True)
class StudentRole:
    """Registrant declared as a student; program is mandatory."""

    program: str
    tab: str = field(default="Student", init=False)


@dataclass(frozen=True)
class FacultyRole:
    """Registrant declared as faculty; department is mandatory."""

    department: str
    tab: str = field(default="Faculty", init=False)


Role = Union[StudentRole, FacultyRole]


@dataclass
class User:
    """A registered account.

    username is the login and session identity. It is None for records
    registered without one -- such records exist but cannot log in.

    password_hash is the bcrypt digest and must never leave the server.
    role carries either the program (students) or the department (faculty);
    the union makes "both set" and "neither set" unrepresentable.
    """

    first_name: str
    last_name: str
    email: str
    id_number: str
    birthday: str  # ISO 8601 date as submitted
    role: Role
    password_hash: str
    username: str | None = None
    interests: list[str] = field(default_factory=list)
    mbti_type: str | None = None
    id: int | None = None
    created_at: str | None = None

    @property
    def program(self) -> str | None:
        return self.role.program if isinstance(self.role, StudentRole) else None

    @property
    def department(self) -> str | None:
        return self.role.department if isinstance(self.role, FacultyRole) else None


@dataclass(frozen=True)
class Identity:
    """Verified caller identity produced by the auth gate from token claims."""

    username: str
