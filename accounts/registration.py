"""
accounts/registration.py -- Registration use case.

validate_registration() runs every presence and format check and builds the
role union; register_user() hashes the password and persists the record.
Nothing touches the store until validation has passed, and no token is issued
here -- callers log in separately.

Layer rule: imports from auth/ only. No imports from api/.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Optional

from auth.errors import ValidationError
from auth.models import FacultyRole, Role, StudentRole, User
from auth.store import UserStore
from auth.tokens import hash_password

logger = logging.getLogger("campusaccounts.accounts")

_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

STUDENT_TAB = "Student"
FACULTY_TAB = "Faculty"


@dataclass
class RegistrationForm:
    """Raw registration input as submitted by the client. Every field may be missing."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    id_number: Optional[str] = None
    birthday: Optional[str] = None
    program: Optional[str] = None
    department: Optional[str] = None
    active_tab: Optional[str] = None
    username: Optional[str] = None

    def redacted(self) -> dict:
        """Return the form as a dict safe to log (password removed)."""
        data = asdict(self)
        data.pop("password", None)
        return data


def _is_valid_birthday(value: str) -> bool:
    try:
        date.fromisoformat(value)
        return True
    except ValueError:
        pass
    try:
        datetime.fromisoformat(value)
        return True
    except ValueError:
        return False


def _resolve_role(form: RegistrationForm) -> Role:
    if form.active_tab == STUDENT_TAB:
        if not form.program:
            raise ValidationError("Program is required for students.")
        return StudentRole(program=form.program)
    if form.active_tab == FACULTY_TAB:
        if not form.department:
            raise ValidationError("Department is required for faculty.")
        return FacultyRole(department=form.department)
    raise ValidationError("Role must be Student or Faculty.")


def validate_registration(form: RegistrationForm) -> Role:
    """Check the form and return the registrant's role.

    Checks run in a fixed order and the first failure wins:
    required fields, email shape, birthday, role-specific field.
    Raises ValidationError with a client-facing message.
    """
    required = (form.first_name, form.last_name, form.email, form.password, form.id_number, form.birthday)
    if not all(required):
        raise ValidationError("All fields are required.")
    if not _EMAIL_RE.search(form.email):
        raise ValidationError("Invalid email format.")
    if not _is_valid_birthday(form.birthday):
        raise ValidationError("Invalid birthday format. Use YYYY-MM-DD.")
    if form.username is not None and not form.username.strip():
        raise ValidationError("Username cannot be blank.")
    return _resolve_role(form)


def register_user(store: UserStore, form: RegistrationForm, rounds: int = 10) -> User:
    """Validate, hash, and persist a new account. Returns the stored User.

    Raises ValidationError before any write, or DuplicateIdentity from the
    store when the username is taken.
    """
    logger.info("Received registration data: %s", form.redacted())
    role = validate_registration(form)
    if form.username is None:
        logger.warning(
            "Registering %s %s without a username; the account cannot log in",
            form.first_name,
            form.last_name,
        )
    user = User(
        username=form.username,
        first_name=form.first_name,
        last_name=form.last_name,
        email=form.email,
        id_number=form.id_number,
        birthday=form.birthday,
        role=role,
        password_hash=hash_password(form.password, rounds=rounds),
    )
    return store.create_user(user)
