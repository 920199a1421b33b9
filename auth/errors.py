"""
auth/errors.py -- Domain exceptions for accounts and authentication.

Route handlers catch these and map them to 4xx responses. Anything that is
not an AccountError is an internal failure and becomes a generic 500.

Layer rule: no imports from api/ or accounts/.
"""

from __future__ import annotations


class AccountError(Exception):
    """Base class for every expected account/auth failure."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AccountError):
    """Client input failed a presence or format check before persistence."""


class DuplicateIdentity(AccountError):
    """A record with the same username already exists."""


class UserNotFound(AccountError):
    """No record exists for the requested identity."""


class InvalidCredentials(AccountError):
    """The password does not match the stored digest."""


class Unauthenticated(AccountError):
    """No bearer token was presented."""


class InvalidToken(AccountError):
    """The presented token is malformed, unsigned, expired, or tampered with."""


class TooManyInterests(AccountError):
    """An interests list exceeds the per-user limit."""
