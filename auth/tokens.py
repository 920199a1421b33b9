"""
auth/tokens.py -- JWT session tokens, password hashing, and login verification.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry the username claim and, only when
       a lifetime is configured, an "exp" claim. issue_token/verify_token are
       pure functions over an explicit secret -- there is no module-level
       signing state. verify_token raises InvalidToken on any failure; the
       auth gate turns that into a 403.

  Passwords: bcrypt directly. Its cost factor makes brute-force expensive and
       every hash gets a fresh salt, so equal passwords never share a digest.
       The _DUMMY_HASH constant enables timing equalization in
       authenticate_user() so an unknown username costs the same bcrypt work
       as a wrong password.

  Nothing in this module logs a plaintext password, a digest, or a token.

Layer rule: no imports from api/, core/, or accounts/.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import JWTError, jwt

from auth.errors import InvalidCredentials, InvalidToken, UserNotFound

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("campusaccounts.auth")

_ALGORITHM = "HS256"

# ---------------------------------------------------------------------------
# Password hashing (bcrypt -- direct usage, no passlib wrapper)
# ---------------------------------------------------------------------------


def hash_password(plain: str, rounds: int = 10) -> str:
    """Return a salted bcrypt hash of the given plaintext password.

    rounds is the bcrypt log2 cost factor. Passwords longer than 72 bytes are
    cut to 72 before hashing, the same way bcrypt 3.x did implicitly (4.x
    raises instead).
    """
    return bcrypt.hashpw(plain.encode("utf-8")[:72], bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash.

    A malformed digest is reported as a plain mismatch.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8")[:72], hashed.encode("utf-8"))
    except ValueError:
        return False


# Timing equalization dummy hash.
# Computed once at module load so the first login attempt is not measurably
# slower than later ones.
_DUMMY_HASH: str = hash_password("campusaccounts_timing_dummy")


# ---------------------------------------------------------------------------
# JWT issue / verify
# ---------------------------------------------------------------------------


def issue_token(claims: dict, secret: str, expire_seconds: int = 0) -> str:
    """Encode a signed JWT carrying the given identity claims.

    Args:
        claims:         Identity claims. Must contain a "username" string.
        secret:         Server-held HS256 signing key.
        expire_seconds: Session lifetime. 0 (default) issues a token with no
                        "exp" claim, i.e. a non-expiring session.
    """
    if not isinstance(claims.get("username"), str) or not claims["username"]:
        raise ValueError("Token claims must include a non-empty username.")
    payload = dict(claims)
    if expire_seconds > 0:
        payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=expire_seconds)
    return jwt.encode(payload, secret, algorithm=_ALGORITHM)


def verify_token(token: str, secret: str) -> dict:
    """Decode and verify a JWT. Returns the identity claims.

    Raises InvalidToken if the token is malformed, signed with another key,
    expired, or missing the username claim. Only HS256 is accepted, so an
    unsigned ("alg": "none") token never verifies.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise InvalidToken("Invalid Token") from exc
    username = payload.get("username")
    if not isinstance(username, str) or not username:
        raise InvalidToken("Invalid Token")
    payload.pop("exp", None)
    return payload


# ---------------------------------------------------------------------------
# Login verification (constant-time)
# ---------------------------------------------------------------------------


def authenticate_user(store: UserStore, username: str, password: str) -> User:
    """Verify a username/password pair and return the matching User.

    Raises UserNotFound for an unknown username and InvalidCredentials for a
    wrong password. bcrypt runs in both cases so the two failures cost the
    same time:
    - Unknown username: bcrypt runs against _DUMMY_HASH
    - Wrong password: bcrypt runs against the real hash
    """
    user = store.get_by_username(username)
    if user is None:
        verify_password(password, _DUMMY_HASH)
        raise UserNotFound("User not found")
    if not verify_password(password, user.password_hash):
        logger.info("Rejected login for %s: password mismatch", username)
        raise InvalidCredentials("Invalid password")
    return user
