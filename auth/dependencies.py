"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

The auth gate reads exactly one credential source: the
"Authorization: Bearer <token>" header. Per request it resolves to one of:

  NoToken   header absent, wrong scheme, or empty token  -> 401 Access Denied
  Invalid   token fails signature/format verification    -> 403 Invalid Token
  Valid     Identity(username) handed to the route

try_get_identity() is the raising core (domain exceptions only).
get_identity() wraps it and raises HTTPException with the wire-format bodies.

Layer rule: no imports from api/ or accounts/.
  auth/dependencies.py may import from fastapi (for HTTPException/Request)
  because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from auth.errors import InvalidToken, Unauthenticated
from auth.models import Identity
from auth.tokens import verify_token

_BEARER = "bearer"


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an Authorization header value.

    Raises Unauthenticated when the header is missing, uses another scheme,
    or carries no token.
    """
    if not authorization:
        raise Unauthenticated("Access Denied")
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != _BEARER or not token or " " in token:
        raise Unauthenticated("Access Denied")
    return token


def try_get_identity(request: Request) -> Identity:
    """Verify the request's bearer token and return the caller's Identity.

    Raises Unauthenticated or InvalidToken. The signing secret comes from the
    Settings object the lifespan stored on app.state.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    claims = verify_token(token, request.app.state.settings.jwt_secret)
    return Identity(username=claims["username"])


def get_identity(request: Request) -> Identity:
    """Require a verified identity. Raises HTTP 401 or 403 otherwise.

    Use as a FastAPI dependency:
        @router.post("/protected")
        def route(identity: Identity = Depends(get_identity)): ...
    """
    try:
        return try_get_identity(request)
    except Unauthenticated as exc:
        raise HTTPException(status_code=401, detail={"status": "error", "data": "Access Denied"}) from exc
    except InvalidToken as exc:
        raise HTTPException(status_code=403, detail={"status": "error", "data": "Invalid Token"}) from exc
