"""
api/routes/accounts.py -- Public account endpoints.

Routes:
  GET  /          -- liveness banner
  POST /register  -- create an account (no token issued)
  POST /login     -- password login; returns a bearer token

Auth policy: every route here is public. The auth gate never runs on them.

Handlers that hash or query are plain `def` so FastAPI runs them in its
threadpool; bcrypt and database I/O never block the event loop.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from accounts.registration import register_user
from api.models import DataResponse, LoginRequest, MessageResponse, RegisterRequest
from auth.errors import DuplicateIdentity, InvalidCredentials, UserNotFound, ValidationError
from auth.tokens import authenticate_user, issue_token

logger = logging.getLogger("campusaccounts.api")

router = APIRouter()


@router.get("/", response_model=DataResponse)
async def home() -> DataResponse:
    return DataResponse(data="Server Started")


@router.post("/register", response_model=MessageResponse)
def register(request: Request, body: RegisterRequest) -> MessageResponse:
    """Validate and store a new account.

    400 for validation failures, 409 for a taken username. Any other failure
    is logged and reported as a generic 500 without internal detail.
    """
    settings = request.app.state.settings
    try:
        register_user(request.app.state.user_store, body.to_form(), rounds=settings.bcrypt_rounds)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail={"status": "error", "message": exc.message}) from exc
    except DuplicateIdentity as exc:
        raise HTTPException(status_code=409, detail={"status": "error", "message": exc.message}) from exc
    except Exception as exc:
        logger.exception("Error during registration")
        raise HTTPException(
            status_code=500,
            detail={"status": "error", "message": "Server error during registration"},
        ) from exc
    return MessageResponse(message="Registration successful")


@router.post("/login", response_model=DataResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with username and password and return a signed token.

    Unknown username and wrong password are reported separately (404 / 401).
    authenticate_user() still spends the same bcrypt time on both.
    """
    settings = request.app.state.settings
    try:
        user = authenticate_user(request.app.state.user_store, body.username, body.password)
    except UserNotFound as exc:
        raise HTTPException(status_code=404, detail={"status": "error", "data": "User not found"}) from exc
    except InvalidCredentials as exc:
        raise HTTPException(status_code=401, detail={"status": "error", "data": "Invalid password"}) from exc

    token = issue_token({"username": user.username}, settings.jwt_secret, settings.token_expire_seconds)
    resp = JSONResponse(status_code=200, content=DataResponse(data=token).model_dump())
    resp.headers["Cache-Control"] = "no-store"
    return resp
