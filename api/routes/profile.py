"""
api/routes/profile.py -- Authenticated profile endpoints.

Routes:
  POST /update-mbti       -- overwrite the caller's MBTI type
  POST /update-interests  -- replace the caller's interests (max 6)
  GET  /profile           -- read the caller's public profile

Auth policy: every route requires a verified identity (get_identity). The
identity comes from the token only -- no route accepts a username from the
body or path, so a caller can never read or write another user's record.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from accounts.profile import get_profile, update_interests, update_mbti
from api.models import DataResponse, InterestsUpdateRequest, MbtiUpdateRequest, ProfileData, ProfileResponse
from auth.dependencies import get_identity
from auth.errors import TooManyInterests, UserNotFound
from auth.models import Identity

router = APIRouter()

_NOT_FOUND = {"status": "error", "data": "User not found"}


@router.post("/update-mbti", response_model=DataResponse)
def update_mbti_route(
    request: Request,
    body: MbtiUpdateRequest,
    identity: Identity = Depends(get_identity),
) -> DataResponse:
    try:
        update_mbti(request.app.state.user_store, identity, body.mbti_type)
    except UserNotFound as exc:
        raise HTTPException(status_code=404, detail=_NOT_FOUND) from exc
    return DataResponse(data="MBTI type updated")


@router.post("/update-interests", response_model=DataResponse)
def update_interests_route(
    request: Request,
    body: InterestsUpdateRequest,
    identity: Identity = Depends(get_identity),
) -> DataResponse:
    """Replace the interests list. 400 when more than six are submitted."""
    try:
        update_interests(request.app.state.user_store, identity, body.interests)
    except TooManyInterests as exc:
        raise HTTPException(status_code=400, detail={"status": "error", "data": exc.message}) from exc
    except UserNotFound as exc:
        raise HTTPException(status_code=404, detail=_NOT_FOUND) from exc
    return DataResponse(data="Interests updated successfully")


@router.get("/profile", response_model=ProfileResponse)
def profile_route(request: Request, identity: Identity = Depends(get_identity)) -> ProfileResponse:
    """Return the caller's profile. fullname, bio, address and pronouns are always null."""
    try:
        view = get_profile(request.app.state.user_store, identity)
    except UserNotFound as exc:
        raise HTTPException(status_code=404, detail=_NOT_FOUND) from exc
    return ProfileResponse(data=ProfileData.from_view(view))
