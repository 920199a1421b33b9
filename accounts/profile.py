"""
accounts/profile.py -- Identity-scoped profile reads and mutations.

Every operation takes the Identity produced by the auth gate, so a caller can
only ever load or change the record keyed by their own verified username.
Mutations are plain read-modify-write; concurrent updates to one record are
last-write-wins.

Layer rule: imports from auth/ only. No imports from api/.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from auth.errors import TooManyInterests, UserNotFound
from auth.models import MAX_INTERESTS, Identity, User
from auth.store import UserStore

logger = logging.getLogger("campusaccounts.accounts")


@dataclass(frozen=True)
class ProfileView:
    """Public profile shape returned by GET /profile.

    fullname, bio, address and pronouns are not stored anywhere in the user
    record. They are always None until the data model grows those fields.
    """

    username: str
    fullname: Optional[str] = None
    bio: Optional[str] = None
    address: Optional[str] = None
    pronouns: Optional[str] = None


def _load_own_record(store: UserStore, identity: Identity) -> User:
    user = store.get_by_username(identity.username)
    if user is None:
        raise UserNotFound("User not found")
    return user


def update_mbti(store: UserStore, identity: Identity, mbti_type: Optional[str]) -> User:
    """Overwrite the caller's MBTI type. No domain check on the value."""
    user = _load_own_record(store, identity)
    user.mbti_type = mbti_type
    store.save_user(user)
    logger.info("Updated MBTI type for %s", identity.username)
    return user


def update_interests(store: UserStore, identity: Identity, interests: list[str]) -> User:
    """Replace the caller's interests list.

    Raises TooManyInterests before touching the store when more than
    MAX_INTERESTS entries are given. The new list replaces the old one as-is.
    """
    if len(interests) > MAX_INTERESTS:
        raise TooManyInterests(f"You can select up to {MAX_INTERESTS} interests only")
    user = _load_own_record(store, identity)
    user.interests = list(interests)
    store.save_user(user)
    logger.info("Updated %d interests for %s", len(interests), identity.username)
    return user


def get_profile(store: UserStore, identity: Identity) -> ProfileView:
    user = _load_own_record(store, identity)
    return ProfileView(username=user.username)
