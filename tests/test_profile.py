"""Unit tests for accounts/profile.py -- identity-scoped mutators.

Covers:
- update_mbti() overwrites unconditionally
- update_interests() rejects >6 without touching the store; 6 replaces entirely
- operations on a missing record raise UserNotFound
- get_profile() exposes only username; the other fields are None
- a caller's identity never reaches another user's record
"""

import pytest

from accounts.profile import get_profile, update_interests, update_mbti
from auth.errors import TooManyInterests, UserNotFound
from auth.models import Identity

ALICE = Identity(username="alice")


@pytest.fixture
def seeded(store, user_factory):
    store.create_user(user_factory("alice"))
    store.create_user(user_factory("bob", first_name="Bob"))
    return store


def test_update_mbti_overwrites(seeded):
    update_mbti(seeded, ALICE, "ENTP")
    update_mbti(seeded, ALICE, "ISFJ")
    assert seeded.get_by_username("alice").mbti_type == "ISFJ"


def test_update_mbti_accepts_any_value(seeded):
    update_mbti(seeded, ALICE, "not-a-type")
    assert seeded.get_by_username("alice").mbti_type == "not-a-type"


def test_update_mbti_can_clear(seeded):
    update_mbti(seeded, ALICE, "ENTP")
    update_mbti(seeded, ALICE, None)
    assert seeded.get_by_username("alice").mbti_type is None


def test_seven_interests_rejected_and_unchanged(seeded):
    update_interests(seeded, ALICE, ["a", "b"])
    with pytest.raises(TooManyInterests, match="up to 6 interests"):
        update_interests(seeded, ALICE, [str(i) for i in range(7)])
    assert seeded.get_by_username("alice").interests == ["a", "b"]


def test_six_interests_replace_not_merge(seeded):
    update_interests(seeded, ALICE, ["old-1", "old-2", "old-3"])
    new = ["music", "art", "code", "film", "chess", "yoga"]
    update_interests(seeded, ALICE, new)
    assert seeded.get_by_username("alice").interests == new


def test_empty_interests_clears_list(seeded):
    update_interests(seeded, ALICE, ["music"])
    update_interests(seeded, ALICE, [])
    assert seeded.get_by_username("alice").interests == []


def test_interest_order_preserved(seeded):
    update_interests(seeded, ALICE, ["zeta", "alpha", "mu"])
    assert seeded.get_by_username("alice").interests == ["zeta", "alpha", "mu"]


def test_updates_are_scoped_to_identity(seeded):
    update_mbti(seeded, ALICE, "INTJ")
    update_interests(seeded, ALICE, ["chess"])
    bob = seeded.get_by_username("bob")
    assert bob.mbti_type is None
    assert bob.interests == []


@pytest.mark.parametrize(
    "operation",
    [
        lambda s, i: update_mbti(s, i, "INTJ"),
        lambda s, i: update_interests(s, i, ["chess"]),
        lambda s, i: get_profile(s, i),
    ],
)
def test_missing_record_raises_not_found(store, operation):
    with pytest.raises(UserNotFound):
        operation(store, Identity(username="ghost"))


def test_get_profile_unstored_fields_are_none(seeded):
    view = get_profile(seeded, ALICE)
    assert view.username == "alice"
    assert view.fullname is None
    assert view.bio is None
    assert view.address is None
    assert view.pronouns is None
