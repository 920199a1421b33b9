"""
tests/test_auth_gate.py -- Unit tests for auth/dependencies.py header parsing.

The end-to-end 401/403 behaviour is covered in test_api_routes.py; these tests
pin down which Authorization header shapes count as "no token".
"""

from __future__ import annotations

import pytest

from auth.dependencies import extract_bearer_token
from auth.errors import Unauthenticated


@pytest.mark.parametrize(
    "header",
    [None, "", "Bearer", "Bearer ", "Basic dXNlcjpwYXNz", "Token abc", "Bearer a b"],
)
def test_missing_or_malformed_header(header) -> None:
    with pytest.raises(Unauthenticated):
        extract_bearer_token(header)


def test_bearer_token_extracted() -> None:
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"


def test_scheme_is_case_insensitive() -> None:
    assert extract_bearer_token("bearer abc.def.ghi") == "abc.def.ghi"
