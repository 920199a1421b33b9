"""
tests/test_cli.py -- main.py command line.

Covers:
  - verify-token prints claims for a valid token (exit 0)
  - verify-token rejects a token signed with another secret (exit 1)
  - serve passes the configured host/port to uvicorn, with flag overrides
"""

from __future__ import annotations

import json

import pytest

import main as cli
from auth.tokens import issue_token


@pytest.fixture(autouse=True)
def _fixed_settings(monkeypatch, test_settings):
    monkeypatch.setattr(cli, "get_settings", lambda: test_settings)


def test_verify_token_valid(capsys, test_secret):
    token = issue_token({"username": "alice"}, test_secret)
    assert cli.main(["verify-token", token]) == 0
    assert json.loads(capsys.readouterr().out) == {"username": "alice"}


def test_verify_token_invalid(capsys):
    token = issue_token({"username": "alice"}, "some-other-secret-0123456789abcdef012345")
    assert cli.main(["verify-token", token]) == 1
    assert "Invalid token" in capsys.readouterr().err


def test_serve_uses_settings_and_overrides(monkeypatch):
    calls = []
    uvicorn = pytest.importorskip("uvicorn")
    monkeypatch.setattr(uvicorn, "run", lambda *a, **kw: calls.append((a, kw)))

    assert cli.main(["serve"]) == 0
    assert cli.main(["serve", "--port", "9000", "--host", "127.0.0.1"]) == 0

    assert calls[0][1]["port"] == 5001
    assert calls[1][1]["port"] == 9000
    assert calls[1][1]["host"] == "127.0.0.1"
    assert calls[0][0] == ("asgi:app",)
