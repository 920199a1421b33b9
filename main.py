#!/usr/bin/env python3
"""
Campus Accounts -- account registration, login, and profile service.

Usage:
  python main.py serve
  python main.py serve --port 8080 --reload
  python main.py verify-token <token>

Environment variables (or .env):
  JWT_SECRET     Signing secret, at least 32 characters. Required unless DEBUG=true.
  DATABASE_URL   SQLAlchemy URL of the user database.
  PORT           Listen port (default 5001).
"""

import argparse
import json
import sys

from auth.errors import InvalidToken
from auth.tokens import verify_token
from core.config import get_settings


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port
    print(f"  Server is running on http://{host}:{port}")
    uvicorn.run("asgi:app", host=host, port=port, reload=args.reload)
    return 0


def _verify_token(args: argparse.Namespace) -> int:
    settings = get_settings()
    try:
        claims = verify_token(args.token, settings.jwt_secret)
    except InvalidToken:
        print("  [!] Invalid token.", file=sys.stderr)
        return 1
    print(json.dumps(claims, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="campus-accounts",
        description="Campus Accounts -- registration, login, and profile service.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn.")
    serve.add_argument("--host", default=None, help="Bind address (default: HOST setting).")
    serve.add_argument("--port", type=int, default=None, help="Listen port (default: PORT setting).")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes (development only).")
    serve.set_defaults(func=_serve)

    check = sub.add_parser("verify-token", help="Verify a session token and print its claims.")
    check.add_argument("token", help="Encoded token as returned by POST /login.")
    check.set_defaults(func=_verify_token)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
