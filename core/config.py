"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for Campus Accounts happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. jwt_secret -> JWT_SECRET, database_url -> DATABASE_URL).

  frozen=True: the Settings instance is built once in the API lifespan and
      shared by every request. Nothing may mutate it after construction.

Security notes:
  JWT_SECRET shorter than 32 chars is rejected outright. HS256 signing relies
  on key entropy -- a short key weakens every issued session token.

  In production mode (DEBUG not set or false), a missing JWT_SECRET is a hard
  startup failure. There is no built-in fallback secret.

Layer rule: core/ is the kernel. This module may not import from api/, auth/,
or accounts/.
"""

import logging
import secrets
from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("campusaccounts.config")

_DEFAULT_DB_URL = f"sqlite:///{Path(__file__).resolve().parent.parent / 'campus_accounts.db'}"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields except jwt_secret have usable defaults. The model_validator
    enforces the secret policy before the instance is frozen.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    host: str = "0.0.0.0"  # nosec B104 -- container deployments bind all interfaces
    port: int = 5001
    database_url: str = _DEFAULT_DB_URL

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    # Empty string is the sentinel for "not configured". The validator below
    # either generates a dev key or raises, so callers never see "".
    jwt_secret: str = ""
    # 0 keeps sessions non-expiring (no "exp" claim). Any positive value is
    # the token lifetime in seconds.
    token_expire_seconds: int = 0
    bcrypt_rounds: int = 10

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8081"]

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="before")
    @classmethod
    def fill_dev_secret(cls, data):
        """Generate a throwaway JWT_SECRET in DEBUG mode when none is set.

        Runs before field validation because the instance is frozen afterwards.
        Sessions signed with a generated key do not survive a restart.
        """
        if not isinstance(data, dict):
            return data
        debug = str(data.get("debug", "")).strip().lower() in ("1", "true", "yes", "on")
        if debug and not data.get("jwt_secret"):
            data = {**data, "jwt_secret": secrets.token_hex(32)}
            logger.warning("WARNING: Using auto-generated JWT_SECRET. Sessions will not persist across restarts.")
        return data

    @model_validator(mode="after")
    def validate_jwt_secret(self) -> "Settings":
        """Refuse to start without a strong signing secret.

        Production mode (DEBUG=false or not set): a missing JWT_SECRET raises.
        Both modes: keys shorter than 32 characters raise.
        """
        if not self.jwt_secret:
            raise ValueError(
                "JWT_SECRET is required in production mode. "
                "Set JWT_SECRET in your environment or .env file. "
                "To run in development mode, set DEBUG=true."
            )
        if len(self.jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters.")
        if self.token_expire_seconds < 0:
            raise ValueError("TOKEN_EXPIRE_SECONDS must be 0 (no expiry) or positive.")
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    Called once by the API lifespan and by the CLI. Route handlers read the
    instance from request.app.state.settings rather than calling this.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
