"""Runtime settings read from the environment (and ``.env`` via python-dotenv)."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

AUTH_TOKEN_ENV = "GAODUN_AUTH_TOKEN"


class ConfigError(Exception):
    """Raised when a required setting is missing."""


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


class ExtractorConfig(BaseModel):
    """Settings for one extractor instance."""

    auth_token: str = ""
    timeout: int = Field(default=10, ge=1)
    retries: int = Field(default=3, ge=0)
    max_in_flight: int = Field(default=8, ge=1)
    resolution_hint: str = "SD"
    channel: int = 0
    strict_schema: bool = False

    @classmethod
    def from_env(cls, require_token: bool = True) -> "ExtractorConfig":
        token = _env_str(AUTH_TOKEN_ENV)
        if require_token and not token:
            raise ConfigError(f"{AUTH_TOKEN_ENV} environment variable is not set")

        values = {
            "auth_token": token or "",
            "timeout": _env_int("GAODUN_TIMEOUT"),
            "retries": _env_int("GAODUN_RETRIES"),
            "max_in_flight": _env_int("GAODUN_MAX_IN_FLIGHT"),
            "resolution_hint": _env_str("GAODUN_RESOLUTION"),
            "channel": _env_int("GAODUN_CHANNEL"),
            "strict_schema": _env_bool("GAODUN_STRICT_SCHEMA"),
        }
        return cls(**{key: value for key, value in values.items() if value is not None})
