"""Configuration module — loads and validates PatternStack environment variables."""

import logging
import os
from collections.abc import Mapping
from functools import lru_cache

from pydantic import BaseModel, field_validator

ENV_PREFIX = "PATTERNSTACK_"
DEFAULT_API_URL = "https://patternstack.ai"
KEYS_URL = "https://patternstack.ai/dashboard/keys"


class Settings(BaseModel):
    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    clerk_user_id: str = ""
    log_level: str = "INFO"

    @field_validator("api_key", "clerk_user_id")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        v = v.strip() or DEFAULT_API_URL
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid API URL: {v}")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        numeric = getattr(logging, v.upper(), None)
        if not isinstance(numeric, int):
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables (PATTERNSTACK_<FIELD>)."""
    if environ is None:
        environ = os.environ
    env = {}
    for field_name in Settings.model_fields:
        val = environ.get(ENV_PREFIX + field_name.upper())
        if val is not None:
            env[field_name] = val
    return Settings(**env)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance."""
    return load_settings()
