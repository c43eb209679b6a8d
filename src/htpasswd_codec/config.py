"""Runtime configuration — HtpasswdConfig resolved from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field

from htpasswd_codec.constants import (
    DEFAULT_ENCODING,
    DEFAULT_FILE,
    ENV_CREATE_MISSING,
    ENV_ENCODING,
    ENV_FILE,
)

_TRUTHY = {"1", "true", "yes", "on"}


def _default_file() -> Path:
    env = os.environ.get(ENV_FILE)
    if env:
        return Path(env)
    return DEFAULT_FILE


def _default_create_missing() -> bool:
    return os.environ.get(ENV_CREATE_MISSING, "").strip().lower() in _TRUTHY


class HtpasswdConfig(BaseModel):
    """Runtime configuration resolved once at startup."""

    htpasswd_file: Path = Field(default_factory=_default_file)
    encoding: str = Field(default_factory=lambda: os.environ.get(ENV_ENCODING, DEFAULT_ENCODING))
    create_missing: bool = Field(default_factory=_default_create_missing)


@lru_cache(maxsize=1)
def get_config() -> HtpasswdConfig:
    """Process-wide config, built from the environment on first call."""
    return HtpasswdConfig()
