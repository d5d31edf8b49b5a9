# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Linear connection configuration.

Evaluated at import time, after ``load_dotenv()`` in ``main.py``
has already injected the .env file.

Two ways to reach Linear are supported. A personal API key (environment
or macOS Keychain) selects a direct HTTPS transport. Without one, the
server relies on the Dedalus platform's OAuth token exchange and only
declares the secret name it expects.

Objects:
  linear    -- Connection with OAuth bearer token auth
  Settings  -- process settings read from the environment
"""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass

from dedalus_mcp.auth import Connection, SecretKeys


DEFAULT_API_URL = "https://api.linear.app/graphql"
KEYCHAIN_SERVICE = "linear-api-key"


linear = Connection(
    name="linear-gql-mcp",
    secrets=SecretKeys(token="LINEAR_ACCESS_TOKEN"),  # noqa: S106
    base_url="https://api.linear.app",
    auth_header_format="Bearer {api_key}",
)


def _keychain_get(service: str) -> str | None:
    """Read a generic password from the macOS Keychain, or None."""
    try:
        proc = subprocess.run(  # noqa: S603
            ["security", "find-generic-password", "-s", service, "-w"],  # noqa: S607
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return None
    if proc.returncode != 0:
        return None
    key = proc.stdout.strip()
    return key or None


def load_api_key() -> str | None:
    """Locate a Linear personal API key.

    Checks ``LINEAR_API_KEY`` first, then the macOS Keychain entry
    ``linear-api-key`` when running on darwin.

    Returns:
        The key, or None when neither source has one.

    """
    key = os.getenv("LINEAR_API_KEY", "").strip()
    if key:
        return key
    if sys.platform == "darwin":
        return _keychain_get(KEYCHAIN_SERVICE)
    return None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide settings."""

    # fmt: off
    api_key:              str | None = None
    api_url:              str        = DEFAULT_API_URL
    timeout:              float      = 30.0
    port:                 int        = 8080
    authorization_server: str        = "https://as.dedaluslabs.ai"
    log_level:            str        = "INFO"
    transport:            str        = "auto"
    # fmt: on

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the current environment.

        Returns:
            Settings populated from environment variables, with defaults
            for anything unset or malformed.

        """
        result = cls(
            api_key=load_api_key(),
            api_url=os.getenv("LINEAR_API_URL", DEFAULT_API_URL),
            timeout=_float_env("LINEAR_TIMEOUT", 30.0),
            port=_int_env("PORT", 8080),
            authorization_server=os.getenv("DEDALUS_AS_URL", "https://as.dedaluslabs.ai"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            transport=os.getenv("LINEAR_TRANSPORT", "auto").strip().lower(),
        )
        return result
