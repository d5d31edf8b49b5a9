# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Shared plumbing for tool handlers.

Functions:
  reports_errors(fn)               -- turn LinearError into the tool's text result
  mutation_payload(data, key, op)  -- unwrap ``{key: {success, ...}}``
  clamp_limit(limit, default)      -- 1..100 page size
  parse_priority(name)             -- "high" -> 2
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec

from linear_gql.errors import InvalidInputError, LinearError
from linear_gql.types import PRIORITY_LEVELS, JSONObject


logger = logging.getLogger(__name__)

P = ParamSpec("P")

MAX_PAGE_SIZE = 100


def reports_errors(fn: Callable[P, Awaitable[str]]) -> Callable[P, Awaitable[str]]:
    """Return failures as text instead of raising through the MCP layer."""

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> str:
        try:
            return await fn(*args, **kwargs)
        except LinearError as exc:
            logger.warning("%s failed: %s", fn.__name__, exc)
            return str(exc)

    return wrapper


def mutation_payload(data: JSONObject, key: str, operation: str) -> JSONObject:
    """Return ``data[key]`` when the mutation reports success.

    Raises:
        LinearError: Payload missing or ``success`` is false.

    """
    payload: Any = data.get(key)
    if not isinstance(payload, dict) or not payload.get("success"):
        raise LinearError(f"{operation} failed")
    return payload


def clamp_limit(limit: int | None, default: int = 25) -> int:
    if limit is None:
        return default
    return max(1, min(limit, MAX_PAGE_SIZE))


def parse_priority(name: str) -> int:
    """Map a priority name (``urgent`` .. ``none``) to Linear's number.

    Raises:
        InvalidInputError: Unknown priority name.

    """
    value = PRIORITY_LEVELS.get(name.strip().lower())
    if value is None:
        choices = ", ".join(PRIORITY_LEVELS)
        raise InvalidInputError(f"Unknown priority '{name}'. Use one of: {choices}")
    return value
