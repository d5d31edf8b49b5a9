# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Linear GraphQL request dispatch and response helpers.

Linear uses a single GraphQL endpoint (POST /graphql) for all operations.
Unlike REST APIs, every request goes to the same URL with a query body.
Requests are single-shot: nothing here retries.

Transports (both satisfy ``Transport``):
  HttpTransport                 -- direct HTTPS with a personal API key
  EnclaveTransport              -- dispatch via the Dedalus enclave (OAuth)

Functions:
  unwrap_response(body)         -- classify a decoded GraphQL body

Coercion helpers (safe extraction from untyped API dicts):
  _str(val, default)            -- coerce to str
  _int(val, default)            -- coerce to int
  _float(val, default)          -- coerce to float
  _opt_str(val)                 -- coerce to str | None
  _opt_float(val)               -- coerce to float | None
  _bool(val, *, default)        -- coerce to bool
  _nested_str(obj, key)         -- extract str from nested dict
  _nodes(obj, key)              -- extract ``key.nodes`` list of dicts
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import httpx
from dedalus_mcp import HttpMethod, HttpRequest, get_context
from dedalus_mcp.auth import Connection

from linear_gql.config import DEFAULT_API_URL
from linear_gql.errors import (
    GraphQLError,
    HttpStatusError,
    NoDataError,
    TransportError,
)
from linear_gql.types import JSONObject


logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Executes one GraphQL document and returns its ``data`` object."""

    async def execute(
        self, query: str, variables: JSONObject | None = None
    ) -> JSONObject: ...


# --- Response classification ---


def unwrap_response(body: Any) -> JSONObject:  # noqa: ANN401 — raw JSON body
    """Classify a decoded GraphQL response body.

    Args:
        body: Decoded JSON response body.

    Returns:
        The ``data`` object.

    Raises:
        GraphQLError: The body carries a non-empty ``errors`` array.
        NoDataError: The body has no ``data`` object.

    """
    if not isinstance(body, dict):
        raise NoDataError
    errors = body.get("errors")
    if errors:
        if isinstance(errors, list):
            messages = [
                _str(err.get("message"), "GraphQL error")
                if isinstance(err, dict)
                else str(err)
                for err in errors
            ]
        else:
            messages = [str(errors)]
        raise GraphQLError(messages)
    data = body.get("data")
    if not isinstance(data, dict):
        raise NoDataError
    return data


def _payload(query: str, variables: JSONObject | None) -> JSONObject:
    body: JSONObject = {"query": query}
    if variables is not None:
        body["variables"] = variables
    return body


def _body_text(body: Any) -> str:  # noqa: ANN401 — raw JSON body
    if isinstance(body, str):
        return body
    return json.dumps(body)


# --- Direct HTTPS (API key) ---


class HttpTransport:
    """POST GraphQL documents straight to Linear with a personal API key."""

    def __init__(
        self,
        api_key: str,
        url: str = DEFAULT_API_URL,
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self._api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def execute(
        self, query: str, variables: JSONObject | None = None
    ) -> JSONObject:
        """Execute a query or mutation.

        Args:
            query: GraphQL query or mutation string.
            variables: GraphQL variables. Optional.

        Returns:
            The response ``data`` object.

        Raises:
            TransportError: The request failed before a response arrived.
            HttpStatusError: Linear answered with a non-2xx status.
            GraphQLError: Linear reported GraphQL errors, or the body was
                not valid JSON.
            NoDataError: The response had no ``data``.

        """
        try:
            response = await self._client.post(
                self._url, headers=self._headers, json=_payload(query, variables)
            )
        except httpx.HTTPError as exc:
            logger.warning("Linear request failed: %s", exc)
            raise TransportError(f"HTTP error: {exc}") from exc

        if not response.is_success:
            logger.warning("Linear answered HTTP %s", response.status_code)
            raise HttpStatusError(response.status_code, response.text)

        try:
            body = response.json()
        except ValueError as exc:
            raise GraphQLError([f"Deserialization error: {exc}"]) from exc
        return unwrap_response(body)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()


# --- Dedalus enclave (OAuth) ---


class EnclaveTransport:
    """Dispatch GraphQL documents through the Dedalus enclave.

    Only valid inside a request context; the enclave injects the OAuth
    bearer token for ``connection``.
    """

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    async def execute(
        self, query: str, variables: JSONObject | None = None
    ) -> JSONObject:
        """Execute a query or mutation via the active Dedalus context.

        Args:
            query: GraphQL query or mutation string.
            variables: GraphQL variables. Optional.

        Returns:
            The response ``data`` object.

        Raises:
            TransportError: The enclave could not complete the request.
            HttpStatusError: Linear answered with a non-2xx status.
            GraphQLError: Linear reported GraphQL errors.
            NoDataError: The response had no ``data``.

        """
        ctx = get_context()
        req = HttpRequest(
            method=HttpMethod.POST, path="/graphql", body=_payload(query, variables)
        )
        resp = await ctx.dispatch(self._connection, req)
        if not resp.success or resp.response is None:
            error = resp.error.message if resp.error else "Request failed"
            logger.warning("Enclave dispatch failed: %s", error)
            raise TransportError(error)
        status = resp.response.status
        if not 200 <= status < 300:
            logger.warning("Linear answered HTTP %s via enclave", status)
            raise HttpStatusError(status, _body_text(resp.response.body))
        return unwrap_response(resp.response.body)


# --- Coercion helpers (safe extraction from untyped API dicts) ---


def _str(val: Any, default: str = "") -> str:  # noqa: ANN401 — raw JSON extraction
    """Safely coerce to string."""
    return str(val) if val is not None else default


def _int(val: Any, default: int = 0) -> int:  # noqa: ANN401 — raw JSON extraction
    """Safely coerce to int."""
    if val is None:
        return default
    try:
        return int(val)
    except (TypeError, ValueError):
        return default


def _float(val: Any, default: float = 0.0) -> float:  # noqa: ANN401 — raw JSON extraction
    """Safely coerce to float."""
    if val is None:
        return default
    try:
        return float(val)
    except (TypeError, ValueError):
        return default


def _opt_str(val: Any) -> str | None:  # noqa: ANN401 — raw JSON extraction
    """Safely coerce to optional string."""
    return str(val) if val is not None else None


def _opt_float(val: Any) -> float | None:  # noqa: ANN401 — raw JSON extraction
    """Safely coerce to optional float."""
    if val is None:
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def _bool(val: Any, *, default: bool = False) -> bool:  # noqa: ANN401 — raw JSON extraction
    """Safely coerce to bool."""
    return bool(val) if val is not None else default


def _nested_str(obj: Any, key: str) -> str | None:  # noqa: ANN401 — raw JSON extraction
    """Extract a string from a nested dict, e.g. ``d.get("user", {}).get("login")``."""
    if isinstance(obj, dict):
        return _opt_str(obj.get(key))
    return None


def _nodes(obj: Any, key: str) -> list[JSONObject]:  # noqa: ANN401 — raw JSON extraction
    """Extract the dict nodes of a connection, e.g. ``d["labels"]["nodes"]``."""
    if not isinstance(obj, dict):
        return []
    conn = obj.get(key)
    if not isinstance(conn, dict):
        return []
    nodes = conn.get("nodes", [])
    if not isinstance(nodes, list):
        return []
    return [node for node in nodes if isinstance(node, dict)]
