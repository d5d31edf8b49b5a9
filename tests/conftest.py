"""Test configuration and fixtures."""

from __future__ import annotations

import asyncio
import re
from typing import Any

import pytest

from linear_gql.session import Session


class FakeTransport:
    """Transport double that records calls and answers from a script.

    Responses are matched by operation name (``query ResolveTeam(...)`` ->
    ``"ResolveTeam"``). A response may be a dict (returned as ``data``), an
    exception instance (raised), or a callable taking ``(query, variables)``.
    A list of responses is consumed in order, the last one repeating.
    """

    def __init__(self, responses: dict[str, Any] | None = None, delay: float = 0.0) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[tuple[str, dict[str, Any] | None]] = []
        self.delay = delay

    @staticmethod
    def operation(query: str) -> str:
        _, _, rest = query.strip().partition(" ")
        return re.split(r"[(\s{]", rest, maxsplit=1)[0]

    def calls_to(self, name: str) -> list[dict[str, Any] | None]:
        return [variables for query, variables in self.calls if self.operation(query) == name]

    async def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        self.calls.append((query, variables))
        if self.delay:
            await asyncio.sleep(self.delay)
        name = self.operation(query)
        if name not in self.responses:
            raise AssertionError(f"unexpected operation {name!r}")
        response = self.responses[name]
        if isinstance(response, list):
            response = response.pop(0) if len(response) > 1 else response[0]
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(query, variables)
        return response


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def session(transport: FakeTransport) -> Session:
    return Session.create(transport)

