# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Shared per-process state handed to every tool.

A ``Session`` bundles the transport and the resolver (which owns the
issue-identifier cache). The server builds one at startup and passes it
to each tool factory; tests build a fresh one per case.
"""

from __future__ import annotations

from dataclasses import dataclass

from linear_gql.cache import EntityCache
from linear_gql.request import Transport
from linear_gql.resolver import Resolver
from linear_gql.types import JSONObject


@dataclass(frozen=True, slots=True)
class Session:
    """Transport + resolver shared by concurrent tool invocations."""

    # fmt: off
    transport: Transport
    resolver:  Resolver
    # fmt: on

    @classmethod
    def create(
        cls, transport: Transport, cache: EntityCache[str] | None = None
    ) -> Session:
        """Build a session with a resolver over ``cache`` (or a new one)."""
        return cls(transport=transport, resolver=Resolver(transport, cache))

    async def execute(
        self, query: str, variables: JSONObject | None = None
    ) -> JSONObject:
        return await self.transport.execute(query, variables)
