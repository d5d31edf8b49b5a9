# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""User tools.

Tools:
  linear_whoami      -- the authenticated user
  linear_list_users  -- active workspace members
"""

from __future__ import annotations

from typing import Any

from dedalus_mcp import tool
from dedalus_mcp.types import ToolAnnotations

from linear_gql.format import format_user
from linear_gql.parse import connection, parse_user
from linear_gql.session import Session
from tools._helpers import clamp_limit, reports_errors


LIST_USERS = """
query ListUsers($first: Int!) {
    users(first: $first, includeDisabled: false) {
        nodes { id displayName email admin guest active }
    }
}
"""


def user_tools(session: Session) -> list[Any]:
    """Build the user tools bound to ``session``."""

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_whoami() -> str:
        """Show the user the server is authenticated as."""
        me = await session.resolver.viewer()
        return f"{format_user(me)}\nID: {me.id}"

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_list_users(limit: int | None = None) -> str:
        """List active users in the workspace.

        Args:
            limit: Maximum users, 1-100 (default 100).

        """
        data = await session.execute(LIST_USERS, {"first": clamp_limit(limit, default=100)})
        nodes, _ = connection(data, "users")
        if not nodes:
            return "No users found."
        return "\n".join(format_user(parse_user(node)) for node in nodes)

    return [linear_whoami, linear_list_users]
