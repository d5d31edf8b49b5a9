# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Search tools.

Tools:
  linear_search_issues  -- full-text issue search with optional filters
"""

from __future__ import annotations

from typing import Any

from dedalus_mcp import tool
from dedalus_mcp.types import ToolAnnotations

from linear_gql import filters
from linear_gql.format import format_issue_summary, format_pagination
from linear_gql.parse import connection, parse_issue
from linear_gql.session import Session
from linear_gql.types import JSONObject
from tools._helpers import clamp_limit, reports_errors


SEARCH_ISSUES = """
query SearchIssues($query: String!, $first: Int, $after: String, $filter: IssueFilter) {
    searchIssues(term: $query, first: $first, after: $after, filter: $filter) {
        nodes {
            id identifier title priority url
            state { id name type color }
            assignee { id displayName email }
            labels { nodes { id name } }
        }
        pageInfo { hasNextPage endCursor }
    }
}
"""


def search_tools(session: Session) -> list[Any]:
    """Build the search tools bound to ``session``."""

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_search_issues(
        query: str,
        team: str | None = None,
        status: str | None = None,
        assignee: str | None = None,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> str:
        """Full-text search across issue titles and descriptions.

        Args:
            query: Search text.
            team: Team key to restrict to.
            status: Workflow state name.
            assignee: Assignee email or display name.
            limit: Page size, 1-100 (default 25).
            cursor: ``endCursor`` from a previous page.

        """
        parts: list[Any] = []
        if team:
            parts.append(filters.team(team))
        if status:
            parts.append(filters.status(status))
        if assignee:
            parts.append(filters.assignee(assignee))

        variables: JSONObject = {"query": query, "first": clamp_limit(limit)}
        if cursor:
            variables["after"] = cursor
        combined = filters.combine(parts)
        if combined is not None:
            variables["filter"] = combined.to_json()

        data = await session.execute(SEARCH_ISSUES, variables)
        nodes, page = connection(data, "searchIssues")
        if not nodes:
            return f"No issues match '{query}'."
        lines = [format_issue_summary(parse_issue(node)) for node in nodes]
        return "\n".join(lines) + format_pagination(page, len(lines))

    return [linear_search_issues]
