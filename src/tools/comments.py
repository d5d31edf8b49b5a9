# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Comment tools.

Tools:
  linear_list_comments   -- comments on an issue, oldest first
  linear_add_comment     -- comment or threaded reply
  linear_update_comment  -- replace a comment body
  linear_delete_comment  -- delete a comment
"""

from __future__ import annotations

from typing import Any

from dedalus_mcp import tool
from dedalus_mcp.types import ToolAnnotations

from linear_gql.errors import NotFoundError
from linear_gql.format import format_comment, format_pagination
from linear_gql.parse import connection, parse_comment
from linear_gql.session import Session
from linear_gql.types import CommentInfo, JSONObject
from tools._helpers import clamp_limit, mutation_payload, reports_errors


# --- Queries ---

_COMMENT_FIELDS = "id body createdAt user { displayName }"

LIST_COMMENTS = f"""
query IssueComments($id: String!, $first: Int, $after: String) {{
    issue(id: $id) {{
        identifier
        comments(first: $first, after: $after) {{
            nodes {{ {_COMMENT_FIELDS} }}
            pageInfo {{ hasNextPage endCursor }}
        }}
    }}
}}
"""

ADD_COMMENT = f"""
mutation AddComment($input: CommentCreateInput!) {{
    commentCreate(input: $input) {{
        success
        comment {{ {_COMMENT_FIELDS} }}
    }}
}}
"""

UPDATE_COMMENT = f"""
mutation UpdateComment($id: String!, $input: CommentUpdateInput!) {{
    commentUpdate(id: $id, input: $input) {{
        success
        comment {{ {_COMMENT_FIELDS} }}
    }}
}}
"""

DELETE_COMMENT = """
mutation DeleteComment($id: String!) {
    commentDelete(id: $id) { success }
}
"""


def _comment_payload(payload: JSONObject) -> CommentInfo:
    raw = payload.get("comment")
    if not isinstance(raw, dict):
        raise NotFoundError("No comment in response")
    return parse_comment(raw)


# --- Tools ---


def comment_tools(session: Session) -> list[Any]:
    """Build the comment tools bound to ``session``."""
    resolver = session.resolver

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_list_comments(
        issue_id: str,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> str:
        """List comments on an issue.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.
            limit: Page size, 1-100 (default 50).
            cursor: ``endCursor`` from a previous page.

        """
        uuid = await resolver.resolve_issue_id(issue_id)
        variables: JSONObject = {"id": uuid, "first": clamp_limit(limit, default=50)}
        if cursor:
            variables["after"] = cursor
        data = await session.execute(LIST_COMMENTS, variables)
        issue = data.get("issue")
        if not isinstance(issue, dict):
            raise NotFoundError(f"Issue '{issue_id}' not found")
        nodes, page = connection(issue, "comments")
        if not nodes:
            return f"No comments on {issue_id}."
        lines = [format_comment(parse_comment(node)) for node in nodes]
        return "\n\n".join(lines) + format_pagination(page, len(lines))

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_add_comment(
        issue_id: str,
        body: str,
        parent_id: str | None = None,
    ) -> str:
        """Add a markdown comment to an issue.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.
            body: Markdown comment body.
            parent_id: Comment UUID to reply to, for a threaded reply.

        """
        input_data: JSONObject = {
            "issueId": await resolver.resolve_issue_id(issue_id),
            "body": body,
        }
        if parent_id:
            input_data["parentId"] = parent_id
        data = await session.execute(ADD_COMMENT, {"input": input_data})
        comment = _comment_payload(mutation_payload(data, "commentCreate", "Comment creation"))
        return f"Comment added to {issue_id} (id: {comment.id})\n\n{format_comment(comment)}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_update_comment(comment_id: str, body: str) -> str:
        """Replace the body of a comment.

        Args:
            comment_id: Comment UUID.
            body: New markdown body.

        """
        data = await session.execute(
            UPDATE_COMMENT, {"id": comment_id, "input": {"body": body}}
        )
        comment = _comment_payload(mutation_payload(data, "commentUpdate", "Comment update"))
        return f"Comment updated\n\n{format_comment(comment)}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    @reports_errors
    async def linear_delete_comment(comment_id: str) -> str:
        """Delete a comment.

        Args:
            comment_id: Comment UUID.

        """
        data = await session.execute(DELETE_COMMENT, {"id": comment_id})
        mutation_payload(data, "commentDelete", "Comment deletion")
        return f"Deleted comment {comment_id}"

    return [
        linear_list_comments,
        linear_add_comment,
        linear_update_comment,
        linear_delete_comment,
    ]
