# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Issue relation tools.

Tools:
  linear_create_issue_relation  -- blocks / blocked_by / related / duplicate
  linear_delete_issue_relation  -- remove a relation by UUID

``blocked_by`` is not a Linear relation type; it is stored as ``blocks``
with the two issues swapped.
"""

from __future__ import annotations

from typing import Any

from dedalus_mcp import tool
from dedalus_mcp.types import ToolAnnotations

from linear_gql.errors import InvalidInputError, NotFoundError
from linear_gql.format import format_relation
from linear_gql.parse import parse_relation
from linear_gql.session import Session
from linear_gql.types import RELATION_TYPES
from tools._helpers import mutation_payload, reports_errors


CREATE_ISSUE_RELATION = """
mutation CreateIssueRelation($input: IssueRelationCreateInput!) {
    issueRelationCreate(input: $input) {
        success
        issueRelation {
            id type
            issue { identifier title }
            relatedIssue { identifier title }
        }
    }
}
"""

DELETE_ISSUE_RELATION = """
mutation DeleteIssueRelation($id: String!) {
    issueRelationDelete(id: $id) { success }
}
"""


def relation_tools(session: Session) -> list[Any]:
    """Build the issue relation tools bound to ``session``."""
    resolver = session.resolver

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_create_issue_relation(
        issue_id: str,
        related_issue_id: str,
        relation_type: str,
    ) -> str:
        """Link two issues.

        Args:
            issue_id: Identifier like ``ENG-1`` or a UUID.
            related_issue_id: Identifier or UUID of the other issue.
            relation_type: ``blocks``, ``blocked_by``, ``related`` or ``duplicate``.

        """
        kind = relation_type.strip().lower()
        if kind not in RELATION_TYPES:
            raise InvalidInputError(
                f"Unknown relation type '{relation_type}'. Use one of: {', '.join(RELATION_TYPES)}"
            )

        source = await resolver.resolve_issue_id(issue_id)
        target = await resolver.resolve_issue_id(related_issue_id)
        if kind == "blocked_by":
            source, target, kind = target, source, "blocks"

        input_data = {"issueId": source, "relatedIssueId": target, "type": kind}
        data = await session.execute(CREATE_ISSUE_RELATION, {"input": input_data})
        payload = mutation_payload(data, "issueRelationCreate", "Relation creation")
        raw = payload.get("issueRelation")
        if not isinstance(raw, dict):
            raise NotFoundError("No relation in response")
        return f"Created relation: {format_relation(parse_relation(raw))}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    @reports_errors
    async def linear_delete_issue_relation(relation_id: str) -> str:
        """Delete an issue relation.

        Args:
            relation_id: Relation UUID (shown by ``linear_get_issue``).

        """
        data = await session.execute(DELETE_ISSUE_RELATION, {"id": relation_id})
        mutation_payload(data, "issueRelationDelete", "Relation deletion")
        return f"Deleted relation {relation_id}"

    return [linear_create_issue_relation, linear_delete_issue_relation]
