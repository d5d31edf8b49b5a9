# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Label tools.

Tools:
  linear_list_labels    -- workspace or team labels
  linear_create_label   -- create a label
  linear_update_label   -- rename or recolor a label
  linear_archive_label  -- delete a label
"""

from __future__ import annotations

from typing import Any

from dedalus_mcp import tool
from dedalus_mcp.types import ToolAnnotations

from linear_gql import filters
from linear_gql.errors import InvalidInputError, NotFoundError
from linear_gql.format import format_label
from linear_gql.parse import connection, parse_label
from linear_gql.session import Session
from linear_gql.types import JSONObject
from tools._helpers import mutation_payload, reports_errors


LIST_LABELS = """
query ListLabels($first: Int!, $filter: IssueLabelFilter) {
    issueLabels(first: $first, filter: $filter) {
        nodes { id name color }
    }
}
"""

CREATE_LABEL = """
mutation CreateLabel($input: IssueLabelCreateInput!) {
    issueLabelCreate(input: $input) {
        success
        issueLabel { id name color }
    }
}
"""

UPDATE_LABEL = """
mutation UpdateLabel($id: String!, $input: IssueLabelUpdateInput!) {
    issueLabelUpdate(id: $id, input: $input) {
        success
        issueLabel { id name color }
    }
}
"""

DELETE_LABEL = """
mutation DeleteLabel($id: String!) {
    issueLabelDelete(id: $id) { success }
}
"""


def label_tools(session: Session) -> list[Any]:
    """Build the label tools bound to ``session``."""

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_list_labels(team: str | None = None) -> str:
        """List issue labels.

        Args:
            team: Team key; only that team's labels.

        """
        variables: JSONObject = {"first": 250}
        if team:
            variables["filter"] = filters.label_team(team).to_json()
        data = await session.execute(LIST_LABELS, variables)
        nodes, _ = connection(data, "issueLabels")
        if not nodes:
            return "No labels found."
        return "\n".join(format_label(parse_label(node)) for node in nodes)

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_create_label(
        name: str,
        team: str | None = None,
        color: str | None = None,
    ) -> str:
        """Create an issue label.

        Args:
            name: Label name.
            team: Team key; omit for a workspace label.
            color: Hex color, e.g. ``#ff0000``.

        """
        input_data: JSONObject = {"name": name}
        if team:
            input_data["teamId"] = await session.resolver.resolve_team_id(team)
        if color:
            input_data["color"] = color
        data = await session.execute(CREATE_LABEL, {"input": input_data})
        payload = mutation_payload(data, "issueLabelCreate", "Label creation")
        raw = payload.get("issueLabel")
        if not isinstance(raw, dict):
            raise NotFoundError("No label in response")
        return f"Created label {format_label(parse_label(raw))}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_update_label(
        label_id: str,
        name: str | None = None,
        color: str | None = None,
    ) -> str:
        """Rename or recolor an issue label.

        Args:
            label_id: Label UUID.
            name: New label name.
            color: New hex color, e.g. ``#ff0000``.

        """
        input_data: JSONObject = {}
        if name is not None:
            input_data["name"] = name
        if color is not None:
            input_data["color"] = color
        if not input_data:
            raise InvalidInputError("No fields to update. Provide name or color.")
        data = await session.execute(UPDATE_LABEL, {"id": label_id, "input": input_data})
        payload = mutation_payload(data, "issueLabelUpdate", "Label update")
        raw = payload.get("issueLabel")
        if not isinstance(raw, dict):
            raise NotFoundError("No label in response")
        return f"Updated label {format_label(parse_label(raw))}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    @reports_errors
    async def linear_archive_label(label_id: str) -> str:
        """Remove an issue label from the workspace.

        Args:
            label_id: Label UUID.

        """
        data = await session.execute(DELETE_LABEL, {"id": label_id})
        mutation_payload(data, "issueLabelDelete", "Label deletion")
        return f"Deleted label {label_id}"

    return [
        linear_list_labels,
        linear_create_label,
        linear_update_label,
        linear_archive_label,
    ]
