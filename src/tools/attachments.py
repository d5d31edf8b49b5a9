# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Attachment tools: link external resources to Linear issues.

Tools:
  linear_list_attachments  -- attachments on an issue
  linear_add_attachment    -- link a URL to an issue (URL is idempotent per issue)
"""

from __future__ import annotations

from typing import Any

from dedalus_mcp import tool
from dedalus_mcp.types import ToolAnnotations

from linear_gql.errors import NotFoundError
from linear_gql.format import format_attachment
from linear_gql.parse import parse_attachment
from linear_gql.request import _nodes
from linear_gql.session import Session
from tools._helpers import mutation_payload, reports_errors


_ATTACHMENT_FIELDS = "id title url createdAt"

LIST_ATTACHMENTS = f"""
query ListAttachments($id: String!) {{
    issue(id: $id) {{
        attachments {{
            nodes {{ {_ATTACHMENT_FIELDS} }}
        }}
    }}
}}
"""

ADD_ATTACHMENT = f"""
mutation AddAttachment($input: AttachmentCreateInput!) {{
    attachmentCreate(input: $input) {{
        success
        attachment {{ {_ATTACHMENT_FIELDS} }}
    }}
}}
"""


def attachment_tools(session: Session) -> list[Any]:
    """Build the attachment tools bound to ``session``."""
    resolver = session.resolver

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_list_attachments(issue_id: str) -> str:
        """List the attachments on an issue.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.

        """
        uuid = await resolver.resolve_issue_id(issue_id)
        data = await session.execute(LIST_ATTACHMENTS, {"id": uuid})
        issue = data.get("issue")
        if not isinstance(issue, dict):
            raise NotFoundError(f"Issue '{issue_id}' not found")
        attachments = [parse_attachment(node) for node in _nodes(issue, "attachments")]
        if not attachments:
            return "No attachments found on this issue."
        return "Attachments:\n\n" + "\n".join(format_attachment(a) for a in attachments)

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_add_attachment(issue_id: str, url: str, title: str) -> str:
        """Link an external URL to an issue.

        Re-attaching a URL already on the issue updates that attachment
        instead of creating a duplicate.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.
            url: External URL to link.
            title: Display title.

        """
        uuid = await resolver.resolve_issue_id(issue_id)
        input_data = {"issueId": uuid, "title": title, "url": url}
        data = await session.execute(ADD_ATTACHMENT, {"input": input_data})
        payload = mutation_payload(data, "attachmentCreate", "Attachment creation")
        raw = payload.get("attachment")
        if not isinstance(raw, dict):
            raise NotFoundError("No attachment in response")
        return f"Attachment added: {format_attachment(parse_attachment(raw))}"

    return [linear_list_attachments, linear_add_attachment]
