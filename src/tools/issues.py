# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Issue tools.

Tools:
  linear_list_issues        -- filtered, ordered, paginated issue list
  linear_get_issue          -- full detail by identifier (ENG-123) or UUID
  linear_my_issues          -- issues assigned to the caller, grouped by state
  linear_create_issue       -- create from team key, emails, names
  linear_update_issue       -- partial update; "none" clears a field
  linear_archive_issue      -- archive an issue
  linear_unarchive_issue    -- restore an archived issue
  linear_get_issue_history  -- state transitions and label changes
"""

from __future__ import annotations

from typing import Any

from dedalus_mcp import tool
from dedalus_mcp.types import ToolAnnotations

from linear_gql import filters
from linear_gql.errors import InvalidInputError, NotFoundError
from linear_gql.format import (
    format_history_entry,
    format_issue_detail,
    format_issue_summary,
    format_pagination,
)
from linear_gql.parse import connection, parse_history_entry, parse_issue
from linear_gql.request import _nested_str, _nodes
from linear_gql.resolver import is_clear_sentinel
from linear_gql.session import Session
from linear_gql.types import IssueInfo, JSONObject
from tools._helpers import clamp_limit, mutation_payload, parse_priority, reports_errors


# --- Queries ---

_SUMMARY_FIELDS = """
    id identifier title priority estimate dueDate url
    state { id name type color }
    assignee { id displayName email }
    team { id key name }
    project { id name state progress }
    labels { nodes { id name } }
"""

_DETAIL_FIELDS = """
    id identifier title description priority estimate dueDate branchName
    createdAt updatedAt url
    state { id name type color }
    assignee { id displayName email }
    team { id key name }
    project { id name state progress }
    labels { nodes { id name } }
    parent { identifier title }
    children { nodes { identifier title } }
    relations { nodes { id type relatedIssue { identifier title } } }
    comments { nodes { id body createdAt user { displayName } } }
"""

LIST_ISSUES = f"""
query ListIssues($first: Int!, $after: String, $filter: IssueFilter, $orderBy: PaginationOrderBy) {{
    issues(first: $first, after: $after, filter: $filter, orderBy: $orderBy) {{
        nodes {{ {_SUMMARY_FIELDS} }}
        pageInfo {{ hasNextPage endCursor }}
    }}
}}
"""

GET_ISSUE = f"""
query GetIssue($id: String!) {{
    issue(id: $id) {{ {_DETAIL_FIELDS} }}
}}
"""

ISSUE_TEAM = """
query IssueTeam($id: String!) {
    issue(id: $id) { id team { id key } }
}
"""

CREATE_ISSUE = f"""
mutation CreateIssue($input: IssueCreateInput!) {{
    issueCreate(input: $input) {{
        success
        issue {{ {_DETAIL_FIELDS} }}
    }}
}}
"""

UPDATE_ISSUE = f"""
mutation UpdateIssue($id: String!, $input: IssueUpdateInput!) {{
    issueUpdate(id: $id, input: $input) {{
        success
        issue {{ {_DETAIL_FIELDS} }}
    }}
}}
"""

ARCHIVE_ISSUE = """
mutation ArchiveIssue($id: String!) {
    issueArchive(id: $id) { success }
}
"""

UNARCHIVE_ISSUE = """
mutation UnarchiveIssue($id: String!) {
    issueUnarchive(id: $id) { success }
}
"""

GET_ISSUE_HISTORY = """
query GetIssueHistory($id: String!, $first: Int!) {
    issue(id: $id) {
        history(first: $first) {
            nodes {
                id createdAt
                fromState { name }
                toState { name }
                actor { displayName }
                addedLabels { nodes { name } }
                removedLabels { nodes { name } }
            }
        }
    }
}
"""

_ORDER_BY = ("createdAt", "updatedAt", "priority")

_RELATION_NOTE = (
    "Note: Linear can only filter on whether an issue has relations, so "
    "results may include issues related in the other direction."
)


# --- Helpers ---


def _issue_list(issues: list[IssueInfo]) -> str:
    if not issues:
        return "No issues found."
    return "\n".join(format_issue_summary(issue) for issue in issues)


def _group_by_state(issues: list[IssueInfo]) -> str:
    groups: dict[str, list[IssueInfo]] = {}
    for issue in issues:
        groups.setdefault(issue.state or "No state", []).append(issue)
    sections = []
    for state, members in groups.items():
        lines = [f"## {state} ({len(members)})"]
        lines += [format_issue_summary(issue) for issue in members]
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def _issue_payload(payload: JSONObject) -> IssueInfo:
    raw = payload.get("issue")
    if not isinstance(raw, dict):
        raise NotFoundError("No issue in response")
    return parse_issue(raw)


# --- Tools ---


def issue_tools(session: Session) -> list[Any]:
    """Build the issue tools bound to ``session``."""
    resolver = session.resolver

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_list_issues(
        team: str | None = None,
        assignee: str | None = None,
        creator: str | None = None,
        status: str | None = None,
        project: str | None = None,
        label: str | None = None,
        priority: str | None = None,
        estimate: float | None = None,
        has_blocked_by_relation: bool | None = None,
        has_blocking_relation: bool | None = None,
        order_by: str = "updatedAt",
        limit: int | None = None,
        cursor: str | None = None,
        due_before: str | None = None,
        due_after: str | None = None,
        created_before: str | None = None,
        created_after: str | None = None,
        updated_before: str | None = None,
        updated_after: str | None = None,
    ) -> str:
        """List Linear issues with human-friendly filters.

        Args:
            team: Team key (e.g. ``ENG``).
            assignee: Assignee email or display name.
            creator: Creator email or display name.
            status: Workflow state name (e.g. ``In Progress``).
            project: Project name, partial match.
            label: Label name.
            priority: ``urgent``, ``high``, ``medium``, ``low`` or ``none``.
            estimate: Exact point estimate.
            has_blocked_by_relation: Only issues with relations.
            has_blocking_relation: Only issues with relations.
            order_by: ``createdAt``, ``updatedAt`` or ``priority``.
            limit: Page size, 1-100 (default 25).
            cursor: ``endCursor`` from a previous page.
            due_before: ISO date upper bound on the due date.
            due_after: ISO date lower bound on the due date.
            created_before: ISO timestamp upper bound on creation.
            created_after: ISO timestamp lower bound on creation.
            updated_before: ISO timestamp upper bound on last update.
            updated_after: ISO timestamp lower bound on last update.

        Returns:
            One line per issue plus a pagination footer.

        """
        if order_by not in _ORDER_BY:
            raise InvalidInputError(
                f"Unknown order '{order_by}'. Use one of: {', '.join(_ORDER_BY)}"
            )

        parts: list[Any] = []
        if team:
            parts.append(filters.team(team))
        if assignee:
            parts.append(filters.assignee(assignee))
        if creator:
            parts.append(filters.creator(creator))
        if status:
            parts.append(filters.status(status))
        if project:
            parts.append(filters.project(project))
        if label:
            parts.append(filters.label(label))
        if priority:
            parts.append(filters.priority(parse_priority(priority)))
        if estimate is not None:
            parts.append(filters.estimate(estimate))
        wants_relations = bool(has_blocked_by_relation or has_blocking_relation)
        if wants_relations:
            parts.append(filters.has_any_relation())
        for ranged in (
            filters.due_date(due_before, due_after),
            filters.created_at(created_before, created_after),
            filters.updated_at(updated_before, updated_after),
        ):
            if ranged is not None:
                parts.append(ranged)

        variables: JSONObject = {
            "first": clamp_limit(limit),
            "orderBy": order_by,
        }
        if cursor:
            variables["after"] = cursor
        combined = filters.combine(parts)
        if combined is not None:
            variables["filter"] = combined.to_json()

        data = await session.execute(LIST_ISSUES, variables)
        nodes, page = connection(data, "issues")
        issues = [parse_issue(node) for node in nodes]
        text = _issue_list(issues) + format_pagination(page, len(issues))
        if wants_relations:
            text += f"\n{_RELATION_NOTE}"
        return text

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_get_issue(issue_id: str) -> str:
        """Get full details of an issue, including comments and sub-issues.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.

        """
        uuid = await resolver.resolve_issue_id(issue_id)
        data = await session.execute(GET_ISSUE, {"id": uuid})
        raw = data.get("issue")
        if not isinstance(raw, dict):
            raise NotFoundError(f"Issue '{issue_id}' not found")
        return format_issue_detail(parse_issue(raw))

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_my_issues(
        include_completed: bool = False,
        team: str | None = None,
        priority: str | None = None,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> str:
        """List issues assigned to the authenticated user, grouped by state.

        Args:
            include_completed: Also show completed and canceled issues.
            team: Team key to restrict to.
            priority: ``urgent``, ``high``, ``medium``, ``low`` or ``none``.
            limit: Page size, 1-100 (default 50).
            cursor: ``endCursor`` from a previous page.

        """
        me = await resolver.viewer()
        parts: list[Any] = [filters.viewer(me.id)]
        if not include_completed:
            parts.append(filters.exclude_completed())
        if team:
            parts.append(filters.team(team))
        if priority:
            parts.append(filters.priority(parse_priority(priority)))

        variables: JSONObject = {
            "first": clamp_limit(limit, default=50),
            "orderBy": "updatedAt",
            "filter": filters.serialize(filters.combine(parts)),
        }
        if cursor:
            variables["after"] = cursor

        data = await session.execute(LIST_ISSUES, variables)
        nodes, page = connection(data, "issues")
        issues = [parse_issue(node) for node in nodes]
        if not issues:
            return f"No issues assigned to {me.name}."
        header = f"# Issues assigned to {me.name}\n\n"
        return header + _group_by_state(issues) + format_pagination(page, len(issues))

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_create_issue(
        team: str,
        title: str,
        description: str | None = None,
        assignee: str | None = None,
        status: str | None = None,
        priority: str | None = None,
        estimate: float | None = None,
        due_date: str | None = None,
        labels: str | None = None,
        project: str | None = None,
        parent: str | None = None,
    ) -> str:
        """Create a Linear issue from human-friendly inputs.

        Team key, assignee email, state name, label names, project name and
        parent identifier are resolved to UUIDs before the mutation runs.

        Args:
            team: Team key (e.g. ``ENG``). Required.
            title: Issue title.
            description: Markdown body.
            assignee: Assignee email.
            status: Workflow state name within ``team``.
            priority: ``urgent``, ``high``, ``medium``, ``low`` or ``none``.
            estimate: Point estimate.
            due_date: ISO date (``YYYY-MM-DD``).
            labels: Comma-separated label names.
            project: Project name (exact or unique partial match).
            parent: Parent issue identifier (e.g. ``ENG-1``).

        """
        input_data: JSONObject = {
            "teamId": await resolver.resolve_team_id(team),
            "title": title,
        }
        if description is not None:
            input_data["description"] = description
        if assignee:
            input_data["assigneeId"] = await resolver.resolve_user_id(assignee)
        if status:
            input_data["stateId"] = await resolver.resolve_state_id(status, team)
        if priority:
            input_data["priority"] = parse_priority(priority)
        if estimate is not None:
            input_data["estimate"] = estimate
        if due_date:
            input_data["dueDate"] = due_date
        if labels:
            label_ids = await resolver.resolve_label_ids(labels)
            if label_ids:
                input_data["labelIds"] = label_ids
        if project:
            input_data["projectId"] = await resolver.resolve_project_id(project)
        if parent:
            input_data["parentId"] = await resolver.resolve_issue_id(parent)

        data = await session.execute(CREATE_ISSUE, {"input": input_data})
        issue = _issue_payload(mutation_payload(data, "issueCreate", "Issue creation"))
        return f"Created issue {issue.identifier}\n\n{format_issue_detail(issue)}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_update_issue(
        issue_id: str,
        title: str | None = None,
        description: str | None = None,
        assignee: str | None = None,
        status: str | None = None,
        priority: str | None = None,
        estimate: float | None = None,
        due_date: str | None = None,
        labels: str | None = None,
        project: str | None = None,
        parent: str | None = None,
    ) -> str:
        """Update an issue. Only the fields you pass are changed.

        Pass ``none`` for assignee, due_date, project or parent to clear it.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.
            title: New title.
            description: New markdown body.
            assignee: Assignee email, or ``none`` to unassign.
            status: Workflow state name in the issue's team.
            priority: ``urgent``, ``high``, ``medium``, ``low`` or ``none``.
            estimate: New point estimate.
            due_date: ISO date, or ``none`` to clear.
            labels: Comma-separated label names (replaces all labels).
            project: Project name, or ``none`` to remove from its project.
            parent: Parent identifier, or ``none`` to detach.

        """
        fields = (
            title, description, assignee, status, priority,
            estimate, due_date, labels, project, parent,
        )
        if all(value is None for value in fields):
            raise InvalidInputError("No fields to update")

        uuid = await resolver.resolve_issue_id(issue_id)
        input_data: JSONObject = {}
        if title is not None:
            input_data["title"] = title
        if description is not None:
            input_data["description"] = description
        if assignee is not None:
            input_data["assigneeId"] = (
                None if is_clear_sentinel(assignee)
                else await resolver.resolve_user_id(assignee)
            )
        if status is not None:
            data = await session.execute(ISSUE_TEAM, {"id": uuid})
            issue_node = data.get("issue")
            team_node = issue_node.get("team") if isinstance(issue_node, dict) else None
            team_key = _nested_str(team_node, "key")
            if not team_key:
                raise NotFoundError(f"Team for issue '{issue_id}' not found")
            input_data["stateId"] = await resolver.resolve_state_id(status, team_key)
        if priority is not None:
            input_data["priority"] = parse_priority(priority)
        if estimate is not None:
            input_data["estimate"] = estimate
        if due_date is not None:
            input_data["dueDate"] = None if is_clear_sentinel(due_date) else due_date
        if labels is not None:
            input_data["labelIds"] = await resolver.resolve_label_ids(labels)
        if project is not None:
            input_data["projectId"] = (
                None if is_clear_sentinel(project)
                else await resolver.resolve_project_id(project)
            )
        if parent is not None:
            input_data["parentId"] = (
                None if is_clear_sentinel(parent)
                else await resolver.resolve_issue_id(parent)
            )

        data = await session.execute(UPDATE_ISSUE, {"id": uuid, "input": input_data})
        issue = _issue_payload(mutation_payload(data, "issueUpdate", "Issue update"))
        return f"Updated issue {issue.identifier}\n\n{format_issue_detail(issue)}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    @reports_errors
    async def linear_archive_issue(issue_id: str) -> str:
        """Archive an issue.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.

        """
        uuid = await resolver.resolve_issue_id(issue_id)
        data = await session.execute(ARCHIVE_ISSUE, {"id": uuid})
        mutation_payload(data, "issueArchive", "Issue archive")
        return f"Archived issue {issue_id}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_unarchive_issue(issue_id: str) -> str:
        """Restore an archived issue.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.

        """
        uuid = await resolver.resolve_issue_id(issue_id)
        data = await session.execute(UNARCHIVE_ISSUE, {"id": uuid})
        mutation_payload(data, "issueUnarchive", "Issue unarchive")
        return f"Unarchived issue {issue_id}"

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_get_issue_history(issue_id: str, limit: int | None = None) -> str:
        """Show an issue's history: state transitions and label changes.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.
            limit: Max entries, 1-100 (default 50).

        """
        uuid = await resolver.resolve_issue_id(issue_id)
        variables = {"id": uuid, "first": clamp_limit(limit, default=50)}
        data = await session.execute(GET_ISSUE_HISTORY, variables)
        raw = data.get("issue")
        if not isinstance(raw, dict):
            raise NotFoundError(f"Issue '{issue_id}' not found")
        entries = [parse_history_entry(node) for node in _nodes(raw, "history")]
        if not entries:
            return "No history entries found for this issue."
        lines = [format_history_entry(entry) for entry in entries]
        return f"History of {issue_id}:\n\n" + "\n".join(lines)

    return [
        linear_list_issues,
        linear_get_issue,
        linear_my_issues,
        linear_create_issue,
        linear_update_issue,
        linear_archive_issue,
        linear_unarchive_issue,
        linear_get_issue_history,
    ]
