# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Parse raw GraphQL nodes into typed records.

Every parser tolerates missing or mistyped fields: Linear omits fields
that a query did not select, and nested objects may be null.

Functions:
  parse_page_info, parse_team, parse_user, parse_state, parse_label,
  parse_issue_ref, parse_comment, parse_relation, parse_issue,
  parse_project, parse_cycle, parse_attachment, parse_history_entry,
  connection
"""

from __future__ import annotations

from typing import Any

from linear_gql.request import (
    _bool,
    _float,
    _int,
    _nested_str,
    _nodes,
    _opt_float,
    _opt_str,
    _str,
)
from linear_gql.types import (
    AttachmentInfo,
    CommentInfo,
    CycleInfo,
    HistoryEntry,
    IssueInfo,
    IssueRef,
    JSONObject,
    LabelInfo,
    PageInfo,
    ProjectInfo,
    RelationInfo,
    TeamInfo,
    UserInfo,
    WorkflowStateInfo,
)


def connection(data: Any, key: str) -> tuple[list[JSONObject], PageInfo]:  # noqa: ANN401 — raw JSON extraction
    """Split a Relay connection ``data[key]`` into its nodes and page info.

    Args:
        data: Untyped object holding the connection under ``key``.
        key: Connection field name, e.g. ``"issues"``.

    Returns:
        The dict nodes and the parsed PageInfo. Both are empty when the
        connection is missing.

    """
    nodes = _nodes(data, key)
    conn = data.get(key) if isinstance(data, dict) else None
    page = parse_page_info(conn.get("pageInfo") if isinstance(conn, dict) else None)
    return nodes, page


def parse_page_info(raw: Any) -> PageInfo:  # noqa: ANN401 — raw JSON extraction
    """Parse a raw ``pageInfo`` object into a PageInfo.

    Args:
        raw: Untyped ``pageInfo`` object. May be null.

    Returns:
        Parsed PageInfo; the empty default when ``raw`` is not an object.

    """
    if not isinstance(raw, dict):
        return PageInfo()
    return PageInfo(
        has_next_page=_bool(raw.get("hasNextPage")),
        end_cursor=_opt_str(raw.get("endCursor")),
    )


def parse_team(raw: JSONObject) -> TeamInfo:
    """Parse a raw GraphQL team node into a TeamInfo.

    Args:
        raw: Untyped team node from a GraphQL response.

    Returns:
        Parsed TeamInfo. ``members`` (when selected) becomes a count.

    """
    members = raw.get("members")
    count = len(_nodes(raw, "members")) if isinstance(members, dict) else None
    result = TeamInfo(
        id=_str(raw.get("id")),
        key=_str(raw.get("key")),
        name=_str(raw.get("name")),
        member_count=count,
    )
    return result


def parse_user(raw: JSONObject) -> UserInfo:
    """Parse a raw GraphQL user node into a UserInfo.

    Args:
        raw: Untyped user node from a GraphQL response.

    Returns:
        Parsed UserInfo; ``displayName`` is preferred over ``name``.

    """
    result = UserInfo(
        id=_str(raw.get("id")),
        name=_str(raw.get("displayName") or raw.get("name")),
        email=_opt_str(raw.get("email")),
        admin=_bool(raw.get("admin")),
        guest=_bool(raw.get("guest")),
    )
    return result


def parse_state(raw: JSONObject) -> WorkflowStateInfo:
    """Parse a raw GraphQL workflow state node into a WorkflowStateInfo.

    Args:
        raw: Untyped workflow state node from a GraphQL response.

    Returns:
        Parsed WorkflowStateInfo with coerced fields.

    """
    result = WorkflowStateInfo(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        type=_str(raw.get("type")),
        color=_opt_str(raw.get("color")),
        team_key=_nested_str(raw.get("team"), "key"),
    )
    return result


def parse_label(raw: JSONObject) -> LabelInfo:
    """Parse a raw GraphQL label node into a LabelInfo.

    Args:
        raw: Untyped issue label node from a GraphQL response.

    Returns:
        Parsed LabelInfo with coerced fields.

    """
    result = LabelInfo(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        color=_opt_str(raw.get("color")),
    )
    return result


def parse_issue_ref(raw: Any) -> IssueRef | None:  # noqa: ANN401 — raw JSON extraction
    """Parse a linked issue (parent, child, relation end) into an IssueRef.

    Args:
        raw: Untyped issue node. May be null.

    Returns:
        Parsed IssueRef, or None when ``raw`` is not an object.

    """
    if not isinstance(raw, dict):
        return None
    return IssueRef(identifier=_str(raw.get("identifier")), title=_str(raw.get("title")))


def parse_comment(raw: JSONObject) -> CommentInfo:
    """Parse a raw GraphQL comment node into a CommentInfo.

    Args:
        raw: Untyped comment node from a GraphQL response.

    Returns:
        Parsed CommentInfo with coerced fields.

    """
    result = CommentInfo(
        id=_str(raw.get("id")),
        body=_str(raw.get("body")),
        user=_nested_str(raw.get("user"), "displayName"),
        created_at=_opt_str(raw.get("createdAt")),
    )
    return result


def parse_relation(raw: JSONObject) -> RelationInfo:
    """Parse a raw GraphQL issue relation node into a RelationInfo.

    Args:
        raw: Untyped relation node from a GraphQL response.

    Returns:
        Parsed RelationInfo with both ends as IssueRefs.

    """
    result = RelationInfo(
        id=_str(raw.get("id")),
        type=_str(raw.get("type")),
        issue=parse_issue_ref(raw.get("issue")),
        related_issue=parse_issue_ref(raw.get("relatedIssue")),
    )
    return result


def parse_issue(raw: JSONObject) -> IssueInfo:
    """Parse a raw GraphQL issue node into an IssueInfo.

    Args:
        raw: Untyped issue node from a GraphQL response.

    Returns:
        Parsed IssueInfo with coerced fields. Detail-only fields are left
        at their defaults when the query did not select them.

    """
    assignee_node = raw.get("assignee")
    team_node = raw.get("team")
    children = [parse_issue_ref(n) for n in _nodes(raw, "children")]
    result = IssueInfo(
        id=_str(raw.get("id")),
        identifier=_str(raw.get("identifier")),
        title=_str(raw.get("title")),
        url=_opt_str(raw.get("url")),
        description=_opt_str(raw.get("description")),
        priority=_int(raw.get("priority")),
        estimate=_opt_float(raw.get("estimate")),
        due_date=_opt_str(raw.get("dueDate")),
        branch_name=_opt_str(raw.get("branchName")),
        created_at=_opt_str(raw.get("createdAt")),
        updated_at=_opt_str(raw.get("updatedAt")),
        state=_nested_str(raw.get("state"), "name"),
        assignee=_nested_str(assignee_node, "displayName"),
        assignee_email=_nested_str(assignee_node, "email"),
        team_key=_nested_str(team_node, "key"),
        team_name=_nested_str(team_node, "name"),
        project=_nested_str(raw.get("project"), "name"),
        labels=[_str(n.get("name")) for n in _nodes(raw, "labels") if n.get("name")],
        parent=parse_issue_ref(raw.get("parent")),
        children=[c for c in children if c is not None],
        comments=[parse_comment(n) for n in _nodes(raw, "comments")],
        relations=[parse_relation(n) for n in _nodes(raw, "relations")],
    )
    return result


def parse_project(raw: JSONObject) -> ProjectInfo:
    """Parse a raw GraphQL project node into a ProjectInfo.

    Args:
        raw: Untyped project node from a GraphQL response.

    Returns:
        Parsed ProjectInfo. Team keys and member names come from the
        ``teams`` and ``members`` connections when selected.

    """
    lead = raw.get("lead")
    result = ProjectInfo(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        state=_opt_str(raw.get("state")),
        progress=_float(raw.get("progress")),
        description=_opt_str(raw.get("description")),
        url=_opt_str(raw.get("url")),
        start_date=_opt_str(raw.get("startDate")),
        target_date=_opt_str(raw.get("targetDate")),
        lead=_nested_str(lead, "displayName"),
        team_keys=[_str(t.get("key")) for t in _nodes(raw, "teams")],
        members=[_str(m.get("displayName")) for m in _nodes(raw, "members")],
    )
    return result


def parse_cycle(raw: JSONObject) -> CycleInfo:
    """Parse a raw GraphQL cycle node into a CycleInfo.

    Args:
        raw: Untyped cycle node from a GraphQL response.

    Returns:
        Parsed CycleInfo with coerced fields.

    """
    result = CycleInfo(
        id=_str(raw.get("id")),
        number=_int(raw.get("number")),
        name=_opt_str(raw.get("name")),
        starts_at=_opt_str(raw.get("startsAt")),
        ends_at=_opt_str(raw.get("endsAt")),
        completed_at=_opt_str(raw.get("completedAt")),
        progress=_float(raw.get("progress")),
    )
    return result


def parse_attachment(raw: JSONObject) -> AttachmentInfo:
    """Parse a raw GraphQL attachment node into an AttachmentInfo.

    Args:
        raw: Untyped attachment node from a GraphQL response.

    Returns:
        Parsed AttachmentInfo with coerced fields.

    """
    return AttachmentInfo(
        id=_str(raw.get("id")),
        url=_str(raw.get("url")),
        title=_opt_str(raw.get("title")),
        created_at=_opt_str(raw.get("createdAt")),
    )


def parse_history_entry(raw: JSONObject) -> HistoryEntry:
    """Parse a raw GraphQL issue history node into a HistoryEntry.

    Args:
        raw: Untyped history node from a GraphQL response.

    Returns:
        Parsed HistoryEntry. Null state and label fields mean the event
        did not touch them.

    """
    return HistoryEntry(
        id=_str(raw.get("id")),
        created_at=_opt_str(raw.get("createdAt")),
        actor=_nested_str(raw.get("actor"), "displayName"),
        from_state=_nested_str(raw.get("fromState"), "name"),
        to_state=_nested_str(raw.get("toState"), "name"),
        added_labels=[_str(n.get("name")) for n in _nodes(raw, "addedLabels")],
        removed_labels=[_str(n.get("name")) for n in _nodes(raw, "removedLabels")],
    )
