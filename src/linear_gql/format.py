# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Render typed records as compact text for tool results.

Functions:
  priority_label(n)                     -- "Urgent", "High", ... "None"
  format_issue_summary(issue)           -- one line per issue
  format_issue_detail(issue)            -- markdown block
  format_comment, format_team, format_user, format_workflow_state,
  format_label, format_project, format_project_detail,
  format_cycle_summary, format_cycle_detail, format_relation,
  format_attachment, format_history_entry
  format_pagination(page, count)        -- footer with the next cursor
"""

from __future__ import annotations

from linear_gql.types import (
    AttachmentInfo,
    CommentInfo,
    CycleInfo,
    HistoryEntry,
    IssueInfo,
    LabelInfo,
    PageInfo,
    ProjectInfo,
    RelationInfo,
    TeamInfo,
    UserInfo,
    WorkflowStateInfo,
)


_PRIORITY_LABELS = {1: "Urgent", 2: "High", 3: "Medium", 4: "Low"}


def priority_label(priority: int) -> str:
    return _PRIORITY_LABELS.get(priority, "None")


def _date(iso: str) -> str:
    """``2025-01-02T03:04:05.000Z`` -> ``2025-01-02``."""
    return iso[:10]


def _pct(progress: float) -> int:
    return round(progress * 100)


# --- Issues ---


def format_issue_summary(issue: IssueInfo) -> str:
    """``[ENG-1] Title (In Progress, High, @Ada, Bug, Frontend)``."""
    meta: list[str] = []
    if issue.state:
        meta.append(issue.state)
    meta.append(priority_label(issue.priority))
    if issue.assignee:
        meta.append(f"@{issue.assignee}")
    if issue.labels:
        meta.append(", ".join(issue.labels))
    return f"[{issue.identifier}] {issue.title} ({', '.join(meta)})"


def format_issue_detail(issue: IssueInfo) -> str:
    """Markdown view of a single issue."""
    lines = [f"# {issue.identifier}: {issue.title}", ""]

    if issue.state:
        lines.append(f"**Status:** {issue.state}")
    lines.append(f"**Priority:** {priority_label(issue.priority)}")
    if issue.assignee:
        if issue.assignee_email:
            lines.append(f"**Assignee:** {issue.assignee} <{issue.assignee_email}>")
        else:
            lines.append(f"**Assignee:** {issue.assignee}")
    if issue.team_key:
        lines.append(f"**Team:** {issue.team_name or issue.team_key} ({issue.team_key})")
    if issue.project:
        lines.append(f"**Project:** {issue.project}")
    if issue.labels:
        lines.append(f"**Labels:** {', '.join(issue.labels)}")
    if issue.estimate is not None:
        lines.append(f"**Estimate:** {issue.estimate:g}")
    if issue.due_date:
        lines.append(f"**Due:** {issue.due_date}")
    if issue.branch_name:
        lines.append(f"**Branch:** {issue.branch_name}")
    if issue.created_at:
        lines.append(f"**Created:** {_date(issue.created_at)}")
    if issue.updated_at:
        lines.append(f"**Updated:** {_date(issue.updated_at)}")
    if issue.url:
        lines.append(f"**URL:** {issue.url}")

    if issue.parent:
        lines += ["", f"**Parent:** [{issue.parent.identifier}] {issue.parent.title}"]

    if issue.description:
        lines += ["", "## Description", issue.description]

    if issue.children:
        lines += ["", "## Sub-issues"]
        lines += [f"- [{c.identifier}] {c.title}" for c in issue.children]

    if issue.relations:
        lines += ["", "## Relations"]
        lines += [f"- {format_relation(r)}" for r in issue.relations]

    if issue.comments:
        lines += ["", "## Comments"]
        for comment in issue.comments:
            lines += [format_comment(comment), ""]

    return "\n".join(lines).rstrip()


def format_comment(comment: CommentInfo) -> str:
    author = comment.user or "Unknown"
    date = _date(comment.created_at) if comment.created_at else "?"
    return f"**{author}** ({date}): {comment.body}"


def format_relation(relation: RelationInfo) -> str:
    kind = relation.type.replace("_", " ")
    parts = []
    if relation.issue:
        parts.append(f"[{relation.issue.identifier}]")
    parts.append(kind)
    if relation.related_issue:
        parts.append(
            f"[{relation.related_issue.identifier}] {relation.related_issue.title}"
        )
    return f"{' '.join(parts)} (relation id: {relation.id})"


# --- Teams, users, states, labels ---


def format_team(team: TeamInfo) -> str:
    if team.member_count is None:
        return f"{team.key} | {team.name}"
    return f"{team.key} | {team.name} ({team.member_count} members)"


def format_user(user: UserInfo) -> str:
    role = "admin" if user.admin else "guest" if user.guest else "member"
    return f"{user.name} <{user.email or 'no email'}> ({role})"


def format_workflow_state(state: WorkflowStateInfo) -> str:
    return f"{state.name} [{state.type}] ({state.color or 'no color'})"


def format_label(label: LabelInfo) -> str:
    if label.color:
        return f"{label.name} ({label.color}) [id: {label.id}]"
    return f"{label.name} [id: {label.id}]"


# --- Projects ---


def format_project(project: ProjectInfo) -> str:
    return f"{project.name} [{project.state or 'unknown'}] - {_pct(project.progress)}% complete"


def format_project_detail(project: ProjectInfo) -> str:
    lines = [f"# {project.name}", ""]
    lines.append(f"**State:** {project.state or 'unknown'}")
    lines.append(f"**Progress:** {_pct(project.progress)}%")
    if project.lead:
        lines.append(f"**Lead:** {project.lead}")
    if project.team_keys:
        lines.append(f"**Teams:** {', '.join(project.team_keys)}")
    if project.start_date:
        lines.append(f"**Start:** {project.start_date}")
    if project.target_date:
        lines.append(f"**Target:** {project.target_date}")
    if project.members:
        lines.append(f"**Members:** {', '.join(project.members)}")
    if project.url:
        lines.append(f"**URL:** {project.url}")
    lines.append(f"**ID:** {project.id}")
    if project.description:
        lines += ["", "## Description", project.description]
    return "\n".join(lines)


# --- Cycles ---


def _cycle_title(cycle: CycleInfo) -> str:
    if cycle.name:
        return f"Cycle {cycle.number}: {cycle.name}"
    return f"Cycle {cycle.number}"


def format_cycle_summary(cycle: CycleInfo) -> str:
    start = _date(cycle.starts_at) if cycle.starts_at else "?"
    end = _date(cycle.ends_at) if cycle.ends_at else "?"
    done = " (completed)" if cycle.completed_at else ""
    return (
        f"{_cycle_title(cycle)} | {start} → {end} | "
        f"{_pct(cycle.progress)}%{done} [id: {cycle.id}]"
    )


def format_cycle_detail(cycle: CycleInfo) -> str:
    lines = [f"# {_cycle_title(cycle)}", ""]
    if cycle.starts_at:
        lines.append(f"**Starts:** {_date(cycle.starts_at)}")
    if cycle.ends_at:
        lines.append(f"**Ends:** {_date(cycle.ends_at)}")
    if cycle.completed_at:
        lines.append(f"**Completed:** {_date(cycle.completed_at)}")
    lines.append(f"**Progress:** {_pct(cycle.progress)}%")
    lines.append(f"**ID:** {cycle.id}")
    return "\n".join(lines)


# --- Attachments, history ---


def format_attachment(attachment: AttachmentInfo) -> str:
    title = attachment.title or attachment.url
    line = f"{title} <{attachment.url}>"
    if attachment.created_at:
        line += f" (added {_date(attachment.created_at)})"
    return f"{line} [id: {attachment.id}]"


def format_history_entry(entry: HistoryEntry) -> str:
    """``2025-01-02 by Ada: Todo -> In Progress; +Bug``."""
    changes: list[str] = []
    if entry.from_state or entry.to_state:
        changes.append(f"{entry.from_state or '?'} -> {entry.to_state or '?'}")
    changes += [f"+{name}" for name in entry.added_labels]
    changes += [f"-{name}" for name in entry.removed_labels]
    when = _date(entry.created_at) if entry.created_at else "?"
    who = entry.actor or "system"
    return f"{when} by {who}: {'; '.join(changes) or 'other change'}"


# --- Pagination ---


def format_pagination(page: PageInfo, count: int) -> str:
    """Footer telling the caller whether (and how) to fetch more."""
    plural = "" if count == 1 else "s"
    if page.has_next_page and page.end_cursor:
        return (
            f"\n---\nShowing {count} result{plural}. More available; "
            f'pass cursor "{page.end_cursor}" to continue.'
        )
    if page.has_next_page:
        return f"\n---\nShowing {count} result{plural}. More available."
    return f"\n---\nShowing all {count} result{plural}."
