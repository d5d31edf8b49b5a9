# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Typed models for Linear API responses.

Result types (frozen dataclasses):
  PageInfo             -- Relay cursor state for a connection
  TeamInfo             -- team summary
  UserInfo             -- user profile
  WorkflowStateInfo    -- workflow state (issue status)
  LabelInfo            -- issue label
  IssueRef             -- identifier + title of a linked issue
  CommentInfo          -- issue comment
  RelationInfo         -- issue relation (blocks, related, ...)
  ProjectInfo          -- project summary / detail
  CycleInfo            -- cycle summary
  AttachmentInfo       -- issue attachment (external link)
  HistoryEntry         -- one issue history event (state or label change)
  IssueInfo            -- issue summary / detail

Type aliases:
  JSONValue            -- recursive JSON value (pre-3.12 TypeAlias)
  JSONObject           -- dict[str, JSONValue]

Constants:
  PRIORITY_LEVELS      -- priority name -> Linear priority number
  RELATION_TYPES       -- accepted issue relation types
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias


# --- JSON types ---

JSONValue: TypeAlias = str | int | float | bool | dict[str, Any] | list[Any] | None
"""Recursive JSON value: primitive, object, or array.

Cannot be truly recursive with TypeAlias (pre-3.12); uses Any for nesting.
"""

JSONObject: TypeAlias = dict[str, JSONValue]
"""JSON object: string keys mapped to JSON values."""


# --- Enumerations ---

PRIORITY_LEVELS: dict[str, int] = {
    "none": 0,
    "urgent": 1,
    "high": 2,
    "medium": 3,
    "low": 4,
}
"""Priority names accepted by tools, mapped to Linear's numeric priority."""

RELATION_TYPES: tuple[str, ...] = ("blocks", "blocked_by", "related", "duplicate")


# --- Pagination ---


@dataclass(frozen=True, slots=True)
class PageInfo:
    """Relay cursor state, passed through untouched."""

    # fmt: off
    has_next_page: bool       = False
    end_cursor:    str | None = None
    # fmt: on


# --- Teams ---


@dataclass(frozen=True, slots=True)
class TeamInfo:
    """Team summary."""

    # fmt: off
    id:           str
    key:          str
    name:         str
    member_count: int | None = None
    # fmt: on


# --- Users ---


@dataclass(frozen=True, slots=True)
class UserInfo:
    """User profile."""

    # fmt: off
    id:    str
    name:  str                 # displayName
    email: str | None = None
    admin: bool       = False
    guest: bool       = False
    # fmt: on


# --- Workflow States ---


@dataclass(frozen=True, slots=True)
class WorkflowStateInfo:
    """Workflow state (issue status).

    Types: triage, backlog, unstarted, started, completed, canceled.
    """

    # fmt: off
    id:       str
    name:     str
    type:     str
    color:    str | None = None
    team_key: str | None = None
    # fmt: on


# --- Labels ---


@dataclass(frozen=True, slots=True)
class LabelInfo:
    """Issue label."""

    # fmt: off
    id:    str
    name:  str
    color: str | None = None
    # fmt: on


# --- Issues ---


@dataclass(frozen=True, slots=True)
class IssueRef:
    """Identifier and title of a related issue (parent, child, relation end)."""

    # fmt: off
    identifier: str
    title:      str
    # fmt: on


@dataclass(frozen=True, slots=True)
class CommentInfo:
    """Issue comment."""

    # fmt: off
    id:         str
    body:       str
    user:       str | None = None
    created_at: str | None = None
    # fmt: on


@dataclass(frozen=True, slots=True)
class RelationInfo:
    """Directed relation between two issues."""

    # fmt: off
    id:            str
    type:          str
    issue:         IssueRef | None = None
    related_issue: IssueRef | None = None
    # fmt: on


@dataclass(frozen=True, slots=True)
class IssueInfo:
    """Issue summary; detail fields are populated for single-issue fetches."""

    # fmt: off
    id:             str
    identifier:     str                        # e.g. "ENG-123"
    title:          str
    url:            str | None           = None
    description:    str | None           = None
    priority:       int                  = 0   # 0=none, 1=urgent, 2=high, 3=medium, 4=low
    estimate:       float | None         = None
    due_date:       str | None           = None
    branch_name:    str | None           = None
    created_at:     str | None           = None
    updated_at:     str | None           = None
    state:          str | None           = None
    assignee:       str | None           = None
    assignee_email: str | None           = None
    team_key:       str | None           = None
    team_name:      str | None           = None
    project:        str | None           = None
    labels:         list[str]            = field(default_factory=list)
    parent:         IssueRef | None      = None
    children:       list[IssueRef]       = field(default_factory=list)
    comments:       list[CommentInfo]    = field(default_factory=list)
    relations:      list[RelationInfo]   = field(default_factory=list)
    # fmt: on


# --- Projects ---


@dataclass(frozen=True, slots=True)
class ProjectInfo:
    """Project summary."""

    # fmt: off
    id:          str
    name:        str
    state:       str | None = None      # planned | started | paused | completed | canceled
    progress:    float      = 0.0
    description: str | None = None
    url:         str | None = None
    start_date:  str | None = None
    target_date: str | None = None
    lead:        str | None = None
    team_keys:   list[str]  = field(default_factory=list)
    members:     list[str]  = field(default_factory=list)
    # fmt: on


# --- Cycles ---


@dataclass(frozen=True, slots=True)
class CycleInfo:
    """Cycle summary."""

    # fmt: off
    id:           str
    number:       int
    name:         str | None = None
    starts_at:    str | None = None
    ends_at:      str | None = None
    completed_at: str | None = None
    progress:     float      = 0.0
    # fmt: on


# --- Attachments ---


@dataclass(frozen=True, slots=True)
class AttachmentInfo:
    """Issue attachment (external link).

    The ``url`` is idempotent per issue: re-attaching the same URL updates
    the existing attachment.
    """

    # fmt: off
    id:         str
    url:        str
    title:      str | None = None
    created_at: str | None = None
    # fmt: on


# --- History ---


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One issue history event."""

    # fmt: off
    id:             str
    created_at:     str | None = None
    actor:          str | None = None
    from_state:     str | None = None
    to_state:       str | None = None
    added_labels:   list[str]  = field(default_factory=list)
    removed_labels: list[str]  = field(default_factory=list)
    # fmt: on
