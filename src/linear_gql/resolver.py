# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Turn human identifiers into Linear UUIDs.

Tool callers supply team keys (``ENG``), issue identifiers (``ENG-123``),
emails, workflow state names, project names and comma-separated label
names. Mutations need UUIDs. ``Resolver`` performs the lookups, raising
``NotFoundError`` or ``AmbiguousError`` rather than guessing.

Only issue identifiers are memoized (in the shared ``EntityCache``); an
issue's UUID never changes once assigned. Teams, users, states, projects
and labels are looked up on every call.

Functions:
  looks_like_uuid(text)  -- structural 36-char hex/hyphen check
  split_names(text)      -- comma-separated list, trimmed, empties dropped
  is_clear_sentinel(v)   -- "none" (any case) means "clear this field"
"""

from __future__ import annotations

import logging
import string

from linear_gql import filters
from linear_gql.cache import EntityCache
from linear_gql.errors import AmbiguousError, NotFoundError
from linear_gql.request import Transport, _nodes, _str
from linear_gql.parse import parse_user
from linear_gql.types import UserInfo


logger = logging.getLogger(__name__)


# --- Queries ---

SEARCH_ISSUE_IDS = """
query ResolveIssue($query: String!, $first: Int) {
    searchIssues(term: $query, first: $first) {
        nodes { id identifier }
    }
}
"""

RESOLVE_TEAM = """
query ResolveTeam($filter: TeamFilter!) {
    teams(filter: $filter) {
        nodes { id key name }
    }
}
"""

RESOLVE_USER = """
query ResolveUser($filter: UserFilter!) {
    users(filter: $filter) {
        nodes { id displayName email }
    }
}
"""

RESOLVE_STATE = """
query ResolveState($filter: WorkflowStateFilter!) {
    workflowStates(filter: $filter) {
        nodes { id name type }
    }
}
"""

RESOLVE_PROJECT = """
query ResolveProject($filter: ProjectFilter) {
    projects(first: 5, filter: $filter) {
        nodes { id name }
    }
}
"""

RESOLVE_LABELS = """
query ResolveLabels($filter: IssueLabelFilter) {
    issueLabels(first: 100, filter: $filter) {
        nodes { id name }
    }
}
"""

VIEWER = """
query Viewer {
    viewer { id displayName email admin guest }
}
"""


# --- Helpers ---

_UUID_CHARS = frozenset(string.hexdigits + "-")


def looks_like_uuid(text: str) -> bool:
    """Return True for 36 characters drawn only from hex digits and ``-``.

    Structural only: hyphen positions and version/variant nibbles are not
    checked, so some non-UUID strings of that shape pass.
    """
    return len(text) == 36 and all(c in _UUID_CHARS for c in text)


def split_names(text: str) -> list[str]:
    """Split ``"Bug, Frontend,,"`` into ``["Bug", "Frontend"]``."""
    return [part.strip() for part in text.split(",") if part.strip()]


def is_clear_sentinel(value: str) -> bool:
    return value.strip().lower() == "none"


# --- Resolver ---


class Resolver:
    """Identifier-to-UUID lookups over a shared transport and cache."""

    def __init__(
        self, transport: Transport, issue_ids: EntityCache[str] | None = None
    ) -> None:
        self._transport = transport
        self._issue_ids: EntityCache[str] = (
            issue_ids if issue_ids is not None else EntityCache()
        )

    @property
    def issue_ids(self) -> EntityCache[str]:
        return self._issue_ids

    async def resolve_issue_id(self, text: str) -> str:
        """Resolve an issue identifier (``ENG-123``) or UUID to a UUID.

        UUID-shaped input is returned untouched. Identifiers are looked up
        by full-text search and memoized for the life of the process.

        Raises:
            NotFoundError: No search hit carries this identifier.

        """
        if looks_like_uuid(text):
            return text

        async def fetch() -> str:
            logger.debug("resolving issue %s", text)
            data = await self._transport.execute(
                SEARCH_ISSUE_IDS, {"query": text, "first": 5}
            )
            wanted = text.lower()
            for node in _nodes(data, "searchIssues"):
                if _str(node.get("identifier")).lower() == wanted:
                    return _str(node.get("id"))
            raise NotFoundError(f"Issue '{text}' not found")

        return await self._issue_ids.get_or_fetch(text, fetch)

    async def resolve_team_id(self, key: str) -> str:
        """Resolve a team key to its UUID.

        Raises:
            NotFoundError: No team has this key.

        """
        logger.debug("resolving team %s", key)
        data = await self._transport.execute(
            RESOLVE_TEAM, {"filter": filters.team_key(key).to_json()}
        )
        nodes = _nodes(data, "teams")
        if not nodes:
            raise NotFoundError(f"Team '{key}' not found")
        return _str(nodes[0].get("id"))

    async def resolve_user_id(self, email: str) -> str:
        """Resolve a user email to a UUID.

        Raises:
            NotFoundError: No user has this email.

        """
        logger.debug("resolving user %s", email)
        data = await self._transport.execute(
            RESOLVE_USER, {"filter": filters.user_email(email).to_json()}
        )
        nodes = _nodes(data, "users")
        if not nodes:
            raise NotFoundError(f"User with email '{email}' not found")
        return _str(nodes[0].get("id"))

    async def resolve_state_id(self, state_name: str, team_key: str) -> str:
        """Resolve a workflow state name within a team to a UUID.

        Raises:
            NotFoundError: The team has no state with this name.

        """
        logger.debug("resolving state %s in %s", state_name, team_key)
        data = await self._transport.execute(
            RESOLVE_STATE,
            {"filter": filters.workflow_state(state_name, team_key).to_json()},
        )
        nodes = _nodes(data, "workflowStates")
        if not nodes:
            raise NotFoundError(
                f"Workflow state '{state_name}' not found for team '{team_key}'"
            )
        return _str(nodes[0].get("id"))

    async def resolve_project_id(self, name: str) -> str:
        """Resolve a (possibly partial) project name to a UUID.

        An exact case-insensitive match wins over partial matches. Failing
        that, a single partial match is accepted. Several partial matches
        are ambiguous.

        Raises:
            NotFoundError: No project name contains ``name``.
            AmbiguousError: Several projects match and none exactly.

        """
        logger.debug("resolving project %s", name)
        data = await self._transport.execute(
            RESOLVE_PROJECT, {"filter": filters.project_name(name).to_json()}
        )
        matches = _nodes(data, "projects")
        if not matches:
            raise NotFoundError(f"Project '{name}' not found")

        wanted = name.lower()
        for node in matches:
            if _str(node.get("name")).lower() == wanted:
                return _str(node.get("id"))

        if len(matches) == 1:
            return _str(matches[0].get("id"))

        candidates = [_str(node.get("name")) for node in matches]
        logger.warning("ambiguous project %r: %s", name, candidates)
        raise AmbiguousError(f"Ambiguous project name '{name}'", candidates)

    async def resolve_project_id_or_uuid(self, text: str) -> str:
        """Like ``resolve_project_id`` but passes UUID-shaped input through."""
        if looks_like_uuid(text):
            return text
        return await self.resolve_project_id(text)

    async def resolve_label_ids(self, names: str) -> list[str]:
        """Resolve comma-separated label names to UUIDs in one query.

        Output follows input order, duplicates included. Empty input gives
        an empty list.

        Raises:
            NotFoundError: Names the first requested label with no match.

        """
        wanted = split_names(names)
        if not wanted:
            return []

        logger.debug("resolving labels %s", wanted)
        data = await self._transport.execute(
            RESOLVE_LABELS,
            {"filter": filters.labels_named(dict.fromkeys(wanted)).to_json()},
        )
        by_name: dict[str, str] = {}
        for node in _nodes(data, "issueLabels"):
            by_name.setdefault(_str(node.get("name")).lower(), _str(node.get("id")))

        ids: list[str] = []
        for label_name in wanted:
            label_id = by_name.get(label_name.lower())
            if label_id is None:
                raise NotFoundError(f"Label '{label_name}' not found")
            ids.append(label_id)
        return ids

    async def viewer(self) -> UserInfo:
        """Fetch the authenticated user."""
        data = await self._transport.execute(VIEWER)
        raw = data.get("viewer")
        if not isinstance(raw, dict):
            raise NotFoundError("Authenticated user not found")
        return parse_user(raw)
