# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Team and workflow state tools.

Tools:
  linear_list_teams   -- teams, optionally with member counts
  linear_list_states  -- workflow states grouped by team
"""

from __future__ import annotations

from typing import Any

from dedalus_mcp import tool
from dedalus_mcp.types import ToolAnnotations

from linear_gql import filters
from linear_gql.format import format_team, format_workflow_state
from linear_gql.parse import connection, parse_state, parse_team
from linear_gql.session import Session
from linear_gql.types import JSONObject, WorkflowStateInfo
from tools._helpers import reports_errors


# --- Queries ---

LIST_TEAMS = """
query ListTeams {
    teams(first: 100) {
        nodes { id key name }
    }
}
"""

LIST_TEAMS_WITH_MEMBERS = """
query ListTeamsWithMembers {
    teams(first: 100) {
        nodes {
            id key name
            members { nodes { id } }
        }
    }
}
"""

LIST_STATES = """
query ListStates($first: Int!, $filter: WorkflowStateFilter) {
    workflowStates(first: $first, filter: $filter) {
        nodes {
            id name type color
            team { id key name }
        }
    }
}
"""


# --- Tools ---


def team_tools(session: Session) -> list[Any]:
    """Build the team and workflow state tools bound to ``session``."""

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_list_teams(include_members: bool = False) -> str:
        """List all teams in the workspace.

        Args:
            include_members: Also count each team's members.

        """
        query = LIST_TEAMS_WITH_MEMBERS if include_members else LIST_TEAMS
        data = await session.execute(query)
        nodes, _ = connection(data, "teams")
        if not nodes:
            return "No teams found."
        return "\n".join(format_team(parse_team(node)) for node in nodes)

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_list_states(team: str | None = None) -> str:
        """List workflow states (issue statuses), grouped by team.

        Args:
            team: Team key to restrict to.

        """
        variables: JSONObject = {"first": 250}
        if team:
            variables["filter"] = filters.state_team(team).to_json()
        data = await session.execute(LIST_STATES, variables)
        nodes, _ = connection(data, "workflowStates")
        if not nodes:
            return "No workflow states found."

        by_team: dict[str, list[WorkflowStateInfo]] = {}
        for node in nodes:
            state = parse_state(node)
            by_team.setdefault(state.team_key or "?", []).append(state)

        sections = []
        for key in sorted(by_team):
            lines = [f"## {key}"]
            lines += [f"- {format_workflow_state(s)}" for s in by_team[key]]
            sections.append("\n".join(lines))
        return "\n\n".join(sections)

    return [linear_list_teams, linear_list_states]
