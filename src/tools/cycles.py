# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Cycle tools.

Tools:
  linear_list_cycles              -- a team's cycles
  linear_get_cycle                -- one cycle by UUID
  linear_add_issue_to_cycle       -- set an issue's cycle
  linear_remove_issue_from_cycle  -- clear an issue's cycle
  linear_create_cycle             -- new cycle for a team
"""

from __future__ import annotations

from typing import Any

from dedalus_mcp import tool
from dedalus_mcp.types import ToolAnnotations

from linear_gql.errors import NotFoundError
from linear_gql.format import format_cycle_detail, format_cycle_summary
from linear_gql.parse import connection, parse_cycle
from linear_gql.session import Session
from linear_gql.types import JSONObject
from tools._helpers import clamp_limit, mutation_payload, reports_errors


# --- Queries ---

_CYCLE_FIELDS = "id number name startsAt endsAt completedAt progress"

LIST_CYCLES = f"""
query ListCycles($teamId: String!, $first: Int!) {{
    team(id: $teamId) {{
        cycles(first: $first, orderBy: createdAt) {{
            nodes {{ {_CYCLE_FIELDS} }}
        }}
    }}
}}
"""

GET_CYCLE = f"""
query GetCycle($id: String!) {{
    cycle(id: $id) {{ {_CYCLE_FIELDS} }}
}}
"""

SET_ISSUE_CYCLE = """
mutation SetIssueCycle($id: String!, $input: IssueUpdateInput!) {
    issueUpdate(id: $id, input: $input) {
        success
        issue { identifier cycle { number name } }
    }
}
"""

CREATE_CYCLE = f"""
mutation CreateCycle($input: CycleCreateInput!) {{
    cycleCreate(input: $input) {{
        success
        cycle {{ {_CYCLE_FIELDS} }}
    }}
}}
"""


# --- Tools ---


def cycle_tools(session: Session) -> list[Any]:
    """Build the cycle tools bound to ``session``."""
    resolver = session.resolver

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_list_cycles(team: str, limit: int | None = None) -> str:
        """List a team's cycles with dates and progress.

        Args:
            team: Team key (e.g. ``ENG``).
            limit: Maximum cycles, 1-100 (default 25).

        """
        team_id = await resolver.resolve_team_id(team)
        data = await session.execute(
            LIST_CYCLES, {"teamId": team_id, "first": clamp_limit(limit)}
        )
        nodes, _ = connection(data.get("team"), "cycles")
        if not nodes:
            return f"No cycles found for team {team}."
        return "\n".join(format_cycle_summary(parse_cycle(node)) for node in nodes)

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_get_cycle(cycle_id: str) -> str:
        """Get a cycle's details.

        Args:
            cycle_id: Cycle UUID.

        """
        data = await session.execute(GET_CYCLE, {"id": cycle_id})
        raw = data.get("cycle")
        if not isinstance(raw, dict):
            raise NotFoundError(f"Cycle '{cycle_id}' not found")
        return format_cycle_detail(parse_cycle(raw))

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_add_issue_to_cycle(issue_id: str, cycle_id: str) -> str:
        """Move an issue into a cycle.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.
            cycle_id: Cycle UUID.

        """
        uuid = await resolver.resolve_issue_id(issue_id)
        data = await session.execute(
            SET_ISSUE_CYCLE, {"id": uuid, "input": {"cycleId": cycle_id}}
        )
        mutation_payload(data, "issueUpdate", "Cycle assignment")
        return f"Added {issue_id} to cycle {cycle_id}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_remove_issue_from_cycle(issue_id: str) -> str:
        """Take an issue out of its cycle.

        Args:
            issue_id: Identifier like ``ENG-123`` or a UUID.

        """
        uuid = await resolver.resolve_issue_id(issue_id)
        data = await session.execute(
            SET_ISSUE_CYCLE, {"id": uuid, "input": {"cycleId": None}}
        )
        mutation_payload(data, "issueUpdate", "Cycle removal")
        return f"Removed {issue_id} from its cycle"

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_create_cycle(
        team: str,
        starts_at: str,
        ends_at: str,
        name: str | None = None,
    ) -> str:
        """Create a cycle for a team.

        Args:
            team: Team key (e.g. ``ENG``).
            starts_at: Start date, ISO format (e.g. ``2025-01-01``).
            ends_at: End date, ISO format (e.g. ``2025-01-15``).
            name: Cycle name. Optional.

        """
        input_data: JSONObject = {
            "teamId": await resolver.resolve_team_id(team),
            "startsAt": starts_at,
            "endsAt": ends_at,
        }
        if name:
            input_data["name"] = name
        data = await session.execute(CREATE_CYCLE, {"input": input_data})
        payload = mutation_payload(data, "cycleCreate", "Cycle creation")
        raw = payload.get("cycle")
        if not isinstance(raw, dict):
            raise NotFoundError("No cycle in response")
        return f"Created {format_cycle_summary(parse_cycle(raw))}"

    return [
        linear_list_cycles,
        linear_get_cycle,
        linear_add_issue_to_cycle,
        linear_remove_issue_from_cycle,
        linear_create_cycle,
    ]
