# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Project tools.

Tools:
  linear_list_projects    -- projects by state, lead and team
  linear_get_project      -- detail by name or UUID
  linear_create_project   -- create from team keys and a lead email
  linear_update_project   -- partial update; "none" clears lead and dates
  linear_archive_project  -- archive by name or UUID
"""

from __future__ import annotations

from typing import Any

from dedalus_mcp import tool
from dedalus_mcp.types import ToolAnnotations

from linear_gql import filters
from linear_gql.errors import InvalidInputError, NotFoundError
from linear_gql.format import format_project, format_project_detail
from linear_gql.parse import connection, parse_project
from linear_gql.resolver import is_clear_sentinel, split_names
from linear_gql.session import Session
from linear_gql.types import JSONObject, ProjectInfo
from tools._helpers import clamp_limit, mutation_payload, reports_errors


# --- Queries ---

_PROJECT_FIELDS = """
    id name description state progress url startDate targetDate
    lead { id displayName email }
    teams { nodes { id key name } }
    members { nodes { id displayName } }
"""

LIST_PROJECTS = f"""
query ListProjects($first: Int!, $filter: ProjectFilter) {{
    projects(first: $first, filter: $filter) {{
        nodes {{ {_PROJECT_FIELDS} }}
    }}
}}
"""

GET_PROJECT = f"""
query GetProject($id: String!) {{
    project(id: $id) {{ {_PROJECT_FIELDS} }}
}}
"""

CREATE_PROJECT = f"""
mutation CreateProject($input: ProjectCreateInput!) {{
    projectCreate(input: $input) {{
        success
        project {{ {_PROJECT_FIELDS} }}
    }}
}}
"""

UPDATE_PROJECT = f"""
mutation UpdateProject($id: String!, $input: ProjectUpdateInput!) {{
    projectUpdate(id: $id, input: $input) {{
        success
        project {{ {_PROJECT_FIELDS} }}
    }}
}}
"""

ARCHIVE_PROJECT = """
mutation ArchiveProject($id: String!) {
    projectArchive(id: $id) { success }
}
"""

# team filtering happens client-side over this many projects
_TEAM_SCAN_LIMIT = 250


def _project_payload(payload: JSONObject) -> ProjectInfo:
    raw = payload.get("project")
    if not isinstance(raw, dict):
        raise NotFoundError("No project in response")
    return parse_project(raw)


# --- Tools ---


def project_tools(session: Session) -> list[Any]:
    """Build the project tools bound to ``session``."""
    resolver = session.resolver

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_list_projects(
        status: str | None = None,
        lead: str | None = None,
        team: str | None = None,
        limit: int | None = None,
    ) -> str:
        """List projects with their state and progress.

        Args:
            status: Project state, e.g. ``started``, ``planned``, ``completed``.
            lead: Lead email or display name.
            team: Team key; only projects shared with this team.
            limit: Maximum projects, 1-100 (default 25).

        """
        parts: list[Any] = []
        if status:
            parts.append(filters.project_state(status))
        if lead:
            parts.append(filters.project_lead(lead))

        first = clamp_limit(limit)
        variables: JSONObject = {"first": _TEAM_SCAN_LIMIT if team else first}
        combined = filters.combine(parts)
        if combined is not None:
            variables["filter"] = combined.to_json()

        data = await session.execute(LIST_PROJECTS, variables)
        nodes, _ = connection(data, "projects")
        projects = [parse_project(node) for node in nodes]
        if team:
            wanted = team.strip().upper()
            projects = [p for p in projects if wanted in {k.upper() for k in p.team_keys}]
            projects = projects[:first]
        if not projects:
            return "No projects found."
        return "\n".join(format_project(p) for p in projects)

    @tool(annotations=ToolAnnotations(readOnlyHint=True))
    @reports_errors
    async def linear_get_project(project: str) -> str:
        """Get a project's details.

        Args:
            project: Project name (exact or unique partial match) or UUID.

        """
        uuid = await resolver.resolve_project_id_or_uuid(project)
        data = await session.execute(GET_PROJECT, {"id": uuid})
        raw = data.get("project")
        if not isinstance(raw, dict):
            raise NotFoundError(f"Project '{project}' not found")
        return format_project_detail(parse_project(raw))

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_create_project(
        name: str,
        teams: str,
        description: str | None = None,
        lead: str | None = None,
        start_date: str | None = None,
        target_date: str | None = None,
    ) -> str:
        """Create a project.

        Args:
            name: Project name.
            teams: Comma-separated team keys (at least one).
            description: Markdown description.
            lead: Lead email.
            start_date: ISO date (``YYYY-MM-DD``).
            target_date: ISO date (``YYYY-MM-DD``).

        """
        keys = split_names(teams)
        if not keys:
            raise InvalidInputError("At least one team key is required")
        team_ids = [await resolver.resolve_team_id(key) for key in keys]

        input_data: JSONObject = {"name": name, "teamIds": team_ids}
        if description is not None:
            input_data["description"] = description
        if lead:
            input_data["leadId"] = await resolver.resolve_user_id(lead)
        if start_date:
            input_data["startDate"] = start_date
        if target_date:
            input_data["targetDate"] = target_date

        data = await session.execute(CREATE_PROJECT, {"input": input_data})
        project = _project_payload(mutation_payload(data, "projectCreate", "Project creation"))
        return f"Created project {project.name}\n\n{format_project_detail(project)}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_update_project(
        project: str,
        name: str | None = None,
        description: str | None = None,
        state: str | None = None,
        lead: str | None = None,
        start_date: str | None = None,
        target_date: str | None = None,
    ) -> str:
        """Update a project. Only the fields you pass are changed.

        Pass ``none`` for lead, start_date or target_date to clear it.

        Args:
            project: Project name or UUID.
            name: New name.
            description: New markdown description.
            state: New state, e.g. ``started`` or ``completed``.
            lead: Lead email, or ``none``.
            start_date: ISO date, or ``none``.
            target_date: ISO date, or ``none``.

        """
        if all(v is None for v in (name, description, state, lead, start_date, target_date)):
            raise InvalidInputError("No fields to update")

        uuid = await resolver.resolve_project_id_or_uuid(project)
        input_data: JSONObject = {}
        if name is not None:
            input_data["name"] = name
        if description is not None:
            input_data["description"] = description
        if state is not None:
            input_data["state"] = state
        if lead is not None:
            input_data["leadId"] = (
                None if is_clear_sentinel(lead) else await resolver.resolve_user_id(lead)
            )
        if start_date is not None:
            input_data["startDate"] = None if is_clear_sentinel(start_date) else start_date
        if target_date is not None:
            input_data["targetDate"] = None if is_clear_sentinel(target_date) else target_date

        data = await session.execute(UPDATE_PROJECT, {"id": uuid, "input": input_data})
        updated = _project_payload(mutation_payload(data, "projectUpdate", "Project update"))
        return f"Updated project {updated.name}\n\n{format_project_detail(updated)}"

    @tool(annotations=ToolAnnotations(readOnlyHint=False))
    @reports_errors
    async def linear_archive_project(project: str) -> str:
        """Archive a project.

        Args:
            project: Project name or UUID.

        """
        uuid = await resolver.resolve_project_id_or_uuid(project)
        data = await session.execute(ARCHIVE_PROJECT, {"id": uuid})
        mutation_payload(data, "projectArchive", "Project archive")
        return f"Archived project {project}"

    return [
        linear_list_projects,
        linear_get_project,
        linear_create_project,
        linear_update_project,
        linear_archive_project,
    ]
