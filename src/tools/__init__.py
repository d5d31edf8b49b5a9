# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Tool registry for linear-gql-mcp.

Modules:
  issues       -- linear_list_issues, linear_get_issue, linear_my_issues,
                  linear_create_issue, linear_update_issue, linear_archive_issue,
                  linear_unarchive_issue, linear_get_issue_history
  search       -- linear_search_issues
  comments     -- linear_list_comments, linear_add_comment, linear_update_comment,
                  linear_delete_comment
  teams        -- linear_list_teams, linear_list_states
  users        -- linear_whoami, linear_list_users
  projects     -- linear_list_projects, linear_get_project, linear_create_project,
                  linear_update_project, linear_archive_project
  labels       -- linear_list_labels, linear_create_label, linear_update_label,
                  linear_archive_label
  cycles       -- linear_list_cycles, linear_get_cycle, linear_add_issue_to_cycle,
                  linear_remove_issue_from_cycle, linear_create_cycle
  relations    -- linear_create_issue_relation, linear_delete_issue_relation
  attachments  -- linear_list_attachments, linear_add_attachment
"""

from __future__ import annotations

from typing import Any

from linear_gql.session import Session
from tools.attachments import attachment_tools
from tools.comments import comment_tools
from tools.cycles import cycle_tools
from tools.issues import issue_tools
from tools.labels import label_tools
from tools.projects import project_tools
from tools.relations import relation_tools
from tools.search import search_tools
from tools.teams import team_tools
from tools.users import user_tools


def linear_tools(session: Session) -> list[Any]:
    """Every tool, bound to ``session``."""
    return [
        *issue_tools(session),
        *search_tools(session),
        *comment_tools(session),
        *team_tools(session),
        *user_tools(session),
        *project_tools(session),
        *label_tools(session),
        *cycle_tools(session),
        *relation_tools(session),
        *attachment_tools(session),
    ]
