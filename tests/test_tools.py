"""Unit tests for tool handlers over a scripted transport."""

import pytest

from conftest import FakeTransport
from linear_gql.errors import GraphQLError
from linear_gql.session import Session
from tools import linear_tools


pytestmark = pytest.mark.asyncio

ISSUE_UUID = "0f8fad5b-d9cb-469f-a165-70867728950e"
OTHER_UUID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"


def _tools(transport):
    return {fn.__name__: fn for fn in linear_tools(Session.create(transport))}


def _issue_payload(key, **fields):
    issue = {"id": ISSUE_UUID, "identifier": "ENG-1", "title": "Fix login", "priority": 2}
    issue.update(fields)
    return {key: {"success": True, "issue": issue}}


def _input(transport, operation):
    (variables,) = transport.calls_to(operation)
    return variables["input"]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    async def test_every_tool_is_registered_once(self):
        names = [fn.__name__ for fn in linear_tools(Session.create(FakeTransport()))]
        assert len(names) == len(set(names))
        assert {
            "linear_list_issues", "linear_search_issues", "linear_get_issue",
            "linear_my_issues", "linear_create_issue", "linear_update_issue",
            "linear_archive_issue", "linear_list_comments", "linear_add_comment",
            "linear_update_comment", "linear_delete_comment", "linear_list_teams",
            "linear_list_states", "linear_whoami", "linear_list_users",
            "linear_list_projects", "linear_get_project", "linear_create_project",
            "linear_update_project", "linear_list_labels", "linear_create_label",
            "linear_list_cycles", "linear_get_cycle", "linear_add_issue_to_cycle",
            "linear_remove_issue_from_cycle", "linear_create_issue_relation",
            "linear_delete_issue_relation", "linear_unarchive_issue",
            "linear_get_issue_history", "linear_archive_project", "linear_update_label",
            "linear_archive_label", "linear_create_cycle", "linear_list_attachments",
            "linear_add_attachment",
        } <= set(names)


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


class TestListIssues:
    async def test_no_filters_omits_filter_variable(self):
        transport = FakeTransport({"ListIssues": {"issues": {"nodes": []}}})
        text = await _tools(transport)["linear_list_issues"]()
        (variables,) = transport.calls_to("ListIssues")
        assert "filter" not in variables
        assert variables["first"] == 25
        assert text.startswith("No issues found.")

    async def test_single_filter_is_not_wrapped(self):
        transport = FakeTransport({"ListIssues": {"issues": {"nodes": []}}})
        await _tools(transport)["linear_list_issues"](team="eng")
        (variables,) = transport.calls_to("ListIssues")
        assert variables["filter"] == {"team": {"key": {"eqIgnoreCase": "ENG"}}}

    async def test_filters_are_anded(self):
        transport = FakeTransport({"ListIssues": {"issues": {"nodes": []}}})
        await _tools(transport)["linear_list_issues"](
            team="ENG", priority="high", due_before="2025-06-01", limit=500
        )
        (variables,) = transport.calls_to("ListIssues")
        assert variables["first"] == 100
        assert variables["filter"]["and"] == [
            {"team": {"key": {"eqIgnoreCase": "ENG"}}},
            {"priority": {"eq": 2}},
            {"dueDate": {"lt": "2025-06-01"}},
        ]

    async def test_relation_flags_add_note(self):
        transport = FakeTransport({"ListIssues": {"issues": {"nodes": []}}})
        text = await _tools(transport)["linear_list_issues"](has_blocking_relation=True)
        (variables,) = transport.calls_to("ListIssues")
        assert variables["filter"] == {"relations": {"some": {}}}
        assert "other direction" in text

    async def test_bad_priority_is_reported(self):
        transport = FakeTransport()
        text = await _tools(transport)["linear_list_issues"](priority="critical")
        assert text.startswith("Unknown priority 'critical'")
        assert transport.calls == []

    async def test_renders_summaries_and_footer(self):
        transport = FakeTransport({
            "ListIssues": {
                "issues": {
                    "nodes": [{
                        "identifier": "ENG-1", "title": "Fix login", "priority": 1,
                        "state": {"name": "Todo"}, "assignee": {"displayName": "Ada"},
                        "labels": {"nodes": [{"name": "Bug"}]},
                    }],
                    "pageInfo": {"hasNextPage": True, "endCursor": "cur"},
                }
            }
        })
        text = await _tools(transport)["linear_list_issues"]()
        assert text.splitlines()[0] == "[ENG-1] Fix login (Todo, Urgent, @Ada, Bug)"
        assert '"cur"' in text

    async def test_transport_error_becomes_text(self):
        transport = FakeTransport({"ListIssues": GraphQLError(["Rate limit exceeded"])})
        assert await _tools(transport)["linear_list_issues"]() == "Rate limit exceeded"


class TestCreateIssue:
    async def test_unknown_team_stops_before_mutation(self):
        transport = FakeTransport({"ResolveTeam": {"teams": {"nodes": []}}})
        text = await _tools(transport)["linear_create_issue"](team="XYZ", title="t")
        assert text == "Team 'XYZ' not found"
        assert transport.calls_to("CreateIssue") == []

    async def test_resolves_human_inputs(self):
        transport = FakeTransport({
            "ResolveTeam": {"teams": {"nodes": [{"id": "team-1"}]}},
            "ResolveUser": {"users": {"nodes": [{"id": "user-1"}]}},
            "ResolveLabels": {"issueLabels": {"nodes": [{"id": "l1", "name": "Bug"}]}},
            "CreateIssue": _issue_payload("issueCreate"),
        })
        text = await _tools(transport)["linear_create_issue"](
            team="eng", title="Fix login", assignee="ada@x.io", priority="High", labels="Bug"
        )
        assert _input(transport, "CreateIssue") == {
            "teamId": "team-1",
            "title": "Fix login",
            "assigneeId": "user-1",
            "priority": 2,
            "labelIds": ["l1"],
        }
        assert text.startswith("Created issue ENG-1")

    async def test_failed_mutation(self):
        transport = FakeTransport({
            "ResolveTeam": {"teams": {"nodes": [{"id": "team-1"}]}},
            "CreateIssue": {"issueCreate": {"success": False}},
        })
        text = await _tools(transport)["linear_create_issue"](team="ENG", title="t")
        assert text == "Issue creation failed"


class TestUpdateIssue:
    async def test_no_fields_is_invalid_input(self):
        transport = FakeTransport()
        text = await _tools(transport)["linear_update_issue"](issue_id="ENG-1")
        assert text == "No fields to update"
        assert transport.calls == []

    async def test_none_sentinel_sends_explicit_null(self):
        transport = FakeTransport({"UpdateIssue": _issue_payload("issueUpdate")})
        await _tools(transport)["linear_update_issue"](
            issue_id=ISSUE_UUID, assignee="none", due_date="None", project="NONE", parent="none"
        )
        assert _input(transport, "UpdateIssue") == {
            "assigneeId": None,
            "dueDate": None,
            "projectId": None,
            "parentId": None,
        }
        assert [FakeTransport.operation(q) for q, _ in transport.calls] == ["UpdateIssue"]

    async def test_omitted_fields_are_absent(self):
        transport = FakeTransport({"UpdateIssue": _issue_payload("issueUpdate")})
        await _tools(transport)["linear_update_issue"](issue_id=ISSUE_UUID, title="New")
        assert _input(transport, "UpdateIssue") == {"title": "New"}

    async def test_status_uses_issue_team(self):
        transport = FakeTransport({
            "ResolveIssue": {"searchIssues": {"nodes": [{"id": ISSUE_UUID, "identifier": "ENG-1"}]}},
            "IssueTeam": {"issue": {"id": ISSUE_UUID, "team": {"id": "t", "key": "ENG"}}},
            "ResolveState": {"workflowStates": {"nodes": [{"id": "state-done"}]}},
            "UpdateIssue": _issue_payload("issueUpdate"),
        })
        await _tools(transport)["linear_update_issue"](issue_id="ENG-1", status="Done")
        (state_vars,) = transport.calls_to("ResolveState")
        assert state_vars["filter"]["team"] == {"key": {"eq": "ENG"}}
        assert _input(transport, "UpdateIssue") == {"stateId": "state-done"}

    async def test_unknown_label_stops_before_mutation(self):
        transport = FakeTransport({
            "ResolveLabels": {"issueLabels": {"nodes": [{"id": "l1", "name": "Bug"}]}},
        })
        text = await _tools(transport)["linear_update_issue"](
            issue_id=ISSUE_UUID, labels="Bug, Ghost"
        )
        assert text == "Label 'Ghost' not found"
        assert transport.calls_to("UpdateIssue") == []


class TestMyIssues:
    async def test_filters_on_viewer_and_groups_by_state(self):
        transport = FakeTransport({
            "Viewer": {"viewer": {"id": "me", "displayName": "Ada"}},
            "ListIssues": {"issues": {"nodes": [
                {"identifier": "ENG-1", "title": "A", "state": {"name": "Todo"}},
                {"identifier": "ENG-2", "title": "B", "state": {"name": "In Progress"}},
                {"identifier": "ENG-3", "title": "C", "state": {"name": "Todo"}},
            ]}},
        })
        text = await _tools(transport)["linear_my_issues"]()
        (variables,) = transport.calls_to("ListIssues")
        assert variables["filter"] == {"and": [
            {"assignee": {"id": {"eq": "me"}}},
            {"state": {"type": {"nin": ["completed", "canceled"]}}},
        ]}
        assert "## Todo (2)" in text
        assert "## In Progress (1)" in text

    async def test_include_completed_keeps_single_filter(self):
        transport = FakeTransport({
            "Viewer": {"viewer": {"id": "me", "displayName": "Ada"}},
            "ListIssues": {"issues": {"nodes": []}},
        })
        text = await _tools(transport)["linear_my_issues"](include_completed=True)
        (variables,) = transport.calls_to("ListIssues")
        assert variables["filter"] == {"assignee": {"id": {"eq": "me"}}}
        assert text == "No issues assigned to Ada."


# ---------------------------------------------------------------------------
# Comments, cycles, relations, projects
# ---------------------------------------------------------------------------


class TestComments:
    async def test_threaded_reply(self):
        transport = FakeTransport({
            "AddComment": {"commentCreate": {"success": True, "comment": {"id": "c2", "body": "ok"}}},
        })
        await _tools(transport)["linear_add_comment"](
            issue_id=ISSUE_UUID, body="ok", parent_id="c1"
        )
        assert _input(transport, "AddComment") == {
            "issueId": ISSUE_UUID, "body": "ok", "parentId": "c1"
        }


class TestCycles:
    async def test_remove_sends_null_cycle(self):
        transport = FakeTransport({"SetIssueCycle": {"issueUpdate": {"success": True}}})
        await _tools(transport)["linear_remove_issue_from_cycle"](issue_id=ISSUE_UUID)
        assert _input(transport, "SetIssueCycle") == {"cycleId": None}

    async def test_create_resolves_team(self):
        transport = FakeTransport({
            "ResolveTeam": {"teams": {"nodes": [{"id": "team-1"}]}},
            "CreateCycle": {"cycleCreate": {"success": True, "cycle": {
                "id": "c9", "number": 7, "startsAt": "2025-01-01T00:00:00Z",
                "endsAt": "2025-01-15T00:00:00Z",
            }}},
        })
        text = await _tools(transport)["linear_create_cycle"](
            team="eng", starts_at="2025-01-01", ends_at="2025-01-15"
        )
        assert _input(transport, "CreateCycle") == {
            "teamId": "team-1", "startsAt": "2025-01-01", "endsAt": "2025-01-15"
        }
        assert text.startswith("Created Cycle 7 | 2025-01-01")

    async def test_create_unknown_team(self):
        transport = FakeTransport({"ResolveTeam": {"teams": {"nodes": []}}})
        text = await _tools(transport)["linear_create_cycle"](
            team="XYZ", starts_at="2025-01-01", ends_at="2025-01-15"
        )
        assert text == "Team 'XYZ' not found"
        assert transport.calls_to("CreateCycle") == []


class TestRelations:
    async def test_blocked_by_is_stored_as_reversed_blocks(self):
        transport = FakeTransport({
            "CreateIssueRelation": {"issueRelationCreate": {
                "success": True, "issueRelation": {"id": "r1", "type": "blocks"},
            }},
        })
        await _tools(transport)["linear_create_issue_relation"](
            issue_id=ISSUE_UUID, related_issue_id=OTHER_UUID, relation_type="blocked_by"
        )
        assert _input(transport, "CreateIssueRelation") == {
            "issueId": OTHER_UUID, "relatedIssueId": ISSUE_UUID, "type": "blocks"
        }

    async def test_unknown_type(self):
        transport = FakeTransport()
        text = await _tools(transport)["linear_create_issue_relation"](
            issue_id=ISSUE_UUID, related_issue_id=OTHER_UUID, relation_type="parent"
        )
        assert text.startswith("Unknown relation type 'parent'")


class TestProjects:
    async def test_team_filter_is_client_side(self):
        transport = FakeTransport({"ListProjects": {"projects": {"nodes": [
            {"id": "p1", "name": "Mobile", "state": "started", "progress": 0.5,
             "teams": {"nodes": [{"key": "ENG"}]}},
            {"id": "p2", "name": "Brand", "state": "planned", "progress": 0,
             "teams": {"nodes": [{"key": "MKT"}]}},
        ]}}})
        text = await _tools(transport)["linear_list_projects"](team="eng")
        (variables,) = transport.calls_to("ListProjects")
        assert variables["first"] == 250
        assert text == "Mobile [started] - 50% complete"

    async def test_ambiguous_name_is_reported(self):
        transport = FakeTransport({"ResolveProject": {"projects": {"nodes": [
            {"id": "p1", "name": "Mobile App"}, {"id": "p2", "name": "Mobile Web"},
        ]}}})
        text = await _tools(transport)["linear_get_project"](project="Mobile")
        assert text == "Ambiguous project name 'Mobile'. Matches: Mobile App, Mobile Web"

    async def test_update_clears_lead(self):
        transport = FakeTransport({"UpdateProject": {"projectUpdate": {
            "success": True, "project": {"id": ISSUE_UUID, "name": "Mobile"},
        }}})
        await _tools(transport)["linear_update_project"](project=ISSUE_UUID, lead="none")
        assert _input(transport, "UpdateProject") == {"leadId": None}

    async def test_archive_by_name(self):
        transport = FakeTransport({
            "ResolveProject": {"projects": {"nodes": [{"id": "p1", "name": "Mobile"}]}},
            "ArchiveProject": {"projectArchive": {"success": True}},
        })
        text = await _tools(transport)["linear_archive_project"](project="Mobile")
        assert transport.calls_to("ArchiveProject") == [{"id": "p1"}]
        assert text == "Archived project Mobile"

    async def test_archive_uuid_skips_lookup(self):
        transport = FakeTransport({"ArchiveProject": {"projectArchive": {"success": False}}})
        text = await _tools(transport)["linear_archive_project"](project=ISSUE_UUID)
        assert transport.calls_to("ResolveProject") == []
        assert text == "Project archive failed"


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


class TestLabels:
    async def test_update_sends_only_given_fields(self):
        transport = FakeTransport({"UpdateLabel": {"issueLabelUpdate": {
            "success": True, "issueLabel": {"id": "l1", "name": "Bug", "color": "#f00"},
        }}})
        text = await _tools(transport)["linear_update_label"](label_id="l1", color="#f00")
        assert transport.calls_to("UpdateLabel") == [{"id": "l1", "input": {"color": "#f00"}}]
        assert text == "Updated label Bug (#f00) [id: l1]"

    async def test_update_without_fields(self):
        transport = FakeTransport()
        text = await _tools(transport)["linear_update_label"](label_id="l1")
        assert text == "No fields to update. Provide name or color."
        assert transport.calls == []

    async def test_archive(self):
        transport = FakeTransport({"DeleteLabel": {"issueLabelDelete": {"success": True}}})
        text = await _tools(transport)["linear_archive_label"](label_id="l1")
        assert transport.calls_to("DeleteLabel") == [{"id": "l1"}]
        assert text == "Deleted label l1"


# ---------------------------------------------------------------------------
# Archive, history, attachments
# ---------------------------------------------------------------------------


class TestIssueLifecycle:
    async def test_unarchive_resolves_identifier(self):
        transport = FakeTransport({
            "ResolveIssue": {"searchIssues": {"nodes": [{"id": ISSUE_UUID, "identifier": "ENG-1"}]}},
            "UnarchiveIssue": {"issueUnarchive": {"success": True}},
        })
        text = await _tools(transport)["linear_unarchive_issue"](issue_id="ENG-1")
        assert transport.calls_to("UnarchiveIssue") == [{"id": ISSUE_UUID}]
        assert text == "Unarchived issue ENG-1"

    async def test_history(self):
        transport = FakeTransport({"GetIssueHistory": {"issue": {"history": {"nodes": [
            {"id": "h1", "createdAt": "2025-01-02T00:00:00Z",
             "fromState": {"name": "Todo"}, "toState": {"name": "In Progress"},
             "actor": {"displayName": "Ada"},
             "addedLabels": {"nodes": [{"name": "Bug"}]}, "removedLabels": None},
        ]}}}})
        text = await _tools(transport)["linear_get_issue_history"](issue_id=ISSUE_UUID)
        assert transport.calls_to("GetIssueHistory") == [{"id": ISSUE_UUID, "first": 50}]
        assert "2025-01-02 by Ada: Todo -> In Progress; +Bug" in text

    async def test_history_limit_is_clamped(self):
        transport = FakeTransport({"GetIssueHistory": {"issue": {"history": {"nodes": []}}}})
        text = await _tools(transport)["linear_get_issue_history"](issue_id=ISSUE_UUID, limit=500)
        assert transport.calls_to("GetIssueHistory") == [{"id": ISSUE_UUID, "first": 100}]
        assert text == "No history entries found for this issue."


class TestAttachments:
    async def test_list(self):
        transport = FakeTransport({"ListAttachments": {"issue": {"attachments": {"nodes": [
            {"id": "a1", "title": "Design", "url": "https://figma.com/x",
             "createdAt": "2025-01-03T00:00:00Z"},
        ]}}}})
        text = await _tools(transport)["linear_list_attachments"](issue_id=ISSUE_UUID)
        assert text == "Attachments:\n\nDesign <https://figma.com/x> (added 2025-01-03) [id: a1]"

    async def test_list_missing_issue(self):
        transport = FakeTransport({"ListAttachments": {"issue": None}})
        text = await _tools(transport)["linear_list_attachments"](issue_id=ISSUE_UUID)
        assert text == f"Issue '{ISSUE_UUID}' not found"

    async def test_add_resolves_issue(self):
        transport = FakeTransport({
            "ResolveIssue": {"searchIssues": {"nodes": [{"id": ISSUE_UUID, "identifier": "ENG-1"}]}},
            "AddAttachment": {"attachmentCreate": {
                "success": True, "attachment": {"id": "a2", "title": "PR", "url": "https://gh/1"},
            }},
        })
        text = await _tools(transport)["linear_add_attachment"](
            issue_id="ENG-1", url="https://gh/1", title="PR"
        )
        assert _input(transport, "AddAttachment") == {
            "issueId": ISSUE_UUID, "title": "PR", "url": "https://gh/1"
        }
        assert text == "Attachment added: PR <https://gh/1> [id: a2]"
