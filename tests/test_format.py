"""Unit tests for text rendering."""

from linear_gql.format import (
    format_attachment,
    format_comment,
    format_cycle_summary,
    format_history_entry,
    format_issue_detail,
    format_issue_summary,
    format_pagination,
    format_project,
    format_relation,
    format_team,
    format_user,
    format_workflow_state,
    priority_label,
)
from linear_gql.types import (
    AttachmentInfo,
    CommentInfo,
    CycleInfo,
    HistoryEntry,
    IssueInfo,
    IssueRef,
    PageInfo,
    ProjectInfo,
    RelationInfo,
    TeamInfo,
    UserInfo,
    WorkflowStateInfo,
)


def _issue(**overrides):
    fields = {
        "id": "i1",
        "identifier": "ENG-1",
        "title": "Fix login",
        "state": "In Progress",
        "priority": 2,
        "assignee": "Ada",
        "labels": ["Bug", "Frontend"],
    }
    fields.update(overrides)
    return IssueInfo(**fields)


class TestPriority:
    def test_known_levels(self):
        assert [priority_label(n) for n in range(5)] == ["None", "Urgent", "High", "Medium", "Low"]

    def test_unknown_is_none(self):
        assert priority_label(9) == "None"


class TestIssues:
    def test_summary(self):
        assert format_issue_summary(_issue()) == (
            "[ENG-1] Fix login (In Progress, High, @Ada, Bug, Frontend)"
        )

    def test_summary_without_optional_parts(self):
        issue = _issue(state=None, assignee=None, labels=[], priority=0)
        assert format_issue_summary(issue) == "[ENG-1] Fix login (None)"

    def test_detail(self):
        issue = _issue(
            assignee_email="ada@x.io",
            team_key="ENG",
            team_name="Engineering",
            description="Steps to reproduce",
            created_at="2025-01-02T03:04:05.000Z",
            children=[IssueRef("ENG-2", "Sub task")],
            comments=[CommentInfo(id="c1", body="On it", user="Bo", created_at="2025-01-03T00:00:00Z")],
        )
        text = format_issue_detail(issue)
        assert text.startswith("# ENG-1: Fix login")
        assert "**Assignee:** Ada <ada@x.io>" in text
        assert "**Team:** Engineering (ENG)" in text
        assert "**Created:** 2025-01-02" in text
        assert "## Description\nSteps to reproduce" in text
        assert "- [ENG-2] Sub task" in text
        assert "**Bo** (2025-01-03): On it" in text


class TestOtherEntities:
    def test_comment_without_author(self):
        assert format_comment(CommentInfo(id="c", body="hi")) == "**Unknown** (?): hi"

    def test_team(self):
        assert format_team(TeamInfo(id="t", key="ENG", name="Engineering", member_count=4)) == (
            "ENG | Engineering (4 members)"
        )
        assert format_team(TeamInfo(id="t", key="ENG", name="Engineering")) == "ENG | Engineering"

    def test_user_roles(self):
        assert format_user(UserInfo(id="u", name="Ada", email="a@x.io", admin=True)) == (
            "Ada <a@x.io> (admin)"
        )
        assert format_user(UserInfo(id="u", name="Bo", guest=True)) == "Bo <no email> (guest)"
        assert format_user(UserInfo(id="u", name="Cy", email="c@x.io")) == "Cy <c@x.io> (member)"

    def test_project(self):
        project = ProjectInfo(id="p", name="Mobile", state="started", progress=0.4)
        assert format_project(project) == "Mobile [started] - 40% complete"

    def test_workflow_state(self):
        state = WorkflowStateInfo(id="s", name="Done", type="completed", color="#0f0")
        assert format_workflow_state(state) == "Done [completed] (#0f0)"

    def test_cycle_summary(self):
        cycle = CycleInfo(
            id="c1", number=3, name="Sprint", starts_at="2025-01-01T00:00:00Z",
            ends_at="2025-01-14T00:00:00Z", progress=0.5,
        )
        assert format_cycle_summary(cycle).startswith("Cycle 3: Sprint | 2025-01-01")

    def test_relation(self):
        relation = RelationInfo(
            id="r1", type="blocks", issue=IssueRef("ENG-1", "A"), related_issue=IssueRef("ENG-2", "B")
        )
        assert format_relation(relation) == "[ENG-1] blocks [ENG-2] B (relation id: r1)"

    def test_attachment_falls_back_to_url(self):
        attachment = AttachmentInfo(id="a1", url="https://x.io/1")
        assert format_attachment(attachment) == "https://x.io/1 <https://x.io/1> [id: a1]"

    def test_history_entry(self):
        entry = HistoryEntry(
            id="h1", created_at="2025-01-02T03:04:05Z", from_state="Todo",
            to_state="Done", removed_labels=["Bug"],
        )
        assert format_history_entry(entry) == "2025-01-02 by system: Todo -> Done; -Bug"
        assert format_history_entry(HistoryEntry(id="h2")) == "? by system: other change"


class TestPagination:
    def test_more_available_with_cursor(self):
        text = format_pagination(PageInfo(has_next_page=True, end_cursor="abc"), 25)
        assert text.startswith("\n---\nShowing 25 results. More available")
        assert '"abc"' in text

    def test_last_page(self):
        assert format_pagination(PageInfo(), 1) == "\n---\nShowing all 1 result."
