"""Tests for the tool handlers against a scripted Linear API."""

import pytest

from mcp_linear.exceptions import EntityNotFoundError, LinearAPIError
from mcp_linear.tools.arguments import bind
from mcp_linear.tools.catalogue import get_tool_spec
from mcp_linear.tools.handlers import HANDLERS, ISSUE_DETAIL_PLAN
from tests.fixtures.linear_mocks import (
    MOCK_BARE_ISSUE_RELATIONS,
    MOCK_ISSUE,
    MOCK_ISSUE_ID,
    MOCK_ISSUE_RELATIONS,
    MOCK_PROJECT,
    MOCK_PROJECT_ID,
    MOCK_PROJECT_RELATIONS,
)
from tests.utils.factories import (
    LinearIssueFactory,
    LinearLabelFactory,
    LinearProjectFactory,
    LinearTeamFactory,
    LinearUserFactory,
    connection,
)
from tests.utils.graphql import FakeLinearAPI

VIEWER = {"data": {"viewer": LinearUserFactory.create("viewer-1", name="Me")}}
TEAM = {"data": {"team": LinearTeamFactory.create()}}
MISSING_TEAM = {"data": {"team": None}}


async def run(fake: FakeLinearAPI, name: str, arguments: dict | None = None):
    spec = get_tool_spec(name)
    return await HANDLERS[name](fake.fetcher(), bind(spec.arguments, arguments))


def test_every_catalogue_tool_has_a_handler():
    from mcp_linear.tools.catalogue import TOOL_SPECS

    assert set(HANDLERS) == {spec.name for spec in TOOL_SPECS}


class TestCreateIssue:
    @staticmethod
    def _fake() -> FakeLinearAPI:
        return FakeLinearAPI(
            {
                "Viewer": VIEWER,
                "CreateIssue": {
                    "data": {
                        "issueCreate": {
                            "success": True,
                            "issue": LinearIssueFactory.create(
                                state={"id": "s-1", "name": "Todo"},
                                assignee={"id": "viewer-1", "name": "Me"},
                                team=LinearTeamFactory.create(),
                                labels=connection(LinearLabelFactory.create()),
                            ),
                        }
                    }
                },
            }
        )

    @pytest.mark.anyio
    async def test_omitted_assignee_defaults_to_viewer(self):
        fake = self._fake()

        result = await run(fake, "create_issue", {"title": "Bug", "teamId": "team-1"})

        assert fake.operations == ["Viewer", "CreateIssue"]
        assert fake.request_for("CreateIssue")["variables"]["input"] == {
            "title": "Bug",
            "teamId": "team-1",
            "assigneeId": "viewer-1",
        }
        assert result["assignee"] == {"id": "viewer-1", "name": "Me"}
        assert result["status"] == "Todo"
        assert result["labels"] == [{"id": "label-1", "name": "Bug", "color": "#eb5757"}]

    @pytest.mark.anyio
    async def test_explicit_null_assignee_leaves_issue_unassigned(self):
        fake = self._fake()

        await run(
            fake, "create_issue", {"title": "Bug", "teamId": "team-1", "assigneeId": None}
        )

        assert fake.operations == ["CreateIssue"]
        issue_input = fake.request_for("CreateIssue")["variables"]["input"]
        assert "assigneeId" in issue_input
        assert issue_input["assigneeId"] is None

    @pytest.mark.anyio
    async def test_optional_fields_are_renamed_for_linear(self):
        fake = self._fake()

        await run(
            fake,
            "create_issue",
            {
                "title": "Bug",
                "teamId": "team-1",
                "assigneeId": "user-7",
                "priority": 1,
                "labels": ["label-1"],
                "parentId": "parent-1",
                "projectId": "project-1",
                "stateId": "s-1",
            },
        )

        assert fake.request_for("CreateIssue")["variables"]["input"] == {
            "title": "Bug",
            "teamId": "team-1",
            "assigneeId": "user-7",
            "priority": 1,
            "labelIds": ["label-1"],
            "parentId": "parent-1",
            "projectId": "project-1",
            "stateId": "s-1",
        }


class TestListIssues:
    @staticmethod
    def _fake() -> FakeLinearAPI:
        return FakeLinearAPI(
            {
                "ListIssues": {
                    "data": {
                        "issues": connection(
                            LinearIssueFactory.create(
                                state={"id": "s-1", "name": "Todo"},
                                assignee=LinearUserFactory.create(),
                            ),
                            LinearIssueFactory.create_minimal("issue-uuid-2"),
                        )
                    }
                }
            }
        )

    @pytest.mark.anyio
    async def test_defaults_to_fifty(self):
        fake = self._fake()

        result = await run(fake, "list_issues", {})

        assert fake.request_for("ListIssues")["variables"] == {"filter": {}, "first": 50}
        assert result[0]["status"] == "Todo"
        assert result[0]["assignee"] == {"id": "user-1", "name": "Ada Lovelace"}
        assert result[1]["status"] == "Unknown"
        assert result[1]["statusUUID"] is None
        assert result[1]["assignee"] is None

    @pytest.mark.anyio
    async def test_first_is_overridable(self):
        fake = self._fake()

        await run(fake, "list_issues", {"first": 5})

        assert fake.request_for("ListIssues")["variables"]["first"] == 5

    @pytest.mark.anyio
    async def test_filters_and_status_uuid_precedence(self):
        fake = self._fake()

        await run(
            fake,
            "list_issues",
            {
                "teamId": "team-1",
                "assigneeId": "user-1",
                "statusName": "Todo",
                "statusUUID": "s-9",
            },
        )

        assert fake.request_for("ListIssues")["variables"]["filter"] == {
            "team": {"id": {"eq": "team-1"}},
            "assignee": {"id": {"eq": "user-1"}},
            "state": {"id": {"eq": "s-9"}},
        }

    @pytest.mark.anyio
    async def test_status_name_filter(self):
        fake = self._fake()

        await run(fake, "list_issues", {"statusName": "Todo"})

        assert fake.request_for("ListIssues")["variables"]["filter"] == {
            "state": {"name": {"eq": "Todo"}}
        }


class TestUpdateIssue:
    @pytest.mark.anyio
    async def test_update_maps_fields_and_returns_url(self):
        fake = FakeLinearAPI(
            {
                "Issue": {"data": {"issue": MOCK_ISSUE}},
                "UpdateIssue": {
                    "data": {
                        "issueUpdate": {
                            "success": True,
                            "issue": LinearIssueFactory.create(
                                MOCK_ISSUE_ID, title="Renamed"
                            ),
                        }
                    }
                },
            }
        )

        result = await run(
            fake,
            "update_issue",
            {
                "issueId": "ENG-1",
                "title": "Renamed",
                "status": "s-2",
                "labels": [],
                "assigneeId": None,
            },
        )

        request = fake.request_for("UpdateIssue")
        assert request["variables"] == {
            "id": MOCK_ISSUE_ID,
            "input": {
                "title": "Renamed",
                "assigneeId": None,
                "stateId": "s-2",
                "labelIds": [],
            },
        }
        assert result["success"] is True
        assert result["issue"]["title"] == "Renamed"
        assert result["issueUrl"] == MOCK_ISSUE["url"]

    @pytest.mark.anyio
    async def test_omitted_assignee_is_left_unchanged(self):
        fake = FakeLinearAPI(
            {
                "Issue": {"data": {"issue": MOCK_ISSUE}},
                "UpdateIssue": {
                    "data": {"issueUpdate": {"success": True, "issue": MOCK_ISSUE}}
                },
            }
        )

        await run(fake, "update_issue", {"issueId": "ENG-1", "priority": 3})

        assert fake.request_for("UpdateIssue")["variables"]["input"] == {"priority": 3}
        assert "Viewer" not in fake.operations

    @pytest.mark.anyio
    async def test_missing_issue(self):
        fake = FakeLinearAPI({"Issue": {"data": {"issue": None}}})

        with pytest.raises(EntityNotFoundError, match="ENG-404"):
            await run(fake, "update_issue", {"issueId": "ENG-404", "title": "x"})

        assert "UpdateIssue" not in fake.operations


@pytest.mark.anyio
async def test_list_teams_and_states():
    def states(variables):
        ordered = {
            "team-1": [
                LinearTeamFactory.state("s-b", "Done", 2),
                LinearTeamFactory.state("s-a", "Todo", 1),
            ],
            "team-2": [],
        }
        return {
            "data": {
                "team": {"id": variables["id"], "states": connection(*ordered[variables["id"]])}
            }
        }

    fake = FakeLinearAPI(
        {
            "ListTeams": {
                "data": {
                    "teams": connection(
                        LinearTeamFactory.create(),
                        LinearTeamFactory.create("team-2", name="Design", key="DES"),
                    )
                }
            },
            "TeamStates": states,
        }
    )

    result = await run(fake, "list_teams_and_states")

    assert [team["key"] for team in result] == ["ENG", "DES"]
    assert [state["name"] for state in result[0]["states"]] == ["Todo", "Done"]
    assert result[0]["states"][0]["teamId"] == "team-1"
    assert result[1]["states"] == []
    assert fake.operations.count("TeamStates") == 2


class TestListProjects:
    @pytest.mark.anyio
    async def test_filters(self):
        fake = FakeLinearAPI(
            {"ListProjects": {"data": {"projects": connection(LinearProjectFactory.create())}}}
        )

        result = await run(
            fake, "list_projects", {"teamId": "team-1", "projectName": "onboard"}
        )

        assert fake.request_for("ListProjects")["variables"] == {
            "filter": {
                "accessibleTeams": {"id": {"eq": "team-1"}},
                "name": {"containsIgnoreCase": "onboard"},
            },
            "first": 50,
        }
        assert result[0]["name"] == "Onboarding revamp"
        assert set(result[0]) == {"id", "name", "description", "state", "url"}


class TestSearchIssues:
    @staticmethod
    def _fake() -> FakeLinearAPI:
        return FakeLinearAPI(
            {
                "SearchIssues": {
                    "data": {
                        "searchIssues": connection(
                            LinearIssueFactory.create(
                                team={"id": "team-1"}, metadata={"score": 0.9}
                            ),
                            LinearIssueFactory.create(
                                "issue-uuid-2", team={"id": "team-2"}
                            ),
                        )
                    }
                }
            }
        )

    @pytest.mark.anyio
    async def test_search_without_team(self):
        fake = self._fake()

        result = await run(fake, "search_issues", {"query": "login"})

        request = fake.request_for("SearchIssues")
        assert request["variables"] == {"term": "login", "first": 50}
        assert "team {" not in request["query"]
        assert len(result) == 2
        assert result[0]["metadata"] == {"score": 0.9}

    @pytest.mark.anyio
    async def test_search_filtered_by_team(self):
        fake = self._fake()

        result = await run(
            fake, "search_issues", {"query": "login", "teamId": "team-1", "first": 10}
        )

        request = fake.request_for("SearchIssues")
        assert "team {" in request["query"]
        assert request["variables"]["first"] == 10
        assert [issue["id"] for issue in result] == ["issue-uuid-1"]


class TestGetIssue:
    @pytest.mark.anyio
    async def test_full_record(self):
        fake = FakeLinearAPI({"Issue": {"data": {"issue": MOCK_ISSUE}}, **MOCK_ISSUE_RELATIONS})

        result = await run(fake, "get_issue", {"issueId": "ENG-1"})

        assert len(fake.requests) == 1 + len(ISSUE_DETAIL_PLAN)
        assert result["identifier"] == "ENG-1"
        assert result["status"] == "In Progress"
        assert result["cycle"] == {"id": "cycle-1", "name": "Cycle 7", "number": 7}
        assert result["embeddedImages"] == [
            {"url": "https://uploads.linear.app/a/before.png", "altText": "before"},
            {"url": "https://uploads.linear.app/a/after.png", "altText": "after fix"},
        ]

    @pytest.mark.anyio
    async def test_bare_issue_has_null_and_empty_relations(self):
        fake = FakeLinearAPI(
            {"Issue": {"data": {"issue": MOCK_ISSUE}}, **MOCK_BARE_ISSUE_RELATIONS}
        )

        result = await run(fake, "get_issue", {"issueId": MOCK_ISSUE_ID})

        assert result["assignee"] is None
        assert result["labels"] == []
        assert result["comments"] == []
        assert result["status"] == "Unknown"


class TestLabels:
    @pytest.mark.anyio
    async def test_list_labels(self):
        fake = FakeLinearAPI(
            {
                "Team": TEAM,
                "TeamLabels": {
                    "data": {
                        "team": {
                            "id": "team-1",
                            "labels": connection(LinearLabelFactory.create()),
                        }
                    }
                },
            }
        )

        result = await run(fake, "list_labels", {"teamId": "team-1"})

        assert fake.operations == ["Team", "TeamLabels"]
        assert result == [
            {
                "id": "label-1",
                "name": "Bug",
                "color": "#eb5757",
                "description": "Something is broken",
                "createdAt": "2024-01-01T00:00:00.000Z",
                "updatedAt": "2024-01-02T00:00:00.000Z",
            }
        ]

    @pytest.mark.anyio
    async def test_list_labels_unknown_team(self):
        fake = FakeLinearAPI({"Team": MISSING_TEAM})

        with pytest.raises(EntityNotFoundError, match="team-404"):
            await run(fake, "list_labels", {"teamId": "team-404"})

    @pytest.mark.anyio
    async def test_create_label(self):
        fake = FakeLinearAPI(
            {
                "CreateLabel": {
                    "data": {
                        "issueLabelCreate": {
                            "success": True,
                            "issueLabel": LinearLabelFactory.create(
                                team={"id": "team-1", "name": "Engineering", "key": "ENG"}
                            ),
                        }
                    }
                }
            }
        )

        result = await run(
            fake, "create_label", {"teamId": "team-1", "name": "Bug", "color": "#eb5757"}
        )

        assert fake.request_for("CreateLabel")["variables"]["input"] == {
            "teamId": "team-1",
            "name": "Bug",
            "color": "#eb5757",
        }
        assert result["success"] is True
        assert result["label"]["team"]["key"] == "ENG"

    @pytest.mark.anyio
    async def test_update_label_sends_only_provided_fields(self):
        label = LinearLabelFactory.create()
        fake = FakeLinearAPI(
            {
                "Label": {"data": {"issueLabel": label}},
                "UpdateLabel": {
                    "data": {"issueLabelUpdate": {"success": True, "issueLabel": label}}
                },
            }
        )

        result = await run(fake, "update_label", {"id": "label-1", "color": "#000000"})

        assert fake.request_for("UpdateLabel")["variables"] == {
            "id": "label-1",
            "input": {"color": "#000000"},
        }
        assert result["label"]["id"] == "label-1"

    @pytest.mark.anyio
    async def test_update_unknown_label(self):
        fake = FakeLinearAPI({"Label": {"data": {"issueLabel": None}}})

        with pytest.raises(EntityNotFoundError, match="label-404"):
            await run(fake, "update_label", {"id": "label-404", "name": "x"})


@pytest.mark.anyio
async def test_list_team_members_skips_missing_users():
    def user(variables):
        if variables["id"] == "gone":
            return {"data": {"user": None}}
        return {"data": {"user": LinearUserFactory.create(variables["id"])}}

    fake = FakeLinearAPI(
        {
            "Team": TEAM,
            "TeamMemberships": {
                "data": {
                    "team": {
                        "id": "team-1",
                        "memberships": connection(
                            {"id": "m-1", "user": {"id": "user-1"}},
                            {"id": "m-2", "user": {"id": "gone"}},
                        ),
                    }
                }
            },
            "User": user,
        }
    )

    result = await run(fake, "list_team_members", {"teamId": "team-1"})

    assert result == [
        {"id": "user-1", "name": "Ada Lovelace", "displayName": "ada", "active": True}
    ]


@pytest.mark.anyio
async def test_project_states_and_statuses():
    fake = FakeLinearAPI(
        {
            "ProjectStatuses": {
                "data": {
                    "projectStatuses": connection(
                        {
                            "id": "ps-1",
                            "name": "Planned",
                            "color": "#ccc",
                            "type": "planned",
                            "description": "Not started",
                            "position": 1,
                        }
                    )
                }
            }
        }
    )

    states = await run(fake, "list_project_states")
    statuses = await run(fake, "list_project_statuses")

    assert states == [{"id": "ps-1", "name": "Planned", "color": "#ccc", "type": "planned"}]
    assert statuses == [
        {"id": "ps-1", "name": "Planned", "description": "Not started", "type": "planned"}
    ]


@pytest.mark.anyio
async def test_get_project():
    fake = FakeLinearAPI(
        {"Project": {"data": {"project": MOCK_PROJECT}}, **MOCK_PROJECT_RELATIONS}
    )

    result = await run(fake, "get_project", {"projectId": MOCK_PROJECT_ID})

    assert result["lead"] == {"id": "user-1", "name": "Ada Lovelace"}
    assert result["teams"] == [{"id": "team-1", "name": "Engineering", "key": "ENG"}]
    assert result["issues"] == [
        {
            "id": MOCK_ISSUE_ID,
            "title": "Fix login redirect",
            "identifier": "ENG-1",
            "status": "In Progress",
            "priority": 2,
        },
        {
            "id": "issue-uuid-3",
            "title": "Welcome email",
            "identifier": "ENG-3",
            "status": "Unknown",
            "priority": 0,
        },
    ]
    assert result["members"] == [{"id": "user-1", "name": "Ada Lovelace", "displayName": "ada"}]
    assert result["externalLinks"][0]["url"] == "https://docs.example.com/onboarding"


class TestCreateProject:
    @staticmethod
    def _fake() -> FakeLinearAPI:
        return FakeLinearAPI(
            {
                "Team": TEAM,
                "Viewer": VIEWER,
                "CreateProject": {
                    "data": {
                        "projectCreate": {
                            "success": True,
                            "project": LinearProjectFactory.create(
                                lead={"id": "viewer-1", "name": "Me"}
                            ),
                        }
                    }
                },
            }
        )

    @pytest.mark.anyio
    async def test_omitted_lead_defaults_to_viewer(self):
        fake = self._fake()

        result = await run(
            fake,
            "create_project",
            {"name": "Onboarding revamp", "teamId": "team-1", "description": ""},
        )

        assert fake.request_for("CreateProject")["variables"]["input"] == {
            "name": "Onboarding revamp",
            "teamIds": ["team-1"],
            "leadId": "viewer-1",
        }
        assert result["success"] is True
        assert result["project"]["lead"] == {"id": "viewer-1", "name": "Me"}

    @pytest.mark.anyio
    async def test_explicit_null_lead(self):
        fake = self._fake()

        await run(
            fake,
            "create_project",
            {
                "name": "Onboarding revamp",
                "teamId": "team-1",
                "leadId": None,
                "content": "## Goals",
                "statusId": "ps-1",
            },
        )

        assert "Viewer" not in fake.operations
        assert fake.request_for("CreateProject")["variables"]["input"] == {
            "name": "Onboarding revamp",
            "teamIds": ["team-1"],
            "content": "## Goals",
            "leadId": None,
            "statusId": "ps-1",
        }

    @pytest.mark.anyio
    async def test_unknown_team(self):
        fake = FakeLinearAPI({"Team": MISSING_TEAM})

        with pytest.raises(EntityNotFoundError, match="team-404"):
            await run(fake, "create_project", {"name": "P", "teamId": "team-404"})

        assert fake.operations == ["Team"]


@pytest.mark.anyio
async def test_update_project():
    fake = FakeLinearAPI(
        {
            "Project": {"data": {"project": MOCK_PROJECT}},
            "UpdateProject": {
                "data": {
                    "projectUpdate": {
                        "success": True,
                        "project": LinearProjectFactory.create(
                            MOCK_PROJECT_ID, name="Renamed"
                        ),
                    }
                }
            },
        }
    )

    result = await run(
        fake,
        "update_project",
        {"projectId": MOCK_PROJECT_ID, "name": "Renamed", "content": "", "leadId": None},
    )

    assert fake.request_for("UpdateProject")["variables"] == {
        "id": MOCK_PROJECT_ID,
        "input": {"name": "Renamed", "leadId": None},
    }
    assert result["project"]["name"] == "Renamed"
    assert result["project"]["lead"] is None


@pytest.mark.anyio
async def test_create_issue_without_viewer_sends_nothing():
    fake = FakeLinearAPI({"Viewer": {"data": {"viewer": None}}})

    with pytest.raises(LinearAPIError):
        await run(fake, "create_issue", {"title": "Bug", "teamId": "team-1"})

    assert fake.operations == ["Viewer"]
