"""Tool handlers: one coroutine per catalogue entry.

Each handler receives the shared :class:`LinearFetcher` and its bound argument
record, performs the Linear lookups its resolution plan declares and returns a
JSON-serializable record.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..exceptions import EntityNotFoundError
from ..linear import LinearFetcher
from ..models.linear import LinearUser
from .arguments import (
    CreateIssueArguments,
    CreateLabelArguments,
    CreateProjectArguments,
    GetIssueArguments,
    GetProjectArguments,
    ListIssuesArguments,
    ListLabelsArguments,
    ListProjectsArguments,
    ListProjectStatesArguments,
    ListProjectStatusesArguments,
    ListTeamMembersArguments,
    ListTeamsAndStatesArguments,
    SearchIssuesArguments,
    ToolArguments,
    UpdateIssueArguments,
    UpdateLabelArguments,
    UpdateProjectArguments,
)

logger = logging.getLogger("mcp-linear.tools")

DEFAULT_PAGE_SIZE = 50

# Resolution plans: the only relations each tool ever requests
ISSUE_SUMMARY_PLAN = ("state", "assignee", "team", "project", "labels")
ISSUE_LIST_PLAN = ("state", "assignee")
ISSUE_DETAIL_PLAN = (
    "state",
    "assignee",
    "creator",
    "team",
    "project",
    "parent",
    "cycle",
    "labels",
    "comments",
    "attachments",
    "relations",
)
PROJECT_SUMMARY_PLAN = ("lead", "status")
PROJECT_DETAIL_PLAN = ("lead", "teams", "issues", "members", "externalLinks")

Handler = Callable[[LinearFetcher, Any], Awaitable[Any]]


async def _default_identity(
    linear: LinearFetcher, args: ToolArguments, field: str
) -> str | None:
    """Value of an identity field on creation.

    Omitted means "the authenticated user"; an explicit null is kept.
    """
    if args.provided(field):
        return getattr(args, field)
    viewer = await linear.get_viewer()
    return viewer.id


async def create_issue(linear: LinearFetcher, args: CreateIssueArguments) -> Any:
    issue_input: dict[str, Any] = {"title": args.title, "teamId": args.team_id}
    issue_input.update(
        args.provided_values(
            "description", "priority", "parent_id", "project_id", "state_id"
        )
    )
    if args.provided("labels"):
        issue_input["labelIds"] = args.labels
    issue_input["assigneeId"] = await _default_identity(linear, args, "assignee_id")

    _, issue = await linear.create_issue(issue_input, ISSUE_SUMMARY_PLAN)
    return issue.to_summary_dict()


async def list_issues(linear: LinearFetcher, args: ListIssuesArguments) -> Any:
    issue_filter: dict[str, Any] = {}
    if args.team_id:
        issue_filter["team"] = {"id": {"eq": args.team_id}}
    if args.assignee_id:
        issue_filter["assignee"] = {"id": {"eq": args.assignee_id}}
    if args.status_name:
        issue_filter["state"] = {"name": {"eq": args.status_name}}
    if args.status_uuid:
        # The UUID is unambiguous, so it wins over the name
        issue_filter["state"] = {"id": {"eq": args.status_uuid}}

    first = args.first if args.first is not None else DEFAULT_PAGE_SIZE
    issues = await linear.list_issues(issue_filter, first, ISSUE_LIST_PLAN)
    return [issue.to_list_dict() for issue in issues]


async def update_issue(linear: LinearFetcher, args: UpdateIssueArguments) -> Any:
    issue = await linear.get_issue(args.issue_id)

    issue_input = args.provided_values(
        "title", "description", "assignee_id", "priority", "parent_id", "project_id"
    )
    if args.provided("status"):
        issue_input["stateId"] = args.status
    if args.provided("labels"):
        issue_input["labelIds"] = args.labels

    success, updated = await linear.update_issue(
        issue.id, issue_input, ISSUE_SUMMARY_PLAN
    )
    return {
        "success": success,
        "issue": updated.to_summary_dict(),
        "issueUrl": issue.url,
    }


async def list_teams_and_states(
    linear: LinearFetcher, args: ListTeamsAndStatesArguments
) -> Any:
    teams = await linear.list_teams()
    states = await asyncio.gather(*(linear.get_team_states(team.id) for team in teams))
    return [
        team.model_copy(update={"states": team_states}).to_simplified_dict()
        for team, team_states in zip(teams, states, strict=True)
    ]


async def list_projects(linear: LinearFetcher, args: ListProjectsArguments) -> Any:
    project_filter: dict[str, Any] = {}
    if args.team_id:
        project_filter["accessibleTeams"] = {"id": {"eq": args.team_id}}
    if args.project_name:
        project_filter["name"] = {"containsIgnoreCase": args.project_name}

    first = args.first if args.first is not None else DEFAULT_PAGE_SIZE
    projects = await linear.list_projects(project_filter, first)
    return [project.to_list_dict() for project in projects]


async def search_issues(linear: LinearFetcher, args: SearchIssuesArguments) -> Any:
    plan = ISSUE_LIST_PLAN + (("team",) if args.team_id else ())
    first = args.first if args.first is not None else DEFAULT_PAGE_SIZE
    issues = await linear.search_issues(args.query, first, plan)

    if args.team_id:
        issues = [
            issue for issue in issues if issue.team and issue.team.id == args.team_id
        ]
    return [issue.to_search_dict() for issue in issues]


async def get_issue(linear: LinearFetcher, args: GetIssueArguments) -> Any:
    issue = await linear.get_issue(args.issue_id, ISSUE_DETAIL_PLAN)
    return issue.to_detail_dict()


async def list_labels(linear: LinearFetcher, args: ListLabelsArguments) -> Any:
    team = await linear.get_team(args.team_id)
    labels = await linear.get_team_labels(team.id)
    return [label.to_simplified_dict() for label in labels]


async def create_label(linear: LinearFetcher, args: CreateLabelArguments) -> Any:
    label_input: dict[str, Any] = {
        "teamId": args.team_id,
        "name": args.name,
        "color": args.color,
    }
    label_input.update(args.provided_values("description"))

    success, label = await linear.create_label(label_input)
    return {"success": success, "label": label.to_detail_dict()}


async def update_label(linear: LinearFetcher, args: UpdateLabelArguments) -> Any:
    label = await linear.get_label(args.id)
    label_input = args.provided_values("name", "color", "description")

    success, updated = await linear.update_label(label.id, label_input)
    return {"success": success, "label": updated.to_detail_dict()}


async def list_team_members(
    linear: LinearFetcher, args: ListTeamMembersArguments
) -> Any:
    team = await linear.get_team(args.team_id)
    memberships = await linear.get_team_memberships(team.id)

    async def member(user_id: str) -> LinearUser | None:
        try:
            return await linear.get_user(user_id)
        except EntityNotFoundError:
            logger.warning(f"Skipping team {team.id} member {user_id}: user not found")
            return None

    users = await asyncio.gather(
        *(member(membership.user_id) for membership in memberships if membership.user_id)
    )
    return [user.to_member_dict() for user in users if user is not None]


async def list_project_states(
    linear: LinearFetcher, args: ListProjectStatesArguments
) -> Any:
    statuses = await linear.list_project_statuses()
    return [status.to_state_dict() for status in statuses]


async def get_project(linear: LinearFetcher, args: GetProjectArguments) -> Any:
    project = await linear.get_project(args.project_id, PROJECT_DETAIL_PLAN)
    return project.to_detail_dict()


async def create_project(linear: LinearFetcher, args: CreateProjectArguments) -> Any:
    team = await linear.get_team(args.team_id)

    project_input: dict[str, Any] = {"name": args.name, "teamIds": [team.id]}
    # Empty text is treated like an omitted field
    if args.description:
        project_input["description"] = args.description
    if args.content:
        project_input["content"] = args.content
    project_input["leadId"] = await _default_identity(linear, args, "lead_id")
    project_input.update(args.provided_values("status_id"))

    success, project = await linear.create_project(project_input, PROJECT_SUMMARY_PLAN)
    return {"success": success, "project": project.to_summary_dict()}


async def update_project(linear: LinearFetcher, args: UpdateProjectArguments) -> Any:
    project = await linear.get_project(args.project_id)

    project_input = args.provided_values("name", "lead_id", "status_id")
    if args.description:
        project_input["description"] = args.description
    if args.content:
        project_input["content"] = args.content

    success, updated = await linear.update_project(
        project.id, project_input, PROJECT_SUMMARY_PLAN
    )
    return {"success": success, "project": updated.to_summary_dict()}


async def list_project_statuses(
    linear: LinearFetcher, args: ListProjectStatusesArguments
) -> Any:
    statuses = await linear.list_project_statuses()
    return [status.to_simplified_dict() for status in statuses]


HANDLERS: dict[str, Handler] = {
    "create_issue": create_issue,
    "list_issues": list_issues,
    "update_issue": update_issue,
    "list_teams_and_states": list_teams_and_states,
    "list_projects": list_projects,
    "search_issues": search_issues,
    "get_issue": get_issue,
    "list_labels": list_labels,
    "create_label": create_label,
    "update_label": update_label,
    "list_team_members": list_team_members,
    "list_project_states": list_project_states,
    "get_project": get_project,
    "create_project": create_project,
    "update_project": update_project,
    "list_project_statuses": list_project_statuses,
}
