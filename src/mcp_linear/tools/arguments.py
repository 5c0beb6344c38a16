"""Typed argument records for every Linear tool, and the binder that builds them.

Each tool accepts one argument model. The model is the single source of truth
for the tool's parameters: the catalogue derives its ``inputSchema`` from it
and :func:`bind` enforces the same required fields and types.
"""

import logging
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import InvalidArgumentError, MissingRequiredFieldError

logger = logging.getLogger("mcp-linear.tools")

ArgumentsT = TypeVar("ArgumentsT", bound="ToolArguments")

# Priority range is advertised to clients but not enforced; Linear decides.
PRIORITY_RANGE = {"minimum": 0, "maximum": 4}


def _whole_number(value: Any) -> Any:
    # JSON "number" fields may arrive as 10.0; fractional values stay invalid
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# Advertised as a JSON "number"; accepts integers and integral floats
WholeNumber = Annotated[int, BeforeValidator(_whole_number)]


class ToolArguments(BaseModel):
    """Base class for tool argument records.

    Fields use snake_case in Python and camelCase on the wire. Records are
    immutable; ``model_fields_set`` remembers which optional fields the
    caller actually sent (including explicit ``null``).
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def provided(self, field: str) -> bool:
        """Whether the caller supplied ``field`` (possibly as ``null``)."""
        return field in self.model_fields_set

    def provided_values(self, *fields: str) -> dict[str, Any]:
        """Supplied values among ``fields``, keyed by their wire names."""
        return {
            wire_name(type(self), field): getattr(self, field)
            for field in fields
            if self.provided(field)
        }


class CreateIssueArguments(ToolArguments):
    title: str = Field(description="Issue title")
    description: str | None = Field(
        default=None, description="Issue description (markdown supported)"
    )
    team_id: str = Field(description="Team ID")
    assignee_id: str | None = Field(
        default=None,
        description=(
            "Assignee user ID (optional). Defaults to the authenticated user; "
            "pass null explicitly to leave the issue unassigned"
        ),
    )
    priority: WholeNumber | None = Field(
        default=None,
        description="Priority (0-4, optional)",
        json_schema_extra=PRIORITY_RANGE,
    )
    labels: list[str] | None = Field(
        default=None, description="Label IDs to apply (optional)"
    )
    parent_id: str | None = Field(default=None, description="Parent issue ID (optional)")
    project_id: str | None = Field(default=None, description="Project ID (optional)")
    state_id: str | None = Field(default=None, description="Status UUID (optional)")


class ListIssuesArguments(ToolArguments):
    team_id: str | None = Field(default=None, description="Filter by team ID (optional)")
    assignee_id: str | None = Field(
        default=None, description="Filter by assignee ID (optional)"
    )
    status_name: str | None = Field(
        default=None, description="Filter by status name (optional)"
    )
    status_uuid: str | None = Field(
        default=None,
        alias="statusUUID",
        description="Filter by status UUID (optional, takes precedence over statusName)",
    )
    first: WholeNumber | None = Field(
        default=None, description="Number of issues to return (default: 50)"
    )


class UpdateIssueArguments(ToolArguments):
    issue_id: str = Field(description="Issue ID")
    title: str | None = Field(default=None, description="New title (optional)")
    description: str | None = Field(
        default=None, description="New description (optional)"
    )
    status: str | None = Field(
        default=None, description="New status UUID (optional)"
    )
    assignee_id: str | None = Field(
        default=None,
        description="New assignee ID (optional, null removes the assignee)",
    )
    priority: WholeNumber | None = Field(
        default=None,
        description="New priority (0-4, optional)",
        json_schema_extra=PRIORITY_RANGE,
    )
    labels: list[str] | None = Field(
        default=None,
        description="Label IDs (optional); replaces the issue's current labels",
    )
    parent_id: str | None = Field(default=None, description="Parent issue ID (optional)")
    project_id: str | None = Field(default=None, description="Project ID (optional)")


class ListTeamsAndStatesArguments(ToolArguments):
    pass


class ListProjectsArguments(ToolArguments):
    team_id: str | None = Field(default=None, description="Filter by team ID (optional)")
    first: WholeNumber | None = Field(
        default=None, description="Number of projects to return (default: 50)"
    )
    project_name: str | None = Field(
        default=None,
        description="Filter by partial, case-insensitive project name (optional)",
    )


class SearchIssuesArguments(ToolArguments):
    query: str = Field(description="Search query text")
    first: WholeNumber | None = Field(
        default=None, description="Number of results to return (default: 50)"
    )
    team_id: str | None = Field(default=None, description="Filter by team ID (optional)")


class GetIssueArguments(ToolArguments):
    issue_id: str = Field(description="Issue ID")


class ListLabelsArguments(ToolArguments):
    team_id: str = Field(description="Team ID")


class CreateLabelArguments(ToolArguments):
    team_id: str = Field(description="Team ID")
    name: str = Field(description="Label name")
    color: str = Field(description="Label color (hex color code)")
    description: str | None = Field(
        default=None, description="Label description (optional)"
    )


class UpdateLabelArguments(ToolArguments):
    id: str = Field(description="Label ID")
    name: str | None = Field(default=None, description="New label name (optional)")
    color: str | None = Field(
        default=None, description="New color (hex color code, optional)"
    )
    description: str | None = Field(
        default=None, description="New description (optional)"
    )


class ListTeamMembersArguments(ToolArguments):
    team_id: str = Field(description="Team ID")


class ListProjectStatesArguments(ToolArguments):
    pass


class GetProjectArguments(ToolArguments):
    project_id: str = Field(description="Project ID")


class CreateProjectArguments(ToolArguments):
    name: str = Field(description="Project name (required)")
    team_id: str = Field(description="Team ID (required)")
    description: str | None = Field(
        default=None, description="Project description (optional)"
    )
    content: str | None = Field(
        default=None, description="Project content in markdown format (optional)"
    )
    lead_id: str | None = Field(
        default=None,
        description=(
            "Project lead user ID (optional). Defaults to the authenticated user; "
            "pass null explicitly to create the project without a lead"
        ),
    )
    status_id: str | None = Field(default=None, description="Project status ID (optional)")


class UpdateProjectArguments(ToolArguments):
    project_id: str = Field(description="Project ID (required)")
    name: str | None = Field(default=None, description="New project name (optional)")
    description: str | None = Field(
        default=None, description="New project description (optional)"
    )
    content: str | None = Field(
        default=None,
        description="New project content in markdown format (optional)",
    )
    lead_id: str | None = Field(
        default=None, description="New project lead user ID (optional)"
    )
    status_id: str | None = Field(
        default=None, description="New project status ID (optional)"
    )


class ListProjectStatusesArguments(ToolArguments):
    pass


def wire_name(model: type[ToolArguments], field: str) -> str:
    """The camelCase name a field has in tool arguments and schemas."""
    return model.model_fields[field].alias or field


def required_fields(model: type[ToolArguments]) -> list[str]:
    """Wire names of the model's required fields, in declaration order."""
    return [
        wire_name(model, name)
        for name, info in model.model_fields.items()
        if info.is_required()
    ]


def bind(model: type[ArgumentsT], arguments: dict[str, Any] | None) -> ArgumentsT:
    """
    Validate raw tool arguments into a typed argument record.

    Args:
        model: The tool's argument model
        arguments: Arguments sent by the client (``None`` means none)

    Returns:
        The bound, immutable argument record

    Raises:
        MissingRequiredFieldError: If required fields are absent, null or empty,
            naming every missing field
        InvalidArgumentError: If a supplied value has the wrong type
    """
    arguments = arguments or {}

    missing = [
        name for name in required_fields(model) if arguments.get(name) in (None, "")
    ]
    if missing:
        raise MissingRequiredFieldError(missing)

    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "arguments"
        msg = f"Invalid value for '{field}': {error['msg']}"
        logger.debug(f"{model.__name__} rejected arguments: {e}")
        raise InvalidArgumentError(msg) from e
