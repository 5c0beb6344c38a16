"""The fixed, ordered catalogue of Linear tools."""

import types as pytypes
from dataclasses import dataclass
from typing import Annotated, Any, Union, get_args, get_origin

from mcp import types

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
    required_fields,
    wire_name,
)

_JSON_TYPES: dict[type, str] = {
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
}


@dataclass(frozen=True)
class ToolSpec:
    """Descriptor of one tool: its name, description and argument model."""

    name: str
    description: str
    arguments: type[ToolArguments]
    write: bool = False

    @property
    def input_schema(self) -> dict[str, Any]:
        return input_schema(self.arguments)

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


def _property_schema(annotation: Any) -> dict[str, Any]:
    """JSON schema of a field annotation, ignoring its optionality."""
    if get_origin(annotation) in (Union, pytypes.UnionType):
        annotation = next(arg for arg in get_args(annotation) if arg is not type(None))
    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    if get_origin(annotation) is list:
        (item,) = get_args(annotation)
        return {"type": "array", "items": _property_schema(item)}
    return {"type": _JSON_TYPES[annotation]}


def input_schema(model: type[ToolArguments]) -> dict[str, Any]:
    """
    Derive a tool's ``inputSchema`` from its argument model.

    Args:
        model: The tool's argument model

    Returns:
        JSON schema object with camelCase property names; ``required`` is
        omitted for tools without required fields
    """
    properties: dict[str, Any] = {}
    for name, info in model.model_fields.items():
        prop = _property_schema(info.annotation)
        if info.description:
            prop["description"] = info.description
        if isinstance(info.json_schema_extra, dict):
            prop.update(info.json_schema_extra)
        properties[wire_name(model, name)] = prop

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    required = required_fields(model)
    if required:
        schema["required"] = required
    return schema


TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        "create_issue",
        "Create a new issue in Linear",
        CreateIssueArguments,
        write=True,
    ),
    ToolSpec("list_issues", "List issues with optional filters", ListIssuesArguments),
    ToolSpec(
        "update_issue",
        "Update an existing issue",
        UpdateIssueArguments,
        write=True,
    ),
    ToolSpec(
        "list_teams_and_states",
        "List all teams with their workflow states",
        ListTeamsAndStatesArguments,
    ),
    ToolSpec("list_projects", "List all projects", ListProjectsArguments),
    ToolSpec(
        "search_issues",
        "Search for issues using a text query",
        SearchIssuesArguments,
    ),
    ToolSpec(
        "get_issue",
        "Get detailed information about a specific issue",
        GetIssueArguments,
    ),
    ToolSpec("list_labels", "List the issue labels of a team", ListLabelsArguments),
    ToolSpec(
        "create_label",
        "Create a new issue label",
        CreateLabelArguments,
        write=True,
    ),
    ToolSpec(
        "update_label",
        "Edit an existing issue label",
        UpdateLabelArguments,
        write=True,
    ),
    ToolSpec(
        "list_team_members",
        "List the members of a team",
        ListTeamMembersArguments,
    ),
    ToolSpec(
        "list_project_states",
        "List all distinct project states",
        ListProjectStatesArguments,
    ),
    ToolSpec(
        "get_project",
        "Get detailed information about a specific project",
        GetProjectArguments,
    ),
    ToolSpec(
        "create_project",
        "Create a new project in Linear",
        CreateProjectArguments,
        write=True,
    ),
    ToolSpec(
        "update_project",
        "Update an existing project in Linear",
        UpdateProjectArguments,
        write=True,
    ),
    ToolSpec(
        "list_project_statuses",
        "List the statuses a project can be set to",
        ListProjectStatusesArguments,
    ),
)

_SPECS_BY_NAME: dict[str, ToolSpec] = {spec.name: spec for spec in TOOL_SPECS}


def get_tool_spec(name: str) -> ToolSpec | None:
    """Look up a tool by name; ``None`` if the catalogue has no such tool."""
    return _SPECS_BY_NAME.get(name)


def list_tool_specs(read_only: bool = False) -> list[ToolSpec]:
    """Catalogue in its fixed order, without write tools in read-only mode."""
    return [spec for spec in TOOL_SPECS if not (read_only and spec.write)]
