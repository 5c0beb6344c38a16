"""Module for Linear project operations."""

import logging
from collections.abc import Sequence
from typing import Any

from ..models.linear import LinearProject, LinearProjectStatus
from .relations import (
    PROJECT_FIELDS,
    PROJECT_STATUS_FIELDS,
    RelationsMixin,
    selection_for,
)

logger = logging.getLogger("mcp-linear.linear")


class ProjectsMixin(RelationsMixin):
    """Mixin for Linear project operations."""

    async def get_project(
        self, project_id: str, plan: Sequence[str] = ()
    ) -> LinearProject:
        """
        Get a project and the relations named by ``plan``.

        Args:
            project_id: Project UUID or slug
            plan: Relation names to resolve concurrently

        Returns:
            LinearProject with the planned relations populated

        Raises:
            EntityNotFoundError: If the project does not exist
        """
        data = await self.fetch_entity("project", "Project", project_id, PROJECT_FIELDS)
        relations = await self.resolve_relations("project", data["id"], plan)
        return LinearProject.from_api_response({**data, **relations})

    async def list_projects(
        self, filter: dict[str, Any] | None = None, first: int = 50
    ) -> list[LinearProject]:
        """
        List projects matching a ``ProjectFilter``.

        Args:
            filter: Linear project filter (``None`` for all projects)
            first: Maximum number of projects to return

        Returns:
            List of LinearProject objects (scalar fields only)
        """
        query = (
            "query ListProjects($filter: ProjectFilter, $first: Int) { "
            f"projects(filter: $filter, first: $first) {{ nodes {{ {PROJECT_FIELDS} }} }} }}"
        )
        data = await self.execute(query, {"filter": filter, "first": first})
        projects = LinearProject.from_connection(data.get("projects"))
        logger.debug(f"Listed {len(projects)} projects (first={first})")
        return projects

    async def create_project(
        self, input: dict[str, Any], plan: Sequence[str] = ()
    ) -> tuple[bool, LinearProject]:
        """
        Create a project.

        Args:
            input: ``ProjectCreateInput`` fields
            plan: Relations of the created project to return

        Returns:
            Tuple of (success, created project)
        """
        mutation = (
            "mutation CreateProject($input: ProjectCreateInput!) { "
            "projectCreate(input: $input) { success project { "
            f"{PROJECT_FIELDS} {selection_for('project', plan)} }} }} }}"
        )
        success, project = await self.mutate(
            mutation, {"input": input}, "projectCreate", "project"
        )
        logger.info(f"Created project {project.get('name')} (success={success})")
        return success, LinearProject.from_api_response(project)

    async def update_project(
        self, project_id: str, input: dict[str, Any], plan: Sequence[str] = ()
    ) -> tuple[bool, LinearProject]:
        """
        Update a project. Only the keys present in ``input`` are changed.

        Returns:
            Tuple of (success, updated project)
        """
        mutation = (
            "mutation UpdateProject($id: String!, $input: ProjectUpdateInput!) { "
            "projectUpdate(id: $id, input: $input) { success project { "
            f"{PROJECT_FIELDS} {selection_for('project', plan)} }} }} }}"
        )
        success, project = await self.mutate(
            mutation, {"id": project_id, "input": input}, "projectUpdate", "project"
        )
        logger.info(f"Updated project {project_id} (success={success})")
        return success, LinearProject.from_api_response(project)

    async def list_project_statuses(self) -> list[LinearProjectStatus]:
        """Workspace-level project statuses, in their configured order."""
        query = (
            "query ProjectStatuses { projectStatuses(first: 250) { "
            f"nodes {{ {PROJECT_STATUS_FIELDS} }} }} }}"
        )
        data = await self.execute(query)
        statuses = LinearProjectStatus.from_connection(data.get("projectStatuses"))
        statuses.sort(key=lambda status: (status.position is None, status.position or 0))
        return statuses
