"""
Linear project models.

This module provides Pydantic models for Linear projects and the entities
that only appear inside a project (its issue list entries).
"""

import logging
from typing import Any

from pydantic import Field

from ..base import ApiModel
from ..constants import LINEAR_DEFAULT_ID, UNKNOWN
from .common import (
    LinearExternalLink,
    LinearProjectStatus,
    LinearUser,
    LinearWorkflowState,
)
from .team import LinearTeam

logger = logging.getLogger(__name__)


class LinearProjectIssue(ApiModel):
    """
    Model representing an issue as listed inside a project.
    """

    id: str = LINEAR_DEFAULT_ID
    identifier: str | None = None
    title: str = UNKNOWN
    priority: int | float | None = None
    state: LinearWorkflowState | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearProjectIssue":
        if not data:
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            identifier=data.get("identifier"),
            title=data.get("title") or UNKNOWN,
            priority=data.get("priority"),
            state=LinearWorkflowState.from_optional(data.get("state")),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "identifier": self.identifier,
            "status": self.state.name if self.state else UNKNOWN,
            "priority": self.priority,
        }


class LinearProject(ApiModel):
    """
    Model representing a Linear project.

    Relation fields (lead, status, teams, issues, members, external links)
    stay empty unless they were part of the resolution plan.
    """

    id: str = LINEAR_DEFAULT_ID
    name: str = UNKNOWN
    description: str | None = None
    content: str | None = None
    state: str | None = None
    url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    start_date: str | None = None
    target_date: str | None = None
    completed_at: str | None = None
    progress: float | None = None
    lead: LinearUser | None = None
    status: LinearProjectStatus | None = None
    teams: list[LinearTeam] = Field(default_factory=list)
    issues: list[LinearProjectIssue] = Field(default_factory=list)
    members: list[LinearUser] = Field(default_factory=list)
    external_links: list[LinearExternalLink] = Field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearProject":
        """
        Create a LinearProject from a Linear API response.

        Args:
            data: The project data, with any resolved relations merged in

        Returns:
            A LinearProject instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary data, returning default instance")
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            name=data.get("name") or UNKNOWN,
            description=data.get("description"),
            content=data.get("content"),
            state=data.get("state"),
            url=data.get("url"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            start_date=data.get("startDate"),
            target_date=data.get("targetDate"),
            completed_at=data.get("completedAt"),
            progress=data.get("progress"),
            lead=LinearUser.from_optional(data.get("lead")),
            status=LinearProjectStatus.from_optional(data.get("status")),
            teams=LinearTeam.from_connection(data.get("teams")),
            issues=LinearProjectIssue.from_connection(data.get("issues")),
            members=LinearUser.from_connection(data.get("members")),
            external_links=LinearExternalLink.from_connection(data.get("externalLinks")),
        )

    def to_reference(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "state": self.state}

    def to_list_dict(self) -> dict[str, Any]:
        """Entry for project listings."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "state": self.state,
            "url": self.url,
        }

    def to_summary_dict(self) -> dict[str, Any]:
        """Record returned after creating or updating a project."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "content": self.content,
            "state": self.state,
            "url": self.url,
            "progress": self.progress,
            "startDate": self.start_date,
            "targetDate": self.target_date,
            "lead": self.lead.to_reference() if self.lead else None,
            "status": self.status.to_reference() if self.status else None,
        }

    def to_detail_dict(self) -> dict[str, Any]:
        """Full project record with its teams, issues, members and links."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "content": self.content,
            "state": self.state,
            "url": self.url,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "startDate": self.start_date,
            "targetDate": self.target_date,
            "completedAt": self.completed_at,
            "progress": self.progress,
            "lead": self.lead.to_reference() if self.lead else None,
            "teams": [team.to_reference() for team in self.teams],
            "issues": [issue.to_simplified_dict() for issue in self.issues],
            "members": [
                member.to_member_dict(include_active=False) for member in self.members
            ],
            "externalLinks": [link.to_simplified_dict() for link in self.external_links],
        }
