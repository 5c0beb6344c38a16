"""
Common Linear entity models.

This module provides Pydantic models for the small Linear entities that are
embedded in issues, projects and teams: users, workflow states, project
statuses, cycles, comments, attachments and external links.
"""

import logging
from typing import Any

from ..base import ApiModel
from ..constants import LINEAR_DEFAULT_ID, UNKNOWN

logger = logging.getLogger(__name__)


class LinearUser(ApiModel):
    """
    Model representing a Linear user.
    """

    id: str = LINEAR_DEFAULT_ID
    name: str = UNKNOWN
    display_name: str | None = None
    email: str | None = None
    active: bool = True

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearUser":
        """
        Create a LinearUser from a Linear API response.

        Args:
            data: The user data from the Linear API

        Returns:
            A LinearUser instance
        """
        if not data:
            return cls()

        display_name = data.get("displayName")
        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            name=data.get("name") or display_name or UNKNOWN,
            display_name=display_name,
            email=data.get("email"),
            active=bool(data.get("active", True)),
        )

    def to_reference(self) -> dict[str, Any]:
        """Minimal reference: identifier plus human-readable name."""
        return {"id": self.id, "name": self.name}

    def to_contact_dict(self) -> dict[str, Any]:
        """Reference including the e-mail address."""
        return {"id": self.id, "name": self.name, "email": self.email}

    def to_member_dict(self, include_active: bool = True) -> dict[str, Any]:
        """Team or project member entry."""
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name,
        }
        if include_active:
            result["active"] = self.active
        return result

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        return {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name,
            "email": self.email,
            "active": self.active,
        }


class LinearWorkflowState(ApiModel):
    """
    Model representing a team workflow state (Backlog, Todo, In Progress...).
    """

    id: str = LINEAR_DEFAULT_ID
    name: str = UNKNOWN
    color: str | None = None
    type: str | None = None
    position: float | None = None
    description: str | None = None
    team_id: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearWorkflowState":
        """
        Create a LinearWorkflowState from a Linear API response.

        Args:
            data: The state data from the Linear API
            **kwargs: ``team_id`` of the owning team, when known

        Returns:
            A LinearWorkflowState instance
        """
        if not data:
            return cls()

        team_id = kwargs.get("team_id")
        if team_id is None and isinstance(data.get("team"), dict):
            team_id = data["team"].get("id")

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            name=data.get("name") or UNKNOWN,
            color=data.get("color"),
            type=data.get("type"),
            position=data.get("position"),
            description=data.get("description"),
            team_id=team_id,
        )

    def to_reference(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "type": self.type,
            "position": self.position,
            "description": self.description,
            "teamId": self.team_id,
        }


class LinearProjectStatus(ApiModel):
    """
    Model representing a workspace-level project status.
    """

    id: str = LINEAR_DEFAULT_ID
    name: str = UNKNOWN
    color: str | None = None
    type: str | None = None
    description: str | None = None
    position: float | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearProjectStatus":
        if not data:
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            name=data.get("name") or UNKNOWN,
            color=data.get("color"),
            type=data.get("type"),
            description=data.get("description"),
            position=data.get("position"),
        )

    def to_reference(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": self.type}

    def to_state_dict(self) -> dict[str, Any]:
        """Entry for the project-state listing."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "type": self.type,
        }

    def to_simplified_dict(self) -> dict[str, Any]:
        """Entry for the project-status listing."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
        }


class LinearCycle(ApiModel):
    """
    Model representing a Linear cycle (sprint).
    """

    id: str = LINEAR_DEFAULT_ID
    name: str | None = None
    number: int | float | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearCycle":
        if not data:
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            name=data.get("name"),
            number=data.get("number"),
        )

    @property
    def display_name(self) -> str:
        """Cycles are often unnamed; fall back to their number."""
        if self.name:
            return self.name
        if self.number is not None:
            return f"Cycle {self.number:g}"
        return UNKNOWN

    def to_reference(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.display_name, "number": self.number}


class LinearComment(ApiModel):
    """
    Model representing an issue comment.
    """

    id: str = LINEAR_DEFAULT_ID
    body: str = ""
    created_at: str | None = None
    user: LinearUser | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearComment":
        if not data:
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            body=data.get("body") or "",
            created_at=data.get("createdAt"),
            user=LinearUser.from_optional(data.get("user")),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        return {
            "id": self.id,
            "body": self.body,
            "createdAt": self.created_at,
            "user": self.user.to_reference() if self.user else None,
        }


class LinearAttachment(ApiModel):
    """
    Model representing a link or file attached to an issue.
    """

    id: str = LINEAR_DEFAULT_ID
    title: str = UNKNOWN
    url: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearAttachment":
        if not data:
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            title=data.get("title") or UNKNOWN,
            url=data.get("url"),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "url": self.url}


class LinearExternalLink(ApiModel):
    """
    Model representing an external link attached to a project.
    """

    id: str = LINEAR_DEFAULT_ID
    label: str = UNKNOWN
    url: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearExternalLink":
        if not data:
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            label=data.get("label") or UNKNOWN,
            url=data.get("url"),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "url": self.url}
