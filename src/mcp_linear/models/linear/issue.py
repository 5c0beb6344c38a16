"""
Linear issue models.

This module provides Pydantic models for Linear issues. An issue is built
from its scalar fields plus whichever relations the calling tool resolved;
relations that were not resolved (or do not exist) stay ``None`` / empty,
and every view method still emits their keys.
"""

import logging
from typing import Any

from pydantic import Field

from ...utils.markdown import extract_embedded_images
from ..base import ApiModel
from ..constants import LINEAR_DEFAULT_ID, UNKNOWN
from .common import (
    LinearAttachment,
    LinearComment,
    LinearCycle,
    LinearUser,
    LinearWorkflowState,
)
from .label import LinearLabel
from .project import LinearProject
from .team import LinearTeam

logger = logging.getLogger(__name__)


class LinearIssueReference(ApiModel):
    """
    Model representing another issue referenced by a parent link or relation.
    """

    id: str = LINEAR_DEFAULT_ID
    identifier: str | None = None
    title: str = UNKNOWN

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearIssueReference":
        if not data:
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            identifier=data.get("identifier"),
            title=data.get("title") or UNKNOWN,
        )

    def to_reference(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "identifier": self.identifier}


class LinearIssueRelation(ApiModel):
    """
    Model representing a relation (blocks, duplicate, related...) to another issue.
    """

    id: str = LINEAR_DEFAULT_ID
    type: str = UNKNOWN
    related_issue: LinearIssueReference | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearIssueRelation":
        if not data:
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            type=data.get("type") or UNKNOWN,
            related_issue=LinearIssueReference.from_optional(data.get("relatedIssue")),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "issue": self.related_issue.to_reference() if self.related_issue else None,
        }


class LinearIssue(ApiModel):
    """
    Model representing a Linear issue.

    This is a comprehensive model containing the scalar fields of an issue
    and every relation any tool may resolve for it.
    """

    id: str = LINEAR_DEFAULT_ID
    identifier: str | None = None
    title: str = UNKNOWN
    description: str | None = None
    priority: int | float = 0
    priority_label: str | None = None
    url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    started_at: str | None = None
    completed_at: str | None = None
    canceled_at: str | None = None
    archived_at: str | None = None
    auto_archived_at: str | None = None
    auto_closed_at: str | None = None
    due_date: str | None = None
    estimate: float | None = None
    customer_ticket_count: int = 0
    previous_identifiers: list[str] = Field(default_factory=list)
    branch_name: str = ""
    trashed: bool = False
    metadata: dict[str, Any] | None = None
    state: LinearWorkflowState | None = None
    assignee: LinearUser | None = None
    creator: LinearUser | None = None
    team: LinearTeam | None = None
    project: LinearProject | None = None
    parent: LinearIssueReference | None = None
    cycle: LinearCycle | None = None
    labels: list[LinearLabel] = Field(default_factory=list)
    comments: list[LinearComment] = Field(default_factory=list)
    attachments: list[LinearAttachment] = Field(default_factory=list)
    relations: list[LinearIssueRelation] = Field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearIssue":
        """
        Create a LinearIssue from a Linear API response.

        Args:
            data: The issue data, with any resolved relations merged in
            **kwargs: Additional arguments (unused)

        Returns:
            A LinearIssue instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary data, returning default instance")
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            identifier=data.get("identifier"),
            title=data.get("title") or UNKNOWN,
            description=data.get("description"),
            priority=data.get("priority") or 0,
            priority_label=data.get("priorityLabel"),
            url=data.get("url"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            started_at=data.get("startedAt"),
            completed_at=data.get("completedAt"),
            canceled_at=data.get("canceledAt"),
            archived_at=data.get("archivedAt"),
            auto_archived_at=data.get("autoArchivedAt"),
            auto_closed_at=data.get("autoClosedAt"),
            due_date=data.get("dueDate"),
            estimate=data.get("estimate"),
            customer_ticket_count=data.get("customerTicketCount") or 0,
            previous_identifiers=data.get("previousIdentifiers") or [],
            branch_name=data.get("branchName") or "",
            trashed=bool(data.get("trashed")),
            metadata=data.get("metadata"),
            state=LinearWorkflowState.from_optional(data.get("state")),
            assignee=LinearUser.from_optional(data.get("assignee")),
            creator=LinearUser.from_optional(data.get("creator")),
            team=LinearTeam.from_optional(data.get("team")),
            project=LinearProject.from_optional(data.get("project")),
            parent=LinearIssueReference.from_optional(data.get("parent")),
            cycle=LinearCycle.from_optional(data.get("cycle")),
            labels=LinearLabel.from_connection(data.get("labels")),
            comments=LinearComment.from_connection(data.get("comments")),
            attachments=LinearAttachment.from_connection(data.get("attachments")),
            relations=LinearIssueRelation.from_connection(data.get("relations")),
        )

    @property
    def status(self) -> str:
        """Workflow state name, or 'Unknown' when the state is absent."""
        return self.state.name if self.state else UNKNOWN

    @property
    def status_uuid(self) -> str | None:
        return self.state.id if self.state else None

    @property
    def embedded_images(self) -> list[dict[str, str]]:
        """Images linked from the description with markdown syntax."""
        return extract_embedded_images(self.description)

    def to_list_dict(self) -> dict[str, Any]:
        """Entry for issue listings."""
        return {
            "id": self.id,
            "identifier": self.identifier,
            "title": self.title,
            "status": self.status,
            "statusUUID": self.status_uuid,
            "assignee": self.assignee.to_reference() if self.assignee else None,
            "priority": self.priority,
            "url": self.url,
        }

    def to_search_dict(self) -> dict[str, Any]:
        """Entry for search results, including the search metadata."""
        result = self.to_list_dict()
        result["metadata"] = self.metadata
        return result

    def to_summary_dict(self) -> dict[str, Any]:
        """Record returned after creating or updating an issue."""
        return {
            "id": self.id,
            "identifier": self.identifier,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "priorityLabel": self.priority_label,
            "url": self.url,
            "status": self.status,
            "statusUUID": self.status_uuid,
            "assignee": self.assignee.to_reference() if self.assignee else None,
            "team": self.team.to_reference() if self.team else None,
            "project": (
                {"id": self.project.id, "name": self.project.name}
                if self.project
                else None
            ),
            "labels": [label.to_reference() for label in self.labels],
            "createdAt": self.created_at,
        }

    def to_detail_dict(self) -> dict[str, Any]:
        """Full issue record with every relation and embedded images."""
        return {
            "id": self.id,
            "identifier": self.identifier,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "priorityLabel": self.priority_label,
            "status": self.status,
            "statusUUID": self.status_uuid,
            "url": self.url,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "startedAt": self.started_at,
            "completedAt": self.completed_at,
            "canceledAt": self.canceled_at,
            "dueDate": self.due_date,
            "assignee": self.assignee.to_contact_dict() if self.assignee else None,
            "creator": self.creator.to_contact_dict() if self.creator else None,
            "team": self.team.to_reference() if self.team else None,
            "project": self.project.to_reference() if self.project else None,
            "parent": self.parent.to_reference() if self.parent else None,
            "cycle": self.cycle.to_reference() if self.cycle else None,
            "labels": [label.to_reference() for label in self.labels],
            "comments": [comment.to_simplified_dict() for comment in self.comments],
            "attachments": [
                attachment.to_simplified_dict() for attachment in self.attachments
            ],
            "embeddedImages": self.embedded_images,
            "estimate": self.estimate,
            "customerTicketCount": self.customer_ticket_count,
            "previousIdentifiers": self.previous_identifiers,
            "branchName": self.branch_name,
            "archivedAt": self.archived_at,
            "autoArchivedAt": self.auto_archived_at,
            "autoClosedAt": self.auto_closed_at,
            "trashed": self.trashed,
            "relations": [relation.to_simplified_dict() for relation in self.relations],
        }
