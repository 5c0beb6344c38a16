"""
Pydantic models for Linear API responses.

Each model converts a raw GraphQL object (plus whichever relations were
resolved for it) into a plain, JSON-serializable record.
"""

from .base import ApiModel
from .constants import LINEAR_DEFAULT_ID, UNKNOWN
from .linear import (
    LinearAttachment,
    LinearComment,
    LinearCycle,
    LinearExternalLink,
    LinearIssue,
    LinearIssueReference,
    LinearIssueRelation,
    LinearLabel,
    LinearProject,
    LinearProjectIssue,
    LinearProjectStatus,
    LinearTeam,
    LinearTeamMembership,
    LinearUser,
    LinearWorkflowState,
)

__all__ = [
    "ApiModel",
    "LINEAR_DEFAULT_ID",
    "UNKNOWN",
    "LinearAttachment",
    "LinearComment",
    "LinearCycle",
    "LinearExternalLink",
    "LinearIssue",
    "LinearIssueReference",
    "LinearIssueRelation",
    "LinearLabel",
    "LinearProject",
    "LinearProjectIssue",
    "LinearProjectStatus",
    "LinearTeam",
    "LinearTeamMembership",
    "LinearUser",
    "LinearWorkflowState",
]
