"""
Linear data models for the MCP Linear integration.

This package provides Pydantic models for Linear API data structures,
organized by entity type.
"""

from .common import (
    LinearAttachment,
    LinearComment,
    LinearCycle,
    LinearExternalLink,
    LinearProjectStatus,
    LinearUser,
    LinearWorkflowState,
)
from .issue import LinearIssue, LinearIssueReference, LinearIssueRelation
from .label import LinearLabel
from .project import LinearProject, LinearProjectIssue
from .team import LinearTeam, LinearTeamMembership

__all__ = [
    # Common models
    "LinearUser",
    "LinearWorkflowState",
    "LinearProjectStatus",
    "LinearCycle",
    "LinearComment",
    "LinearAttachment",
    "LinearExternalLink",
    # Entity-specific models
    "LinearTeam",
    "LinearTeamMembership",
    "LinearLabel",
    "LinearProject",
    "LinearProjectIssue",
    "LinearIssue",
    "LinearIssueReference",
    "LinearIssueRelation",
]
