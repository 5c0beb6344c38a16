"""Linear API integration module.

This module provides access to Linear issues, projects, teams and labels
through the Model Context Protocol.
"""

from .client import LinearClient
from .config import LinearConfig
from .issues import IssuesMixin
from .labels import LabelsMixin
from .projects import ProjectsMixin
from .teams import TeamsMixin
from .users import UsersMixin


class LinearFetcher(IssuesMixin, ProjectsMixin, TeamsMixin, LabelsMixin, UsersMixin):
    """Main entry point for Linear operations.

    Combines the per-entity mixins over a single shared GraphQL client.
    """


__all__ = ["LinearFetcher", "LinearConfig", "LinearClient"]
