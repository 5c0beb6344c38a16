"""
Linear team models.
"""

import logging
from typing import Any

from pydantic import Field

from ..base import ApiModel
from ..constants import LINEAR_DEFAULT_ID, UNKNOWN
from .common import LinearWorkflowState

logger = logging.getLogger(__name__)


class LinearTeam(ApiModel):
    """
    Model representing a Linear team and, when resolved, its workflow states.
    """

    id: str = LINEAR_DEFAULT_ID
    name: str = UNKNOWN
    key: str | None = None
    description: str | None = None
    states: list[LinearWorkflowState] = Field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearTeam":
        """
        Create a LinearTeam from a Linear API response.

        Workflow states are ordered by their position in the workflow.

        Args:
            data: The team data from the Linear API

        Returns:
            A LinearTeam instance
        """
        if not data:
            return cls()

        team_id = str(data.get("id") or LINEAR_DEFAULT_ID)
        states = LinearWorkflowState.from_connection(data.get("states"), team_id=team_id)
        states.sort(key=lambda state: (state.position is None, state.position or 0))

        return cls(
            id=team_id,
            name=data.get("name") or UNKNOWN,
            key=data.get("key"),
            description=data.get("description"),
            states=states,
        )

    def to_reference(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "key": self.key}

    def to_simplified_dict(self) -> dict[str, Any]:
        """Team entry with its workflow states."""
        return {
            "id": self.id,
            "name": self.name,
            "key": self.key,
            "description": self.description,
            "states": [state.to_simplified_dict() for state in self.states],
        }


class LinearTeamMembership(ApiModel):
    """
    Model representing a user's membership of a team.
    """

    id: str = LINEAR_DEFAULT_ID
    user_id: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearTeamMembership":
        if not data:
            return cls()

        user = data.get("user")
        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            user_id=user.get("id") if isinstance(user, dict) else None,
        )
