"""
Linear issue label models.
"""

from typing import Any

from ..base import ApiModel
from ..constants import LINEAR_DEFAULT_ID, UNKNOWN
from .team import LinearTeam


class LinearLabel(ApiModel):
    """
    Model representing an issue label.
    """

    id: str = LINEAR_DEFAULT_ID
    name: str = UNKNOWN
    color: str | None = None
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    team: LinearTeam | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearLabel":
        if not data:
            return cls()

        return cls(
            id=str(data.get("id") or LINEAR_DEFAULT_ID),
            name=data.get("name") or UNKNOWN,
            color=data.get("color"),
            description=data.get("description"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            team=LinearTeam.from_optional(data.get("team")),
        )

    def to_reference(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "description": self.description,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_detail_dict(self) -> dict[str, Any]:
        """Label record including its owning team."""
        result = self.to_simplified_dict()
        result["team"] = self.team.to_reference() if self.team else None
        return result
