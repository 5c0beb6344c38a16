"""Module for Linear team operations."""

import logging
from collections.abc import Sequence

from ..models.linear import (
    LinearLabel,
    LinearTeam,
    LinearTeamMembership,
    LinearWorkflowState,
)
from .relations import TEAM_FIELDS, RelationsMixin

logger = logging.getLogger("mcp-linear.linear")


class TeamsMixin(RelationsMixin):
    """Mixin for Linear team operations."""

    async def get_team(self, team_id: str, plan: Sequence[str] = ()) -> LinearTeam:
        """
        Get a team by identifier.

        Args:
            team_id: Team UUID
            plan: Team relations to resolve

        Returns:
            LinearTeam

        Raises:
            EntityNotFoundError: If the team does not exist
        """
        data = await self.fetch_entity("team", "Team", team_id, TEAM_FIELDS)
        relations = await self.resolve_relations("team", data["id"], plan)
        return LinearTeam.from_api_response({**data, **relations})

    async def list_teams(self) -> list[LinearTeam]:
        """List every team visible to the API key (without their states)."""
        query = f"query ListTeams {{ teams(first: 250) {{ nodes {{ {TEAM_FIELDS} }} }} }}"
        data = await self.execute(query)
        return LinearTeam.from_connection(data.get("teams"))

    async def get_team_states(self, team_id: str) -> list[LinearWorkflowState]:
        """Workflow states of a team, in workflow order."""
        relations = await self.resolve_relations("team", team_id, ("states",))
        states = LinearWorkflowState.from_connection(
            relations["states"], team_id=team_id
        )
        states.sort(key=lambda state: (state.position is None, state.position or 0))
        return states

    async def get_team_labels(self, team_id: str) -> list[LinearLabel]:
        """Issue labels owned by a team."""
        relations = await self.resolve_relations("team", team_id, ("labels",))
        return LinearLabel.from_connection(relations["labels"])

    async def get_team_memberships(self, team_id: str) -> list[LinearTeamMembership]:
        """Memberships of a team; each carries only the member's user id."""
        relations = await self.resolve_relations("team", team_id, ("memberships",))
        return LinearTeamMembership.from_connection(relations["memberships"])
