"""Module for Linear user operations."""

import logging

from ..exceptions import LinearAPIError
from ..models.linear import LinearUser
from .client import LinearClient
from .relations import USER_FIELDS

logger = logging.getLogger("mcp-linear.linear")


class UsersMixin(LinearClient):
    """Mixin for Linear user operations."""

    async def get_viewer(self) -> LinearUser:
        """
        Get the user the API key belongs to.

        Returns:
            LinearUser for the authenticated user

        Raises:
            LinearAPIError: If the lookup fails or Linear returns no viewer
        """
        data = await self.execute(f"query Viewer {{ viewer {{ {USER_FIELDS} }} }}")
        viewer = data.get("viewer") or {}
        if not viewer.get("id"):
            msg = "Linear returned no authenticated user for this API key"
            raise LinearAPIError(msg)
        logger.debug(f"Resolved viewer {viewer.get('id')}")
        return LinearUser.from_api_response(viewer)

    async def get_user(self, user_id: str) -> LinearUser:
        """
        Get a user by identifier.

        Raises:
            EntityNotFoundError: If the user does not exist
        """
        data = await self.fetch_entity("user", "User", user_id, USER_FIELDS)
        return LinearUser.from_api_response(data)
