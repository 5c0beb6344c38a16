"""Module for Linear issue label operations."""

import logging
from typing import Any

from ..models.linear import LinearLabel
from .client import LinearClient
from .relations import LABEL_FIELDS

logger = logging.getLogger("mcp-linear.linear")

# Labels are returned together with their owning team
_LABEL_SELECTION = f"{LABEL_FIELDS} team {{ id name key }}"


class LabelsMixin(LinearClient):
    """Mixin for Linear issue label operations."""

    async def get_label(self, label_id: str) -> LinearLabel:
        """
        Get a label by identifier.

        Raises:
            EntityNotFoundError: If the label does not exist
        """
        data = await self.fetch_entity("issueLabel", "Label", label_id, _LABEL_SELECTION)
        return LinearLabel.from_api_response(data)

    async def create_label(self, input: dict[str, Any]) -> tuple[bool, LinearLabel]:
        """
        Create an issue label.

        Args:
            input: ``IssueLabelCreateInput`` fields (teamId, name, color, ...)

        Returns:
            Tuple of (success, created label)
        """
        mutation = (
            "mutation CreateLabel($input: IssueLabelCreateInput!) { "
            f"issueLabelCreate(input: $input) {{ success issueLabel {{ {_LABEL_SELECTION} }} }} }}"
        )
        success, label = await self.mutate(
            mutation, {"input": input}, "issueLabelCreate", "issueLabel"
        )
        logger.info(f"Created label {label.get('name')} (success={success})")
        return success, LinearLabel.from_api_response(label)

    async def update_label(
        self, label_id: str, input: dict[str, Any]
    ) -> tuple[bool, LinearLabel]:
        """
        Update an issue label. Only the keys present in ``input`` are changed.

        Returns:
            Tuple of (success, updated label)
        """
        mutation = (
            "mutation UpdateLabel($id: String!, $input: IssueLabelUpdateInput!) { "
            f"issueLabelUpdate(id: $id, input: $input) {{ success issueLabel {{ {_LABEL_SELECTION} }} }} }}"
        )
        success, label = await self.mutate(
            mutation, {"id": label_id, "input": input}, "issueLabelUpdate", "issueLabel"
        )
        logger.info(f"Updated label {label_id} (success={success})")
        return success, LinearLabel.from_api_response(label)
