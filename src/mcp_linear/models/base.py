"""
Base models and utility classes for the MCP Linear API models.

This module provides base classes and mixins that are used by the
Linear models to ensure consistent behavior and reduce code duplication.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Type variable for the return type of from_api_response
T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base model for all API models with common conversion methods.

    This provides a standard interface for converting API responses
    to models and for converting models to simplified dictionaries
    for API responses.
    """

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        """
        Convert an API response to a model instance.

        Args:
            data: The API response data
            **kwargs: Additional context parameters

        Returns:
            An instance of the model

        Raises:
            NotImplementedError: If the subclass does not implement this method
        """
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> dict[str, Any]:
        """
        Convert the model to a simplified dictionary for API responses.

        Returns:
            A dictionary with only the essential fields for API responses
        """
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_optional(cls: type[T], data: Any, **kwargs: Any) -> T | None:
        """Build an instance for a to-one relation, or None when it is absent."""
        if not data or not isinstance(data, dict):
            return None
        return cls.from_api_response(data, **kwargs)

    @classmethod
    def from_connection(cls: type[T], data: Any, **kwargs: Any) -> list[T]:
        """Build instances for a to-many relation.

        Accepts either a plain list of nodes or a GraphQL connection
        (``{"nodes": [...]}``); anything else yields an empty list.
        """
        if isinstance(data, dict):
            data = data.get("nodes")
        if not isinstance(data, list):
            return []
        return [cls.from_api_response(item, **kwargs) for item in data if item]
