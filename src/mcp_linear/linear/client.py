"""Base client module for Linear API interactions."""

import asyncio
import logging
from typing import Any

import httpx

from ..exceptions import (
    EntityNotFoundError,
    LinearAPIError,
    LinearAuthenticationError,
)
from .config import LinearConfig

logger = logging.getLogger("mcp-linear.linear")


class LinearClient:
    """Base client for Linear GraphQL API interactions.

    One instance (and its HTTP connection pool) is shared by every tool
    invocation. The configuration is fixed at construction time.
    """

    def __init__(
        self,
        config: LinearConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Linear client with a given configuration.

        Args:
            config: Linear configuration object. If None, will be loaded from
                environment variables.
            transport: Optional httpx transport, used to stub the network.
        """
        self.config = config or LinearConfig.from_env()
        self._http = httpx.AsyncClient(
            headers={
                "Authorization": self.config.api_key,
                "Content-Type": "application/json",
            },
            timeout=self.config.timeout,
            transport=transport,
        )
        self._limit = asyncio.Semaphore(self.config.max_concurrency)

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def execute(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Execute a GraphQL document and return its ``data`` object.

        Args:
            query: The GraphQL query or mutation
            variables: Variables referenced by the document

        Returns:
            The ``data`` member of the GraphQL response.

        Raises:
            LinearAuthenticationError: If Linear rejects the API key
            LinearAPIError: On network failures, HTTP errors or GraphQL errors
        """
        payload = {"query": query, "variables": variables or {}}
        logger.debug(f"Linear request: {_operation_name(query)}")

        async with self._limit:
            try:
                response = await self._http.post(self.config.api_url, json=payload)
            except httpx.TimeoutException as e:
                msg = f"Request to Linear timed out after {self.config.timeout}s"
                raise LinearAPIError(msg) from e
            except httpx.RequestError as e:
                msg = f"Network error contacting Linear: {e}"
                raise LinearAPIError(msg) from e

        return self._handle_response(response)

    async def fetch_entity(
        self, root: str, entity_name: str, entity_id: str, selection: str
    ) -> dict[str, Any]:
        """Fetch one entity by identifier.

        Args:
            root: GraphQL root field ('issue', 'team', 'project', ...)
            entity_name: Human-readable entity type used in errors
            entity_id: Identifier supplied by the caller
            selection: Fields to select on the entity

        Returns:
            The raw entity object.

        Raises:
            EntityNotFoundError: If Linear has no entity for the identifier
            LinearAPIError: If the request fails for any other reason
        """
        query = (
            f"query {entity_name.replace(' ', '')}($id: String!) {{ "
            f"{root}(id: $id) {{ {selection} }} }}"
        )
        try:
            data = await self.execute(query, {"id": entity_id})
        except LinearAPIError as e:
            if e.is_not_found:
                raise EntityNotFoundError(entity_name, entity_id) from e
            raise

        entity = data.get(root)
        if not entity:
            raise EntityNotFoundError(entity_name, entity_id)
        return entity

    async def mutate(
        self,
        mutation: str,
        variables: dict[str, Any],
        payload_field: str,
        entity_field: str,
    ) -> tuple[bool, dict[str, Any]]:
        """Run a mutation and unpack its ``{success, <entity>}`` payload.

        Returns:
            Tuple of (success flag, raw entity; empty when Linear returned none)
        """
        data = await self.execute(mutation, variables)
        payload = data.get(payload_field) or {}
        return bool(payload.get("success")), payload.get(entity_field) or {}

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        """Map an HTTP response to GraphQL data or a LinearAPIError."""
        try:
            body = response.json()
        except ValueError:
            body = None

        errors = body.get("errors") if isinstance(body, dict) else None

        if response.status_code in (401, 403):
            msg = _first_message(errors) or "Authentication with Linear failed"
            raise LinearAuthenticationError(
                msg, status_code=response.status_code, errors=errors
            )

        if errors:
            if any(_is_authentication_error(error) for error in errors):
                raise LinearAuthenticationError(
                    _first_message(errors),
                    status_code=response.status_code,
                    errors=errors,
                )
            raise LinearAPIError(
                _first_message(errors),
                status_code=response.status_code,
                errors=errors,
            )

        if response.status_code == 429:
            msg = "Linear rate limit exceeded"
            raise LinearAPIError(msg, status_code=429)

        if response.is_error or not isinstance(body, dict):
            msg = f"Linear returned HTTP {response.status_code}"
            if not response.is_error:
                msg = "Linear returned a response that is not JSON"
            raise LinearAPIError(msg, status_code=response.status_code)

        return body.get("data") or {}


def _first_message(errors: list[dict] | None) -> str:
    if not errors:
        return ""
    error = errors[0]
    extensions = error.get("extensions") or {}
    return str(
        extensions.get("userPresentableMessage") or error.get("message") or "Unknown error"
    )


def _is_authentication_error(error: dict[str, Any]) -> bool:
    extensions = error.get("extensions") or {}
    return str(extensions.get("code", "")).upper() in {
        "AUTHENTICATION_ERROR",
        "FORBIDDEN",
    }


def _operation_name(query: str) -> str:
    """Return 'query Foo' / 'mutation Bar' from a GraphQL document."""
    head = query.strip().split("(", 1)[0].split("{", 1)[0]
    return " ".join(head.split()) or "anonymous"
