"""Error taxonomy for MCP Linear.

Every failure a tool call can produce is one of the :class:`ErrorKind` members.
The dispatcher renders all of them as error-flagged content, except
``UNKNOWN_TOOL``, which the server reports through the protocol error channel.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds reported to the calling agent."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_ARGUMENT = "invalid_argument"
    READ_ONLY = "read_only"
    ENTITY_NOT_FOUND = "entity_not_found"
    EXTERNAL_API_FAILURE = "external_api_failure"
    UNKNOWN_TOOL = "unknown_tool"
    INTERNAL = "internal"


class MCPLinearError(Exception):
    """Base exception for MCP-Linear errors."""

    kind: ErrorKind = ErrorKind.INTERNAL


class MissingRequiredFieldError(MCPLinearError):
    """Raised when required tool arguments are absent or empty."""

    kind = ErrorKind.MISSING_REQUIRED_FIELD

    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class InvalidArgumentError(MCPLinearError):
    """Raised when a tool argument has the wrong type."""

    kind = ErrorKind.INVALID_ARGUMENT


class ReadOnlyModeError(MCPLinearError):
    """Raised when a write tool is called while read-only mode is enabled."""

    kind = ErrorKind.READ_ONLY

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(
            f"Operation '{tool_name}' is not available in read-only mode."
        )


class UnknownToolError(MCPLinearError):
    """Raised when a call names a tool that is not in the catalogue."""

    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class LinearAPIError(MCPLinearError):
    """Raised when the Linear API request fails for any reason."""

    kind = ErrorKind.EXTERNAL_API_FAILURE

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[dict] | None = None,
    ) -> None:
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        """True when Linear reported that the requested entity does not exist."""
        for error in self.errors:
            extensions = error.get("extensions") or {}
            code = str(extensions.get("code", "")).upper()
            message = str(error.get("message", "")).lower()
            if code == "ENTITY_NOT_FOUND" or "not found" in message:
                return True
        return False


class LinearAuthenticationError(LinearAPIError):
    """Raised when Linear API authentication fails (401/403)."""


class EntityNotFoundError(MCPLinearError):
    """Raised when Linear has no entity for a supplied identifier."""

    kind = ErrorKind.ENTITY_NOT_FOUND

    def __init__(self, entity: str, identifier: str) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} not found")
