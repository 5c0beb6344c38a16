"""Routing of tool calls to their handlers, and translation of failures."""

import json
import logging
from typing import Any

from mcp import types

from ..exceptions import ErrorKind, MCPLinearError, ReadOnlyModeError, UnknownToolError
from ..linear import LinearFetcher
from ..logging_config import log_operation
from .arguments import bind
from .catalogue import get_tool_spec
from .handlers import HANDLERS

logger = logging.getLogger("mcp-linear.tools")

# Prefix of the error text returned to the caller, per failure kind
ERROR_PREFIXES: dict[ErrorKind, str] = {
    ErrorKind.MISSING_REQUIRED_FIELD: "Validation error",
    ErrorKind.INVALID_ARGUMENT: "Validation error",
    ErrorKind.READ_ONLY: "Read-only mode error",
    ErrorKind.ENTITY_NOT_FOUND: "Linear API error",
    ErrorKind.EXTERNAL_API_FAILURE: "Linear API error",
    ErrorKind.UNKNOWN_TOOL: "Protocol error",
    ErrorKind.INTERNAL: "Internal error",
}


def error_kind(exc: BaseException) -> ErrorKind:
    """Failure kind of an exception; anything outside the taxonomy is internal."""
    if isinstance(exc, MCPLinearError):
        return exc.kind
    return ErrorKind.INTERNAL


def success_result(record: Any) -> types.CallToolResult:
    """Render a handler's record as one pretty-printed JSON text block."""
    text = json.dumps(record, indent=2, ensure_ascii=False, default=str)
    return types.CallToolResult(content=[types.TextContent(type="text", text=text)])


def error_result(exc: Exception) -> types.CallToolResult:
    """Render a failure as error-flagged content prefixed by its kind."""
    text = f"{ERROR_PREFIXES[error_kind(exc)]}: {exc}"
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=True,
    )


class ToolDispatcher:
    """Runs catalogue tools against a shared Linear fetcher."""

    def __init__(self, linear: LinearFetcher, read_only: bool = False) -> None:
        self.linear = linear
        self.read_only = read_only

    async def dispatch(
        self, name: str, arguments: dict[str, Any] | None
    ) -> types.CallToolResult:
        """
        Execute a tool call.

        Args:
            name: Tool name from the request
            arguments: Raw tool arguments (may be ``None``)

        Returns:
            The tool result; failures are returned as error-flagged content

        Raises:
            UnknownToolError: If ``name`` is not in the catalogue
        """
        spec = get_tool_spec(name)
        if spec is None:
            logger.warning(f"Call to unknown tool: {name}")
            raise UnknownToolError(name)

        # The operation context logs each failure once: taxonomy errors at
        # INFO, anything else at ERROR with its traceback.
        try:
            with log_operation(
                logger, f"tool:{name}", expected=(MCPLinearError,), tool=name
            ):
                if self.read_only and spec.write:
                    raise ReadOnlyModeError(name)
                args = bind(spec.arguments, arguments)
                record = await HANDLERS[name](self.linear, args)
        except Exception as e:
            return error_result(e)

        return success_result(record)
