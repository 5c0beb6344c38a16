"""Linear tool catalogue, argument binding and dispatch."""

from .catalogue import TOOL_SPECS, ToolSpec, get_tool_spec, input_schema, list_tool_specs
from .dispatcher import ToolDispatcher, error_result, success_result

__all__ = [
    "TOOL_SPECS",
    "ToolSpec",
    "ToolDispatcher",
    "error_result",
    "get_tool_spec",
    "input_schema",
    "list_tool_specs",
    "success_result",
]
