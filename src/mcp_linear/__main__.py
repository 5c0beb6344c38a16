"""Entry point for running the MCP Linear server with ``python -m mcp_linear``."""

from mcp_linear import main

if __name__ == "__main__":
    main()
