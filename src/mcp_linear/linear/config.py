"""Configuration module for Linear API interactions."""

import os
from dataclasses import dataclass

from ..utils.env import getenv_first, is_env_extended_truthy

DEFAULT_API_URL = "https://api.linear.app/graphql"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_CONCURRENCY = 8


@dataclass(frozen=True)
class LinearConfig:
    """Linear API configuration.

    Linear authenticates every request with a single API key, forwarded
    verbatim in the ``Authorization`` header.
    """

    api_key: str
    team_name: str | None = None  # Only used to customize the server name
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT  # Seconds per HTTP request
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY  # In-flight requests per client
    read_only: bool = False

    @property
    def server_name(self) -> str:
        """Name advertised to MCP clients."""
        if self.team_name:
            return f"linear-mcp-for-{self.team_name}"
        return "linear-mcp"

    @classmethod
    def from_env(cls) -> "LinearConfig":
        """Create configuration from environment variables.

        Returns:
            LinearConfig with values from environment variables.

        Raises:
            ValueError: If the API key is missing or a numeric setting is invalid
        """
        api_key = getenv_first("LINEAR_API_KEY", "LINEARAPIKEY")
        if not api_key:
            error_msg = "Missing required LINEAR_API_KEY environment variable"
            raise ValueError(error_msg)

        try:
            timeout = float(os.getenv("LINEAR_TIMEOUT", str(DEFAULT_TIMEOUT)))
            max_concurrency = int(
                os.getenv("LINEAR_MAX_CONCURRENCY", str(DEFAULT_MAX_CONCURRENCY))
            )
        except ValueError as e:
            msg = f"Invalid numeric Linear setting: {e}"
            raise ValueError(msg) from e

        if timeout <= 0 or max_concurrency < 1:
            msg = "LINEAR_TIMEOUT must be positive and LINEAR_MAX_CONCURRENCY at least 1"
            raise ValueError(msg)

        return cls(
            api_key=api_key,
            team_name=getenv_first("LINEAR_TEAM_NAME", "LINEARTEAMNAME"),
            api_url=os.getenv("LINEAR_API_URL", DEFAULT_API_URL),
            timeout=timeout,
            max_concurrency=max_concurrency,
            read_only=is_env_extended_truthy("READ_ONLY_MODE", "false"),
        )
