import asyncio
import os
import sys

import click
from dotenv import load_dotenv

__version__ = "0.3.0"

# Import the advanced logging system
from .logging_config import log_operation, setup_logger

# Set up the advanced logger
logger = setup_logger()

USAGE = """\
Linear API key is not configured.

Set it in the environment (or a .env file) before starting the server:

    LINEAR_API_KEY=<your Linear personal API key>
    LINEAR_TEAM_NAME=<team name, optional; used in the server name>

or pass --linear-api-key / --linear-team-name on the command line.
"""


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse"]),
    default="stdio",
    help="Transport type (stdio or sse)",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for SSE transport",
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=False,
    help="Enable/disable file logging",
)
@click.option("--linear-api-key", help="Linear personal API key")
@click.option(
    "--linear-team-name",
    help="Linear team name, advertised in the server name",
)
@click.option(
    "--read-only/--no-read-only",
    default=None,
    help="Hide and reject tools that modify Linear data",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    port: int,
    log_dir: str | None,
    log_to_file: bool,
    linear_api_key: str | None,
    linear_team_name: str | None,
    read_only: bool | None,
) -> None:
    """MCP Linear Server - Linear issues, projects and labels for MCP"""
    # Configure logging based on verbosity
    logging_level = "INFO"
    if verbose >= 2:
        logging_level = "DEBUG"

    setup_logger(
        name="mcp-linear",
        level=logging_level,
        log_to_file=log_to_file,
        log_dir=log_dir,
    )

    with log_operation(logger, "application_startup", app_version=__version__):
        # Load environment variables from file if specified, otherwise try default .env
        if env_file:
            logger.info(f"Loading environment from file: {env_file}")
            load_dotenv(env_file)
        else:
            logger.debug("Attempting to load environment from default .env file")
            load_dotenv()

        # Set environment variables from command line arguments if provided
        if linear_api_key:
            os.environ["LINEAR_API_KEY"] = linear_api_key
        if linear_team_name:
            os.environ["LINEAR_TEAM_NAME"] = linear_team_name
        if read_only is not None:
            os.environ["READ_ONLY_MODE"] = str(read_only).lower()
        if log_dir:
            os.environ["LOG_DIR"] = log_dir

        from .linear.config import LinearConfig

        try:
            config = LinearConfig.from_env()
        except ValueError as e:
            logger.error(str(e))
            click.echo(USAGE, err=True)
            sys.exit(1)

        if config.team_name:
            logger.info(f"Serving Linear team: {config.team_name}")
        else:
            logger.info("LINEAR_TEAM_NAME not set; using the default server name")

        from . import server

        logger.info(f"Starting MCP Linear v{__version__} with {transport} transport")

    # Run the server with specified transport
    asyncio.run(server.run_server(config, transport=transport, port=port))


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()
