"""
Configuration commands for the osm-services CLI.
"""

from typing import Optional

import typer

from osm_services.commands.shared import build_config, masked_settings
from osm_services.errors import OSMServicesError
from osm_services.logging import get_logger, setup_logging
from osm_services.utils.console import display_mapping, error

app = typer.Typer(help="Inspect client configuration")


@app.command("show")
def show_config(
    server: Optional[str] = typer.Option(
        None, "--server", "-s", help="Server to connect to (negotiates capabilities)"
    ),
    api_version: Optional[str] = typer.Option(None, "--api-version", help="API version"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User name"),
    passwordfile: Optional[str] = typer.Option(
        None, "--passwordfile", "-p", help="File with user:password lines"
    ),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="User-Agent header"),
) -> None:
    """Show the effective settings with credentials masked"""
    setup_logging()
    logger = get_logger("osm_services.commands.config")

    try:
        config = build_config(
            server=server,
            api_version=api_version,
            user=user,
            passwordfile=passwordfile,
            user_agent=user_agent,
        )
    except OSMServicesError as e:
        logger.error(f"Failed to build configuration: {e}")
        error(str(e))
        raise typer.Exit(1)

    display_mapping(masked_settings(config), "Configuration")
