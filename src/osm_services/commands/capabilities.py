"""
Capability negotiation command for the osm-services CLI.
"""

from typing import Optional

import typer

from osm_services.commands.shared import build_config
from osm_services.constants import DEFAULT_SETTINGS
from osm_services.errors import OSMServicesError
from osm_services.logging import get_logger, setup_logging
from osm_services.utils.console import console, create_table, error, format_value, success

CAPABILITY_ROWS = (
    ("Minimum API version", "get_min_version"),
    ("Maximum API version", "get_max_version"),
    ("Timeout (seconds)", "get_timeout"),
    ("Max changeset elements", "get_max_elements"),
    ("Max nodes per way", "get_max_nodes"),
    ("Tracepoints per page", "get_tracepoints_per_page"),
    ("Max area (sq. degrees)", "get_max_area"),
)


def show_capabilities(
    server: str = typer.Option(
        DEFAULT_SETTINGS["server"], "--server", "-s", help="Server to query"
    ),
    api_version: Optional[str] = typer.Option(
        None, "--api-version", help="API version that must be supported"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log response bodies"),
) -> None:
    """Negotiate with a server and show its advertised capabilities"""
    setup_logging()
    logger = get_logger("osm_services.commands.capabilities")

    try:
        config = build_config(server=server, api_version=api_version, verbose=verbose)
    except OSMServicesError as e:
        logger.error(f"Capability negotiation with {server} failed: {e}")
        error(str(e))
        raise typer.Exit(1)

    table = create_table(f"Capabilities of {config.server}", ["Capability", "Value"])
    for label, getter in CAPABILITY_ROWS:
        table.add_row(label, format_value(getattr(config, getter)()))
    table.add_row("API endpoint", config.get_api_url())
    console.print(table)
    success(f"API {config.api_version} is supported by {config.server}")
