import typer
from osm_services.commands import config, logs
from osm_services.commands.capabilities import show_capabilities
from osm_services.logging import setup_logging, get_logger, log_application_event

app = typer.Typer(
    help="[bold blue]osm-services[/bold blue] - OpenStreetMap API client configuration",
    rich_markup_mode="rich",
)

app.add_typer(config.app, name="config")
app.add_typer(logs.app, name="logs")
app.command("capabilities")(show_capabilities)


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """
    [bold blue]osm-services[/bold blue] - OpenStreetMap API client configuration

    Inspect settings and negotiate capabilities with OSM API servers.
    """
    if not ctx.invoked_subcommand:
        print("Type osm-services --help to see the available commands.")


def main():
    setup_logging()
    logger = get_logger("osm_services.main")
    log_application_event("CLI started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {e}")
        raise
    finally:
        log_application_event("CLI finished")


if __name__ == "__main__":
    main()
