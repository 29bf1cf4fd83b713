"""
CLI components (using typer)
"""

import logging
from pathlib import Path
from typing import Optional

import structlog
import typer
from rich.console import Console
from rich.table import Table

CONSOLE = Console()

APP = typer.Typer()


def configure_logging(level: str):
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        )
    )


@APP.command()
def serve(
    port: int = typer.Option(3000, "--port", "-p"),
    mbtiles: Optional[Path] = typer.Option(None, "--mbtiles", "-m"),
    config: Optional[Path] = typer.Option(None, "--config", "-c"),
    min_zoom: int = typer.Option(10, "--min-zoom", "-z"),
    host: str = "127.0.0.1",
    log_level: str = "INFO",
):
    """
    Start the bulk tile server.
    """
    from uvicorn import run

    from bulktiles.server import create_app
    from bulktiles.settings import Settings

    settings = Settings(
        host=host,
        port=port,
        mbtiles=mbtiles,
        config_path=config,
        min_zoom=min_zoom,
        log_level=log_level,
    )

    configure_logging(settings.log_level)

    run(create_app(settings), host=settings.host, port=settings.port)


@APP.command()
def inspect(
    mbtiles: Optional[Path] = typer.Option(None, "--mbtiles", "-m"),
    config: Optional[Path] = typer.Option(None, "--config", "-c"),
):
    """
    Open the configured sources and list them, without serving.
    """
    from bulktiles.providers.registry import StartupFailure
    from bulktiles.settings import Settings

    configure_logging("WARNING")

    try:
        registry = Settings(mbtiles=mbtiles, config_path=config).create_registry()
    except StartupFailure as e:
        CONSOLE.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    table = Table()
    table.add_column("Source", no_wrap=True)
    table.add_column("Path", overflow="fold")
    table.add_column("Min zoom")
    table.add_column("Max zoom")

    for descriptor in registry:
        table.add_row(
            descriptor.source_id,
            descriptor.store.path,
            str(descriptor.metadata.minzoom),
            str(descriptor.metadata.maxzoom),
        )

    CONSOLE.print(table)
    registry.close()


def main():
    global APP

    APP()
