"""
CLI: ``followgraph serve`` — start the API server.
"""

from __future__ import annotations

import typer

from followgraph.cli.utils import console


def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (default: settings)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default: settings)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of workers"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (default: settings)"),
) -> None:
    """Start the followgraph REST API server."""
    import uvicorn

    from followgraph.core.logging import configure_logging
    from followgraph.core.settings import get_settings

    settings = get_settings()
    level = (log_level or settings.log_level).upper()
    configure_logging(level=level, json_format=settings.log_json, service="followgraph")

    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(f"[bold green]Starting followgraph API[/bold green] on {bind_host}:{bind_port}")
    uvicorn.run(
        "followgraph.api:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        workers=workers,
        log_level=level.lower(),
    )
