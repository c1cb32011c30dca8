"""
CLI: ``followgraph db`` — database management commands.
"""

from __future__ import annotations

import typer

from followgraph.cli.utils import console, err_console

app = typer.Typer(no_args_is_help=True)


@app.command()
def init(
    database_url: str | None = typer.Option(
        None, "--database-url", "-d", help="SQLAlchemy URL (default: settings)"
    ),
) -> None:
    """Initialise database schema (create tables)."""
    from pathlib import Path

    from sqlalchemy.exc import SQLAlchemyError

    from followgraph.core.orm.session import create_followgraph_engine, init_schema
    from followgraph.core.settings import get_settings

    settings = get_settings()
    if database_url is None and settings.database_url is None:
        Path(settings.data_dir).expanduser().mkdir(parents=True, exist_ok=True)
    url = database_url or settings.resolved_database_url()

    engine = create_followgraph_engine(url)
    try:
        init_schema(engine)
    except SQLAlchemyError as exc:
        err_console.print(f"[red]Schema initialisation failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    finally:
        engine.dispose()
    console.print(f"[green]Schema ready[/green] at {engine.url.render_as_string(hide_password=True)}")
