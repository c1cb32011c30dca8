"""
Root Typer application for the followgraph CLI.

Sub-commands import FastAPI, SQLAlchemy and uvicorn inside the command
bodies so ``followgraph --help`` stays fast.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer
from typer import Typer

app = Typer(
    name="followgraph",
    help="followgraph — follower/following connections service.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("followgraph")
        except PackageNotFoundError:
            from followgraph import __version__ as v
        typer.echo(f"followgraph {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """followgraph CLI — run the API server and manage its database."""


# ── Sub-command registration ─────────────────────────────────────────────

from followgraph.cli.db import app as db_app  # noqa: E402
from followgraph.cli.serve import serve  # noqa: E402

app.command("serve")(serve)
app.add_typer(db_app, name="db", help="Database operations.")
