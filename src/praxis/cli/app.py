"""
Root Typer application for the praxis CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from praxis import __version__
from praxis.core.config import PraxisSettings
from praxis.core.logging import configure_logging

app = Typer(
    name="praxis",
    help="praxis - compile agent roles and verify praxis documents.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"praxis {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """praxis CLI - compile roles, validate documents, inspect the cache."""
    settings = PraxisSettings()
    level = "DEBUG" if verbose or settings.debug else settings.log_level
    configure_logging(level=level, json_format=settings.json_logs)
    ctx.obj = settings


# ── Sub-command registration ─────────────────────────────────────────────

from praxis.cli.cache import app as cache_app  # noqa: E402
from praxis.cli.compile import compile_roles  # noqa: E402
from praxis.cli.validate import validate_documents  # noqa: E402

app.command("compile")(compile_roles)
app.command("validate")(validate_documents)
app.add_typer(cache_app, name="cache", help="Validation cache inspection.")
