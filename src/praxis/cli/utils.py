"""
CLI utility helpers: shared consoles, project loading and output formatting.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from praxis.core.config import PraxisSettings, ProjectConfig, find_project_root
from praxis.core.errors import PraxisError
from praxis.validator.llm import LLMProvider, OpenRouterProvider

console = Console()
err_console = Console(stderr=True)


# ── Context helpers ──────────────────────────────────────────────────────


def get_settings(ctx: typer.Context) -> PraxisSettings:
    """Settings loaded by the root callback (fresh ones if invoked standalone)."""
    if isinstance(ctx.obj, PraxisSettings):
        return ctx.obj
    return PraxisSettings()


def load_project(root: Path | None) -> tuple[Path, ProjectConfig]:
    """Locate the project root and load its configuration.

    Exits with code 1 on a configuration error.
    """
    try:
        project_root = find_project_root(root)
        return project_root, ProjectConfig.load(project_root)
    except PraxisError as e:
        fail(e)


def make_provider(settings: PraxisSettings) -> LLMProvider:
    """Verification backend configured from *settings*."""
    return OpenRouterProvider(
        settings.openrouter_api_key,
        model=settings.openrouter_model,
        base_url=settings.openrouter_url,
        timeout=settings.request_timeout,
    )


def fail(error: PraxisError | str) -> NoReturn:
    """Print *error* and exit with code 1."""
    message = error.message if isinstance(error, PraxisError) else error
    err_console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(code=1)


# ── Output helpers ───────────────────────────────────────────────────────


def print_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str))


def print_table(columns: list[str], rows: list[list[Any]], *, title: str = "") -> None:
    """Render *rows* as a Rich table."""
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)


def format_size(size: int) -> str:
    """Human-readable byte count."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"
