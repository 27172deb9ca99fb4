"""
CLI: ``praxis compile`` - compile role manifests into agent profiles.
"""

from __future__ import annotations

from pathlib import Path

import typer

from praxis.cli.utils import console, err_console, fail, load_project
from praxis.compiler import RoleCompiler
from praxis.core.errors import ConfigError


def compile_roles(
    role_file: Path | None = typer.Argument(None, help="Role file to compile (all roles if omitted)"),
    root: Path | None = typer.Option(None, "--root", "-r", help="Project root (discovered if omitted)"),
) -> None:
    """Compile one role, or every role in the roles directory."""
    project_root, config = load_project(root)

    try:
        compiler = RoleCompiler(project_root, config)
    except ConfigError as e:
        fail(e)

    if role_file is not None:
        if not role_file.is_file():
            fail(f"Role file not found: {role_file}")
        alias = compiler.compile(role_file)
        if alias is None:
            err_console.print(f"[yellow]Skipped[/yellow] {role_file} (no alias)")
            raise typer.Exit(code=1)
        console.print(f"[green]Compiled[/green] {alias}")
        return

    summary = compiler.compile_all()
    for alias in summary.aliases:
        console.print(f"  [green]✓[/green] {alias}")
    for path in summary.skipped:
        console.print(f"  [yellow]-[/yellow] {Path(path).name} (skipped)")
    for path in summary.failed:
        console.print(f"  [red]✗[/red] {Path(path).name} (failed)")

    console.print(f"Compiled {summary.compiled} role(s)")
    if summary.failed:
        raise typer.Exit(code=1)
