"""
CLI: ``praxis cache`` - inspect the validation cache.
"""

from __future__ import annotations

from pathlib import Path

import typer

from praxis.cli.utils import console, format_size, get_settings, load_project, print_json, print_table
from praxis.validator import CacheManager

app = typer.Typer(no_args_is_help=True)


def _cache(ctx: typer.Context, root: Path | None) -> tuple[CacheManager, Path]:
    _, config = load_project(root)
    cache = CacheManager(config.cache_path, debug=get_settings(ctx).debug)
    return cache, config.content_path


@app.command("stats")
def stats(
    ctx: typer.Context,
    root: Path | None = typer.Option(None, "--root", "-r", help="Project root (discovered if omitted)"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show cache file count and size by document type."""
    cache, _ = _cache(ctx, root)
    summary = cache.stats()

    if json_out:
        print_json(summary.to_dict())
        return

    console.print(f"[bold]Cache:[/bold] {cache.cache_root}")
    console.print(f"  files: {summary.total_files}")
    console.print(f"  size:  {format_size(summary.total_size)}")
    if summary.by_type:
        print_table(["Type", "Files"], [[k, v] for k, v in sorted(summary.by_type.items())])


@app.command("orphans")
def orphans(
    ctx: typer.Context,
    delete: bool = typer.Option(False, "--delete", help="Delete the orphaned cache files"),
    root: Path | None = typer.Option(None, "--root", "-r", help="Project root (discovered if omitted)"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List cache files whose source document no longer exists."""
    cache, content_dir = _cache(ctx, root)
    found = cache.orphaned_cache_files(content_dir)

    deleted = 0
    if delete:
        for orphan in found:
            try:
                orphan.file.unlink()
                deleted += 1
            except OSError as e:
                console.print(f"[red]Could not delete[/red] {orphan.file}: {e}")

    if json_out:
        print_json({
            "orphans": [
                {"file": str(o.file), "doc_name": o.doc_name, "type": o.type, "reason": o.reason}
                for o in found
            ],
            "deleted": deleted,
        })
        return

    if not found:
        console.print("[dim]No orphaned cache files.[/dim]")
        return

    print_table(
        ["Type", "Document", "File"],
        [[o.type, o.doc_name, o.file.name] for o in found],
        title="Orphaned cache files",
    )
    if delete:
        console.print(f"Deleted {deleted} file(s)")
