"""
CLI: ``praxis validate`` - verify documents against their README specification.
"""

from __future__ import annotations

from pathlib import Path

import typer

from praxis.cli import utils
from praxis.cli.utils import console, fail, get_settings, load_project, print_table
from praxis.core.errors import DocumentError, VerificationError
from praxis.validator import CacheManager, DocumentValidator, Severity, ValidationResult


def collect_documents(paths: list[Path], *, skip_missing: bool = False) -> list[Path]:
    """Expand directories to the markdown documents they contain, recursively.

    README.md files are specifications, not documents, and dot-prefixed
    entries are never visited.
    """
    documents: list[Path] = []
    for path in paths:
        if path.is_dir():
            documents.extend(
                doc for doc in sorted(path.rglob("*.md"))
                if doc.is_file()
                and doc.name != "README.md"
                and not any(part.startswith(".") for part in doc.relative_to(path).parts)
            )
        elif path.is_file():
            documents.append(path)
        elif not skip_missing:
            fail(f"Path not found: {path}")
    return documents


def validate_documents(
    ctx: typer.Context,
    paths: list[Path] | None = typer.Argument(
        None, help="Documents or directories to validate (configured sources if omitted)"
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Ignore and do not update cached results"),
    root: Path | None = typer.Option(None, "--root", "-r", help="Project root (discovered if omitted)"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Validate documents; exits 1 if any has an error-severity issue."""
    settings = get_settings(ctx)
    _, config = load_project(root)
    if paths:
        documents = collect_documents(paths)
    else:
        documents = collect_documents(config.source_paths, skip_missing=True)

    cache = None if no_cache else CacheManager(config.cache_path, debug=settings.debug)
    provider = utils.make_provider(settings)

    results: list[tuple[Path, str, ValidationResult, bool]] = []
    for document in documents:
        try:
            validator = DocumentValidator(document, provider=provider, cache=cache)
            result = validator.validate()
        except DocumentError as e:
            result = ValidationResult(
                compliant=False, issues=[e.message], reason=e.message, severity=Severity.ERROR,
            )
            results.append((document, "unknown", result, False))
            continue
        except VerificationError as e:
            fail(e)
        results.append((document, validator.document_type.value, result, validator.cache_hit))

    if json_out:
        utils.print_json([
            {"path": str(doc), "type": doc_type, "cached": cached, **result.to_dict()}
            for doc, doc_type, result, cached in results
        ])
    else:
        rows = [
            [doc, doc_type, _status(result), "; ".join(result.issues), "yes" if cached else "no"]
            for doc, doc_type, result, cached in results
        ]
        print_table(["Document", "Type", "Status", "Issues", "Cached"], rows, title="Validation")
        compliant = sum(1 for _, _, result, _ in results if result.compliant)
        console.print(f"{compliant}/{len(results)} compliant")

    if any(result.severity == Severity.ERROR for _, _, result, _ in results):
        raise typer.Exit(code=1)


def _status(result: ValidationResult) -> str:
    if result.compliant:
        return "[green]compliant[/green]"
    if result.severity == Severity.WARNING:
        return "[yellow]warning[/yellow]"
    return "[red]error[/red]"
