"""
Project-root discovery.

Walks upward from a starting directory looking for a praxis project
marker. Unlike most lookups in praxis this one is strict: a missing
marker is a configuration error, because every relative path in a
manifest is resolved against the root.

Tags:
    praxis, configuration, project-root, loader

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path

from praxis.core.errors import ProjectRootNotFoundError

PROJECT_MARKER = ".praxis"

ROOT_MARKERS: tuple[str, ...] = (PROJECT_MARKER, ".git")


def find_project_root(start: Path | None = None) -> Path:
    """Walk upward from *start* to find the project root.

    Recognised root markers (checked in order):

    * ``.praxis`` directory
    * ``.git`` directory

    Raises:
        ProjectRootNotFoundError: no marker exists in *start* or any parent.
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        for marker in ROOT_MARKERS:
            if (directory / marker).exists():
                return directory

    raise ProjectRootNotFoundError(str(current))
