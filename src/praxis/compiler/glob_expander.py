"""
Reference expander: turn manifest path patterns into existing files.

Manifesto:
    A manifest lists references as literal paths or glob patterns,
    relative to the project root. Expansion is deterministic: patterns
    are processed in declaration order, each glob yields its matches in
    lexicographic order, and a path seen twice is kept only the first
    time. Two author mistakes are kept apart:

    - a literal path that does not exist (typo)      → ``missing``
    - a glob that matches nothing (pattern too narrow) → ``empty_globs``

    Wildcards never match dot-files or dot-directories; a pattern reaches
    them only through a segment that itself starts with ``.``.

Examples:
    >>> expander = GlobExpander(Path("/work/project"))
    >>> expander.expand("content/reference/*.md")
    ['content/reference/a.md', 'content/reference/b.md']
    >>> expander.expand_all(["content/reference/b.md", "content/reference/*.md"])
    ['content/reference/b.md', 'content/reference/a.md']

Tags:
    praxis, compiler, glob, references, deterministic

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

GLOB_CHARS = frozenset("*?[")


@dataclass
class Expansion:
    """Result of expanding one reference group."""

    paths: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    empty_globs: list[str] = field(default_factory=list)


def _normalize(pattern: str) -> str:
    pattern = pattern.strip().replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.lstrip("/")


def _hidden_allowed(relative: PurePosixPath, pattern: str) -> bool:
    """Whether every dot-prefixed part of *relative* is named by a dot segment of *pattern*."""
    dot_segments = [seg for seg in PurePosixPath(pattern).parts if seg.startswith(".")]
    return all(
        any(fnmatch.fnmatchcase(part, seg) for seg in dot_segments)
        for part in relative.parts
        if part.startswith(".")
    )


class GlobExpander:
    """Expands path patterns relative to a project root."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def is_glob(self, pattern: str) -> bool:
        """Whether *pattern* contains glob metacharacters."""
        return any(char in GLOB_CHARS for char in pattern)

    def expand(self, pattern: str) -> list[str]:
        """Expand one pattern into sorted, existing, root-relative file paths.

        A literal pattern yields itself when the file exists, else nothing.
        """
        normalized = _normalize(pattern)
        if not normalized:
            return []

        if not self.is_glob(normalized):
            return [normalized] if (self.root / normalized).is_file() else []

        matches: set[str] = set()
        for match in self.root.glob(normalized):
            relative = PurePosixPath(match.relative_to(self.root).as_posix())
            if match.is_file() and _hidden_allowed(relative, normalized):
                matches.add(relative.as_posix())
        return sorted(matches)

    def expand_all(self, patterns: list[str]) -> list[str]:
        """Expand every pattern, preserving declaration order, de-duplicated."""
        return self.expand_with_diagnostics(patterns).paths

    def expand_with_diagnostics(self, patterns: list[str]) -> Expansion:
        """Expand *patterns* and record which ones resolved to nothing."""
        expansion = Expansion()
        seen: set[str] = set()

        for pattern in patterns:
            pattern = str(pattern)
            matches = self.expand(pattern)

            if not matches:
                if self.is_glob(pattern):
                    expansion.empty_globs.append(pattern)
                else:
                    expansion.missing.append(pattern)
                continue

            for match in matches:
                if match not in seen:
                    seen.add(match)
                    expansion.paths.append(match)

        return expansion
