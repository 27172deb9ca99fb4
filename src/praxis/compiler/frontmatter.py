"""
Front-matter manifest reader.

A praxis document may open with a YAML block fenced by ``---`` lines::

    ---
    alias: Tester
    description: Reviews pull requests
    refs:
      - content/reference/*.md
    ---
    # Tester
    ...

Manifesto:
    The compiler must never crash on one bad manifest. A missing block is
    an empty mapping; a malformed block is an empty mapping plus a logged
    diagnostic. Value shape (scalar vs. list) is normalised once here, in
    :meth:`Frontmatter.array`, so callers never branch on it.

Examples:
    >>> fm = Frontmatter.from_text("---\\nrefs: a.md\\n---\\nbody")
    >>> fm.array("refs")
    ['a.md']
    >>> fm.array("context")
    []
    >>> split_frontmatter("no block here")
    (None, 'no block here')

Tags:
    praxis, compiler, frontmatter, yaml, manifest

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from praxis.core.logging import get_logger

logger = get_logger(__name__)

DELIMITER = "---"


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Split *text* into ``(raw_frontmatter, body)``.

    The block is the text between a first line consisting solely of the
    delimiter and the next such line. Without a complete block the raw
    front-matter is ``None`` and the body is the whole text.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != DELIMITER:
        return None, text

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n") == DELIMITER:
            return "".join(lines[1:index]), "".join(lines[index + 1 :])

    return None, text


def as_list(value: Any) -> list[Any]:
    """Coerce a front-matter value to a list (empty, singleton or itself)."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class Frontmatter:
    """Parsed front-matter of a single document.

    Parsing happens once, on first access, and the mapping is then
    reused for every accessor call.
    """

    def __init__(self, path: Path | str | None = None, *, text: str | None = None):
        self.path = Path(path) if path is not None else None
        self._text = text
        self._data: dict[str, Any] | None = None
        self.error: str | None = None

    @classmethod
    def from_text(cls, text: str, source: Path | str | None = None) -> Frontmatter:
        """Build a reader over already-loaded document content."""
        return cls(source, text=text)

    def parse(self) -> dict[str, Any]:
        """Return the front-matter mapping (empty if absent or malformed)."""
        if self._data is None:
            self._data = self._load()
        return self._data

    def value(self, key: str) -> Any | None:
        """Return the raw value for *key*, or None when undeclared."""
        return self.parse().get(key)

    def array(self, key: str) -> list[Any]:
        """Return the value for *key* as a list, whatever its declared shape."""
        return as_list(self.value(key))

    def __contains__(self, key: str) -> bool:
        return key in self.parse()

    # ── Internals ────────────────────────────────────────────────

    def _read_text(self) -> str:
        if self._text is None:
            if self.path is None:
                return ""
            self._text = self.path.read_text(encoding="utf-8")
        return self._text

    def _load(self) -> dict[str, Any]:
        raw, _ = split_frontmatter(self._read_text())
        if raw is None:
            return {}

        source = str(self.path) if self.path else "<text>"
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            self.error = str(e)
            logger.warning("malformed_frontmatter", path=source, error=self.error)
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            self.error = f"expected a mapping, got {type(data).__name__}"
            logger.warning("malformed_frontmatter", path=source, error=self.error)
            return {}
        return data
