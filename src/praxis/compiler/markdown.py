"""Document reader: raw content and front-matter-free body of a markdown file."""

from __future__ import annotations

from pathlib import Path

from praxis.compiler.frontmatter import split_frontmatter


class Markdown:
    """A markdown document on disk.

    The path is assumed to exist; callers check existence before reading.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._content: str | None = None

    def content(self) -> str:
        """Raw file content, front-matter included."""
        if self._content is None:
            self._content = self.path.read_text(encoding="utf-8")
        return self._content

    def body(self) -> str:
        """Content with any leading front-matter block removed, trimmed."""
        _, body = split_frontmatter(self.content())
        return body.strip()
