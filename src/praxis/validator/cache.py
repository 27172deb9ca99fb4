"""
File-based validation result cache.

Verification calls a remote model and is slow, costly and not
deterministic, so verdicts are cached per document and reused as long as
the content fingerprint (document + README spec) is unchanged.

Manifesto:
    A cache must never be the reason a verification run fails:
    - **Best-effort writes:** I/O or serialization failures remove any
      partial file and are reported only in debug mode
    - **Self-healing reads:** A corrupt entry is deleted and treated as a miss
    - **Content-addressed validity:** The fingerprint lives inside the file;
      a new fingerprint overwrites the entry in place
    - **Discovery, not deletion:** Orphaned entries are reported, the caller
      decides what to remove

Architecture:
    ::

        <cache_root>/
          roles/
            tester.json              ← canonical: fingerprint stored inside
            tester_ab12cd34.json     ← legacy: fingerprint in the filename
          context/
            conventions/
              naming.json

        Cache file:
        {
          "version": "1.0",
          "cached_at": "2026-01-01T00:00:00+00:00",
          "content_hash": "ab12cd34",
          "document": {"path": ..., "type": "role", "spec_path": ...},
          "result": {"compliant": false, "issues": [...], "reason": ..., "severity": "error"}
        }

    ``read``/``write`` use the canonical layout. ``cache_path_for(path,
    content_hash)`` gives the legacy hash-in-filename location in the same
    directory; ``read`` falls back to it and orphan detection maps both
    layouts to the same document key.

Examples:
    >>> cache = CacheManager(Path(".praxis/cache/validation"))
    >>> cache.cache_path_for("content/roles/tester.md")
    PosixPath('.praxis/cache/validation/roles/tester.json')
    >>> cache.write("content/roles/tester.md", "ab12cd34", ValidationResult(True),
    ...             CacheMetadata("role", "content/roles/README.md"))
    True
    >>> cache.read("content/roles/tester.md", "ab12cd34").compliant
    True

Tags:
    cache, validation, content-addressed, best-effort, praxis

Doc-Types:
    - API Reference
    - Architecture
"""

from __future__ import annotations

import contextlib
import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Any

from praxis.core.logging import get_logger
from praxis.core.result import Err, Result, try_result
from praxis.validator.models import ValidationResult

# Cache format version for backwards-compatibility checks.
CACHE_VERSION = "1.0"

CONTENT_SEGMENT = "content"

# Type directories (relative to the content root) scanned for orphan detection.
DOCUMENT_TYPES: tuple[str, ...] = (
    "roles",
    "responsibilities",
    "reference",
    "context/conventions",
    "context/constitution",
)

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_LEGACY_SUFFIX = re.compile(r"_[0-9a-f]{8}$")


def sanitize_text(text: str) -> str:
    """Strip control characters and replace double quotes.

    Newlines, carriage returns and tabs are preserved.
    """
    return _CONTROL_CHARS.sub("", text).replace('"', "'")


def document_name(cache_file: Path) -> str:
    """Document base name for a cache file in either layout."""
    return _LEGACY_SUFFIX.sub("", cache_file.stem)


@dataclass(frozen=True)
class CacheMetadata:
    """Document details stored alongside a cached result."""

    document_type: str
    spec_path: str


@dataclass
class CacheStats:
    """Size summary of the cache directory."""

    total_files: int = 0
    total_size: int = 0
    by_type: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_size": self.total_size,
            "by_type": dict(self.by_type),
        }


@dataclass(frozen=True)
class OrphanedCacheFile:
    """A cache file whose source document no longer exists."""

    file: Path
    doc_name: str
    type: str
    reason: str = "document_missing"


class CacheManager:
    """Manages validation cache files under a cache root directory."""

    def __init__(
        self,
        cache_root: Path | str,
        *,
        debug: bool = False,
        document_types: tuple[str, ...] = DOCUMENT_TYPES,
        logger: Any = None,
    ):
        """Initialize the cache.

        Args:
            cache_root: Directory holding cache files.
            debug: Log recovered cache failures at debug level.
            document_types: Type directories scanned by orphan detection.
            logger: structlog logger (module logger if omitted).
        """
        self.cache_root = Path(cache_root)
        self.debug = debug
        self.document_types = document_types
        self.logger = logger or get_logger(__name__)

    # ── Addressing ───────────────────────────────────────────────

    def cache_path_for(self, document_path: Path | str, content_hash: str | None = None) -> Path:
        """Filesystem location of the cache entry for *document_path*.

        The sub-path after the last ``content/`` segment is preserved.
        Passing *content_hash* selects the legacy ``<name>_<hash>.json``
        file in the same directory.
        """
        relative = self._relative_document_path(document_path)
        name = relative.name
        base = name[: -len(".md")] if name.endswith(".md") else name
        filename = f"{base}_{content_hash}.json" if content_hash else f"{base}.json"
        return self.cache_root.joinpath(*relative.parent.parts, filename)

    @staticmethod
    def _relative_document_path(document_path: Path | str) -> PurePosixPath:
        posix = str(document_path).replace("\\", "/")
        marker = f"/{CONTENT_SEGMENT}/"

        if marker in posix:
            posix = posix.rsplit(marker, 1)[-1]
        elif posix.startswith(f"{CONTENT_SEGMENT}/"):
            posix = posix[len(CONTENT_SEGMENT) + 1 :]

        parts = [part for part in PurePosixPath(posix).parts if part not in ("/", ".", "..")]
        return PurePosixPath(*parts) if parts else PurePosixPath("unknown")

    # ── Write ────────────────────────────────────────────────────

    def write(
        self,
        document_path: Path | str,
        content_hash: str,
        result: ValidationResult,
        metadata: CacheMetadata,
    ) -> bool:
        """Write a validation result to the cache. Never raises.

        Returns:
            True if the entry was stored.
        """
        return self.try_write(document_path, content_hash, result, metadata).is_ok()

    def try_write(
        self,
        document_path: Path | str,
        content_hash: str,
        result: ValidationResult,
        metadata: CacheMetadata,
    ) -> Result[Path]:
        """Write a validation result, returning the failure instead of raising."""
        cache_path = self.cache_path_for(document_path)

        sanitized = ValidationResult(
            compliant=result.compliant,
            issues=[sanitize_text(issue) for issue in result.issues],
            reason=sanitize_text(result.reason),
            severity=result.severity,
        )
        payload = {
            "version": CACHE_VERSION,
            "cached_at": datetime.now(timezone.utc).isoformat(),
            "content_hash": content_hash,
            "document": {
                "path": str(document_path),
                "type": metadata.document_type,
                "spec_path": str(metadata.spec_path),
            },
            "result": sanitized.to_dict(),
        }

        def persist() -> Path:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            serialized = json.dumps(payload, indent=2, ensure_ascii=False)
            json.loads(serialized)  # verify integrity before writing
            cache_path.write_text(serialized, encoding="utf-8")
            return cache_path

        outcome = try_result(persist)

        if isinstance(outcome, Err):
            with contextlib.suppress(OSError):
                cache_path.unlink(missing_ok=True)
            self._debug("cache_write_failed", path=str(cache_path), error=str(outcome.error))
            return outcome

        self._remove_legacy_entries(cache_path)
        return outcome

    def _remove_legacy_entries(self, cache_path: Path) -> None:
        base = cache_path.stem
        for legacy in cache_path.parent.glob(f"{base}_*.json"):
            if document_name(legacy) == base:
                with contextlib.suppress(OSError):
                    legacy.unlink()

    # ── Read ─────────────────────────────────────────────────────

    def read(self, document_path: Path | str, content_hash: str) -> ValidationResult | None:
        """Return the cached result if present, current and for this fingerprint.

        Never raises. A corrupt file is deleted and treated as a miss.
        """
        for cache_path in (
            self.cache_path_for(document_path),
            self.cache_path_for(document_path, content_hash),
        ):
            if cache_path.is_file():
                return self._load(cache_path, content_hash)
        return None

    def _load(self, cache_path: Path, content_hash: str) -> ValidationResult | None:
        try:
            data = json.loads(cache_path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("cache file is not a JSON object")

            if data.get("version") != CACHE_VERSION:
                return None
            if data.get("content_hash") != content_hash:
                return None

            result = data.get("result")
            if not isinstance(result, dict):
                raise ValueError("cache entry has no result object")
            return ValidationResult.from_dict(result)
        except (OSError, ValueError, KeyError, TypeError) as e:
            with contextlib.suppress(OSError):
                cache_path.unlink()
            self._debug("corrupt_cache_file_removed", path=str(cache_path), error=str(e))
            return None

    # ── Inspection ───────────────────────────────────────────────

    def cache_files(self) -> list[Path]:
        """All cache files, sorted."""
        if not self.cache_root.is_dir():
            return []
        return sorted(path for path in self.cache_root.rglob("*.json") if path.is_file())

    def stats(self) -> CacheStats:
        """Count and total size of cache files, grouped by top-level type."""
        stats = CacheStats()

        for cache_file in self.cache_files():
            try:
                size = cache_file.stat().st_size
            except OSError:
                continue

            relative = cache_file.relative_to(self.cache_root)
            type_name = relative.parts[0] if len(relative.parts) > 1 else "unknown"

            stats.total_files += 1
            stats.total_size += size
            stats.by_type[type_name] = stats.by_type.get(type_name, 0) + 1

        return stats

    def orphaned_cache_files(self, content_dir: Path | str) -> list[OrphanedCacheFile]:
        """Find cache files whose source document was deleted.

        Entries whose fingerprint went stale are not orphans: they are
        overwritten in place on the next write.
        """
        valid_documents = self._document_keys(Path(content_dir))
        orphans: list[OrphanedCacheFile] = []

        for cache_file in self.cache_files():
            relative = cache_file.relative_to(self.cache_root)
            type_name = relative.parent.as_posix() if len(relative.parts) > 1 else "unknown"
            doc_name = document_name(cache_file)

            if f"{type_name}/{doc_name}" not in valid_documents:
                orphans.append(OrphanedCacheFile(file=cache_file, doc_name=doc_name, type=type_name))

        return orphans

    def _document_keys(self, content_dir: Path) -> set[str]:
        documents: set[str] = set()

        for type_name in self.document_types:
            type_dir = content_dir / type_name
            if not type_dir.is_dir():
                continue

            for doc_path in type_dir.glob("*.md"):
                base = doc_path.stem
                if base == "README" or base.startswith("_"):
                    continue
                documents.add(f"{type_name}/{base}")

        return documents

    def _debug(self, event: str, **context: Any) -> None:
        if self.debug:
            self.logger.debug(event, **context)


__all__ = [
    "CACHE_VERSION",
    "DOCUMENT_TYPES",
    "CacheManager",
    "CacheMetadata",
    "CacheStats",
    "OrphanedCacheFile",
    "document_name",
    "sanitize_text",
]
