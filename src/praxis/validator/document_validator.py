"""
Document verification against the README specification of its directory.

Manifesto:
    Every praxis directory carries a README.md describing what its
    documents must contain. Verification asks a language model whether a
    document meets that README and turns the free-text reply into a
    structured :class:`ValidationResult`:
    - **Cache first:** An unchanged document + README pair never costs a
      second remote call
    - **Failures are not verdicts:** A missing credential or service error
      raises; it is never reported as a non-compliant document
    - **Provider-agnostic:** Any :class:`LLMProvider` can answer

Architecture:
    ::

        DocumentValidator(document_path, spec_path=None, provider=..., cache=...)
          │
          ├── find spec:   <dir>/README.md → <dir>/../README.md → SpecNotFoundError
          ├── detect type: "_" prefix → template; front-matter "type"; path segment
          │
          └── validate()
                ├── cache.read(path, content_hash)      hit → return, cache_hit=True
                ├── provider.complete(system + question, temperature=0.1)
                ├── parse_response(reply)               yes / maybe / other
                └── cache.write(...)                    best-effort

Examples:
    >>> validator = DocumentValidator(
    ...     "content/roles/tester.md",
    ...     provider=MockLLMProvider(default_response="Yes, all sections present."),
    ... )
    >>> validator.validate().compliant
    True
    >>> parse_response("No\\n- missing description").issues
    ['missing description']

Tags:
    validator, verification, llm, cache, praxis

Doc-Types:
    - API Reference
    - Architecture
"""

from __future__ import annotations

import re
from pathlib import Path

from praxis.compiler.frontmatter import Frontmatter
from praxis.core.errors import SpecNotFoundError
from praxis.core.logging import get_logger
from praxis.validator.cache import CacheManager, CacheMetadata
from praxis.validator.hashing import content_hash
from praxis.validator.llm.protocol import LLMProvider, Message
from praxis.validator.models import DocumentType, Severity, ValidationResult
from praxis.validator.prompts import SYSTEM_PROMPT, build_validation_question

logger = get_logger(__name__)

SPEC_FILE = "README.md"
VALIDATION_TEMPERATURE = 0.1

# Path segment → document type, checked in order.
PATH_TYPES: tuple[tuple[str, DocumentType], ...] = (
    ("roles", DocumentType.ROLE),
    ("responsibilities", DocumentType.RESPONSIBILITY),
    ("reference", DocumentType.REFERENCE),
    ("conventions", DocumentType.CONVENTION),
    ("constitution", DocumentType.CONSTITUTION),
)

_VERDICT_SPLIT = re.compile(r"[\s,.:]")
_ISSUE_LINE = re.compile(r"^(?:[-*•]\s+|\d+\.\s+)")
_ISSUE_MARKER = re.compile(r"^[-*•\d.]+\s*")


# ── Response parsing ─────────────────────────────────────────────────


def parse_response(response: str) -> ValidationResult:
    """Turn a Yes/Maybe/No reply into a structured result."""
    trimmed = response.strip()
    verdict = _VERDICT_SPLIT.split(trimmed, maxsplit=1)[0].lower()

    if verdict == "yes":
        return ValidationResult(compliant=True, issues=[], reason=trimmed)

    return ValidationResult(
        compliant=False,
        issues=parse_issues(trimmed),
        reason=trimmed,
        severity=Severity.WARNING if verdict == "maybe" else Severity.ERROR,
    )


def parse_issues(reason: str) -> list[str]:
    """Bullet and numbered lines of *reason*, or the whole reply if none."""
    issues = [
        _ISSUE_MARKER.sub("", line.strip())
        for line in reason.split("\n")
        if _ISSUE_LINE.match(line.strip())
    ]
    return issues or [reason]


def find_spec(document_path: Path) -> Path:
    """README.md in the document's directory, else in its parent.

    Raises:
        SpecNotFoundError: neither directory has a README.md.
    """
    base_dir = document_path.parent
    for candidate in (base_dir / SPEC_FILE, base_dir.parent / SPEC_FILE):
        if candidate.is_file():
            return candidate
    raise SpecNotFoundError(str(document_path))


# ── Validator ────────────────────────────────────────────────────────


class DocumentValidator:
    """Verifies one document against its README specification."""

    def __init__(
        self,
        document_path: Path | str,
        spec_path: Path | str | None = None,
        *,
        provider: LLMProvider,
        cache: CacheManager | None = None,
        model: str | None = None,
    ):
        """Read the document and its specification.

        Args:
            document_path: Document to verify.
            spec_path: Explicit specification file (README lookup if omitted).
            provider: Completion backend.
            cache: Result cache; ``None`` disables caching.
            model: Model override passed to the provider.

        Raises:
            SpecNotFoundError: no specification could be located.
            OSError: the document or specification is unreadable.
        """
        self.document_path = Path(document_path)
        self.document_content = self.document_path.read_text(encoding="utf-8")
        self.document_type = self.detect_document_type()
        self.spec_path = Path(spec_path) if spec_path is not None else find_spec(self.document_path)
        self.spec_content = self.spec_path.read_text(encoding="utf-8")

        self.provider = provider
        self.cache = cache
        self.model = model

        self.result: ValidationResult | None = None
        self.cache_hit = False

    def content_hash(self) -> str:
        """Fingerprint of the document and its specification."""
        return content_hash(self.document_content, self.spec_content)

    def validate(self) -> ValidationResult:
        """Verify the document, reusing a cached verdict when current.

        Raises:
            VerificationError: the provider could not produce a verdict.
        """
        fingerprint = self.content_hash()

        if self.cache is not None:
            cached = self.cache.read(self.document_path, fingerprint)
            if cached is not None:
                self.cache_hit = True
                self.result = cached
                logger.debug("validation_cache_hit", path=str(self.document_path), hash=fingerprint)
                return cached

        self.cache_hit = False
        response = self.provider.complete(
            [Message.system(SYSTEM_PROMPT), Message.user(self.validation_question())],
            self.model,
            temperature=VALIDATION_TEMPERATURE,
        )
        self.result = parse_response(response.content)

        logger.info(
            "document_validated",
            path=str(self.document_path),
            compliant=self.result.compliant,
            issues=len(self.result.issues),
        )

        if self.cache is not None:
            self.cache.write(
                self.document_path,
                fingerprint,
                self.result,
                CacheMetadata(document_type=self.document_type.value, spec_path=str(self.spec_path)),
            )

        return self.result

    def validation_question(self) -> str:
        return build_validation_question(
            spec_content=self.spec_content,
            document_content=self.document_content,
            file_name=self.document_path.name,
            directory=str(self.document_path.parent),
            document_type=self.document_type.value,
        )

    def detect_document_type(self) -> DocumentType:
        """Template by file name, else front-matter ``type``, else path."""
        if self.document_path.name.startswith("_"):
            return DocumentType.TEMPLATE

        declared = Frontmatter.from_text(self.document_content, self.document_path).value("type")
        if isinstance(declared, str):
            try:
                detected = DocumentType(declared)
            except ValueError:
                detected = None
            if detected not in (None, DocumentType.TEMPLATE, DocumentType.UNKNOWN):
                return detected

        segments = self.document_path.parent.parts
        for segment, document_type in PATH_TYPES:
            if segment in segments:
                return document_type
        return DocumentType.UNKNOWN
