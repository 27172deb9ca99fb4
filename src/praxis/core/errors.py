"""
Structured error types for praxis.

Provides a small hierarchy of typed errors with category metadata so the
CLI and callers can tell fatal configuration problems apart from failures
of a single verification call.

Manifesto:
    - **Typed Error Hierarchy:** Configuration, document and verification
      failures each have their own base class
    - **Fail Fast on Config:** Configuration errors abort before any output
      is written
    - **Rich Context:** Errors carry metadata for logging
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                        PraxisError                            │
        │              (category, context, cause)                       │
        ├──────────────────────────────────────────────────────────────┤
        │  ConfigError              DocumentError     VerificationError │
        │  (CONFIG)                 (DOCUMENT)        (VERIFICATION)    │
        │     │                        │                  │             │
        │  UnknownPluginError       SpecNotFoundError  MissingCredential│
        │  ProjectRootNotFound                         VerificationService│
        │  InvalidConfigError                                           │
        └──────────────────────────────────────────────────────────────┘

    Per-document warnings (missing alias, unresolved reference, ...) are
    NOT exceptions: they are logged diagnostics. Cache failures never
    surface as errors at all.

Tags:
    error-handling, exception-hierarchy, error-context, praxis

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and CLI exit handling."""

    CONFIG = "CONFIG"
    DOCUMENT = "DOCUMENT"
    VERIFICATION = "VERIFICATION"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error."""

    path: str | None = None
    role: str | None = None
    plugin: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.path:
            result["path"] = self.path
        if self.role:
            result["role"] = self.role
        if self.plugin:
            result["plugin"] = self.plugin
        if self.metadata:
            result["metadata"] = self.metadata
        return result


class PraxisError(Exception):
    """
    Base exception for all praxis errors.

    Subclasses set ``default_category`` so callers can route on
    :class:`ErrorCategory` without isinstance ladders.

    Examples:
        >>> error = PraxisError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(path="content/roles/a.md").context.path
        'content/roles/a.md'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> PraxisError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ConfigError("Bad value").with_context(path=".praxis/config.json")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(PraxisError):
    """
    Configuration error.

    Fatal - aborts before any output is written.
    """

    default_category = ErrorCategory.CONFIG


class UnknownPluginError(ConfigError):
    """A configured output plugin name is not in the registry."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f'Unknown plugin: "{name}". Available plugins: {", ".join(available)}',
            context=ErrorContext(plugin=name),
        )


class ProjectRootNotFoundError(ConfigError):
    """No praxis project marker found walking up from a directory."""

    def __init__(self, start: str):
        self.start = start
        super().__init__(
            f"Not inside a praxis project (no .praxis or .git found above {start})",
            context=ErrorContext(path=start),
        )


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


# =============================================================================
# DOCUMENT ERRORS
# =============================================================================


class DocumentError(PraxisError):
    """A document cannot be processed."""

    default_category = ErrorCategory.DOCUMENT


class SpecNotFoundError(DocumentError):
    """No README specification exists for a document."""

    def __init__(self, document_path: str):
        self.document_path = document_path
        super().__init__(
            f"No README.md found for {document_path}",
            context=ErrorContext(path=document_path),
        )


# =============================================================================
# VERIFICATION ERRORS
# =============================================================================


class VerificationError(PraxisError):
    """
    The remote verification call failed.

    Fatal to that single call. Never treated as a non-compliant result.
    """

    default_category = ErrorCategory.VERIFICATION


class MissingCredentialError(VerificationError):
    """The API credential for the verification service is not set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} environment variable not set")


class VerificationServiceError(VerificationError):
    """The verification service returned a non-success response."""

    def __init__(self, status_code: int, body: str, *, cause: Exception | None = None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"OpenRouter API error ({status_code}): {body}", cause=cause)


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "PraxisError",
    "ConfigError",
    "UnknownPluginError",
    "ProjectRootNotFoundError",
    "InvalidConfigError",
    "DocumentError",
    "SpecNotFoundError",
    "VerificationError",
    "MissingCredentialError",
    "VerificationServiceError",
]
