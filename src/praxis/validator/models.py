"""Validation result types shared by the validator and the cache."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity of a non-compliant validation result."""

    WARNING = "warning"
    ERROR = "error"


class DocumentType(str, Enum):
    """Known document types within a praxis content tree."""

    ROLE = "role"
    RESPONSIBILITY = "responsibility"
    REFERENCE = "reference"
    CONVENTION = "convention"
    CONSTITUTION = "constitution"
    TEMPLATE = "template"
    UNKNOWN = "unknown"


@dataclass
class ValidationResult:
    """Outcome of verifying one document against its specification.

    Attributes:
        compliant: Whether the document satisfies its specification.
        issues: Discrete problems found (empty when compliant).
        reason: Free-text explanation returned by the verifier.
        severity: Set only for non-compliant results.
    """

    compliant: bool
    issues: list[str] = field(default_factory=list)
    reason: str = ""
    severity: Severity | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "compliant": self.compliant,
            "issues": list(self.issues),
            "reason": self.reason,
        }
        if self.severity is not None:
            data["severity"] = self.severity.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidationResult:
        """Build a result from its serialized form.

        Raises:
            KeyError, TypeError, ValueError: *data* is not a valid result.
        """
        if not isinstance(data, dict):
            raise TypeError(f"result must be an object, got {type(data).__name__}")

        issues = data.get("issues", [])
        if not isinstance(issues, list):
            raise TypeError(f"issues must be a list, got {type(issues).__name__}")

        severity = data.get("severity")
        return cls(
            compliant=bool(data["compliant"]),
            issues=[str(issue) for issue in issues],
            reason=str(data.get("reason", "")),
            severity=Severity(severity) if severity else None,
        )
