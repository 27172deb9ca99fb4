"""Agent metadata derived from a role manifest."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from praxis.compiler.frontmatter import Frontmatter

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_alias(alias: str) -> str:
    """Lowercase *alias* and collapse non-alphanumeric runs to one hyphen.

    >>> normalize_alias("  Code Reviewer (v2) ")
    'code-reviewer-v2'
    """
    return _NON_ALNUM.sub("-", str(alias).lower()).strip("-")


@dataclass(frozen=True)
class AgentMetadata:
    """Identity fields a platform plugin may emit in its header block.

    Attributes:
        name: Normalised alias (lowercase, hyphenated).
        description: One-line role description. Always non-empty.
        tools: Optional tool list, passed through verbatim.
        model: Optional model identifier.
        permission_mode: Optional permission mode.
    """

    name: str
    description: str
    tools: str | None = None
    model: str | None = None
    permission_mode: str | None = None


def _passthrough(value: Any) -> str | None:
    if value is None or value == "" or value == []:
        return None
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def build_agent_metadata(fm: Frontmatter, alias: str) -> AgentMetadata | None:
    """Build metadata from role front-matter, or None without a description.

    Optional fields are read from ``agent_tools``, ``agent_model`` and
    ``agent_permission_mode``.
    """
    description = fm.value("description")
    if description is None or not str(description).strip():
        return None

    return AgentMetadata(
        name=normalize_alias(alias),
        description=str(description).strip(),
        tools=_passthrough(fm.value("agent_tools")),
        model=_passthrough(fm.value("agent_model")),
        permission_mode=_passthrough(fm.value("agent_permission_mode")),
    )
