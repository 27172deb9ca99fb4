"""
Profile assembler.

Collects inlined document bodies under named sections and renders the
pure profile: ``# <Section>`` headings in canonical order, bodies
separated by blank lines, empty sections omitted entirely.

Architecture:
    ::

        ProfileBuilder
          ├── add_role(body)                 → # Role
          ├── add_responsibilities(bodies)   → # Responsibilities
          ├── add_constitution(bodies)       → # Constitution
          ├── add_context(bodies)            → # Context
          ├── add_reference(bodies)          → # Reference
          └── build_profile() → str

Examples:
    >>> builder = ProfileBuilder()
    >>> builder.add_role("A test role")
    >>> builder.add_context([])
    >>> print(builder.build_profile())
    # Role
    <BLANKLINE>
    A test role
    <BLANKLINE>

Tags:
    praxis, compiler, profile, rendering

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from enum import Enum


class Section(str, Enum):
    """Profile sections, declared in canonical render order."""

    ROLE = "Role"
    RESPONSIBILITIES = "Responsibilities"
    CONSTITUTION = "Constitution"
    CONTEXT = "Context"
    REFERENCE = "Reference"


SECTION_ORDER: tuple[Section, ...] = tuple(Section)


class ProfileBuilder:
    """Accumulates section bodies and renders the pure profile text."""

    def __init__(self) -> None:
        self._sections: dict[Section, list[str]] = {section: [] for section in SECTION_ORDER}

    def add(self, section: Section, bodies: list[str]) -> None:
        """Append *bodies* to *section*, skipping blank ones."""
        self._sections[section].extend(body.strip() for body in bodies if body and body.strip())

    def add_role(self, body: str) -> None:
        self.add(Section.ROLE, [body])

    def add_responsibilities(self, bodies: list[str]) -> None:
        self.add(Section.RESPONSIBILITIES, bodies)

    def add_constitution(self, bodies: list[str]) -> None:
        self.add(Section.CONSTITUTION, bodies)

    def add_context(self, bodies: list[str]) -> None:
        self.add(Section.CONTEXT, bodies)

    def add_reference(self, bodies: list[str]) -> None:
        self.add(Section.REFERENCE, bodies)

    def sections(self) -> dict[str, list[str]]:
        """Non-empty sections in render order (name → bodies)."""
        return {
            section.value: list(bodies)
            for section, bodies in self._sections.items()
            if bodies
        }

    def build_profile(self) -> str:
        """Render the pure profile (no platform metadata)."""
        blocks = [
            f"# {name}\n\n" + "\n\n".join(bodies)
            for name, bodies in self.sections().items()
        ]
        if not blocks:
            return ""
        return "\n\n".join(blocks) + "\n"
