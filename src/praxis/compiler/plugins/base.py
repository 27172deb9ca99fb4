"""Output plugin protocol and construction options."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from praxis.compiler.metadata import AgentMetadata


@dataclass(frozen=True)
class PluginOptions:
    """Options passed to plugin constructors.

    Attributes:
        root: Project root directory.
        plugins_output_dir: Base directory for plugin output, or None for
            ``<root>/plugins``.
        plugin_name: Sub-directory name under the plugins output directory.
    """

    root: Path
    plugins_output_dir: Path | None = None
    plugin_name: str = "praxis"


@runtime_checkable
class CompilerPlugin(Protocol):
    """A sink that wraps a pure profile for one platform and writes it.

    Implementors own their output location and header format. They must
    handle ``metadata=None`` by writing the profile without identity fields.
    """

    name: str

    def compile(self, profile: str, metadata: AgentMetadata | None, alias: str) -> Path:
        """Write the platform rendering of *profile*; return the file written."""
        ...
