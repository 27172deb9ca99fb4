"""
Claude Code compiler plugin.

Wraps a pure profile with a YAML agent header and writes it to
``<plugins_output_dir>/<plugin_name>/agents/<alias>.md``::

    ---
    name: tester
    description: Reviews pull requests
    tools: Read, Grep
    ---
    # Role
    ...

Without metadata (no ``description`` in the role) the header is omitted
and the profile is written as-is.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from praxis.compiler.metadata import AgentMetadata, normalize_alias
from praxis.compiler.plugins.base import PluginOptions


class ClaudeCodePlugin:
    """Writes Claude Code agent files."""

    name = "claude-code"

    def __init__(self, options: PluginOptions):
        base = options.plugins_output_dir or (Path(options.root) / "plugins")
        self.output_dir = Path(base) / options.plugin_name / "agents"

    def compile(self, profile: str, metadata: AgentMetadata | None, alias: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)

        header = self.build_frontmatter(metadata)
        content = f"{header}\n{profile}" if header else profile

        target = self.output_dir / f"{normalize_alias(alias)}.md"
        target.write_text(content, encoding="utf-8")
        return target

    def build_frontmatter(self, metadata: AgentMetadata | None) -> str | None:
        """Render the agent header block, or None when metadata is incomplete."""
        if metadata is None or not metadata.name or not metadata.description:
            return None

        fields: dict[str, Any] = {
            "name": metadata.name,
            "description": metadata.description,
        }
        if metadata.tools:
            fields["tools"] = metadata.tools
        if metadata.model:
            fields["model"] = metadata.model
        if metadata.permission_mode:
            fields["permissionMode"] = metadata.permission_mode

        body = yaml.safe_dump(
            fields,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            width=2**16,
        )
        return f"---\n{body}---"
