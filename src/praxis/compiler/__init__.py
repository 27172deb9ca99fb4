"""
Role compilation: manifests in, self-contained agent profiles out.

Architecture::

    frontmatter.py     Frontmatter (manifest reader), split_frontmatter()
    glob_expander.py   GlobExpander (reference patterns → existing paths)
    markdown.py        Markdown (document body without front-matter)
    profile.py         ProfileBuilder (canonical section order, rendering)
    metadata.py        AgentMetadata, normalize_alias()
    role_compiler.py   RoleCompiler (per-role + batch orchestration)
    plugins/           output sinks (claude-code) and their registry
"""

from praxis.compiler.frontmatter import Frontmatter, split_frontmatter
from praxis.compiler.glob_expander import Expansion, GlobExpander
from praxis.compiler.markdown import Markdown
from praxis.compiler.metadata import AgentMetadata, build_agent_metadata, normalize_alias
from praxis.compiler.profile import ProfileBuilder, Section
from praxis.compiler.role_compiler import CompileSummary, Diagnostic, RoleCompiler

__all__ = [
    "AgentMetadata",
    "CompileSummary",
    "Diagnostic",
    "Expansion",
    "Frontmatter",
    "GlobExpander",
    "Markdown",
    "ProfileBuilder",
    "RoleCompiler",
    "Section",
    "build_agent_metadata",
    "normalize_alias",
    "split_frontmatter",
]
