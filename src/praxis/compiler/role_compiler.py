"""
Role compiler - turn role manifests into self-contained agent profiles.

Manifesto:
    A role file declares *what* an agent should know by reference; the
    compiled profile contains *everything* inline. Compilation is
    forgiving per document and strict per project:

    - **Per document:** missing alias, missing description, unresolved
      reference, zero-match glob and the deprecated ``constitution: true``
      flag are diagnostics. The affected unit is skipped, the batch goes on.
    - **Per project:** an unknown plugin name aborts before any file is
      written.

Architecture:
    ::

        RoleCompiler.compile(role_file)
              │
              ├──► Frontmatter(role_file) ── alias? ──no──► diagnostic, skip
              │
              ├──► build_agent_metadata()  (None → diagnostic)
              │
              ├──► for group in responsibilities, constitution, context, refs:
              │         GlobExpander.expand_with_diagnostics(patterns)
              │         Markdown(path).body() for each resolved path
              │
              ├──► ProfileBuilder.build_profile()   (pure rendering)
              │
              └──► sinks:
                     <agent_profiles_dir>/<alias>.md        (if configured)
                     plugin.compile(profile, metadata, alias) for each plugin

    Roles are compiled strictly one after another so diagnostics come
    out in a deterministic order.

Examples:
    >>> compiler = RoleCompiler(Path("/work/project"))
    >>> compiler.compile(Path("/work/project/content/roles/tester.md"))
    'Tester'
    >>> compiler.compile_all().compiled
    3

Tags:
    praxis, compiler, roles, profiles, orchestration

Doc-Types:
    - API Reference
    - Architecture
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from praxis.compiler.frontmatter import Frontmatter, as_list
from praxis.compiler.glob_expander import GlobExpander
from praxis.compiler.markdown import Markdown
from praxis.compiler.metadata import AgentMetadata, build_agent_metadata, normalize_alias
from praxis.compiler.plugins import CompilerPlugin, PluginOptions, resolve_plugins
from praxis.compiler.profile import ProfileBuilder
from praxis.core.config import ProjectConfig
from praxis.core.logging import LogContext, get_logger

# Files excluded when scanning the roles directory for compilation.
EXCLUDED_FILES = frozenset({"_template.md", "README.md"})

CONSTITUTION_EXAMPLE = 'constitution: "content/context/constitution/*.md"'


@dataclass(frozen=True)
class Diagnostic:
    """A per-document warning raised during compilation."""

    event: str
    message: str
    role: str | None = None
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class CompileSummary:
    """Outcome of a batch compilation."""

    compiled: int = 0
    aliases: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class RoleCompiler:
    """Compiles role definition files into agent profiles and plugin output."""

    def __init__(
        self,
        root: Path | str,
        config: ProjectConfig | None = None,
        logger: Any = None,
    ):
        """Initialize the compiler.

        Args:
            root: Project root; reference patterns resolve against it.
            config: Project configuration (loaded from ``root`` if omitted).
            logger: structlog logger (module logger if omitted).

        Raises:
            UnknownPluginError: the configuration names an unknown plugin.
        """
        self.root = Path(root).resolve()
        self.config = config or ProjectConfig.load(self.root)
        self.logger = logger or get_logger(__name__)
        self.expander = GlobExpander(self.root)
        self.diagnostics: list[Diagnostic] = []
        self._current_role: str | None = None

        self.plugins: list[CompilerPlugin] = resolve_plugins(
            self.config.plugins,
            PluginOptions(
                root=self.root,
                plugins_output_dir=self.config.plugins_output_path,
                plugin_name=self.config.plugin_name,
            ),
        )

    # ── Public API ───────────────────────────────────────────────

    def compile(self, role_file: Path | str) -> str | None:
        """Compile a single role file, writing output based on config.

        Returns:
            The role alias, or None if the role was skipped.
        """
        role_file = Path(role_file)
        fm = Frontmatter(role_file)
        data = fm.parse()

        if fm.error:
            self._record("malformed_frontmatter", f"Malformed front-matter in {role_file}: {fm.error}")

        alias = data.get("alias")
        if alias is None or not str(alias).strip():
            self._warn("missing_alias", f"No alias found in {role_file}, skipping", path=str(role_file))
            return None

        alias = str(alias).strip()
        name = normalize_alias(alias)
        self._current_role = name

        try:
            with LogContext(role=name):
                profile, metadata = self.build_role_profile(role_file, fm, alias)
                written = self.write_outputs(profile, metadata, alias)
                self.logger.info("role_compiled", output=f"{name}.md", files=len(written))
        finally:
            self._current_role = None

        return alias

    def compile_all(self) -> CompileSummary:
        """Compile every role in the configured roles directory.

        Skips ``_template.md``, ``README.md`` and roles without an alias. A
        failure in one role is recorded and the batch continues.
        """
        summary = CompileSummary()
        roles_dir = self.config.roles_path

        if not roles_dir.is_dir():
            self._warn("roles_dir_missing", f"Roles directory not found: {roles_dir}", path=str(roles_dir))
            return summary

        role_files = sorted(
            path for path in roles_dir.glob("*.md")
            if path.is_file() and path.name not in EXCLUDED_FILES
        )

        for role_file in role_files:
            try:
                alias = self.compile(role_file)
            except Exception as e:
                self.logger.exception("role_failed", path=str(role_file))
                self._record("role_failed", f"Failed to compile {role_file.name}: {e}", path=str(role_file))
                summary.failed.append(str(role_file))
                continue

            if alias is None:
                summary.skipped.append(str(role_file))
            else:
                summary.compiled += 1
                summary.aliases.append(alias)

        self.logger.info("compile_all_finished", compiled=summary.compiled, skipped=len(summary.skipped), failed=len(summary.failed))
        return summary

    def build_role_profile(
        self,
        role_file: Path,
        fm: Frontmatter,
        alias: str,
    ) -> tuple[str, AgentMetadata | None]:
        """Build the pure profile text and metadata for a role."""
        metadata = build_agent_metadata(fm, alias)
        if metadata is None:
            self._warn("missing_description", "No description found in role, skipping agent metadata")

        builder = ProfileBuilder()
        builder.add_role(Markdown(role_file).body())
        builder.add_responsibilities(self.inline_refs(fm, "responsibilities"))
        builder.add_constitution(self.inline_constitution(fm))
        builder.add_context(self.inline_refs(fm, "context"))
        builder.add_reference(self.inline_refs(fm, "refs"))

        return builder.build_profile(), metadata

    def write_outputs(self, profile: str, metadata: AgentMetadata | None, alias: str) -> list[Path]:
        """Route a compiled profile to the profile directory and every plugin."""
        written: list[Path] = []

        profiles_dir = self.config.agent_profiles_path
        if profiles_dir is not None:
            profiles_dir.mkdir(parents=True, exist_ok=True)
            target = profiles_dir / f"{normalize_alias(alias)}.md"
            target.write_text(profile, encoding="utf-8")
            written.append(target)

        for plugin in self.plugins:
            written.append(plugin.compile(profile, metadata, alias))

        return written

    # ── Reference groups ─────────────────────────────────────────

    def inline_refs(self, fm: Frontmatter, key: str) -> list[str]:
        """Expand a front-matter reference group and return the bodies."""
        return self._inline_patterns(self._patterns(fm.array(key), key))

    def inline_constitution(self, fm: Frontmatter) -> list[str]:
        """Inline the constitution group.

        ``constitution: true`` is the deprecated legacy form: it expands to
        nothing and emits one deprecation diagnostic.
        """
        raw = fm.value("constitution")
        if raw is None or raw is False:
            return []
        if raw is True:
            self._warn(
                "deprecated_constitution_flag",
                f"constitution: true is deprecated. Use an explicit path like: {CONSTITUTION_EXAMPLE}",
            )
            return []
        return self._inline_patterns(self._patterns(as_list(raw), "constitution"))

    def _patterns(self, values: list[Any], key: str) -> list[str]:
        patterns: list[str] = []
        for value in values:
            if isinstance(value, str) and value.strip():
                patterns.append(value)
            else:
                self._warn("invalid_reference", f"Ignoring non-path entry in {key}: {value!r}", group=key)
        return patterns

    def _inline_patterns(self, patterns: list[str]) -> list[str]:
        expansion = self.expander.expand_with_diagnostics(patterns)

        for pattern in expansion.empty_globs:
            self._warn("glob_matched_zero_files", f"Glob pattern matched zero files: {pattern}", pattern=pattern)
        for pattern in expansion.missing:
            self._warn("referenced_file_not_found", f"Referenced file not found: {pattern}", path=pattern)

        bodies: list[str] = []
        for rel_path in expansion.paths:
            try:
                bodies.append(Markdown(self.root / rel_path).body())
            except FileNotFoundError:
                self._warn("referenced_file_not_found", f"Referenced file not found: {rel_path}", path=rel_path)
        return bodies

    # ── Diagnostics ──────────────────────────────────────────────

    def _record(self, event: str, message: str, **context: Any) -> Diagnostic:
        diagnostic = Diagnostic(event=event, message=message, role=self._current_role, context=context)
        self.diagnostics.append(diagnostic)
        return diagnostic

    def _warn(self, event: str, message: str, **context: Any) -> None:
        self._record(event, message, **context)
        self.logger.warning(event, message=message, **context)
