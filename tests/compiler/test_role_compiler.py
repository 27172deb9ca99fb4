"""Tests for praxis.compiler.role_compiler."""

import json

import pytest
from structlog.testing import capture_logs

from praxis.compiler.glob_expander import Expansion
from praxis.compiler.role_compiler import RoleCompiler
from praxis.core.config import ProjectConfig
from praxis.core.errors import UnknownPluginError


def events(compiler):
    return [d.event for d in compiler.diagnostics]


class TestCompile:
    """Test compiling a single role."""

    def test_returns_alias(self, praxis_project):
        compiler = RoleCompiler(praxis_project)
        alias = compiler.compile(praxis_project / "content/roles/test-role.md")
        assert alias == "Tester"

    def test_writes_pure_profile(self, praxis_project):
        RoleCompiler(praxis_project).compile(praxis_project / "content/roles/test-role.md")

        profile = (praxis_project / "agent-profiles" / "tester.md").read_text(encoding="utf-8")
        assert profile == (
            "# Role\n\n# Tester\n\nA test role for unit testing\n\n"
            "# Responsibilities\n\nWrite unit tests for every change.\n\n"
            "# Constitution\n\nNever ship untested code.\n\n"
            "# Context\n\nUse kebab-case file names.\n\n"
            "# Reference\n\n# Glossary\n\nTerms used across the project.\n"
        )

    def test_profile_has_no_frontmatter(self, praxis_project):
        RoleCompiler(praxis_project).compile(praxis_project / "content/roles/test-role.md")
        profile = (praxis_project / "agent-profiles" / "tester.md").read_text(encoding="utf-8")
        assert not profile.startswith("---")
        assert "alias:" not in profile

    def test_writes_plugin_output(self, praxis_project):
        RoleCompiler(praxis_project).compile(praxis_project / "content/roles/test-role.md")

        agent = praxis_project / "plugins" / "praxis" / "agents" / "tester.md"
        text = agent.read_text(encoding="utf-8")
        assert text.startswith("---\nname: tester\ndescription: Ensures code quality through testing\n---\n")
        assert text.endswith("A test role for unit testing\n\n# Responsibilities\n\n"
                             "Write unit tests for every change.\n\n# Constitution\n\n"
                             "Never ship untested code.\n\n# Context\n\nUse kebab-case file names.\n\n"
                             "# Reference\n\n# Glossary\n\nTerms used across the project.\n")

    def test_no_plugin_output_without_plugins(self, praxis_project):
        config = ProjectConfig.from_dict({}, praxis_project)
        RoleCompiler(praxis_project, config).compile(praxis_project / "content/roles/test-role.md")
        assert not (praxis_project / "plugins").exists()

    def test_profile_dir_can_be_disabled(self, praxis_project):
        config = ProjectConfig.from_dict(
            {"agentProfilesOutputDir": False, "plugins": ["claude-code"]}, praxis_project
        )
        RoleCompiler(praxis_project, config).compile(praxis_project / "content/roles/test-role.md")
        assert not (praxis_project / "agent-profiles").exists()
        assert (praxis_project / "plugins" / "praxis" / "agents" / "tester.md").exists()

    def test_missing_alias_is_skipped(self, praxis_project, write_file):
        role = write_file(praxis_project / "content/roles/anon.md", "---\ndescription: x\n---\nBody\n")
        compiler = RoleCompiler(praxis_project)
        with capture_logs() as logs:
            assert compiler.compile(role) is None
        assert events(compiler) == ["missing_alias"]
        assert logs[0]["event"] == "missing_alias"
        assert not (praxis_project / "agent-profiles").exists()

    def test_missing_description_skips_metadata(self, praxis_project, write_file):
        role = write_file(praxis_project / "content/roles/plain.md", "---\nalias: Plain\n---\nJust a role\n")
        compiler = RoleCompiler(praxis_project)
        compiler.compile(role)

        assert events(compiler) == ["missing_description"]
        assert compiler.diagnostics[0].role == "plain"
        agent = praxis_project / "plugins" / "praxis" / "agents" / "plain.md"
        assert agent.read_text(encoding="utf-8") == "# Role\n\nJust a role\n"

    def test_missing_reference_warns_and_continues(self, praxis_project, write_file):
        role = write_file(
            praxis_project / "content/roles/gappy.md",
            "---\nalias: Gappy\nrefs:\n  - content/reference/nope.md\n  - content/nothing/*.md\n---\nBody\n",
        )
        compiler = RoleCompiler(praxis_project)
        compiler.compile(role)

        messages = [d.message for d in compiler.diagnostics]
        assert "Referenced file not found: content/reference/nope.md" in messages
        assert "Glob pattern matched zero files: content/nothing/*.md" in messages
        profile = (praxis_project / "agent-profiles" / "gappy.md").read_text(encoding="utf-8")
        assert "# Reference" not in profile

    def test_reference_removed_after_expansion_is_skipped(self, praxis_project, write_file, monkeypatch):
        role = write_file(
            praxis_project / "content/roles/racy.md",
            "---\nalias: Racy\nrefs: content/reference/gone.md\n---\nBody\n",
        )
        compiler = RoleCompiler(praxis_project)
        monkeypatch.setattr(
            compiler.expander,
            "expand_with_diagnostics",
            lambda patterns: Expansion(paths=["content/reference/gone.md"] if patterns else []),
        )

        assert compiler.compile(role) == "Racy"

        not_found = [d for d in compiler.diagnostics if d.event == "referenced_file_not_found"]
        assert len(not_found) == 1
        assert not_found[0].context == {"path": "content/reference/gone.md"}
        assert "content/reference/gone.md" in not_found[0].message
        profile = (praxis_project / "agent-profiles" / "racy.md").read_text(encoding="utf-8")
        assert "# Reference" not in profile

    def test_constitution_true_is_deprecated(self, praxis_project, write_file):
        role = write_file(
            praxis_project / "content/roles/legacy.md",
            "---\nalias: Legacy\ndescription: Old style\nconstitution: true\n---\nBody\n",
        )
        compiler = RoleCompiler(praxis_project)
        compiler.compile(role)

        deprecations = [d for d in compiler.diagnostics if d.event == "deprecated_constitution_flag"]
        assert len(deprecations) == 1
        assert "content/context/constitution/*.md" in deprecations[0].message
        profile = (praxis_project / "agent-profiles" / "legacy.md").read_text(encoding="utf-8")
        assert "# Constitution" not in profile

    def test_scalar_reference_is_accepted(self, praxis_project, write_file):
        role = write_file(
            praxis_project / "content/roles/single.md",
            "---\nalias: Single\ncontext: content/context/conventions/naming.md\n---\nBody\n",
        )
        RoleCompiler(praxis_project).compile(role)
        profile = (praxis_project / "agent-profiles" / "single.md").read_text(encoding="utf-8")
        assert "# Context\n\nUse kebab-case file names.\n" in profile

    def test_duplicate_references_inline_once(self, praxis_project, write_file):
        role = write_file(
            praxis_project / "content/roles/dup.md",
            "---\nalias: Dup\nrefs:\n  - content/reference/glossary.md\n  - content/reference/*.md\n---\nBody\n",
        )
        RoleCompiler(praxis_project).compile(role)
        profile = (praxis_project / "agent-profiles" / "dup.md").read_text(encoding="utf-8")
        assert profile.count("Terms used across the project.") == 1

    def test_malformed_frontmatter_skips_role(self, praxis_project, write_file):
        role = write_file(praxis_project / "content/roles/broken.md", "---\nalias: [oops\n---\nBody\n")
        compiler = RoleCompiler(praxis_project)
        assert compiler.compile(role) is None
        assert events(compiler) == ["malformed_frontmatter", "missing_alias"]


class TestCompileAll:
    """Test batch compilation."""

    def test_compiles_roles_and_skips_templates(self, praxis_project):
        summary = RoleCompiler(praxis_project).compile_all()
        assert summary.compiled == 1
        assert summary.aliases == ["Tester"]
        assert not (praxis_project / "agent-profiles" / "template.md").exists()
        assert not (praxis_project / "agent-profiles" / "readme.md").exists()

    def test_roles_without_alias_are_counted_as_skipped(self, praxis_project, write_file):
        write_file(praxis_project / "content/roles/anon.md", "No front-matter at all\n")
        summary = RoleCompiler(praxis_project).compile_all()
        assert summary.compiled == 1
        assert len(summary.skipped) == 1

    def test_compiles_in_sorted_order(self, praxis_project, write_file):
        write_file(praxis_project / "content/roles/a-first.md", "---\nalias: Alpha\n---\nA\n")
        write_file(praxis_project / "content/roles/z-last.md", "---\nalias: Zulu\n---\nZ\n")
        summary = RoleCompiler(praxis_project).compile_all()
        assert summary.aliases == ["Alpha", "Tester", "Zulu"]

    def test_missing_roles_dir(self, tmp_path):
        compiler = RoleCompiler(tmp_path, ProjectConfig.from_dict({}, tmp_path))
        summary = compiler.compile_all()
        assert summary.compiled == 0
        assert events(compiler) == ["roles_dir_missing"]

    def test_custom_roles_dir(self, praxis_project, write_file):
        write_file(praxis_project / "agents/roles/custom.md", "---\nalias: Custom\n---\nC\n")
        (praxis_project / ".praxis" / "config.json").write_text(
            json.dumps({"rolesDir": "agents/roles"}), encoding="utf-8"
        )
        summary = RoleCompiler(praxis_project).compile_all()
        assert summary.aliases == ["Custom"]

    def test_one_failing_role_does_not_stop_batch(self, praxis_project, write_file, monkeypatch):
        write_file(praxis_project / "content/roles/boom.md", "---\nalias: Boom\n---\nB\n")
        compiler = RoleCompiler(praxis_project)
        original = compiler.write_outputs

        def write_outputs(profile, metadata, alias):
            if alias == "Boom":
                raise OSError("disk full")
            return original(profile, metadata, alias)

        monkeypatch.setattr(compiler, "write_outputs", write_outputs)
        summary = compiler.compile_all()

        assert summary.aliases == ["Tester"]
        assert len(summary.failed) == 1
        assert "role_failed" in events(compiler)


class TestConfiguration:
    """Test configuration errors surface before output is written."""

    def test_unknown_plugin_raises_at_construction(self, praxis_project):
        (praxis_project / ".praxis" / "config.json").write_text(
            json.dumps({"plugins": ["vscode"]}), encoding="utf-8"
        )
        with pytest.raises(UnknownPluginError) as exc_info:
            RoleCompiler(praxis_project)

        assert 'Unknown plugin: "vscode"' in str(exc_info.value)
        assert "claude-code" in str(exc_info.value)
        assert not (praxis_project / "agent-profiles").exists()
