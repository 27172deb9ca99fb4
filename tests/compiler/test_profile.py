"""Tests for praxis.compiler.profile and praxis.compiler.metadata."""

from praxis.compiler.frontmatter import Frontmatter
from praxis.compiler.metadata import build_agent_metadata, normalize_alias
from praxis.compiler.profile import ProfileBuilder, Section


class TestProfileBuilder:
    """Test profile rendering."""

    def test_empty_profile(self):
        assert ProfileBuilder().build_profile() == ""

    def test_role_only(self):
        builder = ProfileBuilder()
        builder.add_role("I am a role.")
        assert builder.build_profile() == "# Role\n\nI am a role.\n"

    def test_sections_render_in_canonical_order(self):
        builder = ProfileBuilder()
        builder.add_reference(["ref"])
        builder.add_context(["ctx"])
        builder.add_constitution(["law"])
        builder.add_responsibilities(["duty one", "duty two"])
        builder.add_role("role")

        assert builder.build_profile() == (
            "# Role\n\nrole\n\n"
            "# Responsibilities\n\nduty one\n\nduty two\n\n"
            "# Constitution\n\nlaw\n\n"
            "# Context\n\nctx\n\n"
            "# Reference\n\nref\n"
        )

    def test_empty_sections_are_omitted(self):
        builder = ProfileBuilder()
        builder.add_role("role")
        builder.add_context([])
        builder.add_reference(["", "   "])
        assert list(builder.sections()) == [Section.ROLE.value]

    def test_bodies_are_trimmed(self):
        builder = ProfileBuilder()
        builder.add_responsibilities(["\n  duty  \n"])
        assert builder.sections() == {"Responsibilities": ["duty"]}


class TestNormalizeAlias:
    """Test alias normalisation."""

    def test_spaces_and_case(self):
        assert normalize_alias("Code Reviewer") == "code-reviewer"

    def test_punctuation_runs_collapse(self):
        assert normalize_alias("  QA // Lead (v2)!") == "qa-lead-v2"

    def test_already_normal(self):
        assert normalize_alias("tester") == "tester"


class TestAgentMetadata:
    """Test metadata derivation from role front-matter."""

    def test_requires_description(self):
        fm = Frontmatter.from_text("---\nalias: Tester\n---\n")
        assert build_agent_metadata(fm, "Tester") is None

    def test_blank_description_is_missing(self):
        fm = Frontmatter.from_text("---\ndescription: '   '\n---\n")
        assert build_agent_metadata(fm, "Tester") is None

    def test_basic_fields(self):
        fm = Frontmatter.from_text("---\ndescription: Reviews code\n---\n")
        metadata = build_agent_metadata(fm, "Code Reviewer")
        assert metadata.name == "code-reviewer"
        assert metadata.description == "Reviews code"
        assert metadata.tools is None

    def test_optional_fields(self):
        fm = Frontmatter.from_text(
            "---\n"
            "description: Reviews code\n"
            "agent_tools: [Read, Grep]\n"
            "agent_model: sonnet\n"
            "agent_permission_mode: plan\n"
            "---\n"
        )
        metadata = build_agent_metadata(fm, "Reviewer")
        assert metadata.tools == "Read, Grep"
        assert metadata.model == "sonnet"
        assert metadata.permission_mode == "plan"
