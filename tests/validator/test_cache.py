"""Tests for praxis.validator.cache."""

import json

import pytest
from structlog.testing import capture_logs

from praxis.core.result import Err, Ok
from praxis.validator.cache import (
    CACHE_VERSION,
    CacheManager,
    CacheMetadata,
    document_name,
    sanitize_text,
)
from praxis.validator.models import Severity, ValidationResult

ROLE_PATH = "content/roles/tester.md"
META = CacheMetadata(document_type="role", spec_path="content/roles/README.md")


@pytest.fixture
def cache(tmp_path):
    return CacheManager(tmp_path / "cache")


def failing():
    return ValidationResult(
        compliant=False,
        issues=["Missing description"],
        reason="No - missing description",
        severity=Severity.ERROR,
    )


class TestCachePath:
    """Test cache file addressing."""

    def test_subpath_after_content(self, cache):
        assert cache.cache_path_for(ROLE_PATH) == cache.cache_root / "roles" / "tester.json"

    def test_absolute_path_uses_last_content_segment(self, cache):
        path = "/home/me/content/project/content/context/conventions/naming.md"
        assert cache.cache_path_for(path) == cache.cache_root / "context" / "conventions" / "naming.json"

    def test_legacy_path_embeds_hash(self, cache):
        assert cache.cache_path_for(ROLE_PATH, "ab12cd34") == cache.cache_root / "roles" / "tester_ab12cd34.json"

    def test_path_outside_content(self, cache):
        assert cache.cache_path_for("notes/todo.md") == cache.cache_root / "notes" / "todo.json"

    def test_backslashes(self, cache):
        assert cache.cache_path_for("content\\roles\\tester.md") == cache.cache_root / "roles" / "tester.json"


class TestReadWrite:
    """Test storing and retrieving results."""

    def test_round_trip(self, cache):
        assert cache.write(ROLE_PATH, "ab12cd34", failing(), META) is True
        result = cache.read(ROLE_PATH, "ab12cd34")
        assert result == failing()

    def test_compliant_result_has_no_severity(self, cache):
        cache.write(ROLE_PATH, "ab12cd34", ValidationResult(compliant=True, reason="Yes"), META)
        data = json.loads(cache.cache_path_for(ROLE_PATH).read_text(encoding="utf-8"))
        assert "severity" not in data["result"]
        assert cache.read(ROLE_PATH, "ab12cd34").severity is None

    def test_file_format(self, cache):
        cache.write(ROLE_PATH, "ab12cd34", failing(), META)
        data = json.loads(cache.cache_path_for(ROLE_PATH).read_text(encoding="utf-8"))
        assert data["version"] == CACHE_VERSION
        assert data["content_hash"] == "ab12cd34"
        assert data["document"] == {
            "path": ROLE_PATH,
            "type": "role",
            "spec_path": "content/roles/README.md",
        }
        assert data["result"]["severity"] == "error"
        assert "cached_at" in data

    def test_miss_when_absent(self, cache):
        assert cache.read(ROLE_PATH, "ab12cd34") is None

    def test_miss_on_hash_mismatch(self, cache):
        cache.write(ROLE_PATH, "ab12cd34", failing(), META)
        assert cache.read(ROLE_PATH, "ffffffff") is None
        assert cache.cache_path_for(ROLE_PATH).exists()

    def test_new_hash_overwrites_in_place(self, cache):
        cache.write(ROLE_PATH, "ab12cd34", failing(), META)
        cache.write(ROLE_PATH, "12345678", ValidationResult(compliant=True), META)
        assert cache.cache_files() == [cache.cache_path_for(ROLE_PATH)]
        assert cache.read(ROLE_PATH, "12345678").compliant

    def test_version_mismatch_is_miss(self, cache):
        cache.write(ROLE_PATH, "ab12cd34", failing(), META)
        path = cache.cache_path_for(ROLE_PATH)
        data = json.loads(path.read_text(encoding="utf-8"))
        data["version"] = "0.9"
        path.write_text(json.dumps(data), encoding="utf-8")
        assert cache.read(ROLE_PATH, "ab12cd34") is None

    def test_corrupt_file_deleted(self, cache):
        path = cache.cache_path_for(ROLE_PATH)
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")
        assert cache.read(ROLE_PATH, "ab12cd34") is None
        assert not path.exists()

    def test_invalid_result_deleted(self, cache):
        path = cache.cache_path_for(ROLE_PATH)
        path.parent.mkdir(parents=True)
        path.write_text(
            json.dumps({"version": CACHE_VERSION, "content_hash": "ab12cd34", "result": {"issues": 3}}),
            encoding="utf-8",
        )
        assert cache.read(ROLE_PATH, "ab12cd34") is None
        assert not path.exists()

    @pytest.mark.parametrize("stored", [["x"], "compliant", 1, None])
    def test_non_object_result_deleted(self, cache, stored):
        path = cache.cache_path_for(ROLE_PATH)
        path.parent.mkdir(parents=True)
        path.write_text(
            json.dumps({"version": CACHE_VERSION, "content_hash": "ab12cd34", "result": stored}),
            encoding="utf-8",
        )
        assert cache.read(ROLE_PATH, "ab12cd34") is None
        assert not path.exists()

    def test_legacy_file_is_read(self, cache):
        legacy = cache.cache_path_for(ROLE_PATH, "ab12cd34")
        legacy.parent.mkdir(parents=True)
        legacy.write_text(
            json.dumps({
                "version": CACHE_VERSION,
                "content_hash": "ab12cd34",
                "result": {"compliant": True, "issues": [], "reason": "Yes"},
            }),
            encoding="utf-8",
        )
        assert cache.read(ROLE_PATH, "ab12cd34").compliant

    def test_write_removes_legacy_files(self, cache):
        legacy = cache.cache_path_for(ROLE_PATH, "00000000")
        legacy.parent.mkdir(parents=True)
        legacy.write_text("{}", encoding="utf-8")
        other = cache.cache_path_for("content/roles/tester_notes.md")
        other.write_text("{}", encoding="utf-8")

        cache.write(ROLE_PATH, "ab12cd34", failing(), META)

        assert not legacy.exists()
        assert other.exists()

    def test_sanitizes_text(self, cache):
        result = ValidationResult(
            compliant=False,
            issues=['Use "quotes"\x07 carefully'],
            reason='line one\nline "two"\x00',
            severity=Severity.WARNING,
        )
        cache.write(ROLE_PATH, "ab12cd34", result, META)
        stored = cache.read(ROLE_PATH, "ab12cd34")
        assert stored.issues == ["Use 'quotes' carefully"]
        assert stored.reason == "line one\nline 'two'"


class TestBestEffortWrite:
    """Test that write failures never raise."""

    def test_unwritable_root(self, tmp_path):
        blocker = tmp_path / "cache"
        blocker.write_text("not a directory", encoding="utf-8")
        cache = CacheManager(blocker)

        assert cache.write(ROLE_PATH, "ab12cd34", failing(), META) is False
        outcome = cache.try_write(ROLE_PATH, "ab12cd34", failing(), META)
        assert isinstance(outcome, Err)

    def test_try_write_ok(self, cache):
        outcome = cache.try_write(ROLE_PATH, "ab12cd34", failing(), META)
        assert isinstance(outcome, Ok)
        assert outcome.unwrap() == cache.cache_path_for(ROLE_PATH)

    def test_failures_logged_only_in_debug(self, tmp_path):
        blocker = tmp_path / "cache"
        blocker.write_text("x", encoding="utf-8")

        with capture_logs() as quiet:
            CacheManager(blocker).write(ROLE_PATH, "ab12cd34", failing(), META)
        with capture_logs() as verbose:
            CacheManager(blocker, debug=True).write(ROLE_PATH, "ab12cd34", failing(), META)

        assert quiet == []
        assert verbose[0]["event"] == "cache_write_failed"


class TestStats:
    """Test cache statistics."""

    def test_empty(self, cache):
        stats = cache.stats()
        assert stats.total_files == 0
        assert stats.total_size == 0
        assert stats.by_type == {}

    def test_groups_by_top_level_dir(self, cache):
        cache.write(ROLE_PATH, "ab12cd34", failing(), META)
        cache.write("content/roles/other.md", "ab12cd34", failing(), META)
        cache.write("content/context/conventions/naming.md", "ab12cd34", failing(), META)

        stats = cache.stats()
        assert stats.total_files == 3
        assert stats.total_size > 0
        assert stats.by_type == {"roles": 2, "context": 1}
        assert stats.to_dict()["total_files"] == 3


class TestOrphans:
    """Test orphan detection."""

    def test_deleted_document_is_orphan(self, cache, praxis_project):
        content = praxis_project / "content"
        cache.write(str(content / "roles/test-role.md"), "ab12cd34", failing(), META)
        cache.write(str(content / "roles/deleted.md"), "ab12cd34", failing(), META)

        orphans = cache.orphaned_cache_files(content)

        assert [(o.type, o.doc_name) for o in orphans] == [("roles", "deleted")]
        assert orphans[0].reason == "document_missing"
        assert orphans[0].file.exists()

    def test_nested_type_directories(self, cache, praxis_project):
        content = praxis_project / "content"
        cache.write(str(content / "context/conventions/naming.md"), "ab12cd34", failing(), META)
        cache.write(str(content / "context/conventions/gone.md"), "ab12cd34", failing(), META)

        orphans = cache.orphaned_cache_files(content)
        assert [(o.type, o.doc_name) for o in orphans] == [("context/conventions", "gone")]

    def test_legacy_layout_maps_to_document(self, cache, praxis_project):
        content = praxis_project / "content"
        legacy = cache.cache_path_for(str(content / "roles/test-role.md"), "ab12cd34")
        legacy.parent.mkdir(parents=True)
        legacy.write_text("{}", encoding="utf-8")

        assert cache.orphaned_cache_files(content) == []

    def test_no_cache_dir(self, cache, praxis_project):
        assert cache.orphaned_cache_files(praxis_project / "content") == []


class TestHelpers:
    """Test module-level helpers."""

    def test_document_name_strips_legacy_suffix(self, tmp_path):
        assert document_name(tmp_path / "tester_ab12cd34.json") == "tester"
        assert document_name(tmp_path / "tester.json") == "tester"
        assert document_name(tmp_path / "write_tests.json") == "write_tests"

    def test_sanitize_keeps_whitespace(self):
        assert sanitize_text("a\tb\r\nc\x1b") == "a\tb\r\nc"
