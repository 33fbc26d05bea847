"""Tests for capturing and replaying environment snapshots."""

import json

import pytest

from hostfxr.snapshot import dump_environment, environment_to_document, load_environment
from resolution.errors import DiscoveryError


class TestSnapshot:
    """Test dump_environment and load_environment."""

    def test_dump_then_load_preserves_order(self, environment, tmp_path):
        path = tmp_path / "env.json"

        dump_environment(environment, str(path))
        loaded = load_environment(str(path))

        assert loaded == environment
        assert [fw.version for fw in loaded.frameworks] == [fw.version for fw in environment.frameworks]

    def test_document_is_versioned(self, environment):
        document = environment_to_document(environment)

        assert document["format_version"] == 1
        assert document["environment"]["hostfxr_version"] == "8.0.5"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DiscoveryError):
            load_environment(str(tmp_path / "absent.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "env.json"
        path.write_text("not json", encoding="utf-8")

        with pytest.raises(DiscoveryError):
            load_environment(str(path))

    def test_unknown_format_version(self, environment, tmp_path):
        path = tmp_path / "env.json"
        document = environment_to_document(environment)
        document["format_version"] = 99
        path.write_text(json.dumps(document), encoding="utf-8")

        with pytest.raises(DiscoveryError) as exc_info:
            load_environment(str(path))

        assert "99" in str(exc_info.value)

    def test_malformed_framework_entry(self, tmp_path):
        path = tmp_path / "env.json"
        path.write_text(json.dumps({
            "format_version": 1,
            "environment": {
                "hostfxr_version": "8.0.5",
                "hostfxr_commit_hash": "abc",
                "frameworks": [{"name": "A"}],
            },
        }), encoding="utf-8")

        with pytest.raises(DiscoveryError):
            load_environment(str(path))

    def test_unwritable_destination(self, environment, tmp_path):
        with pytest.raises(DiscoveryError):
            dump_environment(environment, str(tmp_path / "no" / "such" / "dir" / "env.json"))
