"""Tests for the desired-set builder."""

import pytest

from resolution.desired import build_desired_frameworks
from resolution.errors import ManifestError
from resolution.models import FrameworkReference, RuntimeOptions
from resolution.version import RuntimeVersion


def ref(name, version):
    return FrameworkReference(name=name, version=version)


class TestBuildDesiredFrameworks:
    """Test build_desired_frameworks function."""

    def test_single_framework(self):
        options = RuntimeOptions(tfm="net8.0", framework=ref("Microsoft.NETCore.App", "8.0.0"))

        desired = build_desired_frameworks(options)

        assert desired == {"Microsoft.NETCore.App": RuntimeVersion(8, 0, 0)}

    def test_frameworks_list_keeps_manifest_order(self):
        options = RuntimeOptions(
            tfm="net8.0",
            frameworks=[ref("Microsoft.NETCore.App", "8.0.0"), ref("Microsoft.AspNetCore.App", "8.0.0")],
        )

        desired = build_desired_frameworks(options)

        assert list(desired) == ["Microsoft.NETCore.App", "Microsoft.AspNetCore.App"]

    def test_included_frameworks_supersede_framework(self):
        """Self-contained apps list includedFrameworks; those win over framework."""
        options = RuntimeOptions(
            tfm="net8.0",
            framework=ref("Microsoft.NETCore.App", "6.0.0"),
            included_frameworks=[ref("Microsoft.NETCore.App", "8.0.5")],
        )

        desired = build_desired_frameworks(options)

        assert desired == {"Microsoft.NETCore.App": RuntimeVersion(8, 0, 5)}

    def test_framework_wins_over_frameworks(self):
        options = RuntimeOptions(
            tfm="net8.0",
            framework=ref("A", "1.0.0"),
            frameworks=[ref("B", "2.0.0")],
        )

        assert build_desired_frameworks(options) == {"A": RuntimeVersion(1, 0, 0)}

    def test_no_requirement_raises(self):
        with pytest.raises(ManifestError):
            build_desired_frameworks(RuntimeOptions(tfm="net8.0"))

    def test_conflicting_versions_raise(self):
        options = RuntimeOptions(tfm="net8.0", frameworks=[ref("A", "1.0"), ref("A", "2.0")])

        with pytest.raises(ManifestError) as exc_info:
            build_desired_frameworks(options)

        assert "A" in str(exc_info.value)
        assert "1.0.0" in str(exc_info.value)
        assert "2.0.0" in str(exc_info.value)

    def test_repeated_identical_requirement_collapses(self):
        options = RuntimeOptions(tfm="net8.0", frameworks=[ref("A", "1.0"), ref("A", "1.0.0")])

        assert build_desired_frameworks(options) == {"A": RuntimeVersion(1, 0, 0)}

    def test_invalid_version_raises_manifest_error(self):
        options = RuntimeOptions(tfm="net8.0", framework=ref("A", "not-a-version"))

        with pytest.raises(ManifestError):
            build_desired_frameworks(options)

    @pytest.mark.parametrize("text", ["8.0.x", "8.x", "8.0.5abc", "1.2.3 garbage"])
    def test_wildcard_or_junk_version_raises_manifest_error(self, text):
        options = RuntimeOptions(tfm="net8.0", framework=ref("A", text))

        with pytest.raises(ManifestError):
            build_desired_frameworks(options)

    def test_empty_included_frameworks_gives_empty_set(self):
        options = RuntimeOptions(tfm="net8.0", included_frameworks=[], framework=ref("A", "1.0.0"))

        assert build_desired_frameworks(options) == {}
