"""Tests for projecting selections onto probe directories."""

import os

import pytest

from resolution.models import Absent, FrameworkSelection, InstalledFramework
from resolution.search_paths import project_search_paths


def selected(name, version, root="/usr/share/dotnet/shared"):
    return FrameworkSelection(InstalledFramework(name=name, path=f"{root}/{name}", version=version))


class TestProjectSearchPaths:
    """Test project_search_paths function."""

    def test_executable_dir_first(self):
        paths = project_search_paths("/apps/demo", {"A": selected("A", "8.0.5")})

        assert paths[0] == "/apps/demo"
        assert paths[1] == os.path.join("/usr/share/dotnet/shared/A", "8.0.5")

    def test_absent_contributes_nothing(self):
        paths = project_search_paths("/apps/demo", {"A": Absent()})

        assert paths == ["/apps/demo"]

    def test_desired_order_is_kept(self):
        selections = {"B": selected("B", "2.0.0"), "A": Absent(), "C": selected("C", "3.0.0")}

        paths = project_search_paths("/apps/demo", selections)

        assert paths == [
            "/apps/demo",
            os.path.join("/usr/share/dotnet/shared/B", "2.0.0"),
            os.path.join("/usr/share/dotnet/shared/C", "3.0.0"),
        ]

    def test_duplicates_collapse(self):
        sel = selected("A", "1.0.0")

        paths = project_search_paths("/apps/demo", {"A": sel, "A2": sel})

        assert len(paths) == 2

    def test_unknown_variant_raises(self):
        with pytest.raises(TypeError):
            project_search_paths("/apps/demo", {"A": "not-a-selection"})
