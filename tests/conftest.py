"""Shared fixtures for runtime-locator tests."""

import json

import pytest

from resolution.models import DotnetEnvironmentInfo, InstalledFramework, InstalledSdk

NETCORE = "Microsoft.NETCore.App"
ASPNETCORE = "Microsoft.AspNetCore.App"
SHARED = "/usr/share/dotnet/shared"


def framework(name, version):
    """Helper to build an installed framework under the usual shared/ layout."""
    return InstalledFramework(name=name, path=f"{SHARED}/{name}", version=version)


@pytest.fixture
def environment():
    """A host with two NETCore minors, one ASP.NET Core and an SDK."""
    return DotnetEnvironmentInfo(
        hostfxr_version="8.0.5",
        hostfxr_commit_hash="abc123",
        sdks=(InstalledSdk(path="/usr/share/dotnet/sdk", version="8.0.300"),),
        frameworks=(
            framework(NETCORE, "6.0.30"),
            framework(NETCORE, "8.0.4"),
            framework(NETCORE, "8.0.5"),
            framework(ASPNETCORE, "8.0.5"),
        ),
    )


@pytest.fixture
def write_app(tmp_path):
    """Create app.dll plus its runtimeconfig.json; returns the dll path."""

    def _write(runtime_options, name="app"):
        dll = tmp_path / f"{name}.dll"
        dll.write_bytes(b"")
        config = tmp_path / f"{name}.runtimeconfig.json"
        config.write_text(json.dumps({"runtimeOptions": runtime_options}), encoding="utf-8")
        return str(dll)

    return _write
