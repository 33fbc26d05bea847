"""Data models for runtime discovery and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .version import RuntimeVersion, parse_version


class RollForward(Enum):
    """Roll-forward policy, as spelled in runtimeconfig.json and DOTNET_ROLL_FORWARD."""

    MINOR = "Minor"
    MAJOR = "Major"
    LATEST_PATCH = "LatestPatch"
    LATEST_MINOR = "LatestMinor"
    LATEST_MAJOR = "LatestMajor"
    DISABLE = "Disable"

    @classmethod
    def parse(cls, text: str) -> "RollForward":
        """Parse a policy name case-insensitively.

        Raises:
            ValueError: If the text names no policy.
        """
        needle = str(text).strip().lower()
        for member in cls:
            if member.value.lower() == needle:
                return member
        raise ValueError(f"Unknown roll-forward policy: {text!r}")


@dataclass(frozen=True)
class InstalledFramework:
    """One installed shared runtime, e.g. Microsoft.NETCore.App 8.0.5."""

    name: str
    path: str
    version: str

    @property
    def parsed_version(self) -> RuntimeVersion:
        return parse_version(self.version)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "path": self.path, "version": self.version}


@dataclass(frozen=True)
class InstalledSdk:
    """One installed SDK, e.g. 8.0.300."""

    path: str
    version: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "version": self.version}


@dataclass(frozen=True)
class DotnetEnvironmentInfo:
    """Snapshot of what the host knows about installed SDKs and runtimes.

    Attributes:
        hostfxr_version: Version of the host resolver that answered, e.g. "8.0.5"
        hostfxr_commit_hash: Commit of the runtime the host resolver was built from
        sdks: Installed SDKs in host enumeration order
        frameworks: Installed shared runtimes in host enumeration order
    """

    hostfxr_version: str
    hostfxr_commit_hash: str
    sdks: Tuple[InstalledSdk, ...] = ()
    frameworks: Tuple[InstalledFramework, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hostfxr_version": self.hostfxr_version,
            "hostfxr_commit_hash": self.hostfxr_commit_hash,
            "sdks": [s.to_dict() for s in self.sdks],
            "frameworks": [f.to_dict() for f in self.frameworks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DotnetEnvironmentInfo":
        """Deserialize from the dict produced by to_dict().

        Raises:
            KeyError, TypeError: If required fields are missing or mistyped.
        """
        return cls(
            hostfxr_version=str(data["hostfxr_version"]),
            hostfxr_commit_hash=str(data["hostfxr_commit_hash"]),
            sdks=tuple(
                InstalledSdk(path=str(s["path"]), version=str(s["version"]))
                for s in data.get("sdks") or []
            ),
            frameworks=tuple(
                InstalledFramework(
                    name=str(f["name"]), path=str(f["path"]), version=str(f["version"])
                )
                for f in data.get("frameworks") or []
            ),
        )


@dataclass(frozen=True)
class FrameworkReference:
    """A framework entry in the runtimeOptions of a runtimeconfig.json file."""

    name: str
    version: str


@dataclass(frozen=True)
class RuntimeOptions:
    """The runtimeOptions object of a runtimeconfig.json file.

    Only the settings relevant to framework resolution are captured;
    configProperties and friends are ignored.
    """

    tfm: str
    framework: Optional[FrameworkReference] = None
    frameworks: Optional[List[FrameworkReference]] = None
    included_frameworks: Optional[List[FrameworkReference]] = None
    roll_forward: Optional[RollForward] = None


@dataclass(frozen=True)
class FrameworkSelection:
    """Resolution found an installed framework for a desired name."""

    framework: InstalledFramework


@dataclass(frozen=True)
class Absent:
    """Resolution found nothing; the caller may assume a self-contained app."""


Selection = Union[FrameworkSelection, Absent]


@dataclass
class ResolutionResult:
    """Outcome of resolving one executable, kept for reporting."""

    executable: str
    roll_forward: RollForward
    desired: Dict[str, RuntimeVersion]
    selections: Dict[str, Selection]
    search_paths: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        frameworks = []
        for name, min_version in self.desired.items():
            selection = self.selections[name]
            if isinstance(selection, FrameworkSelection):
                selected = selection.framework.to_dict()
            elif isinstance(selection, Absent):
                selected = None
            else:
                raise TypeError(f"Unknown selection variant: {selection!r}")
            frameworks.append({
                "name": name,
                "requested_version": str(min_version),
                "selected": selected,
            })
        return {
            "executable": self.executable,
            "roll_forward": self.roll_forward.value,
            "frameworks": frameworks,
            "search_paths": list(self.search_paths),
        }
