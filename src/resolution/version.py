"""Runtime version parsing and ordering.

Versions are (major, minor, build) triples ordered lexicographically.
Pre-release and build metadata are not modelled: they are dropped on parse.
"""

import re
from typing import NamedTuple

import semantic_version

# two to four numeric components, optional pre-release and build metadata; no wildcards
_VERSION_SHAPE = re.compile(r"^\d+(\.\d+){1,3}(-[0-9A-Za-z.-]+)?(\+[0-9A-Za-z.-]+)?$")


class RuntimeVersion(NamedTuple):
    """A three-part runtime version; tuple ordering gives the total order."""

    major: int
    minor: int
    build: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.build}"

    def same_major(self, other: "RuntimeVersion") -> bool:
        """True if both versions share the major component."""
        return self.major == other.major

    def same_minor(self, other: "RuntimeVersion") -> bool:
        """True if both versions share the major and minor components."""
        return self.major == other.major and self.minor == other.minor


def parse_version(text: str) -> RuntimeVersion:
    """Parse version text such as "8.0.5", "8.0" or "9.0.0-preview.1".

    Args:
        text: Version text as found in a manifest or reported by the host.

    Returns:
        RuntimeVersion triple.

    Raises:
        ValueError: If the text is not a version.
    """
    if not isinstance(text, str) or not _VERSION_SHAPE.match(text.strip()):
        raise ValueError(f"Invalid version: {text!r}")
    try:
        ver = semantic_version.Version.coerce(text.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid version: {text!r}") from exc
    return RuntimeVersion(int(ver.major), int(ver.minor), int(ver.patch))
