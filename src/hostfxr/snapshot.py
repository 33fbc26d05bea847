"""JSON snapshots of a discovered environment.

A snapshot lets one enumeration be captured (``runtime-locator info -o``) and
replayed later without loading libhostfxr.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from constants import Constants
from resolution.errors import DiscoveryError
from resolution.models import DotnetEnvironmentInfo

logger = logging.getLogger(__name__)


def environment_to_document(info: DotnetEnvironmentInfo) -> Dict[str, Any]:
    """Wrap an environment in the versioned snapshot document."""
    return {"format_version": Constants.SNAPSHOT_FORMAT_VERSION, "environment": info.to_dict()}


def dump_environment(info: DotnetEnvironmentInfo, path: str) -> None:
    """Write a snapshot file.

    Raises:
        DiscoveryError: If the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(environment_to_document(info), fh, ensure_ascii=False, indent=4)
    except OSError as exc:
        raise DiscoveryError(f"Snapshot couldn't be written to {path}: {exc}") from exc
    logger.info("Environment snapshot written to %s", path)


def load_environment(path: str) -> DotnetEnvironmentInfo:
    """Read a snapshot file written by dump_environment().

    Raises:
        DiscoveryError: If the file is missing, malformed, or of another format version.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            document = json.load(fh)
    except OSError as exc:
        raise DiscoveryError(f"Snapshot could not be read: {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DiscoveryError(f"Snapshot {path} is not valid JSON: {exc}") from exc

    if not isinstance(document, dict) or "environment" not in document:
        raise DiscoveryError(f"Snapshot {path} has no 'environment' object")
    version = document.get("format_version")
    if version != Constants.SNAPSHOT_FORMAT_VERSION:
        raise DiscoveryError(f"Snapshot {path} has unsupported format_version {version!r}")
    try:
        return DotnetEnvironmentInfo.from_dict(document["environment"])
    except (KeyError, TypeError, AttributeError) as exc:
        raise DiscoveryError(f"Snapshot {path} is malformed: {exc}") from exc
