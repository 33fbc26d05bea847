"""Desired-set builder: turn a manifest's requirement section into name -> version."""

from __future__ import annotations

import logging
from typing import Dict, List

from .errors import ManifestError
from .models import FrameworkReference, RuntimeOptions
from .version import RuntimeVersion, parse_version

logger = logging.getLogger(__name__)


def _requirement_section(options: RuntimeOptions) -> List[FrameworkReference]:
    """Pick the requirement shape that applies; includedFrameworks supersedes the others."""
    if options.included_frameworks is not None:
        return list(options.included_frameworks)
    if options.framework is not None:
        return [options.framework]
    if options.frameworks is not None:
        return list(options.frameworks)
    raise ManifestError(
        "Expected runtimeconfig.json to have a framework, frameworks or "
        "includedFrameworks entry, but it had none"
    )


def build_desired_frameworks(options: RuntimeOptions) -> Dict[str, RuntimeVersion]:
    """Map each required framework name to its single minimum version.

    Args:
        options: Parsed runtimeOptions.

    Returns:
        Dict ordered as the manifest lists the frameworks.

    Raises:
        ManifestError: If no requirement is present, a version does not parse,
            or one name is required at two different versions.
    """
    desired: Dict[str, RuntimeVersion] = {}
    for ref in _requirement_section(options):
        try:
            version = parse_version(ref.version)
        except ValueError as exc:
            raise ManifestError(f"Framework {ref.name} has an invalid version: {exc}") from exc
        existing = desired.get(ref.name)
        if existing is None:
            desired[ref.name] = version
        elif existing != version:
            raise ManifestError(
                f"Framework {ref.name} is required at conflicting versions {existing} and {version}"
            )
        else:
            logger.debug("Ignoring repeated requirement %s %s", ref.name, version)
    return desired
