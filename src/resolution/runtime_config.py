"""Locating and parsing runtimeconfig.json manifests."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .errors import ManifestError
from .models import FrameworkReference, RollForward, RuntimeOptions

logger = logging.getLogger(__name__)


def runtime_config_path_for(executable_path: str) -> Tuple[str, str]:
    """Derive the executable directory and sibling runtimeconfig path.

    Args:
        executable_path: Path to an OutputType=Exe .dll file.

    Returns:
        Tuple of (absolute executable directory, runtimeconfig.json path).

    Raises:
        ManifestError: If the path does not name a .dll file.
    """
    suffix = Constants.EXECUTABLE_SUFFIX
    if not executable_path.endswith(suffix):
        raise ManifestError(
            f"Executable must have the extension '{suffix}'; provided: {executable_path}"
        )
    full = os.path.abspath(executable_path)
    directory, file_name = os.path.split(full)
    stem = file_name[: -len(suffix)]
    if not stem:
        raise ManifestError(f"Executable path {executable_path} has no file name")
    return directory, os.path.join(directory, f"{stem}{Constants.RUNTIME_CONFIG_SUFFIX}")


def _parse_reference(raw: Any, where: str) -> FrameworkReference:
    if not isinstance(raw, dict):
        raise ManifestError(f"{where}: expected an object with 'name' and 'version'")
    name = raw.get("name")
    version = raw.get("version")
    if not isinstance(name, str) or not name:
        raise ManifestError(f"{where}: missing 'name'")
    if not isinstance(version, str) or not version:
        raise ManifestError(f"{where}: missing 'version' for framework {name}")
    return FrameworkReference(name=name, version=version)


def _parse_reference_list(raw: Any, key: str) -> Optional[List[FrameworkReference]]:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ManifestError(f"runtimeOptions.{key}: expected a list")
    return [_parse_reference(item, f"runtimeOptions.{key}[{i}]") for i, item in enumerate(raw)]


def parse_runtime_options(data: Dict[str, Any]) -> RuntimeOptions:
    """Build RuntimeOptions from the decoded contents of a runtimeconfig.json file.

    Raises:
        ManifestError: If the document does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise ManifestError("runtimeconfig document must be a JSON object")
    options = data.get("runtimeOptions")
    if not isinstance(options, dict):
        raise ManifestError("runtimeconfig document has no 'runtimeOptions' object")

    tfm = options.get("tfm")
    if not isinstance(tfm, str) or not tfm:
        raise ManifestError("runtimeOptions is missing the required 'tfm' entry")

    framework = None
    if options.get("framework") is not None:
        framework = _parse_reference(options["framework"], "runtimeOptions.framework")

    roll_forward = None
    raw_roll = options.get("rollForward")
    if raw_roll is not None:
        try:
            roll_forward = RollForward.parse(raw_roll)
        except ValueError as exc:
            raise ManifestError(f"runtimeOptions.rollForward: {exc}") from exc

    return RuntimeOptions(
        tfm=tfm,
        framework=framework,
        frameworks=_parse_reference_list(options.get("frameworks"), "frameworks"),
        included_frameworks=_parse_reference_list(
            options.get("includedFrameworks"), "includedFrameworks"
        ),
        roll_forward=roll_forward,
    )


def load_runtime_options(path: str) -> RuntimeOptions:
    """Read and parse a runtimeconfig.json file.

    Raises:
        ManifestError: If the file cannot be read or parsed.
    """
    if is_debug_enabled(logger):
        logger.debug("Reading runtime config", extra=extra_context(
            event="function_entry", component="runtime_config", action="load", target=path
        ))
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as exc:
        raise ManifestError(f"Runtime config not found: {path}") from exc
    except OSError as exc:
        raise ManifestError(f"Runtime config could not be read: {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Failed to parse contents of {path} as a runtime config: {exc}") from exc
    try:
        return parse_runtime_options(data)
    except ManifestError as exc:
        raise ManifestError(f"{path}: {exc}") from exc
