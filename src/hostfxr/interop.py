"""Calling hostfxr_get_dotnet_environment_info through ctypes.

The native function reports its result through a callback that receives a
pointer to a struct valid only for the duration of the callback. The values
are copied into immutable Python objects inside the callback and nothing
native escapes this module.

Signature (hostfxr.h)::

    int32_t hostfxr_get_dotnet_environment_info(
        const char_t* dotnet_root,
        void* reserved,
        hostfxr_get_dotnet_environment_info_result_fn result,
        void* result_context);

``char_t`` is ``wchar_t`` on Windows and UTF-8 ``char`` elsewhere.
"""

from __future__ import annotations

import ctypes
import logging
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Union

from constants import Constants
from common.logging_utils import Timer, extra_context, is_debug_enabled
from resolution.errors import DiscoveryError
from resolution.models import DotnetEnvironmentInfo, InstalledFramework, InstalledSdk

from .locate import find_dotnet_root, locate_hostfxr

logger = logging.getLogger(__name__)

_IS_WINDOWS = sys.platform == "win32"
CharP = ctypes.c_wchar_p if _IS_WINDOWS else ctypes.c_char_p


class SdkInfoNative(ctypes.Structure):  # pylint: disable=too-few-public-methods
    """hostfxr_dotnet_environment_sdk_info"""

    _fields_ = [
        ("size", ctypes.c_size_t),
        ("version", CharP),
        ("path", CharP),
    ]


class FrameworkInfoNative(ctypes.Structure):  # pylint: disable=too-few-public-methods
    """hostfxr_dotnet_environment_framework_info"""

    _fields_ = [
        ("size", ctypes.c_size_t),
        ("name", CharP),
        ("version", CharP),
        ("path", CharP),
    ]


class EnvironmentInfoNative(ctypes.Structure):  # pylint: disable=too-few-public-methods
    """hostfxr_dotnet_environment_info"""

    _fields_ = [
        ("size", ctypes.c_size_t),
        ("hostfxr_version", CharP),
        ("hostfxr_commit_hash", CharP),
        ("sdk_count", ctypes.c_size_t),
        ("sdks", ctypes.POINTER(SdkInfoNative)),
        ("framework_count", ctypes.c_size_t),
        ("frameworks", ctypes.POINTER(FrameworkInfoNative)),
    ]


RESULT_CALLBACK = ctypes.CFUNCTYPE(None, ctypes.POINTER(EnvironmentInfoNative), ctypes.c_void_p)


def to_native_string(text: Optional[str]) -> Union[bytes, str, None]:
    """Encode text the way this platform's char_t expects."""
    if text is None or _IS_WINDOWS:
        return text
    return text.encode("utf-8")


def _from_native_string(value: Union[bytes, str, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _check_size(struct: ctypes.Structure, what: str) -> None:
    expected = ctypes.sizeof(type(struct))
    if struct.size != expected:
        raise DiscoveryError(f"{what}: size field {struct.size} did not match expected size {expected}")


def from_native(native: EnvironmentInfoNative) -> DotnetEnvironmentInfo:
    """Copy a native environment-info struct into a DotnetEnvironmentInfo.

    Raises:
        DiscoveryError: If any struct's size field disagrees with the expected layout.
    """
    _check_size(native, "environment info")

    sdks: List[InstalledSdk] = []
    for i in range(native.sdk_count):
        sdk = native.sdks[i]
        _check_size(sdk, f"sdk info {i}")
        sdks.append(InstalledSdk(path=_from_native_string(sdk.path), version=_from_native_string(sdk.version)))

    frameworks: List[InstalledFramework] = []
    for i in range(native.framework_count):
        fw = native.frameworks[i]
        _check_size(fw, f"framework info {i}")
        frameworks.append(InstalledFramework(
            name=_from_native_string(fw.name),
            path=_from_native_string(fw.path),
            version=_from_native_string(fw.version),
        ))

    return DotnetEnvironmentInfo(
        hostfxr_version=_from_native_string(native.hostfxr_version),
        hostfxr_commit_hash=_from_native_string(native.hostfxr_commit_hash),
        sdks=tuple(sdks),
        frameworks=tuple(frameworks),
    )


def _load_library(path: Path) -> ctypes.CDLL:
    try:
        return ctypes.CDLL(str(path))
    except OSError as exc:
        raise DiscoveryError(f"Unable to load native library {path}: {exc}") from exc


def get_environment_info(
    dotnet: Optional[str] = None,
    hostfxr_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> DotnetEnvironmentInfo:
    """Ask libhostfxr which SDKs and frameworks are installed.

    Args:
        dotnet: A `dotnet` executable whose installation to query; None to find one.
        hostfxr_path: Explicit libhostfxr path, bypassing the search.
        environ: Environment variables to consult (defaults to os.environ).

    Raises:
        DiscoveryError: On any failure; nothing is retried.
    """
    dotnet_root = find_dotnet_root(dotnet, environ)
    lib_path = Path(hostfxr_path) if hostfxr_path else locate_hostfxr(dotnet_root, environ)
    lib = _load_library(lib_path)
    try:
        func = getattr(lib, Constants.HOSTFXR_EXPORT)
    except AttributeError as exc:
        raise DiscoveryError(f"Unable to load {Constants.HOSTFXR_EXPORT} from {lib_path}") from exc
    func.restype = ctypes.c_int32
    func.argtypes = [CharP, ctypes.c_void_p, RESULT_CALLBACK, ctypes.c_void_p]

    outcomes: List[Union[DotnetEnvironmentInfo, DiscoveryError]] = []

    def _store(info_ptr, _context):
        # exceptions cannot cross the native frame; hand them back through outcomes
        try:
            outcomes.append(from_native(info_ptr.contents))
        except DiscoveryError as exc:
            outcomes.append(exc)

    callback = RESULT_CALLBACK(_store)
    root_arg = to_native_string(str(dotnet_root)) if dotnet_root is not None else None
    with Timer() as t:
        rc = func(root_arg, None, callback, None)
    if is_debug_enabled(logger):
        logger.debug("hostfxr call returned", extra=extra_context(
            event="native_call", component="interop", action=Constants.HOSTFXR_EXPORT,
            target=str(lib_path), status_code=rc, duration_ms=t.duration_ms(),
        ))
    if rc != 0:
        raise DiscoveryError(
            f"Could not obtain .NET environment information (exit code: {rc & 0xFFFFFFFF:#010x})"
        )
    if not outcomes:
        raise DiscoveryError(
            "Failed to populate environment information, despite the native call succeeding"
        )
    outcome = outcomes[0]
    if isinstance(outcome, DiscoveryError):
        raise outcome
    logger.info(
        "Discovered %d framework(s) and %d SDK(s) via hostfxr %s",
        len(outcome.frameworks), len(outcome.sdks), outcome.hostfxr_version,
    )
    return outcome
