"""Finding the dotnet installation root and its libhostfxr."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Iterator, List, Mapping, Optional, Tuple

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from resolution.errors import DiscoveryError
from resolution.version import RuntimeVersion, parse_version

logger = logging.getLogger(__name__)


def _default_roots() -> List[str]:
    if sys.platform == "win32":
        return list(Constants.DOTNET_DEFAULT_ROOTS_WINDOWS)
    return list(Constants.DOTNET_DEFAULT_ROOTS_POSIX)


def _root_candidates(dotnet: Optional[str], environ: Mapping[str, str]) -> Iterator[Tuple[str, Path]]:
    """Yield (source, directory) pairs in precedence order."""
    if dotnet:
        # Path.resolve follows every link, e.g. /usr/bin/dotnet -> /usr/share/dotnet/dotnet
        yield "argument", Path(dotnet).resolve().parent
        return
    env_root = environ.get(Constants.ENV_DOTNET_ROOT)
    if env_root:
        yield "environment", Path(env_root)
    on_path = shutil.which("dotnet")
    if on_path:
        yield "path", Path(on_path).resolve().parent
    for root in _default_roots():
        yield "default", Path(root)


def find_dotnet_root(dotnet: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Return the directory containing the `dotnet` host, or None if none is found.

    Args:
        dotnet: Explicit `dotnet` executable; symlinks are resolved before taking its parent.
        environ: Environment variables to consult (defaults to os.environ).
    """
    env = os.environ if environ is None else environ
    for source, root in _root_candidates(dotnet, env):
        if source == "argument" or root.is_dir():
            if is_debug_enabled(logger):
                logger.debug("Selected dotnet root", extra=extra_context(
                    event="decision", component="locate", action="find_dotnet_root",
                    target=str(root), outcome=source,
                ))
            return root
    return None


def _fxr_versions(fxr_dir: Path) -> List[Tuple[RuntimeVersion, Path]]:
    found: List[Tuple[RuntimeVersion, Path]] = []
    for child in fxr_dir.iterdir():
        if not child.is_dir():
            continue
        if child.name.startswith(Constants.HOSTFXR_UNSUPPORTED_PREFIXES):
            continue
        try:
            found.append((parse_version(child.name), child))
        except ValueError:
            logger.debug("Ignoring non-version directory %s", child)
    found.sort(key=lambda item: item[0], reverse=True)
    return found


def locate_hostfxr(dotnet_root: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> Path:
    """Find the libhostfxr shared library to query.

    The RUNTIME_LOCATOR_LIBHOSTFXR environment variable wins outright.
    Otherwise the newest supported ``host/fxr/<version>`` directory under the
    dotnet root (or the default install locations) is searched.

    Raises:
        DiscoveryError: If no library can be found.
    """
    env = os.environ if environ is None else environ
    override = env.get(Constants.ENV_HOSTFXR)
    if override:
        return Path(override)

    roots: List[Path] = [dotnet_root] if dotnet_root is not None else [Path(r) for r in _default_roots()]
    searched: List[str] = []
    for root in roots:
        fxr_dir = root.joinpath(*Constants.HOSTFXR_FXR_SUBDIR)
        searched.append(str(fxr_dir))
        if not fxr_dir.is_dir():
            continue
        for _, version_dir in _fxr_versions(fxr_dir):
            libs = sorted(p for p in version_dir.glob(Constants.HOSTFXR_GLOB) if p.is_file())
            if libs:
                logger.debug("Using hostfxr library %s", libs[0])
                return libs[0]
    raise DiscoveryError(
        "Unable to locate libhostfxr; searched: " + (", ".join(searched) or "<nothing>")
        + f". Set {Constants.ENV_HOSTFXR} to the library path."
    )
