"""Host discovery package.

This package answers "what is installed on this machine?":
- locate.py: finding the dotnet root and its libhostfxr
- interop.py: calling hostfxr_get_dotnet_environment_info through ctypes
- snapshot.py: JSON capture and replay of a discovered environment
"""

from .interop import get_environment_info  # noqa: F401
from .locate import find_dotnet_root, locate_hostfxr  # noqa: F401
from .snapshot import dump_environment, load_environment  # noqa: F401

__all__ = [
    "get_environment_info",
    "find_dotnet_root",
    "locate_hostfxr",
    "dump_environment",
    "load_environment",
]
