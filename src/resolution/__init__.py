"""Runtime resolution engine.

Given the frameworks a runtimeconfig.json requires, the installed frameworks
on the host, and a roll-forward policy, pick one installed framework per
requirement and project the picks into ordered probe directories.

- version.py: three-part version parsing and ordering
- runtime_config.py: locating and parsing runtimeconfig.json
- desired.py: requirement section -> name/version map
- candidates.py: installed frameworks -> per-name candidate pools
- policies.py: roll-forward policy selection and dispatch
- search_paths.py: selections -> ordered directories
- service.py: resolve() entry point
"""

from .errors import (
    ConfigError,
    DiscoveryError,
    LocatorError,
    ManifestError,
    UnsupportedPolicyError,
)
from .models import (
    Absent,
    DotnetEnvironmentInfo,
    FrameworkReference,
    FrameworkSelection,
    InstalledFramework,
    InstalledSdk,
    ResolutionResult,
    RollForward,
    RuntimeOptions,
    Selection,
)
from .version import RuntimeVersion, parse_version
from .service import resolve, resolve_executable, select_runtimes

__all__ = [
    # Errors
    "LocatorError",
    "DiscoveryError",
    "ManifestError",
    "ConfigError",
    "UnsupportedPolicyError",
    # Models
    "Absent",
    "DotnetEnvironmentInfo",
    "FrameworkReference",
    "FrameworkSelection",
    "InstalledFramework",
    "InstalledSdk",
    "ResolutionResult",
    "RollForward",
    "RuntimeOptions",
    "Selection",
    "RuntimeVersion",
    "parse_version",
    # Entry points
    "resolve",
    "resolve_executable",
    "select_runtimes",
]
