"""Error taxonomy for runtime resolution.

Every failure is fatal to a single resolution call. Callers decide the
fallback (for example, assume a self-contained deployment).
"""


class LocatorError(Exception):
    """Base class for all runtime-locator failures."""


class DiscoveryError(LocatorError):
    """The host runtime enumeration could not be obtained."""


class ManifestError(LocatorError):
    """The runtimeconfig manifest is missing, malformed, or contradictory."""


class ConfigError(LocatorError):
    """A configuration value (environment, CLI, or config file) is invalid."""


class UnsupportedPolicyError(LocatorError):
    """The requested roll-forward policy is not implemented."""
