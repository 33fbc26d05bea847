"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    DISCOVERY_ERROR = 2
    CONFIG_ERROR = 3
    UNSUPPORTED_POLICY = 4


class OutputFormats(Enum):
    """Output formats for the resolve command.

    Args:
        Enum (string): Output formats supported by the program.
    """

    TEXT = "text"
    JSON = "json"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    EXECUTABLE_SUFFIX = ".dll"
    RUNTIME_CONFIG_SUFFIX = ".runtimeconfig.json"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    FILE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

    # Environment variables
    ENV_ROLL_FORWARD = "DOTNET_ROLL_FORWARD"
    ENV_DOTNET_ROOT = "DOTNET_ROOT"
    ENV_HOSTFXR = "RUNTIME_LOCATOR_LIBHOSTFXR"
    ENV_LOG_LEVEL = "RUNTIME_LOCATOR_LOG_LEVEL"

    # Native host library
    HOSTFXR_GLOB = "*hostfxr*"
    HOSTFXR_EXPORT = "hostfxr_get_dotnet_environment_info"
    HOSTFXR_FXR_SUBDIR = ("host", "fxr")
    # hostfxr from these majors predates the environment-info export
    HOSTFXR_UNSUPPORTED_PREFIXES = ("3.", "5.")
    DOTNET_DEFAULT_ROOTS_POSIX = [
        "/usr/share/dotnet",
        "/usr/lib/dotnet",
        "/usr/lib64/dotnet",
        "/usr/local/share/dotnet",
        "/opt/dotnet",
    ]
    DOTNET_DEFAULT_ROOTS_WINDOWS = [
        r"C:\Program Files\dotnet",
        r"C:\Program Files (x86)\dotnet",
    ]

    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    CONFIG_KEYS = ["dotnet", "hostfxr", "roll_forward", "environment", "log_level"]
    SNAPSHOT_FORMAT_VERSION = 1
