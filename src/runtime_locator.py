"""runtime-locator - pick the installed .NET runtime that would load an executable.

    Raises:
        SystemExit: Always, with one of ExitCodes

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from constants import ExitCodes, OutputFormats
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import build_settings
from resolution.errors import (
    ConfigError,
    DiscoveryError,
    LocatorError,
    ManifestError,
    UnsupportedPolicyError,
)

logger = logging.getLogger(__name__)

_EXIT_CODES = [
    (ManifestError, ExitCodes.FILE_ERROR),
    (DiscoveryError, ExitCodes.DISCOVERY_ERROR),
    (ConfigError, ExitCodes.CONFIG_ERROR),
    (UnsupportedPolicyError, ExitCodes.UNSUPPORTED_POLICY),
]


def exit_code_for(error):
    """Map a LocatorError to the process exit code."""
    for error_type, code in _EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCodes.FILE_ERROR


def _setup_logging(args, settings=None):
    """Configure logging from the CLI first, then again once the config file is known."""
    name = settings.log_level if settings is not None else getattr(args, "LOG_LEVEL", None)
    level = getattr(logging, name) if name else None
    configure_logging(level)


def load_snapshot_for(settings):
    """Return the configured environment snapshot, or None to query hostfxr during resolution."""
    if not settings.environment:
        return None
    from hostfxr.snapshot import load_environment  # pylint: disable=import-outside-toplevel
    logger.info("Using environment snapshot %s", settings.environment)
    return load_environment(settings.environment)


def run_resolve(args, settings):
    """Resolve one executable and print its probe directories."""
    from resolution.service import resolve_executable  # pylint: disable=import-outside-toplevel

    # the manifest is validated before hostfxr is loaded
    result = resolve_executable(
        args.EXECUTABLE,
        settings.dotnet,
        environment=load_snapshot_for(settings),
        roll_forward=settings.roll_forward,
        hostfxr_path=settings.hostfxr,
    )
    logger.info("Roll-forward policy: %s", result.roll_forward.value)
    if args.OUTPUT_FORMAT == OutputFormats.JSON.value:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=4))
    else:
        for path in result.search_paths:
            print(path)


def format_environment(info):
    """Render an environment in the spirit of `dotnet --info`."""
    lines = [
        f"Host (hostfxr): {info.hostfxr_version}",
        f"  Commit: {info.hostfxr_commit_hash}",
        "",
        "SDKs installed:",
    ]
    lines.extend(f"  {sdk.version} [{sdk.path}]" for sdk in info.sdks)
    if not info.sdks:
        lines.append("  No SDKs were found.")
    lines.append("")
    lines.append("Runtimes installed:")
    lines.extend(f"  {fw.name} {fw.version} [{fw.path}]" for fw in info.frameworks)
    if not info.frameworks:
        lines.append("  No runtimes were found.")
    return "\n".join(lines)


def run_info(args, settings):
    """Show (and optionally capture) the discovered environment."""
    from hostfxr.interop import get_environment_info  # pylint: disable=import-outside-toplevel
    from hostfxr.snapshot import dump_environment  # pylint: disable=import-outside-toplevel

    info = get_environment_info(settings.dotnet, hostfxr_path=settings.hostfxr)
    if getattr(args, "OUTPUT", None):
        dump_environment(info, args.OUTPUT)
    print(format_environment(info))


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    if getattr(args, "LOG_FILE", None):
        add_file_handler(args.LOG_FILE)
        logger.info("Logging to file: %s", args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug("CLI start", extra=extra_context(
            event="function_entry", component="cli", action=args.action
        ))

    try:
        settings = build_settings(args)
        _setup_logging(args, settings)
        if args.action == "resolve":
            run_resolve(args, settings)
        elif args.action == "info":
            run_info(args, settings)
    except LocatorError as e:
        logger.error("%s", e)
        sys.exit(exit_code_for(e).value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
