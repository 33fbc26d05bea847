"""Argument parsing functionality for runtime-locator."""

import argparse

from constants import Constants, OutputFormats


def _add_common_options(parser):
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: INFO)",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--dotnet",
                        dest="DOTNET",
                        help="Path to the `dotnet` executable whose installation should be queried",
                        action="store",
                        type=str)
    parser.add_argument("--hostfxr",
                        dest="HOSTFXR",
                        help=f"Path to libhostfxr (overrides ${Constants.ENV_HOSTFXR} and the search)",
                        action="store",
                        type=str)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="runtime-locator",
        description=(
            "runtime-locator - pick the installed .NET runtime that would load an executable"
        ),
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="List the directories to probe when loading an executable",
    )
    resolve_parser.add_argument("EXECUTABLE",
                                help="Path to an OutputType=Exe .dll file",
                                type=str)
    resolve_parser.add_argument("-e", "--environment",
                                dest="ENVIRONMENT",
                                help="Resolve against an environment snapshot instead of querying hostfxr",
                                action="store",
                                type=str)
    resolve_parser.add_argument("--roll-forward",
                                dest="ROLL_FORWARD",
                                help=f"Roll-forward policy; beats ${Constants.ENV_ROLL_FORWARD} and the manifest",
                                action="store",
                                type=str)
    resolve_parser.add_argument("-f", "--format",
                                dest="OUTPUT_FORMAT",
                                help="Output format (text or json, default: text)",
                                action="store",
                                type=str.lower,
                                choices=[f.value for f in OutputFormats],
                                default=OutputFormats.TEXT.value)
    _add_common_options(resolve_parser)

    info_parser = subparsers.add_parser(
        "info",
        help="Show the installed SDKs and runtimes known to hostfxr",
    )
    info_parser.add_argument("-o", "--output",
                             dest="OUTPUT",
                             help="Write an environment snapshot (JSON) to this path",
                             action="store",
                             type=str)
    _add_common_options(info_parser)

    return parser.parse_args(argv)
