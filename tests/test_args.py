"""Tests for command-line argument parsing."""

import pytest

from args import parse_args


class TestParseArgs:
    """Test parse_args function."""

    def test_resolve_defaults(self):
        args = parse_args(["resolve", "app.dll"])

        assert args.action == "resolve"
        assert args.EXECUTABLE == "app.dll"
        assert args.OUTPUT_FORMAT == "text"
        assert args.ROLL_FORWARD is None
        assert args.LOG_LEVEL is None

    def test_resolve_options(self):
        args = parse_args([
            "resolve", "app.dll",
            "-e", "env.json",
            "--roll-forward", "latestmajor",
            "-f", "JSON",
            "--loglevel", "debug",
            "--dotnet", "/opt/dotnet/dotnet",
        ])

        assert args.ENVIRONMENT == "env.json"
        assert args.ROLL_FORWARD == "latestmajor"
        assert args.OUTPUT_FORMAT == "json"
        assert args.LOG_LEVEL == "DEBUG"
        assert args.DOTNET == "/opt/dotnet/dotnet"

    def test_info_output(self):
        args = parse_args(["info", "-o", "snap.json", "--hostfxr", "/x/libhostfxr.so"])

        assert args.action == "info"
        assert args.OUTPUT == "snap.json"
        assert args.HOSTFXR == "/x/libhostfxr.so"

    def test_action_is_required(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_invalid_format(self):
        with pytest.raises(SystemExit):
            parse_args(["resolve", "app.dll", "-f", "xml"])

    def test_invalid_loglevel(self):
        with pytest.raises(SystemExit):
            parse_args(["resolve", "app.dll", "--loglevel", "loud"])
