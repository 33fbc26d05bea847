"""Resolution entry points: executable path in, ordered probe directories out.

Each call builds its own desired set and candidate pools from immutable
inputs, so concurrent calls need no coordination.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Mapping, Optional

from common.logging_utils import Timer, extra_context, is_debug_enabled

from .candidates import filter_candidates
from .desired import build_desired_frameworks
from .models import DotnetEnvironmentInfo, ResolutionResult, RuntimeOptions, Selection
from .policies import resolve_selections, select_roll_forward
from .runtime_config import load_runtime_options, runtime_config_path_for
from .search_paths import project_search_paths

logger = logging.getLogger(__name__)


def select_runtimes(
    options: RuntimeOptions,
    environment: DotnetEnvironmentInfo,
    environ: Optional[Mapping[str, str]] = None,
    roll_forward: Optional[str] = None,
) -> Dict[str, Selection]:
    """Pick one Selection per framework the manifest requires.

    Args:
        options: Parsed runtimeOptions.
        environment: Installed SDKs and frameworks.
        environ: Environment variables to consult (defaults to os.environ).
        roll_forward: Explicit policy override, beating the environment.

    Returns:
        Ordered name -> Selection mapping.
    """
    result = _resolve(options, environment, environ, roll_forward)
    return result.selections


def _resolve(
    options: RuntimeOptions,
    environment: DotnetEnvironmentInfo,
    environ: Optional[Mapping[str, str]],
    roll_forward: Optional[str],
    executable: str = "",
) -> ResolutionResult:
    env = os.environ if environ is None else environ
    policy = select_roll_forward(env, options.roll_forward, roll_forward)
    desired = build_desired_frameworks(options)
    pools = filter_candidates(desired, environment.frameworks)
    selections = resolve_selections(desired, pools, policy)
    return ResolutionResult(
        executable=executable,
        roll_forward=policy,
        desired=desired,
        selections=selections,
    )


def resolve_executable(
    executable_path: str,
    dotnet: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    environment: Optional[DotnetEnvironmentInfo] = None,
    roll_forward: Optional[str] = None,
    hostfxr_path: Optional[str] = None,
) -> ResolutionResult:
    """Resolve an executable and keep the full outcome for reporting.

    Args:
        executable_path: Path to an OutputType=Exe .dll file.
        dotnet: The `dotnet` executable whose installation should be queried.
        environ: Environment variables to consult (defaults to os.environ).
        environment: Pre-captured environment; skips discovery entirely.
        roll_forward: Explicit policy override.
        hostfxr_path: Explicit libhostfxr path for discovery.

    Raises:
        LocatorError: Any subclass; nothing is retried and no partial result
            is returned.
    """
    with Timer() as t:
        exe_dir, config_path = runtime_config_path_for(executable_path)
        options = load_runtime_options(config_path)

        if environment is None:
            from hostfxr.interop import get_environment_info  # pylint: disable=import-outside-toplevel
            environment = get_environment_info(dotnet, hostfxr_path=hostfxr_path, environ=environ)

        result = _resolve(options, environment, environ, roll_forward, executable=executable_path)
        result.search_paths = project_search_paths(exe_dir, result.selections)

    if is_debug_enabled(logger):
        logger.debug("Resolved executable", extra=extra_context(
            event="function_exit", component="service", action="resolve",
            target=executable_path, outcome="success", count=len(result.search_paths),
            duration_ms=t.duration_ms(),
        ))
    return result


def resolve(
    executable_path: str,
    dotnet: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    environment: Optional[DotnetEnvironmentInfo] = None,
    roll_forward: Optional[str] = None,
    hostfxr_path: Optional[str] = None,
) -> List[str]:
    """Given a .NET executable DLL, list the folders to search for its dependencies.

    When resolving any particular DLL during execution, search these folders
    in order; if a DLL name appears in several of them, the earliest wins.
    """
    return resolve_executable(
        executable_path,
        dotnet,
        environ=environ,
        environment=environment,
        roll_forward=roll_forward,
        hostfxr_path=hostfxr_path,
    ).search_paths
