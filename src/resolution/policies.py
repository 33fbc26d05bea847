"""Roll-forward policy selection and per-framework resolution."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .errors import ConfigError, UnsupportedPolicyError
from .models import Absent, FrameworkSelection, InstalledFramework, RollForward, Selection
from .version import RuntimeVersion

logger = logging.getLogger(__name__)

Handler = Callable[[RuntimeVersion, List[InstalledFramework]], Optional[InstalledFramework]]


def select_roll_forward(
    environ: Mapping[str, str],
    manifest_setting: Optional[RollForward],
    override: Optional[str] = None,
) -> RollForward:
    """Decide the policy for one resolution call.

    Precedence: explicit override (CLI or config file), then the
    DOTNET_ROLL_FORWARD environment variable, then the manifest's rollForward,
    then Minor.

    Raises:
        ConfigError: If the override or the environment value names no policy.
    """
    if override is not None:
        try:
            return RollForward.parse(override)
        except ValueError as exc:
            raise ConfigError(f"Invalid roll-forward override {override!r}") from exc

    env_value = environ.get(Constants.ENV_ROLL_FORWARD)
    if env_value is not None:
        try:
            return RollForward.parse(env_value)
        except ValueError as exc:
            raise ConfigError(
                f"Unable to parse the value of environment variable "
                f"{Constants.ENV_ROLL_FORWARD}, which was: {env_value}"
            ) from exc

    if manifest_setting is not None:
        return manifest_setting
    return RollForward.MINOR


def _highest(pool: List[InstalledFramework]) -> Optional[InstalledFramework]:
    # max() keeps the first of equal elements, so duplicates resolve to enumeration order
    if not pool:
        return None
    return max(pool, key=lambda fw: fw.parsed_version)


def _select_minor(desired: RuntimeVersion, pool: List[InstalledFramework]) -> Optional[InstalledFramework]:
    exact_minor = [fw for fw in pool if fw.parsed_version.same_minor(desired)]
    if exact_minor:
        return _highest(exact_minor)
    same_major = [fw for fw in pool if fw.parsed_version.same_major(desired)]
    if not same_major:
        return None
    # lowest minor above the desired one, newest build at that minor
    return min(same_major, key=lambda fw: (fw.parsed_version.minor, -fw.parsed_version.build))


def _select_latest_patch(desired: RuntimeVersion, pool: List[InstalledFramework]) -> Optional[InstalledFramework]:
    return _highest([fw for fw in pool if fw.parsed_version.same_minor(desired)])


def _select_latest_minor(desired: RuntimeVersion, pool: List[InstalledFramework]) -> Optional[InstalledFramework]:
    return _highest([fw for fw in pool if fw.parsed_version.same_major(desired)])


def _select_latest_major(desired: RuntimeVersion, pool: List[InstalledFramework]) -> Optional[InstalledFramework]:
    return _highest(pool)


def _select_disable(desired: RuntimeVersion, pool: List[InstalledFramework]) -> Optional[InstalledFramework]:
    for fw in pool:
        if fw.parsed_version == desired:
            return fw
    return None


_HANDLERS: Dict[RollForward, Handler] = {
    RollForward.MINOR: _select_minor,
    RollForward.LATEST_PATCH: _select_latest_patch,
    RollForward.LATEST_MINOR: _select_latest_minor,
    RollForward.LATEST_MAJOR: _select_latest_major,
    RollForward.DISABLE: _select_disable,
}
_UNSUPPORTED = frozenset({RollForward.MAJOR})

if set(_HANDLERS) | _UNSUPPORTED != set(RollForward):
    raise RuntimeError("Every roll-forward policy needs a handler or an explicit rejection")


def resolve_selections(
    desired: Mapping[str, RuntimeVersion],
    pools: Mapping[str, List[InstalledFramework]],
    policy: RollForward,
) -> Dict[str, Selection]:
    """Apply the policy to each desired framework independently.

    Args:
        desired: Desired name -> minimum version.
        pools: Candidate pools from filter_candidates().
        policy: Active roll-forward policy.

    Returns:
        Exactly one Selection per desired name, in desired order.

    Raises:
        UnsupportedPolicyError: For the Major policy.
    """
    if policy in _UNSUPPORTED:
        raise UnsupportedPolicyError(f"Roll-forward policy {policy.value} is not supported")
    handler = _HANDLERS[policy]

    selections: Dict[str, Selection] = {}
    for name, minimum in desired.items():
        chosen = handler(minimum, list(pools.get(name, [])))
        if chosen is None:
            logger.info("No installed %s satisfies %s under %s", name, minimum, policy.value)
            selections[name] = Absent()
        else:
            selections[name] = FrameworkSelection(chosen)
        if is_debug_enabled(logger):
            logger.debug("Resolved framework", extra=extra_context(
                event="decision", component="policies", action=policy.value, target=name,
                outcome="selected" if chosen is not None else "absent",
                version=chosen.version if chosen is not None else None,
            ))
    return selections
