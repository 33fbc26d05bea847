"""Candidate filter: group installed frameworks that could satisfy each desired name."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping

from common.logging_utils import extra_context, is_debug_enabled

from .models import InstalledFramework
from .version import RuntimeVersion

logger = logging.getLogger(__name__)


def filter_candidates(
    desired: Mapping[str, RuntimeVersion],
    frameworks: Iterable[InstalledFramework],
) -> Dict[str, List[InstalledFramework]]:
    """Build the per-name candidate pools.

    Frameworks with an undesired name are dropped. Frameworks older than the
    desired minimum are dropped whatever the policy: rolling backward is never
    allowed. Every desired name has a pool, possibly empty, in host
    enumeration order.

    Args:
        desired: Desired name -> minimum version.
        frameworks: Installed frameworks reported by discovery.

    Returns:
        Dict of name -> candidate list, ordered as ``desired``.
    """
    pools: Dict[str, List[InstalledFramework]] = {name: [] for name in desired}
    for fw in frameworks:
        minimum = desired.get(fw.name)
        if minimum is None:
            continue
        try:
            installed = fw.parsed_version
        except ValueError:
            logger.warning(
                "Skipping installed framework %s at %s: unparseable version %r",
                fw.name, fw.path, fw.version,
            )
            continue
        if installed < minimum:
            if is_debug_enabled(logger):
                logger.debug("Discarding older framework", extra=extra_context(
                    event="decision", component="candidates", action="filter",
                    target=fw.name, outcome="too_old", version=fw.version,
                ))
            continue
        pools[fw.name].append(fw)
    return pools
