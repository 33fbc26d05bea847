"""Path projector: selections to the ordered directories a launcher should probe."""

from __future__ import annotations

import os
from typing import List, Mapping

from .models import Absent, FrameworkSelection, Selection


def project_search_paths(executable_dir: str, selections: Mapping[str, Selection]) -> List[str]:
    """Return probe directories, highest priority first.

    The executable's own directory always comes first so private copies of
    dependencies win. Each selected framework then contributes
    ``<path>/<version>`` in desired order; Absent contributes nothing.
    A directory already listed is not repeated: the earliest occurrence
    keeps its position, so lookup order is unchanged.
    """
    paths: List[str] = [executable_dir]
    for selection in selections.values():
        if isinstance(selection, FrameworkSelection):
            candidate = os.path.join(selection.framework.path, selection.framework.version)
        elif isinstance(selection, Absent):
            continue
        else:
            raise TypeError(f"Unknown selection variant: {selection!r}")
        if candidate not in paths:
            paths.append(candidate)
    return paths
