"""
moselect: environmental selection for multi-objective evolutionary algorithms.

Ranks a combined population of objective vectors into Pareto fronts and keeps a
fixed number of survivors, truncating the overflowing front with crowding
distance, niche counts, max-min strength or NSGA-III reference-point niching.

Quick start:
    >>> import numpy as np
    >>> from moselect import EnvironmentalSelector, SelectionConfig
    >>> selector = EnvironmentalSelector(SelectionConfig.default(n_obj=3), n_obj=3)
    >>> result = selector.select(F, n_select=92, rng=np.random.default_rng(0))
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .engine.config import SelectionConfig, SelectionConfigData, load_selection_config
from .engine.diversity import crowding_distance, maxmin_scores, niche_count, sharing_radius
from .engine.reference import (
    NormalizationResult,
    ReferencePointSet,
    generate_reference_points,
    niching_select,
    normalize,
)
from .engine.survival import (
    EnvironmentalSelector,
    SelectionResult,
    preference_ranking,
    select_best_n,
    select_leader,
    select_survivors,
    sort_population,
)
from .foundation.exceptions import MOSelectError
from .foundation.logging import configure_moselect_logging
from .foundation.metrics import dominates, non_dominated_sort, pareto_filter

try:
    __version__ = version("moselect")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "EnvironmentalSelector",
    "MOSelectError",
    "NormalizationResult",
    "ReferencePointSet",
    "SelectionConfig",
    "SelectionConfigData",
    "SelectionResult",
    "configure_moselect_logging",
    "crowding_distance",
    "dominates",
    "generate_reference_points",
    "load_selection_config",
    "maxmin_scores",
    "niche_count",
    "niching_select",
    "non_dominated_sort",
    "normalize",
    "pareto_filter",
    "preference_ranking",
    "select_best_n",
    "select_leader",
    "select_survivors",
    "sharing_radius",
    "sort_population",
]
