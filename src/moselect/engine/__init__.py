"""
Engine layer: selection configuration, diversity metrics, reference-point
niching and the environmental selector that ties them together.
"""

from __future__ import annotations

from .config import SelectionConfig, SelectionConfigData, load_selection_config
from .survival import (
    SURVIVAL_STRATEGIES,
    EnvironmentalSelector,
    SelectionResult,
    preference_ranking,
    select_best_n,
    select_leader,
    select_survivors,
    sort_population,
)

__all__ = [
    "SURVIVAL_STRATEGIES",
    "EnvironmentalSelector",
    "SelectionConfig",
    "SelectionConfigData",
    "SelectionResult",
    "load_selection_config",
    "preference_ranking",
    "select_best_n",
    "select_leader",
    "select_survivors",
    "sort_population",
]
