"""Configuration helpers for environmental selection."""

from .loader import load_selection_config
from .selection import (
    DIVERSITY_MECHANISMS,
    ENGINES,
    SelectionConfig,
    SelectionConfigData,
    canonical_mechanism,
)

__all__ = [
    "DIVERSITY_MECHANISMS",
    "ENGINES",
    "SelectionConfig",
    "SelectionConfigData",
    "canonical_mechanism",
    "load_selection_config",
]
