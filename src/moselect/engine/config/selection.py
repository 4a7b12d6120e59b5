"""Environmental selection configuration."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, Dict, Mapping

from moselect.foundation.exceptions import (
    ConfigurationError,
    InvalidDiversityMechanismError,
    InvalidEngineError,
)
from moselect.foundation.registry import normalize_key

from .base import _reject_unknown_keys, _require_fields, _SerializableConfig

DIVERSITY_MECHANISMS: tuple[str, ...] = (
    "crowding_distance",
    "niche_count",
    "max_min",
    "reference_point",
)

ENGINES: tuple[str, ...] = ("numpy", "numba")

_MECHANISM_ALIASES = {
    "crowding": "crowding_distance",
    "niche": "niche_count",
    "maxmin": "max_min",
    "reference_points": "reference_point",
    "nsga3": "reference_point",
}


def canonical_mechanism(name: str) -> str:
    """Map any accepted spelling of a diversity mechanism to its canonical name.

    >>> canonical_mechanism("crowding distance")
    'crowding_distance'
    >>> canonical_mechanism("max-min")
    'max_min'
    """
    if not isinstance(name, str):
        raise InvalidDiversityMechanismError(str(name), list(DIVERSITY_MECHANISMS))
    key = normalize_key(name)
    key = _MECHANISM_ALIASES.get(key, key)
    if key not in DIVERSITY_MECHANISMS:
        matches = get_close_matches(key, DIVERSITY_MECHANISMS, n=1, cutoff=0.6)
        raise InvalidDiversityMechanismError(name, list(DIVERSITY_MECHANISMS), matches)
    return key


def _is_integer(value: Any) -> bool:
    # NumPy integers count; bools do not.
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _validate_partition_count(value: Any) -> int:
    if not _is_integer(value) or value < 1:
        raise ConfigurationError(
            f"partition_count must be an integer >= 1, got {value!r}.",
            "Use 12 for three objectives or 6 for five to eight objectives",
        )
    return int(value)


def _validate_leader_range(value: Any) -> int:
    if not _is_integer(value) or not 0 <= value <= 100:
        raise ConfigurationError(
            f"leader_selection_range must be an integer percentile in [0, 100], got {value!r}.",
            "The range is the share of the preference ranking leaders are drawn from",
        )
    return int(value)


def _validate_engine(value: Any) -> str:
    engine = str(value).lower()
    if engine not in ENGINES:
        raise InvalidEngineError(str(value), list(ENGINES))
    return engine


@dataclass(frozen=True)
class SelectionConfigData(_SerializableConfig):
    diversity_mechanism: str
    partition_count: int = 12
    leader_selection_range: int = 60
    engine: str = "numpy"

    def __post_init__(self) -> None:
        # Direct construction goes through the same checks as the builder.
        object.__setattr__(self, "diversity_mechanism", canonical_mechanism(self.diversity_mechanism))
        object.__setattr__(self, "partition_count", _validate_partition_count(self.partition_count))
        object.__setattr__(self, "leader_selection_range", _validate_leader_range(self.leader_selection_range))
        object.__setattr__(self, "engine", _validate_engine(self.engine))

    @property
    def uses_reference_points(self) -> bool:
        return self.diversity_mechanism == "reference_point"


class SelectionConfig:
    """
    Declarative configuration holder for environmental selection.

    Examples:
        cfg = SelectionConfig.default(n_obj=3)
        cfg = SelectionConfig().diversity_mechanism("niche count").leader_selection_range(40).fixed()
    """

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    @classmethod
    def default(cls, n_obj: int = 3, diversity_mechanism: str = "reference_point") -> SelectionConfigData:
        """
        Create a default configuration.

        Args:
            n_obj: Number of objectives (picks the reference-point density)
            diversity_mechanism: Mechanism used to truncate the critical front
        """
        partitions = 12 if n_obj <= 3 else 6
        return cls().diversity_mechanism(diversity_mechanism).partition_count(partitions).fixed()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SelectionConfigData:
        """Build validated config data from a plain mapping (e.g. parsed JSON/YAML)."""
        _reject_unknown_keys(data, SelectionConfigData.field_names(), "selection configuration")
        builder = cls()
        builder._cfg.update(data)
        return builder.fixed()

    def diversity_mechanism(self, value: str) -> "SelectionConfig":
        self._cfg["diversity_mechanism"] = canonical_mechanism(value)
        return self

    def partition_count(self, value: int) -> "SelectionConfig":
        self._cfg["partition_count"] = _validate_partition_count(value)
        return self

    def leader_selection_range(self, value: int) -> "SelectionConfig":
        self._cfg["leader_selection_range"] = _validate_leader_range(value)
        return self

    def engine(self, value: str) -> "SelectionConfig":
        self._cfg["engine"] = _validate_engine(value)
        return self

    def fixed(self) -> SelectionConfigData:
        _require_fields(self._cfg, ("diversity_mechanism",), "SelectionConfig")
        return SelectionConfigData(
            diversity_mechanism=self._cfg["diversity_mechanism"],
            partition_count=self._cfg.get("partition_count", 12),
            leader_selection_range=self._cfg.get("leader_selection_range", 60),
            engine=self._cfg.get("engine", "numpy"),
        )


__all__ = [
    "DIVERSITY_MECHANISMS",
    "ENGINES",
    "SelectionConfig",
    "SelectionConfigData",
    "canonical_mechanism",
]
