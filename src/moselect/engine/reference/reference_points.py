"""Das-Dennis simplex-lattice reference points.

Reference points depend only on the objective count and the number of
partitions, so they are generated once per run and shared by every generation.
The set is immutable; niche counts live in each generation's selection result.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import comb
from typing import Iterator, Sequence

import numpy as np

from moselect.foundation.exceptions import ConfigurationError, InvalidDimensionError

SUM_TOLERANCE = 1e-8


@dataclass
class ReferencePoint:
    """A direction on the unit simplex and the individuals currently associated with it."""

    coordinates: tuple[float, ...]
    niche_count: int = 0

    def dim(self) -> int:
        return len(self.coordinates)

    def __getitem__(self, index: int) -> float:
        return self.coordinates[index]


class ReferencePointSet:
    """
    Immutable lattice of reference directions, stored as an (n_ref, n_obj) array.

    Parameters
    ----------
    directions : array-like
        Rows of non-negative coordinates summing to 1.
    partitions : int, optional
        Number of simplex partitions the rows were generated with, if known.
    """

    def __init__(self, directions: np.ndarray | Sequence[Sequence[float]], partitions: int | None = None):
        arr = np.array(directions, dtype=float)
        if arr.ndim != 2 or arr.shape[0] == 0:
            raise ConfigurationError("Reference directions must be a non-empty 2D array.")
        if arr.shape[1] < 2:
            raise InvalidDimensionError(int(arr.shape[1]), minimum=2, context="reference points")
        if np.any(arr < 0.0):
            raise ConfigurationError("Reference directions must be non-negative.")
        if np.any(np.abs(arr.sum(axis=1) - 1.0) > SUM_TOLERANCE):
            raise ConfigurationError("Each reference direction must sum to 1.")
        arr.setflags(write=False)
        self._directions = arr
        self.partitions = partitions

    @property
    def directions(self) -> np.ndarray:
        return self._directions

    @property
    def n_obj(self) -> int:
        return int(self._directions.shape[1])

    def __len__(self) -> int:
        return int(self._directions.shape[0])

    def __iter__(self) -> Iterator[ReferencePoint]:
        return iter(self.points())

    def points(self, niche_counts: Sequence[int] | np.ndarray | None = None) -> list[ReferencePoint]:
        """Materialize ReferencePoint objects, optionally carrying one generation's niche counts."""
        if niche_counts is None:
            niche_counts = np.zeros(len(self), dtype=int)
        if len(niche_counts) != len(self):
            raise ValueError(f"Expected {len(self)} niche counts, got {len(niche_counts)}.")
        return [
            ReferencePoint(tuple(float(c) for c in row), int(count))
            for row, count in zip(self._directions, niche_counts)
        ]

    def __repr__(self) -> str:
        return f"ReferencePointSet(n_ref={len(self)}, n_obj={self.n_obj}, partitions={self.partitions})"


def count_reference_points(n_obj: int, partitions: int) -> int:
    """Cardinality of the lattice, ``C(n_obj + partitions - 1, partitions)``."""
    if n_obj < 1:
        raise InvalidDimensionError(n_obj, minimum=1)
    if partitions < 1:
        raise ConfigurationError("partitions must be >= 1")
    return comb(n_obj + partitions - 1, partitions)


def _lattice_coordinates(n_obj: int, partitions: int) -> list[tuple[int, ...]]:
    coords: list[tuple[int, ...]] = []

    def rec(remaining: int, depth: int, current: list[int]) -> None:
        if depth == n_obj - 1:
            # The last coordinate absorbs whatever budget is left.
            coords.append((*current, remaining))
            return
        for value in range(remaining + 1):
            current.append(value)
            rec(remaining - value, depth + 1, current)
            current.pop()

    rec(partitions, 0, [])
    return coords


def generate_reference_points(n_obj: int, partitions: int) -> ReferencePointSet:
    """
    Generate every point with ``n_obj`` coordinates in {0, 1/P, ..., 1} summing to 1.

    Examples
    --------
    >>> len(generate_reference_points(3, 12))
    91
    """
    if n_obj < 2:
        raise InvalidDimensionError(n_obj, minimum=2, context="reference points")
    expected = count_reference_points(n_obj, partitions)
    arr = np.asarray(_lattice_coordinates(n_obj, partitions), dtype=float) / partitions
    if arr.shape[0] != expected:
        raise RuntimeError(f"Lattice produced {arr.shape[0]} points, expected {expected}.")
    return ReferencePointSet(arr, partitions=partitions)


__all__ = [
    "ReferencePoint",
    "ReferencePointSet",
    "count_reference_points",
    "generate_reference_points",
]
