"""Pure NumPy ranking kernels.

Always available. Pairwise dominance is one broadcast comparison, so memory
grows as N^2 * M booleans; populations of a few thousand are fine.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .backend import KernelBackend


def _dominance_matrix(F: np.ndarray) -> np.ndarray:
    """dom[i, j] is True iff F[i] Pareto-dominates F[j]."""
    lhs = F[:, None, :]
    rhs = F[None, :, :]
    return (lhs <= rhs).all(axis=2) & (lhs < rhs).any(axis=2)


def _peel_fronts(dom_matrix: np.ndarray) -> tuple[list[list[int]], np.ndarray]:
    """
    Peel fronts off a dominance matrix.

    Front 0 holds individuals nobody dominates; removing a front decrements the
    domination count of everyone its members dominate. Mutates dom_matrix.
    """
    n = dom_matrix.shape[0]
    remaining_dominators = dom_matrix.sum(axis=0).astype(np.int64)
    rank = np.full(n, -1, dtype=int)
    fronts: list[list[int]] = []

    layer = np.flatnonzero(remaining_dominators == 0)
    while layer.size:
        rank[layer] = len(fronts)
        fronts.append(layer.tolist())
        remaining_dominators -= dom_matrix[layer].sum(axis=0)
        dom_matrix[layer] = False
        # Retire the peeled layer so it never reappears.
        remaining_dominators[layer] = -1
        layer = np.flatnonzero(remaining_dominators == 0)

    return fronts, rank


def _fast_non_dominated_sort(F: np.ndarray) -> tuple[list[list[int]], np.ndarray]:
    if F.shape[0] == 0:
        return [], np.empty(0, dtype=int)
    return _peel_fronts(_dominance_matrix(F))


def _front_crowding(values: np.ndarray) -> np.ndarray:
    """
    Crowding distance of a single front, values of shape (k, M).

    All M objectives are sorted at once; each interior member gathers the
    normalized gap between its two neighbours, boundaries get +inf.
    """
    k = values.shape[0]
    if k <= 2:
        return np.full(k, np.inf)

    order = np.argsort(values, axis=0, kind="mergesort")
    ranked = np.take_along_axis(values, order, axis=0)
    span = ranked[-1] - ranked[0]

    gaps = np.zeros_like(ranked)
    gaps[1:-1] = ranked[2:] - ranked[:-2]
    flat = span <= 0.0
    gaps[:, ~flat] /= span[~flat]
    gaps[:, flat] = 0.0
    gaps[0] = np.inf
    gaps[-1] = np.inf

    distance = np.zeros(k)
    np.add.at(distance, order.ravel(), gaps.ravel())
    return distance


def _compute_crowding(F: np.ndarray, fronts: Sequence[Sequence[int]]) -> np.ndarray:
    """Crowding front by front; individuals outside every front keep 0."""
    crowding = np.zeros(F.shape[0])
    for front in fronts:
        if len(front):
            members = np.asarray(front, dtype=int)
            crowding[members] = _front_crowding(F[members])
    return crowding


class NumPyKernel(KernelBackend):
    """Default backend; vectorized NumPy with no optional dependencies."""

    name = "numpy"

    def non_dominated_sort(self, F: np.ndarray) -> tuple[list[list[int]], np.ndarray]:
        return _fast_non_dominated_sort(np.asarray(F, dtype=float))

    def crowding_distance(self, F: np.ndarray, fronts: Sequence[Sequence[int]]) -> np.ndarray:
        return _compute_crowding(np.asarray(F, dtype=float), fronts)
