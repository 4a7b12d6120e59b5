"""Max-min Pareto strength (Balling's maximin fitness)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from moselect.foundation.metrics.pareto import as_objective_matrix

if TYPE_CHECKING:
    from numpy.typing import ArrayLike


def maxmin_scores(F: "ArrayLike") -> np.ndarray:
    """
    ``score[i] = max_{j != i} min_k (F[i, k] - F[j, k])``.

    A negative score means no other point is at least as good as ``i`` in every
    objective, i.e. ``i`` is non-dominated and not duplicated. Lower is preferred.
    A population of one scores 0.
    """
    arr = as_objective_matrix(F)
    n = arr.shape[0]
    if n == 0:
        return np.zeros(0, dtype=float)
    if n == 1:
        return np.zeros(1, dtype=float)
    min_diff = (arr[:, None, :] - arr[None, :, :]).min(axis=2)
    np.fill_diagonal(min_diff, -np.inf)
    return min_diff.max(axis=1)


def maxmin_order(scores: np.ndarray) -> np.ndarray:
    """Indices sorted by ascending score; ties keep the lower index."""
    return np.argsort(np.asarray(scores, dtype=float), kind="stable")


__all__ = ["maxmin_scores", "maxmin_order"]
