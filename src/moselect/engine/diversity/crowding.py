"""Crowding distance (Deb et al., NSGA-II)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np

from moselect.foundation.kernel.registry import resolve_kernel
from moselect.foundation.metrics.pareto import as_objective_matrix

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from moselect.foundation.kernel.backend import KernelBackend


def crowding_distance(
    F: "ArrayLike",
    fronts: Sequence[Sequence[int]] | None = None,
    kernel: "KernelBackend | str | None" = None,
) -> np.ndarray:
    """
    Per-individual crowding distance, computed independently inside each front.

    For every objective the front is sorted; the two boundary members receive
    ``inf`` and interior members add ``(f[i+1] - f[i-1]) / (max - min)``. Objectives
    with zero spread inside a front add nothing. Fronts of one or two members are
    all ``inf``. When ``fronts`` is omitted the whole population is one front.

    Larger is more isolated, hence preferred when truncating a front.
    """
    arr = as_objective_matrix(F)
    if fronts is None:
        fronts = [list(range(arr.shape[0]))]
    return resolve_kernel(kernel).crowding_distance(arr, fronts)


def truncate_by_crowding(front: Sequence[int], crowding: np.ndarray, n_keep: int) -> list[int]:
    """Keep the ``n_keep`` most isolated members of ``front``; ties keep the lower index."""
    front_arr = np.asarray(front, dtype=int)
    order = np.lexsort((front_arr, -crowding[front_arr]))
    return front_arr[order[:n_keep]].tolist()


__all__ = ["crowding_distance", "truncate_by_crowding"]
