"""Fonseca-Fleming fitness sharing: niche radius and niche counts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from moselect.foundation.metrics.pareto import as_objective_matrix, ideal_point

if TYPE_CHECKING:
    from numpy.typing import ArrayLike


def sharing_radius(ideal: "ArrayLike", nadir: "ArrayLike", n_points: int) -> float:
    """
    Niche radius delta from the ideal-nadir spread and the number of points.

    Two objectives divide the summed spread by ``n - 1``; three objectives use the
    closed-form root of the Fonseca-Fleming quadratic; higher dimensions split the
    bounding box volume equally, ``prod(spread) ** (1/n_obj) / n``.
    """
    ideal = np.asarray(ideal, dtype=float)
    nadir = np.asarray(nadir, dtype=float)
    if ideal.shape != nadir.shape or ideal.ndim != 1:
        raise ValueError("ideal and nadir must be 1-D vectors of equal length.")
    if n_points < 1:
        raise ValueError("n_points must be >= 1.")
    spread = np.maximum(nadir - ideal, 0.0)
    n = float(n_points)
    gaps = max(n - 1.0, 1.0)

    if spread.size == 2:
        return float(spread.sum() / gaps)
    if spread.size == 3:
        d1, d2, d3 = spread
        radicand = (
            4.0 * n * (d1 * d2 + d1 * d3 + d2 * d3)
            + d1**2
            + d2**2
            + d3**2
            - 2.0 * (d1 * d2 + d1 * d3 + d2 * d3)
            + d1
            + d2
            + d3
        )
        return float(np.sqrt(max(radicand, 0.0)) / (2.0 * gaps))
    return float(np.prod(spread) ** (1.0 / spread.size) / n)


def niche_count(F: "ArrayLike", delta: float | None = None) -> np.ndarray:
    """
    Number of points within Euclidean distance ``< delta`` of each point, self included.

    When ``delta`` is omitted it is derived with :func:`sharing_radius` from the
    ideal point and the component-wise maximum of ``F``. Lower counts are preferred.
    """
    arr = as_objective_matrix(F)
    n = arr.shape[0]
    if n == 0:
        return np.zeros(0, dtype=int)
    if delta is None:
        delta = sharing_radius(ideal_point(arr), arr.max(axis=0), n)
    diff = arr[:, None, :] - arr[None, :, :]
    dist = np.sqrt(np.einsum("ijk,ijk->ij", diff, diff))
    counts = (dist < delta).sum(axis=1)
    # A zero radius would leave a point outside its own niche.
    return np.maximum(counts, 1).astype(int)


__all__ = ["sharing_radius", "niche_count"]
