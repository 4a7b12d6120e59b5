from __future__ import annotations

import numpy as np
from numba import njit


@njit(cache=True)
def dominance_matrix_numba(F: np.ndarray) -> np.ndarray:
    """
    Pairwise Pareto dominance: dom[p, q] is True iff F[p] dominates F[q].
    """
    N, M = F.shape
    dom = np.zeros((N, N), dtype=np.bool_)
    for p in range(N):
        for q in range(N):
            if p == q:
                continue
            less_equal = True
            strictly_less = False
            for m in range(M):
                fp = F[p, m]
                fq = F[q, m]
                if fp > fq:
                    less_equal = False
                    break
                elif fp < fq:
                    strictly_less = True
            if less_equal and strictly_less:
                dom[p, q] = True
    return dom


@njit(cache=True)
def front_crowding_numba(values: np.ndarray) -> np.ndarray:
    """
    Crowding distance of a single front.

    values: objective values of the front members, shape (k, M).
    Boundary members get +inf; axes with zero spread contribute nothing.
    """
    k, M = values.shape
    d = np.zeros(k, dtype=np.float64)
    if k <= 2:
        for i in range(k):
            d[i] = np.inf
        return d

    for m in range(M):
        column = values[:, m].copy()
        order = np.argsort(column, kind="mergesort")
        lo = column[order[0]]
        hi = column[order[k - 1]]
        d[order[0]] = np.inf
        d[order[k - 1]] = np.inf
        span = hi - lo
        if span <= 0.0:
            continue
        for pos in range(1, k - 1):
            idx = order[pos]
            d[idx] += (column[order[pos + 1]] - column[order[pos - 1]]) / span
    return d
