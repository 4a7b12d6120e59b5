"""Adaptive objective normalization for reference-point selection.

Steps (Deb and Jain, 2014):

1. Ideal point: component-wise minimum over the combined population.
2. Translation: every objective vector minus the ideal point.
3. Extreme points: per axis, the working-set member minimizing an
   axis-weighted achievement scalarizing function (ASF).
4. Intercepts: where the hyperplane through the extreme points crosses each
   axis, found by Gaussian elimination. A singular system falls back to the
   per-axis maxima of the translated population.
5. Normalization: translated objectives divided by the intercepts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from moselect.foundation.exceptions import InsufficientCandidatesError, SingularSystemError
from moselect.foundation.metrics.pareto import as_objective_matrix, ideal_point, non_dominated_sort

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from moselect.foundation.kernel.backend import KernelBackend


_logger = logging.getLogger(__name__)

ASF_EPSILON = 1e-6
PIVOT_TOLERANCE = 1e-10
INTERCEPT_EPSILON = 1e-10


@dataclass(frozen=True)
class NormalizationResult:
    """Everything computed while normalizing one generation."""

    ideal: np.ndarray
    translated: np.ndarray
    extreme_points: np.ndarray
    intercepts: np.ndarray
    normalized: np.ndarray
    fallback_used: bool


def translate_objectives(F: "ArrayLike", ideal: "ArrayLike | None" = None) -> np.ndarray:
    """Shift objectives so the ideal point sits at the origin."""
    arr = as_objective_matrix(F)
    if ideal is None:
        ideal = ideal_point(arr)
    return arr - np.asarray(ideal, dtype=float)


def working_set(fronts: Sequence[Sequence[int]], n_obj: int) -> np.ndarray:
    """
    Front 0, extended front by front until it holds at least ``n_obj`` members.

    Returns sorted indices. If every front together is still smaller than
    ``n_obj`` the whole population is returned.
    """
    members: list[int] = []
    for front in fronts:
        members.extend(int(i) for i in front)
        if len(members) >= n_obj:
            break
    return np.asarray(sorted(members), dtype=int)


def achievement_scalarizing(translated: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """``ASF(t, w) = max_j t[j] / w[j]`` for every row of ``translated``."""
    return (np.asarray(translated, dtype=float) / np.asarray(weights, dtype=float)).max(axis=1)


def find_extreme_points(translated: np.ndarray, candidates: "ArrayLike | None" = None) -> np.ndarray:
    """
    Index of the extreme point for every objective axis.

    Parameters
    ----------
    translated : np.ndarray
        Translated objectives, shape (n, n_obj).
    candidates : array-like of int, optional
        Indices allowed to become extreme points; all rows when omitted.

    Returns
    -------
    np.ndarray
        ``n_obj`` indices into ``translated``. The same individual may be
        extreme on several axes. Ties go to the lowest index.
    """
    translated = as_objective_matrix(translated)
    n_obj = translated.shape[1]
    if candidates is None:
        cand = np.arange(translated.shape[0], dtype=int)
    else:
        cand = np.sort(np.asarray(candidates, dtype=int))
    if cand.size == 0:
        raise InsufficientCandidatesError("No candidates available for extreme points.", available=0, required=n_obj)
    extremes = np.empty(n_obj, dtype=int)
    for axis in range(n_obj):
        weights = np.full(n_obj, ASF_EPSILON)
        weights[axis] = 1.0
        asf = achievement_scalarizing(translated[cand], weights)
        extremes[axis] = int(cand[int(np.argmin(asf))])
    return extremes


def gaussian_elimination(A: "ArrayLike", b: "ArrayLike") -> np.ndarray:
    """
    Solve ``A x = b`` by Gaussian elimination with partial pivoting.

    Raises
    ------
    SingularSystemError
        If, for some column, the largest remaining pivot magnitude is below 1e-10.

    Examples
    --------
    >>> gaussian_elimination([[-1, 1, 2], [2, 0, -3], [5, 1, -2]], [1, 1, 1]).round(8).tolist()
    [-0.4, 1.8, -0.6]
    """
    M = np.array(A, dtype=float)
    rhs = np.array(b, dtype=float).reshape(-1)
    n = rhs.size
    if M.shape != (n, n):
        raise ValueError(f"Expected a square ({n}, {n}) matrix, got {M.shape}.")

    for col in range(n):
        pivot_row = col + int(np.argmax(np.abs(M[col:, col])))
        pivot = M[pivot_row, col]
        if abs(pivot) < PIVOT_TOLERANCE:
            raise SingularSystemError(col, float(abs(pivot)))
        if pivot_row != col:
            M[[col, pivot_row]] = M[[pivot_row, col]]
            rhs[[col, pivot_row]] = rhs[[pivot_row, col]]
        factors = M[col + 1 :, col] / M[col, col]
        M[col + 1 :, col:] -= factors[:, None] * M[col, col:]
        rhs[col + 1 :] -= factors * rhs[col]

    x = np.zeros(n)
    for row in range(n - 1, -1, -1):
        x[row] = (rhs[row] - M[row, row + 1 :] @ x[row + 1 :]) / M[row, row]
    return x


def find_intercepts(translated: np.ndarray, extreme_points: "ArrayLike") -> tuple[np.ndarray, bool]:
    """
    Axis intercepts of the hyperplane through the extreme points.

    Solves ``E x = 1`` where row k of E is the k-th extreme point, so the plane
    is ``sum_k t_k / intercept_k = 1`` with ``intercept = 1 / x``. When the
    system is singular, or yields non-finite or non-positive intercepts, every
    intercept falls back to the per-axis maximum of ``translated``.

    Returns
    -------
    tuple
        (intercepts, fallback_used)
    """
    translated = as_objective_matrix(translated)
    extremes = np.asarray(extreme_points, dtype=int)
    n_obj = translated.shape[1]
    try:
        plane = gaussian_elimination(translated[extremes], np.ones(n_obj))
    except SingularSystemError as exc:
        _logger.debug("Degenerate hyperplane (%s); using axis maxima as intercepts.", exc.message)
        return translated.max(axis=0), True

    with np.errstate(divide="ignore"):
        intercepts = 1.0 / plane
    if not np.all(np.isfinite(intercepts)) or np.any(intercepts <= INTERCEPT_EPSILON):
        _logger.debug("Hyperplane intercepts %s are not positive; using axis maxima.", intercepts)
        return translated.max(axis=0), True
    return intercepts, False


def normalize_objectives(translated: np.ndarray, intercepts: "ArrayLike") -> np.ndarray:
    """Divide each translated axis by its intercept, guarded away from zero."""
    denom = np.maximum(np.asarray(intercepts, dtype=float), INTERCEPT_EPSILON)
    return np.asarray(translated, dtype=float) / denom


def normalize(
    F: "ArrayLike",
    fronts: Sequence[Sequence[int]] | None = None,
    kernel: "KernelBackend | str | None" = None,
) -> NormalizationResult:
    """
    Normalize a combined population for reference-point association.

    Parameters
    ----------
    F : array-like
        Objective values, shape (n, n_obj).
    fronts : list of list of int, optional
        Non-dominated fronts of ``F``; computed when omitted.
    kernel : KernelBackend or str, optional
        Backend for the non-dominated sort.

    Raises
    ------
    InsufficientCandidatesError
        If the population has fewer members than objectives.
    """
    arr = as_objective_matrix(F)
    n, n_obj = arr.shape
    if n < n_obj:
        raise InsufficientCandidatesError(
            f"Need at least {n_obj} individuals to build {n_obj} extreme points, got {n}.",
            available=n,
            required=n_obj,
        )
    if fronts is None:
        fronts, _ = non_dominated_sort(arr, kernel=kernel)

    ideal = ideal_point(arr)
    translated = arr - ideal
    extremes = find_extreme_points(translated, working_set(fronts, n_obj))
    intercepts, fallback_used = find_intercepts(translated, extremes)
    normalized = normalize_objectives(translated, intercepts)
    return NormalizationResult(
        ideal=ideal,
        translated=translated,
        extreme_points=extremes,
        intercepts=intercepts,
        normalized=normalized,
        fallback_used=fallback_used,
    )


__all__ = [
    "NormalizationResult",
    "translate_objectives",
    "working_set",
    "achievement_scalarizing",
    "find_extreme_points",
    "gaussian_elimination",
    "find_intercepts",
    "normalize_objectives",
    "normalize",
]
