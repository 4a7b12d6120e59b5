"""Pareto dominance, non-dominated sorting, and ideal/nadir points of a population."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, overload

import numpy as np

from moselect.foundation.exceptions import InvalidDimensionError
from moselect.foundation.kernel.numpy_backend import _dominance_matrix
from moselect.foundation.kernel.registry import resolve_kernel

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from moselect.foundation.kernel.backend import KernelBackend


def as_objective_matrix(F: "ArrayLike", *, min_obj: int = 1) -> np.ndarray:
    """
    Convert F to a float64 matrix of shape (N, n_obj).

    A 1-D input is read as a single objective vector. Raises InvalidDimensionError
    when the objective count is below ``min_obj``.
    """
    arr = np.asarray(F, dtype=float)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1) if arr.size else arr.reshape(0, 0)
    if arr.ndim != 2:
        raise ValueError(f"Objective values must be a 2D array, got shape {arr.shape}.")
    if arr.shape[0] > 0 and arr.shape[1] < min_obj:
        raise InvalidDimensionError(int(arr.shape[1]), minimum=min_obj)
    return arr


def dominates(a: "ArrayLike", b: "ArrayLike") -> bool:
    """
    True iff ``a`` is no worse than ``b`` in every objective and strictly better in one.

    Equal vectors do not dominate each other.

    >>> dominates([1.0, 2.0], [2.0, 3.0])
    True
    >>> dominates([1.0, 1.0], [1.0, 1.0])
    False
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Cannot compare fitness vectors of shapes {a.shape} and {b.shape}.")
    return bool(np.all(a <= b) and np.any(a < b))


def dominance_matrix(F: "ArrayLike") -> np.ndarray:
    """Boolean matrix where entry (i, j) tells whether F[i] dominates F[j]."""
    arr = as_objective_matrix(F)
    if arr.shape[0] == 0:
        return np.zeros((0, 0), dtype=bool)
    return _dominance_matrix(arr)


def non_dominated_sort(
    F: "ArrayLike",
    kernel: "KernelBackend | None" = None,
) -> tuple[list[list[int]], np.ndarray]:
    """
    Sort a population into non-dominated fronts.

    Args:
        F: Objective values (n_solutions, n_objectives), minimized.
        kernel: Backend performing the quadratic work; NumPy when omitted.

    Returns:
        (fronts, rank). Each front lists indices in ascending order, every
        individual appears in exactly one front, and ``rank[i]`` is its front index.
    """
    arr = as_objective_matrix(F)
    return resolve_kernel(kernel).non_dominated_sort(arr)


@overload
def pareto_filter(F: np.ndarray | None, *, return_indices: Literal[False] = False) -> np.ndarray | None: ...


@overload
def pareto_filter(F: np.ndarray | None, *, return_indices: Literal[True]) -> tuple[np.ndarray, np.ndarray]: ...


def pareto_filter(F: np.ndarray | None, *, return_indices: bool = False) -> np.ndarray | tuple[np.ndarray, np.ndarray] | None:
    """
    Return the non-dominated subset of points (first Pareto front).

    Args:
        F: Objective values array (n_solutions, n_objectives) or None.
        return_indices: When True, also return indices of the front in F.

    Returns:
        Front array, or (front, indices) when return_indices is True.
    """
    if F is None:
        if return_indices:
            return np.empty((0, 0)), np.array([], dtype=int)
        return None
    arr = as_objective_matrix(F)
    if arr.shape[0] == 0:
        return (arr, np.array([], dtype=int)) if return_indices else arr
    fronts, _ = non_dominated_sort(arr)
    idx = np.asarray(fronts[0], dtype=int)
    front = arr[idx]
    return (front, idx) if return_indices else front


def ideal_point(F: "ArrayLike") -> np.ndarray:
    """Component-wise minimum over the population."""
    arr = as_objective_matrix(F)
    if arr.shape[0] == 0:
        raise ValueError("Cannot compute the ideal point of an empty population.")
    return arr.min(axis=0)


def nadir_point(F: "ArrayLike") -> np.ndarray:
    """Component-wise maximum over the first non-dominated front."""
    arr = as_objective_matrix(F)
    if arr.shape[0] == 0:
        raise ValueError("Cannot compute the nadir point of an empty population.")
    front = pareto_filter(arr)
    return front.max(axis=0)


__all__ = [
    "as_objective_matrix",
    "dominates",
    "dominance_matrix",
    "non_dominated_sort",
    "pareto_filter",
    "ideal_point",
    "nadir_point",
]
