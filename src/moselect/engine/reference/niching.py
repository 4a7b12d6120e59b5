"""Reference-point association and niche-preserving survival (NSGA-III).

The selection is a pure function of its inputs: fronts, normalized objectives,
the shared reference directions and a caller-owned random generator. Niche
counts are rebuilt from scratch on every call and returned in the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from moselect.foundation.exceptions import (
    ConfigurationError,
    InsufficientCandidatesError,
    SelectionShortfallError,
)

from .reference_points import ReferencePointSet

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NichingResult:
    """Outcome of one niching selection.

    ``associations[i]`` is the reference index of individual i, or -1 when i was
    neither pre-selected nor in the critical front; ``distances`` is NaN there.
    """

    selected: np.ndarray
    critical_front: np.ndarray
    associations: np.ndarray
    distances: np.ndarray
    niche_counts: np.ndarray


def associate(normalized: np.ndarray, directions: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Associate solutions with their nearest reference line through the origin.

    Parameters
    ----------
    normalized : np.ndarray
        Normalized objective values, shape (n, n_obj).
    directions : np.ndarray
        Reference directions, shape (n_ref, n_obj); need not be unit length.

    Returns
    -------
    tuple
        (associations, distances): index of the closest reference line per
        solution (ties go to the lowest index) and the perpendicular distance to it.
    """
    normalized = np.asarray(normalized, dtype=float)
    directions = np.asarray(directions, dtype=float)
    if normalized.shape[0] == 0:
        return np.empty(0, dtype=int), np.empty(0, dtype=float)
    norms = np.linalg.norm(directions, axis=1, keepdims=True)
    unit = directions / np.where(norms > 0, norms, 1.0)
    projection = normalized @ unit.T
    # Norm of the residual itself; |x|^2 - proj^2 cancels badly near a line.
    residual = normalized[:, None, :] - projection[..., None] * unit[None, :, :]
    perpendicular = np.linalg.norm(residual, axis=2)
    associations = np.argmin(perpendicular, axis=1)
    distances = perpendicular[np.arange(normalized.shape[0]), associations]
    return associations.astype(int), distances


def split_fronts(fronts: Sequence[Sequence[int]], n_select: int) -> tuple[list[int], list[int]]:
    """
    Split fronts into members selected outright and the critical front.

    Whole fronts are accepted while the total stays strictly below ``n_select``;
    the front that would meet or exceed it is the critical front.
    """
    accepted: list[int] = []
    for front in fronts:
        if len(accepted) + len(front) < n_select:
            accepted.extend(int(i) for i in front)
        else:
            return accepted, [int(i) for i in front]
    return accepted, []


def niching_select(
    fronts: Sequence[Sequence[int]],
    normalized: np.ndarray,
    reference_points: ReferencePointSet | np.ndarray,
    n_select: int,
    rng: np.random.Generator,
) -> NichingResult:
    """Select exactly ``n_select`` individuals by reference-point niching.

    Parameters
    ----------
    fronts : list of list of int
        Non-dominated fronts of the combined population, best first.
    normalized : np.ndarray
        Normalized objectives of the combined population, shape (n, n_obj).
    reference_points : ReferencePointSet or np.ndarray
        Reference directions shared across generations.
    n_select : int
        Number of survivors N.
    rng : np.random.Generator
        Caller-owned generator used for tie-breaking among candidates.

    Returns
    -------
    NichingResult
        ``selected`` lists the pre-critical members first, then the niche picks
        in the order they were made.

    Raises
    ------
    InsufficientCandidatesError
        If the population holds fewer than ``n_select`` individuals.
    SelectionShortfallError
        If no reference point has a remaining candidate while slots remain.
    """
    if not isinstance(rng, np.random.Generator):
        raise TypeError("rng must be a numpy.random.Generator owned by the caller.")
    directions = reference_points.directions if isinstance(reference_points, ReferencePointSet) else np.asarray(reference_points, dtype=float)
    normalized = np.asarray(normalized, dtype=float)
    n_total = normalized.shape[0]
    n_ref = directions.shape[0]
    if n_total and directions.shape[1] != normalized.shape[1]:
        raise ConfigurationError(
            f"Reference points have {directions.shape[1]} objectives but the population has {normalized.shape[1]}.",
            "Generate the reference points with the population's objective count",
        )
    if n_select < 0:
        raise ValueError("n_select must be non-negative.")
    if n_total < n_select:
        raise InsufficientCandidatesError(
            f"Cannot select {n_select} individuals from a population of {n_total}.",
            available=n_total,
            required=n_select,
        )

    accepted, critical = split_fronts(fronts, n_select)
    associations = np.full(n_total, -1, dtype=int)
    distances = np.full(n_total, np.nan)
    considered = np.asarray(accepted + critical, dtype=int)
    if considered.size:
        assoc, dist = associate(normalized[considered], directions)
        associations[considered] = assoc
        distances[considered] = dist

    niche_counts = np.bincount(associations[np.asarray(accepted, dtype=int)], minlength=n_ref).astype(int)

    pool: list[list[int]] = [[] for _ in range(n_ref)]
    for idx in sorted(critical):
        pool[associations[idx]].append(idx)
    remaining = np.array([len(p) for p in pool], dtype=int)

    chosen: list[int] = []
    n_remaining = n_select - len(accepted)
    while len(chosen) < n_remaining:
        if not remaining.any():
            raise SelectionShortfallError(n_select, len(accepted) + len(chosen))
        masked = np.where(remaining > 0, niche_counts, np.iinfo(np.int64).max)
        ref = int(np.argmin(masked))
        candidates = pool[ref]
        if niche_counts[ref] == 0:
            pick = min(candidates, key=lambda i: (distances[i], i))
        else:
            pick = candidates[int(rng.integers(len(candidates)))]
        candidates.remove(pick)
        remaining[ref] -= 1
        niche_counts[ref] += 1
        chosen.append(pick)

    _logger.debug(
        "Niching kept %d whole-front members and picked %d of %d from the critical front.",
        len(accepted),
        len(chosen),
        len(critical),
    )
    return NichingResult(
        selected=np.asarray(accepted + chosen, dtype=int),
        critical_front=np.asarray(critical, dtype=int),
        associations=associations,
        distances=distances,
        niche_counts=niche_counts,
    )


__all__ = ["NichingResult", "associate", "split_fronts", "niching_select"]
