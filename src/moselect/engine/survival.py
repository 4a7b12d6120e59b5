"""Environmental selection for every supported diversity mechanism.

A generation's combined population (parents plus offspring) is sorted into
non-dominated fronts; whole fronts survive in rank order and the front that
overflows the survivor budget is truncated by the configured diversity
mechanism:

- ``crowding_distance``: most isolated members first (NSGA-II)
- ``niche_count``: least crowded sharing niches first
- ``max_min``: lowest max-min strength over the whole population
- ``reference_point``: normalization plus reference-point niching (NSGA-III)

Everything here is a pure function of its inputs. Randomness flows only
through the ``numpy.random.Generator`` the caller passes in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import ceil
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence

import numpy as np

from moselect.engine.config.selection import SelectionConfig, SelectionConfigData, canonical_mechanism
from moselect.engine.diversity.crowding import truncate_by_crowding
from moselect.engine.diversity.maxmin import maxmin_order, maxmin_scores
from moselect.engine.diversity.niche_count import niche_count, sharing_radius
from moselect.engine.reference.niching import NichingResult, niching_select, split_fronts
from moselect.engine.reference.normalization import NormalizationResult, normalize
from moselect.engine.reference.reference_points import ReferencePointSet, generate_reference_points
from moselect.foundation.exceptions import (
    ConfigurationError,
    InsufficientCandidatesError,
    InvalidDimensionError,
)
from moselect.foundation.kernel.registry import resolve_kernel
from moselect.foundation.metrics.pareto import as_objective_matrix, ideal_point, nadir_point
from moselect.foundation.registry import Registry

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from moselect.foundation.kernel.backend import KernelBackend


_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionResult:
    """Survivors of one generation plus the intermediate products that chose them."""

    selected: np.ndarray
    fronts: list[list[int]]
    rank: np.ndarray
    mechanism: str
    normalization: NormalizationResult | None = None
    niching: NichingResult | None = None

    def __len__(self) -> int:
        return int(self.selected.size)

    @property
    def niche_counts(self) -> np.ndarray | None:
        return None if self.niching is None else self.niching.niche_counts


SurvivalStrategy = Callable[..., SelectionResult]
SURVIVAL_STRATEGIES: Registry[SurvivalStrategy] = Registry("diversity mechanisms")


# -------------------------------------------------------------------------
# Rank-based utilities
# -------------------------------------------------------------------------


def sort_population(F: "ArrayLike", kernel: "KernelBackend | str | None" = None) -> np.ndarray:
    """
    Order the whole population best first: rank ascending, then crowding descending.

    Ties on both keys keep the lower index.
    """
    arr = as_objective_matrix(F)
    if arr.shape[0] == 0:
        return np.empty(0, dtype=int)
    _, rank, crowding = resolve_kernel(kernel).rank_and_crowding(arr)
    idx = np.arange(arr.shape[0])
    return np.lexsort((idx, -crowding, rank)).astype(int)


def select_best_n(
    F: "ArrayLike",
    n_select: int,
    kernel: "KernelBackend | str | None" = None,
    fronts: Sequence[Sequence[int]] | None = None,
) -> np.ndarray:
    """
    NSGA-II elitist truncation: whole fronts first, then the most crowded-out
    members of the critical front by crowding distance.
    """
    arr = as_objective_matrix(F)
    _check_budget(arr.shape[0], n_select)
    backend = resolve_kernel(kernel)
    if fronts is None:
        fronts, _ = backend.non_dominated_sort(arr)
    accepted, critical = split_fronts(fronts, n_select)
    if critical:
        crowding = backend.crowding_distance(arr, [critical])
        accepted.extend(truncate_by_crowding(critical, crowding, n_select - len(accepted)))
    return np.asarray(accepted, dtype=int)


def _check_budget(n_total: int, n_select: int) -> None:
    if n_select < 0:
        raise ValueError("n_select must be non-negative.")
    if n_select > n_total:
        raise InsufficientCandidatesError(
            f"Cannot select {n_select} individuals from a population of {n_total}.",
            available=n_total,
            required=n_select,
        )


# -------------------------------------------------------------------------
# Survival strategies
# -------------------------------------------------------------------------


@SURVIVAL_STRATEGIES.register("crowding_distance")
def _crowding_survival(F, fronts, rank, n_select, *, rng, kernel, reference_points) -> SelectionResult:
    selected = select_best_n(F, n_select, kernel=kernel, fronts=fronts)
    return SelectionResult(selected, fronts, rank, "crowding_distance")


@SURVIVAL_STRATEGIES.register("niche_count")
def _niche_count_survival(F, fronts, rank, n_select, *, rng, kernel, reference_points) -> SelectionResult:
    accepted, critical = split_fronts(fronts, n_select)
    if critical:
        crit = np.asarray(critical, dtype=int)
        # Radius from the critical front's own bounding box.
        counts = niche_count(F[crit])
        order = np.lexsort((crit, counts))
        accepted.extend(crit[order[: n_select - len(accepted)]].tolist())
    return SelectionResult(np.asarray(accepted, dtype=int), fronts, rank, "niche_count")


@SURVIVAL_STRATEGIES.register("max_min")
def _maxmin_survival(F, fronts, rank, n_select, *, rng, kernel, reference_points) -> SelectionResult:
    order = maxmin_order(maxmin_scores(F))
    return SelectionResult(order[:n_select].astype(int), fronts, rank, "max_min")


@SURVIVAL_STRATEGIES.register("reference_point")
def _reference_point_survival(F, fronts, rank, n_select, *, rng, kernel, reference_points) -> SelectionResult:
    if reference_points is None:
        raise ConfigurationError(
            "The reference_point mechanism needs reference points.",
            "Pass generate_reference_points(n_obj, partition_count) or use EnvironmentalSelector",
        )
    if F.shape[1] < 2:
        raise InvalidDimensionError(int(F.shape[1]), minimum=2, context="reference points")
    normalization = normalize(F, fronts)
    niching = niching_select(fronts, normalization.normalized, reference_points, n_select, rng)
    return SelectionResult(niching.selected, fronts, rank, "reference_point", normalization, niching)


def select_survivors(
    F: "ArrayLike",
    n_select: int,
    mechanism: str,
    rng: np.random.Generator,
    reference_points: ReferencePointSet | np.ndarray | None = None,
    kernel: "KernelBackend | str | None" = None,
) -> SelectionResult:
    """Select ``n_select`` survivors from a combined population.

    Parameters
    ----------
    F : array-like
        Objective values of the combined population, shape (n, n_obj).
    n_select : int
        Number of survivors.
    mechanism : str
        Diversity mechanism used to truncate the critical front.
    rng : np.random.Generator
        Caller-owned generator; only the reference-point mechanism draws from it.
    reference_points : ReferencePointSet, optional
        Required for the ``reference_point`` mechanism.
    kernel : KernelBackend or str, optional
        Backend for sorting and crowding; NumPy when omitted.

    Returns
    -------
    SelectionResult
        Survivor indices into ``F``, never duplicated.
    """
    if not isinstance(rng, np.random.Generator):
        raise TypeError("rng must be a numpy.random.Generator owned by the caller.")
    name = canonical_mechanism(mechanism)
    arr = as_objective_matrix(F)
    _check_budget(arr.shape[0], n_select)
    backend = resolve_kernel(kernel)
    fronts, rank = backend.non_dominated_sort(arr)
    strategy = SURVIVAL_STRATEGIES.get(name)
    result = strategy(arr, fronts, rank, n_select, rng=rng, kernel=backend, reference_points=reference_points)
    _logger.debug(
        "Selected %d of %d individuals with %s across %d fronts.",
        len(result),
        arr.shape[0],
        name,
        len(fronts),
    )
    return result


# -------------------------------------------------------------------------
# Preference rankings and leader selection
# -------------------------------------------------------------------------


def preference_ranking(
    F: "ArrayLike",
    mechanism: str,
    kernel: "KernelBackend | str | None" = None,
) -> np.ndarray:
    """
    Ordered indices of the preferred individuals, best first.

    - crowding distance: the whole population in :func:`sort_population` order
    - niche count: the first front by ascending niche count; when that front has
      a single member, the first two individuals in rank order instead
    - max min: ascending max-min score, kept while scores are negative and never
      fewer than two

    Algorithms such as NSPSO draw their leaders from the head of this ranking.
    """
    name = canonical_mechanism(mechanism)
    arr = as_objective_matrix(F)
    n = arr.shape[0]
    if n == 0:
        return np.empty(0, dtype=int)
    backend = resolve_kernel(kernel)

    if name == "crowding_distance":
        return sort_population(arr, kernel=backend)

    if name == "niche_count":
        fronts, _ = backend.non_dominated_sort(arr)
        first = np.asarray(fronts[0], dtype=int)
        if first.size > 1:
            delta = sharing_radius(ideal_point(arr), nadir_point(arr), first.size)
            counts = niche_count(arr[first], delta)
            return first[np.lexsort((first, counts))]
        flat = [i for front in fronts for i in front]
        return np.asarray(flat[:2], dtype=int)

    if name == "max_min":
        scores = maxmin_scores(arr)
        order = maxmin_order(scores)
        keep = 1
        while keep < n and scores[order[keep]] < 0:
            keep += 1
        return order[: min(max(keep, 2), n)].astype(int)

    raise ConfigurationError(
        "The reference_point mechanism does not define a preference ranking.",
        "Use select_survivors for reference-point selection, or rank with crowding_distance",
    )


def select_leader(
    ranking: "ArrayLike",
    individual: int,
    leader_selection_range: int,
    rng: np.random.Generator,
) -> int:
    """
    Draw a leader for ``individual`` from the head of a preference ranking.

    The candidate pool is the top ``ceil(len(ranking) * range / 100)`` entries,
    widened to at least two; ``individual`` itself is never returned.
    """
    if not 0 <= leader_selection_range <= 100:
        raise ConfigurationError(f"leader_selection_range must be in [0, 100], got {leader_selection_range}.")
    ranked = np.asarray(ranking, dtype=int)
    if ranked.size < 2:
        raise InsufficientCandidatesError(
            "Leader selection needs a ranking of at least two individuals.",
            available=int(ranked.size),
            required=2,
        )
    pool_size = min(max(ceil(ranked.size * leader_selection_range / 100), 2), ranked.size)
    pool = ranked[:pool_size]
    candidates = pool[pool != individual]
    if candidates.size == 0:
        raise InsufficientCandidatesError("No leader other than the individual itself.", available=0, required=1)
    return int(candidates[int(rng.integers(candidates.size))])


# -------------------------------------------------------------------------
# Configured selector
# -------------------------------------------------------------------------


class EnvironmentalSelector:
    """Configured, reusable survival selection for one optimization run.

    Validation and reference-point generation happen once, here; every
    generation then calls :meth:`select` or :meth:`rank`, which hold no state
    between calls. One selector may serve several populations as long as each
    call brings its own generator.

    Parameters
    ----------
    config : SelectionConfigData or mapping
        Selection settings (see :class:`SelectionConfig`).
    n_obj : int
        Number of objectives of the populations this selector will see.
    kernel : KernelBackend or str, optional
        Overrides ``config.engine``.

    Examples
    --------
    >>> selector = EnvironmentalSelector(SelectionConfig.default(n_obj=3), n_obj=3)
    >>> result = selector.select(F_combined, n_select=92, rng=np.random.default_rng(1))
    >>> survivors = X_combined[result.selected]
    """

    def __init__(
        self,
        config: SelectionConfigData | Mapping[str, Any],
        n_obj: int,
        kernel: "KernelBackend | str | None" = None,
    ):
        if not isinstance(config, SelectionConfigData):
            config = SelectionConfig.from_dict(config)
        self.config = config
        if n_obj < 1:
            raise InvalidDimensionError(n_obj, minimum=1)
        self.n_obj = n_obj
        self.kernel = resolve_kernel(kernel if kernel is not None else config.engine)
        self.reference_points: ReferencePointSet | None = None
        if config.uses_reference_points:
            if n_obj < 2:
                raise InvalidDimensionError(n_obj, minimum=2, context="reference points")
            self.reference_points = generate_reference_points(n_obj, config.partition_count)
            _logger.debug(
                "Generated %d reference points (n_obj=%d, partitions=%d).",
                len(self.reference_points),
                n_obj,
                config.partition_count,
            )

    @property
    def mechanism(self) -> str:
        return self.config.diversity_mechanism

    def _checked(self, F: "ArrayLike") -> np.ndarray:
        arr = as_objective_matrix(F)
        if arr.shape[0] and arr.shape[1] != self.n_obj:
            raise ConfigurationError(
                f"Selector was configured for {self.n_obj} objectives, got {arr.shape[1]}.",
                "Create one selector per objective count",
            )
        return arr

    def select(self, F: "ArrayLike", n_select: int, rng: np.random.Generator) -> SelectionResult:
        """Select ``n_select`` survivors from the combined population ``F``."""
        return select_survivors(
            self._checked(F),
            n_select,
            self.mechanism,
            rng,
            reference_points=self.reference_points,
            kernel=self.kernel,
        )

    def rank(self, F: "ArrayLike") -> np.ndarray:
        """Preference ranking of ``F`` for the configured (non-reference) mechanism."""
        return preference_ranking(self._checked(F), self.mechanism, kernel=self.kernel)

    def leader(self, ranking: "ArrayLike", individual: int, rng: np.random.Generator) -> int:
        """Draw a leader using the configured ``leader_selection_range``."""
        return select_leader(ranking, individual, self.config.leader_selection_range, rng)


__all__ = [
    "SURVIVAL_STRATEGIES",
    "EnvironmentalSelector",
    "SelectionResult",
    "preference_ranking",
    "select_best_n",
    "select_leader",
    "select_survivors",
    "sort_population",
]
