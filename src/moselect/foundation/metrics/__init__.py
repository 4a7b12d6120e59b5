from .pareto import (
    as_objective_matrix,
    dominance_matrix,
    dominates,
    ideal_point,
    nadir_point,
    non_dominated_sort,
    pareto_filter,
)

__all__ = [
    "as_objective_matrix",
    "dominance_matrix",
    "dominates",
    "ideal_point",
    "nadir_point",
    "non_dominated_sort",
    "pareto_filter",
]
