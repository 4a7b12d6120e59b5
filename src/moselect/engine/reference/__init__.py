"""
Reference-point machinery for many-objective selection.

- `reference_points.py`: Das-Dennis simplex lattice
- `normalization.py`: ideal point, extreme points, hyperplane intercepts
- `niching.py`: reference-line association and niche-preserving selection

References:
    K. Deb and H. Jain, "An Evolutionary Many-Objective Optimization Algorithm
    Using Reference-Point-Based Nondominated Sorting Approach, Part I: Solving
    Problems With Box Constraints," IEEE Trans. Evolutionary Computation,
    vol. 18, no. 4, 2014.
"""

from .niching import NichingResult, associate, niching_select, split_fronts
from .normalization import (
    NormalizationResult,
    achievement_scalarizing,
    find_extreme_points,
    find_intercepts,
    gaussian_elimination,
    normalize,
    normalize_objectives,
    translate_objectives,
    working_set,
)
from .reference_points import (
    ReferencePoint,
    ReferencePointSet,
    count_reference_points,
    generate_reference_points,
)

__all__ = [
    "NichingResult",
    "associate",
    "niching_select",
    "split_fronts",
    "NormalizationResult",
    "achievement_scalarizing",
    "find_extreme_points",
    "find_intercepts",
    "gaussian_elimination",
    "normalize",
    "normalize_objectives",
    "translate_objectives",
    "working_set",
    "ReferencePoint",
    "ReferencePointSet",
    "count_reference_points",
    "generate_reference_points",
]
