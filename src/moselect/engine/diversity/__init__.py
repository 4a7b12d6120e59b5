"""
Diversity metrics used to rank individuals inside a Pareto front.

- `crowding.py`: crowding distance (larger preferred)
- `niche_count.py`: Fonseca-Fleming sharing radius and niche counts (smaller preferred)
- `maxmin.py`: max-min Pareto strength (smaller preferred)
"""

from .crowding import crowding_distance, truncate_by_crowding
from .maxmin import maxmin_order, maxmin_scores
from .niche_count import niche_count, sharing_radius

__all__ = [
    "crowding_distance",
    "truncate_by_crowding",
    "maxmin_order",
    "maxmin_scores",
    "niche_count",
    "sharing_radius",
]
