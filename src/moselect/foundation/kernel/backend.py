from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np


class KernelBackend(ABC):
    """
    Interface for the kernels behind Pareto ranking.
    Backends implement the O(N^2) primitives on an objective matrix F of shape (N, M).
    Performance-sensitive: implementations should be vectorized or compiled and avoid Python loops.
    """

    name: str = "abstract"

    # -------- Ranking kernels --------

    @abstractmethod
    def non_dominated_sort(self, F: np.ndarray) -> tuple[list[list[int]], np.ndarray]:
        """
        Return (fronts, rank) for objective matrix F.

        fronts[k] lists the indices of rank k in ascending order; rank[i] is the
        front index of individual i.
        """

    @abstractmethod
    def crowding_distance(self, F: np.ndarray, fronts: Sequence[Sequence[int]]) -> np.ndarray:
        """
        Return per-individual crowding distances, computed front by front.
        """

    def rank_and_crowding(self, F: np.ndarray) -> tuple[list[list[int]], np.ndarray, np.ndarray]:
        """
        Convenience wrapper returning (fronts, rank, crowding).
        """
        fronts, rank = self.non_dominated_sort(F)
        return fronts, rank, self.crowding_distance(F, fronts)
