# kernel/numba_backend.py
from __future__ import annotations

from typing import Sequence

import numpy as np

from .backend import KernelBackend
from .numba_ops import dominance_matrix_numba, front_crowding_numba
from .numpy_backend import _peel_fronts


class NumbaKernel(KernelBackend):
    """
    JIT-compiled ranking kernels. The first call per dtype pays the compilation cost.
    """

    name = "numba"

    def non_dominated_sort(self, F: np.ndarray) -> tuple[list[list[int]], np.ndarray]:
        F = np.ascontiguousarray(F, dtype=np.float64)
        if F.shape[0] == 0:
            return [], np.empty(0, dtype=int)
        return _peel_fronts(dominance_matrix_numba(F))

    def crowding_distance(self, F: np.ndarray, fronts: Sequence[Sequence[int]]) -> np.ndarray:
        F = np.ascontiguousarray(F, dtype=np.float64)
        crowding = np.zeros(F.shape[0], dtype=np.float64)
        for front in fronts:
            if len(front) == 0:
                continue
            front_arr = np.asarray(front, dtype=np.int64)
            crowding[front_arr] = front_crowding_numba(np.ascontiguousarray(F[front_arr]))
        return crowding
