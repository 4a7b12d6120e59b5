"""DTLZ benchmark problems with a scalable number of objectives."""

from __future__ import annotations

import numpy as np


class DTLZBase:
    def __init__(self, n_var: int, n_obj: int):
        if n_obj < 2:
            raise ValueError("DTLZ problems need at least 2 objectives.")
        if n_var < n_obj:
            raise ValueError(f"n_var ({n_var}) must be >= n_obj ({n_obj}).")
        self.n_var = n_var
        self.n_obj = n_obj
        self.xl = 0.0
        self.xu = 1.0

    def _distance(self, X_m: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def _shape(self, X_pos: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def evaluate(self, X: np.ndarray, out: dict) -> None:
        X = np.asarray(X, dtype=float)
        k = self.n_obj - 1
        g = self._distance(X[:, k:])
        F_res = (1.0 + g[:, None]) * self._shape(X[:, :k])
        if out.get("F") is not None:
            out["F"][:] = F_res
        else:
            out["F"] = F_res


def _product_shape(X_pos: np.ndarray, n_obj: int, head, tail) -> np.ndarray:
    """Objective i multiplies head(x_j) for j < n_obj - i - 1, then tail(x_{n_obj-i-1}) for i > 0."""
    F = np.ones((X_pos.shape[0], n_obj))
    for i in range(n_obj):
        n_head = n_obj - i - 1
        if n_head:
            F[:, i] = np.prod(head(X_pos[:, :n_head]), axis=1)
        if i > 0:
            F[:, i] *= tail(X_pos[:, n_head])
    return F


class DTLZ1Problem(DTLZBase):
    """Linear Pareto front on the hyperplane sum(f) = 0.5."""

    def __init__(self, n_var: int = 7, n_obj: int = 3):
        super().__init__(n_var, n_obj)

    def _distance(self, X_m: np.ndarray) -> np.ndarray:
        shifted = X_m - 0.5
        return 100.0 * (X_m.shape[1] + np.sum(shifted**2 - np.cos(20.0 * np.pi * shifted), axis=1))

    def _shape(self, X_pos: np.ndarray) -> np.ndarray:
        return 0.5 * _product_shape(X_pos, self.n_obj, lambda x: x, lambda x: 1.0 - x)


class DTLZ2Problem(DTLZBase):
    """Spherical Pareto front of radius 1."""

    def __init__(self, n_var: int = 12, n_obj: int = 3):
        super().__init__(n_var, n_obj)

    def _distance(self, X_m: np.ndarray) -> np.ndarray:
        return np.sum((X_m - 0.5) ** 2, axis=1)

    def _shape(self, X_pos: np.ndarray) -> np.ndarray:
        return _product_shape(
            X_pos,
            self.n_obj,
            lambda x: np.cos(x * np.pi / 2.0),
            lambda x: np.sin(x * np.pi / 2.0),
        )


__all__ = ["DTLZ1Problem", "DTLZ2Problem"]
