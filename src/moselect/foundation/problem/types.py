from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class ProblemProtocol(Protocol):
    """Anything that maps decision vectors to fitness vectors.

    The selection engine never calls a problem itself; it only consumes the
    objective matrix a problem produced. Problems write ``out["F"]`` with
    shape (N, n_obj), lower values being better.
    """

    n_var: int
    n_obj: int
    xl: float | np.ndarray
    xu: float | np.ndarray

    def evaluate(self, X: np.ndarray, out: dict[str, np.ndarray]) -> None: ...


def evaluate_population(problem: ProblemProtocol, X: np.ndarray) -> np.ndarray:
    """Evaluate decision vectors X (N, n_var) and return the objective matrix (N, n_obj)."""
    X = np.atleast_2d(np.asarray(X, dtype=float))
    F = np.empty((X.shape[0], problem.n_obj), dtype=np.float64)
    problem.evaluate(X, {"F": F})
    return F


__all__ = ["ProblemProtocol", "evaluate_population"]
