import numpy as np
import pytest

from moselect.foundation.problem import DTLZ1Problem, DTLZ2Problem, evaluate_population


@pytest.fixture(scope="function")
def rng():
    return np.random.default_rng(2024)


@pytest.fixture(scope="function")
def dtlz1_combined(rng):
    """
    Objective values of a 52-member parent population plus 52 offspring on DTLZ1.
    """
    problem = DTLZ1Problem(n_var=7, n_obj=3)
    X = rng.uniform(problem.xl, problem.xu, size=(104, problem.n_var))
    return evaluate_population(problem, X)


@pytest.fixture(scope="function")
def dtlz2_combined(rng):
    problem = DTLZ2Problem(n_var=12, n_obj=3)
    X = rng.uniform(problem.xl, problem.xu, size=(104, problem.n_var))
    return evaluate_population(problem, X)
