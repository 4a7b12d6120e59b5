from .dtlz import DTLZ1Problem, DTLZ2Problem
from .types import ProblemProtocol, evaluate_population

__all__ = ["DTLZ1Problem", "DTLZ2Problem", "ProblemProtocol", "evaluate_population"]
