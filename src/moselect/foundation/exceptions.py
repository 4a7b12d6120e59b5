"""
moselect exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All moselect-specific exceptions inherit from MOSelectError for easy catching.

Structural and configuration problems are raised eagerly, before any generation
runs. Numerical degeneracies inside a single generation (singular hyperplanes,
zero objective spread) are absorbed by the selection code and never surface here,
with the exception of SelectionShortfallError which signals diversity collapse.

Example:
    try:
        result = selector.select(F, n_select=92, rng=rng)
    except MOSelectError as e:
        print(f"Selection failed: {e}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class MOSelectError(Exception):
    """
    Base exception for all moselect errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MOSelectError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidDiversityMechanismError(ConfigurationError):
    """Raised when an unknown diversity mechanism is specified."""

    def __init__(
        self,
        mechanism: str,
        available: list[str] | None = None,
        close_matches: list[str] | None = None,
    ) -> None:
        available = available or [
            "crowding_distance",
            "niche_count",
            "max_min",
            "reference_point",
        ]
        message = f"Unknown diversity mechanism '{mechanism}'."
        suggestion = f"Available mechanisms: {', '.join(available)}"
        if close_matches:
            suggestion = f"Did you mean '{close_matches[0]}'? " + suggestion
        super().__init__(message, suggestion, {"mechanism": mechanism, "available": available})


class InvalidEngineError(ConfigurationError):
    """Raised when an unknown kernel engine is specified."""

    def __init__(self, engine: str, available: list[str] | None = None) -> None:
        available = available or ["numpy", "numba"]
        message = f"Unknown engine '{engine}'."
        suggestion = f"Available engines: {', '.join(available)}. Install extras with: pip install moselect[compute]"
        super().__init__(message, suggestion, {"engine": engine, "available": available})


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" or use {config_class}.default() for sensible defaults"
        super().__init__(message, suggestion, {"field": field})


# =============================================================================
# Selection Errors
# =============================================================================


class SelectionError(MOSelectError):
    """Base class for errors raised while ranking or selecting individuals."""

    pass


class InvalidDimensionError(SelectionError):
    """Raised when the objective count cannot support the requested machinery."""

    def __init__(self, n_obj: int, minimum: int = 1, context: str | None = None) -> None:
        where = f" for {context}" if context else ""
        message = f"Objective count {n_obj} is invalid{where}; at least {minimum} required."
        suggestion = "Reference-point selection needs n_obj >= 2; every mechanism needs n_obj >= 1"
        super().__init__(message, suggestion, {"n_obj": n_obj, "minimum": minimum})


class InsufficientCandidatesError(SelectionError):
    """Raised when too few individuals are available for a structural request."""

    def __init__(self, message: str, available: int | None = None, required: int | None = None) -> None:
        suggestion = "Increase the population size or request fewer survivors"
        super().__init__(message, suggestion, {"available": available, "required": required})


class SingularSystemError(SelectionError):
    """Raised by the linear solver when no admissible pivot exists.

    Normalization catches this and falls back to axis-wise maxima, so it only
    reaches callers who use the solver directly.
    """

    def __init__(self, column: int, pivot: float) -> None:
        message = f"Singular system: largest pivot in column {column} is {pivot:.3e}."
        suggestion = "Extreme points are linearly dependent; use axis-wise maxima as intercepts"
        super().__init__(message, suggestion, {"column": column, "pivot": pivot})


class SelectionShortfallError(SelectionError):
    """Raised when niching cannot fill every survivor slot."""

    def __init__(self, requested: int, selected: int) -> None:
        message = f"Niching selected {selected} of {requested} requested individuals."
        suggestion = "Diversity collapsed: check for NaN objectives or a population smaller than the survivor count"
        super().__init__(message, suggestion, {"requested": requested, "selected": selected})


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Base
    "MOSelectError",
    # Configuration
    "ConfigurationError",
    "InvalidDiversityMechanismError",
    "InvalidEngineError",
    "MissingConfigError",
    # Selection
    "SelectionError",
    "InvalidDimensionError",
    "InsufficientCandidatesError",
    "SingularSystemError",
    "SelectionShortfallError",
]
