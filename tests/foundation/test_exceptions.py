"""Tests for the moselect exception hierarchy."""

import pytest

from moselect.exceptions import (
    ConfigurationError,
    InsufficientCandidatesError,
    InvalidDiversityMechanismError,
    InvalidDimensionError,
    InvalidEngineError,
    MissingConfigError,
    MOSelectError,
    SelectionError,
    SelectionShortfallError,
    SingularSystemError,
)


class TestExceptionHierarchy:
    def test_configuration_errors(self):
        for exc in (InvalidDiversityMechanismError("x"), InvalidEngineError("x"), MissingConfigError("x")):
            assert isinstance(exc, ConfigurationError)
            assert isinstance(exc, MOSelectError)

    def test_selection_errors(self):
        errors = (
            InvalidDimensionError(1),
            InsufficientCandidatesError("too few"),
            SingularSystemError(0, 0.0),
            SelectionShortfallError(10, 8),
        )
        for exc in errors:
            assert isinstance(exc, SelectionError)
            assert isinstance(exc, MOSelectError)


class TestMessages:
    def test_base_message_and_suggestion(self):
        exc = MOSelectError("Something failed", suggestion="Try again", details={"k": 1})
        assert str(exc) == "Something failed\n\nSuggestion: Try again"
        assert exc.details == {"k": 1}

    def test_message_without_suggestion(self):
        exc = MOSelectError("plain")
        assert str(exc) == "plain"
        assert exc.details == {}

    def test_invalid_mechanism_lists_options(self):
        exc = InvalidDiversityMechanismError("nich", close_matches=["niche_count"])
        assert "Unknown diversity mechanism 'nich'" in str(exc)
        assert "Did you mean 'niche_count'?" in exc.suggestion
        assert "reference_point" in exc.suggestion

    def test_invalid_engine_mentions_extra(self):
        exc = InvalidEngineError("cuda")
        assert "moselect[compute]" in exc.suggestion
        assert exc.details["available"] == ["numpy", "numba"]

    def test_missing_config_points_at_defaults(self):
        exc = MissingConfigError("diversity_mechanism", config_class="SelectionConfig")
        assert "SelectionConfig.default()" in exc.suggestion

    def test_shortfall_details(self):
        exc = SelectionShortfallError(requested=52, selected=50)
        assert exc.details == {"requested": 52, "selected": 50}
        assert "50 of 52" in exc.message

    def test_dimension_context(self):
        exc = InvalidDimensionError(1, minimum=2, context="reference points")
        assert "for reference points" in exc.message


def test_public_namespace_rejects_unknown_names():
    import moselect.exceptions as public

    with pytest.raises(AttributeError):
        public.NotAnError  # noqa: B018
    assert "SelectionShortfallError" in dir(public)
