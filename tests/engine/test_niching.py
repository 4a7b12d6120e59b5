import numpy as np
import pytest

from moselect.engine.reference import (
    associate,
    generate_reference_points,
    niching_select,
    normalize,
    split_fronts,
)
from moselect.foundation.exceptions import (
    ConfigurationError,
    InsufficientCandidatesError,
    SelectionShortfallError,
)
from moselect.foundation.metrics.pareto import non_dominated_sort


def _random_generation(seed=0, n=40, n_obj=3):
    rng = np.random.default_rng(seed)
    F = rng.random((n, n_obj))
    fronts, _ = non_dominated_sort(F)
    return F, fronts, normalize(F, fronts).normalized


def test_associate_picks_nearest_line():
    normalized = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0], [0.9, 0.1]])
    directions = np.array([[1.0, 0.0], [0.0, 1.0], [0.5, 0.5]])
    assoc, dist = associate(normalized, directions)
    np.testing.assert_array_equal(assoc, [0, 1, 2, 0])
    np.testing.assert_allclose(dist[:3], 0.0, atol=1e-12)
    assert dist[3] == pytest.approx(0.1)


def test_associate_ties_go_to_lowest_reference():
    assoc, dist = associate(np.array([[1.0, 1.0]]), np.array([[1.0, 0.0], [0.0, 1.0]]))
    assert assoc.tolist() == [0]
    assert dist[0] == pytest.approx(1.0)


def test_associate_point_on_line_has_zero_distance():
    assoc, dist = associate(np.array([[1.0, 1.0], [0.25, 0.25]]), np.array([[0.5, 0.5]]))
    assert assoc.tolist() == [0, 0]
    np.testing.assert_allclose(dist, 0.0, atol=1e-12)


def test_associate_handles_degenerate_front():
    F = np.full((6, 2), 1.0)
    assoc, dist = associate(F, np.array([[1.0, 0.0], [0.0, 1.0], [0.5, 0.5]]))
    assert assoc.shape == (6,)
    assert np.isfinite(dist).all()


@pytest.mark.parametrize(
    "n_select,accepted,critical",
    [
        (4, [0, 1], [2, 3, 4]),
        (5, [0, 1], [2, 3, 4]),
        (6, [0, 1, 2, 3, 4], [5]),
        (10, [0, 1, 2, 3, 4, 5], []),
    ],
)
def test_split_fronts(n_select, accepted, critical):
    assert split_fronts([[0, 1], [2, 3, 4], [5]], n_select) == (accepted, critical)


def test_selects_exactly_n_distinct():
    F, fronts, normalized = _random_generation()
    refs = generate_reference_points(3, 4)
    result = niching_select(fronts, normalized, refs, 20, np.random.default_rng(1))
    assert result.selected.size == 20
    assert np.unique(result.selected).size == 20
    assert result.niche_counts.sum() == 20
    assert result.niche_counts.shape == (len(refs),)


def test_pre_critical_fronts_survive_whole():
    F, fronts, normalized = _random_generation(seed=2)
    refs = generate_reference_points(3, 6)
    n_select = 25
    accepted, critical = split_fronts(fronts, n_select)
    result = niching_select(fronts, normalized, refs, n_select, np.random.default_rng(0))
    assert result.selected[: len(accepted)].tolist() == accepted
    assert set(result.selected[len(accepted) :]) <= set(critical)
    np.testing.assert_array_equal(result.critical_front, critical)


def test_same_seed_same_selection():
    F, fronts, normalized = _random_generation(seed=5, n=60)
    refs = generate_reference_points(3, 3)
    a = niching_select(fronts, normalized, refs, 30, np.random.default_rng(42))
    b = niching_select(fronts, normalized, refs, 30, np.random.default_rng(42))
    np.testing.assert_array_equal(a.selected, b.selected)


def test_empty_niche_takes_closest_candidate():
    normalized = np.array([[1.0, 0.0], [0.0, 1.0], [0.1, 1.0]])
    refs = np.array([[1.0, 0.0], [0.0, 1.0]])
    result = niching_select([[0], [1, 2]], normalized, refs, 2, np.random.default_rng(0))
    assert result.selected.tolist() == [0, 1]
    assert result.niche_counts.tolist() == [1, 1]


def test_empty_niche_prefers_point_exactly_on_line():
    normalized = np.array([[0.3, 0.3 + 1e-10], [1.0, 1.0]])
    result = niching_select([[0, 1]], normalized, np.array([[0.5, 0.5]]), 1, np.random.default_rng(0))
    assert result.selected.tolist() == [1]


def test_niche_count_tie_goes_to_lowest_reference():
    normalized = np.array([[0.0, 1.0], [1.0, 0.0]])
    for seed in range(5):
        result = niching_select([[0, 1]], normalized, np.eye(2), 1, np.random.default_rng(seed))
        # Both niches are empty; reference 0 owns individual 1.
        assert result.selected.tolist() == [1]
        assert result.niche_counts.tolist() == [1, 0]


def test_occupied_niche_draws_from_its_own_candidates():
    normalized = np.array(
        [
            [1.0, 0.0],
            [0.0, 1.0],
            [0.9, 0.1],
            [0.8, 0.1],
            [0.1, 0.9],
            [0.1, 0.8],
        ]
    )
    fronts = [[0, 1], [2, 3, 4, 5]]
    picks = set()
    for seed in range(30):
        result = niching_select(fronts, normalized, np.eye(2), 3, np.random.default_rng(seed))
        assert result.selected[:2].tolist() == [0, 1]
        assert result.selected[2] in (2, 3)
        picks.add(int(result.selected[2]))
    assert picks == {2, 3}


def test_inputs_are_not_mutated():
    F, fronts, normalized = _random_generation(seed=7)
    refs = generate_reference_points(3, 4)
    before = normalized.copy()
    fronts_before = [list(f) for f in fronts]
    niching_select(fronts, normalized, refs, 15, np.random.default_rng(3))
    np.testing.assert_array_equal(normalized, before)
    assert fronts == fronts_before


def test_shortfall_is_reported():
    normalized = np.eye(2)[[0, 1, 0, 1]].astype(float)
    refs = np.array([[1.0, 0.0], [0.0, 1.0]])
    # Fronts that cover only two individuals cannot fill three slots.
    with pytest.raises(SelectionShortfallError) as info:
        niching_select([[0, 1]], normalized, refs, 3, np.random.default_rng(0))
    assert info.value.details == {"requested": 3, "selected": 2}


def test_population_smaller_than_n_select():
    normalized = np.eye(2)
    with pytest.raises(InsufficientCandidatesError):
        niching_select([[0, 1]], normalized, np.eye(2), 3, np.random.default_rng(0))


def test_dimension_mismatch():
    with pytest.raises(ConfigurationError):
        niching_select([[0, 1]], np.eye(2), generate_reference_points(3, 2), 1, np.random.default_rng(0))


def test_requires_generator():
    with pytest.raises(TypeError):
        niching_select([[0, 1]], np.eye(2), np.eye(2), 1, np.random.RandomState(0))
