import numpy as np
import pytest

from moselect.engine.diversity import (
    crowding_distance,
    maxmin_order,
    maxmin_scores,
    niche_count,
    sharing_radius,
    truncate_by_crowding,
)
from moselect.foundation.metrics.pareto import non_dominated_sort


class TestCrowdingDistance:
    def test_boundaries_of_every_front_are_infinite(self):
        rng = np.random.default_rng(21)
        F = rng.random((40, 3))
        fronts, _ = non_dominated_sort(F)
        crowding = crowding_distance(F, fronts)
        for front in fronts:
            front = np.asarray(front)
            for m in range(F.shape[1]):
                assert np.isinf(crowding[front[np.argmin(F[front, m])]])
                assert np.isinf(crowding[front[np.argmax(F[front, m])]])

    def test_two_member_front_is_infinite(self):
        crowding = crowding_distance([[0.0, 1.0], [1.0, 0.0]])
        assert np.all(np.isinf(crowding))

    def test_uniform_front_interior_values(self):
        F = np.array([[0.0, 4.0], [1.0, 3.0], [2.0, 2.0], [3.0, 1.0], [4.0, 0.0]])
        crowding = crowding_distance(F)
        np.testing.assert_allclose(crowding[1:4], [1.0, 1.0, 1.0])

    def test_truncate_keeps_most_isolated_with_index_ties(self):
        crowding = np.array([0.5, np.inf, 0.2, np.inf, 0.5])
        assert truncate_by_crowding([0, 1, 2, 3, 4], crowding, 3) == [1, 3, 0]
        assert truncate_by_crowding([4, 2, 0], crowding, 2) == [0, 4]


class TestSharingRadius:
    def test_two_objectives(self):
        assert sharing_radius([0.0, 0.0], [2.0, 4.0], 4) == pytest.approx(2.0)

    def test_three_objectives_closed_form(self):
        # d = (1, 1, 1), n = 4: radicand 48 - 6 + 3 + 3 = 48
        assert sharing_radius([0.0, 0.0, 0.0], [1.0, 1.0, 1.0], 4) == pytest.approx(np.sqrt(48.0) / 6.0)

    def test_higher_dimensions_split_volume(self):
        assert sharing_radius(np.zeros(4), np.full(4, 2.0), 4) == pytest.approx(0.5)

    def test_single_point_does_not_divide_by_zero(self):
        assert sharing_radius([0.0, 0.0], [1.0, 1.0], 1) == pytest.approx(2.0)

    def test_rejects_bad_inputs(self):
        with pytest.raises(ValueError):
            sharing_radius([0.0, 0.0], [1.0, 1.0, 1.0], 3)
        with pytest.raises(ValueError):
            sharing_radius([0.0, 0.0], [1.0, 1.0], 0)


class TestNicheCount:
    def test_counts_include_self(self):
        F = np.array([[0.0, 0.0], [0.1, 0.0], [5.0, 5.0]])
        np.testing.assert_array_equal(niche_count(F, delta=1.0), [2, 2, 1])

    def test_default_radius(self):
        F = np.array([[0.0, 0.0], [0.1, 0.0], [5.0, 5.0]])
        # delta = (5 + 5) / 2 = 5
        np.testing.assert_array_equal(niche_count(F), [2, 2, 1])

    def test_zero_radius_still_counts_self(self):
        F = np.array([[1.0, 1.0], [1.0, 1.0]])
        np.testing.assert_array_equal(niche_count(F, delta=0.0), [1, 1])

    def test_empty(self):
        assert niche_count(np.empty((0, 2))).shape == (0,)


class TestMaxMin:
    def test_scores(self):
        F = np.array([[0.0, 1.0], [1.0, 0.0], [2.0, 2.0]])
        np.testing.assert_allclose(maxmin_scores(F), [-1.0, -1.0, 1.0])

    def test_single_individual_scores_zero(self):
        np.testing.assert_array_equal(maxmin_scores([[3.0, 4.0]]), [0.0])

    def test_duplicates_are_not_negative(self):
        scores = maxmin_scores([[1.0, 1.0], [1.0, 1.0]])
        np.testing.assert_array_equal(scores, [0.0, 0.0])

    def test_negative_iff_strictly_non_dominated(self):
        rng = np.random.default_rng(4)
        F = rng.random((25, 2))
        fronts, _ = non_dominated_sort(F)
        negative = set(np.flatnonzero(maxmin_scores(F) < 0).tolist())
        assert negative == set(fronts[0])

    def test_order_is_stable(self):
        np.testing.assert_array_equal(maxmin_order([0.5, -1.0, 0.5, -1.0]), [1, 3, 0, 2])
