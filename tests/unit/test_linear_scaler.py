"""Unit tests for linear min-max scaling in `svmscale.features.linear_scaler`."""

import numpy as np
import pytest

from svmscale.features.linear_scaler import LinearScaler, scale_problem
from svmscale.features.range_computer import compute_ranges
from svmscale.models.problem import Problem
from svmscale.utils.error_codes import ErrorCode
from svmscale.utils.exceptions import ShapeError


def _random_problem(n_records: int = 20, n_features: int = 4, seed: int = 0) -> Problem:
    rng = np.random.default_rng(seed)
    block = rng.uniform(-50.0, 50.0, size=(n_records, n_features))
    return Problem.from_records(
        (float(i % 2), [(j + 1, float(v)) for j, v in enumerate(row)])
        for i, row in enumerate(block)
    )


@pytest.mark.unit
class TestScaleProblem:
    """A test suite for the `scale_problem` function."""

    def test_midpoint_maps_to_zero(self):
        """Tests the worked example: 5 in [0, 10] maps to 0 in [-1, 1]."""
        problem = Problem.from_records([(1, [(1, 5.0)])])

        scale_problem(problem, [(0.0, 10.0)], -1.0, 1.0)

        assert problem.values.tolist() == [0.0]

    def test_computed_ranges_map_extremes_to_bounds(self, sample_problem):
        """Tests scaling with ranges computed from the data itself."""
        ranges = scale_problem(sample_problem)

        assert ranges.tolist() == [[0.5, 1.5], [-2.0, 2.0]]
        assert sample_problem.values.tolist() == [-1.0, 1.0, 1.0, -1.0, 0.0, 0.0]

    def test_custom_interval(self, sample_problem):
        """Tests scaling into [0, 1]."""
        scale_problem(sample_problem, lower=0.0, upper=1.0)

        assert sample_problem.values.tolist() == [0.0, 1.0, 1.0, 0.0, 0.5, 0.5]

    def test_labels_and_layout_unchanged(self, sample_problem):
        """Tests that only values are rewritten."""
        labels = sample_problem.labels.copy()
        indices = sample_problem.indices.copy()
        offsets = sample_problem.offsets.copy()

        scale_problem(sample_problem)

        assert np.array_equal(sample_problem.labels, labels)
        assert np.array_equal(sample_problem.indices, indices)
        assert np.array_equal(sample_problem.offsets, offsets)

    def test_supplied_ranges_returned_unchanged(self, sample_problem):
        """Tests that explicitly supplied ranges are returned as-is."""
        ranges = [(0.0, 2.0), (-4.0, 4.0)]

        used = scale_problem(sample_problem, ranges)

        assert used is ranges
        assert used == [(0.0, 2.0), (-4.0, 4.0)]

    def test_longer_range_table_is_accepted(self, sample_problem):
        """Tests that extra ranges beyond the feature count are ignored."""
        scale_problem(sample_problem, [(0.5, 1.5), (-2.0, 2.0), (0.0, 1.0)])

        assert sample_problem.values.tolist() == [-1.0, 1.0, 1.0, -1.0, 0.0, 0.0]

    def test_inverse_mapping_recovers_values(self):
        """Tests that the inverse formula recovers the original values."""
        for lower, upper in [(-1.0, 1.0), (0.0, 1.0), (-5.0, 3.0)]:
            problem = _random_problem()
            original = problem.values.copy()

            ranges = scale_problem(problem, lower=lower, upper=upper)

            positions = problem.positions
            mins, maxs = ranges[positions, 0], ranges[positions, 1]
            recovered = mins + (maxs - mins) * (problem.values - lower) / (upper - lower)
            assert np.allclose(recovered, original)

    def test_identity_scaling_reproduces_values(self):
        """Tests that scaling onto a feature's own range changes nothing."""
        problem = Problem.from_records([(1, [(1, 2.0)]), (2, [(1, 5.0)]), (3, [(1, 9.0)])])

        scale_problem(problem, [(2.0, 9.0)], 2.0, 9.0)

        assert problem.values.tolist() == [2.0, 5.0, 9.0]

    def test_constant_feature_is_not_guarded(self):
        """Tests the documented edge case: max == min yields non-finite values."""
        problem = Problem.from_records([(1, [(1, 3.0), (2, 1.0)]), (2, [(1, 3.0), (2, 2.0)])])

        scale_problem(problem)

        assert np.isnan(problem.values[0])
        assert np.isnan(problem.values[2])
        assert problem.values[1] == -1.0
        assert problem.values[3] == 1.0

    def test_value_outside_constant_range_is_infinite(self):
        """Tests that a value off a degenerate range maps to infinity."""
        problem = Problem.from_records([(1, [(1, 4.0)])])

        scale_problem(problem, [(3.0, 3.0)])

        assert np.isposinf(problem.values[0])

    def test_values_outside_ranges_extrapolate(self):
        """Tests that scaling with foreign ranges is not clipped."""
        problem = Problem.from_records([(1, [(1, 20.0)])])

        scale_problem(problem, [(0.0, 10.0)])

        assert problem.values.tolist() == [3.0]

    def test_short_range_table_raises_before_mutation(self, sample_problem):
        """Tests that too few ranges is fatal and leaves values untouched."""
        before = sample_problem.values.copy()

        with pytest.raises(ShapeError) as exc_info:
            scale_problem(sample_problem, [(0.0, 1.0)])

        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 1
        assert exc_info.value.code == ErrorCode.RANGE_TABLE_TOO_SHORT
        assert np.array_equal(sample_problem.values, before)

    def test_ragged_problem_without_ranges_raises(self, ragged_problem):
        """Tests that ranges cannot be computed for a ragged dataset."""
        before = ragged_problem.values.copy()

        with pytest.raises(ShapeError):
            scale_problem(ragged_problem)

        assert np.array_equal(ragged_problem.values, before)

    def test_ragged_problem_with_enough_ranges(self, ragged_problem):
        """Tests that explicit ranges scale a ragged dataset positionally."""
        scale_problem(ragged_problem, [(0.0, 4.0), (0.0, 8.0), (0.0, 12.0)], 0.0, 1.0)

        assert ragged_problem.values.tolist() == [0.25, 0.5, 0.5, 0.75, 0.75, 0.75]

    def test_empty_problem(self):
        """Tests that scaling an empty dataset is a no-op."""
        problem = Problem.from_records([])

        ranges = scale_problem(problem)

        assert ranges.shape == (0, 2)


@pytest.mark.unit
class TestLinearScaler:
    """A test suite for the stateful `LinearScaler`."""

    def test_fit_transform(self, sample_problem):
        """Tests fitting and scaling in one step."""
        scaler = LinearScaler()

        scaler.fit_transform(sample_problem)

        assert scaler.is_fitted
        assert sample_problem.values.tolist() == [-1.0, 1.0, 1.0, -1.0, 0.0, 0.0]

    def test_fitted_ranges_apply_to_another_problem(self, sample_problem):
        """Tests scaling a test set with training ranges."""
        scaler = LinearScaler(0.0, 1.0).fit(sample_problem)
        test = Problem.from_records([(1, [(1, 1.0), (3, 1.0)])])

        scaler.transform(test)

        assert test.values.tolist() == [0.5, 0.75]

    def test_transform_requires_fit(self, sample_problem):
        """Tests that an unfitted scaler refuses to transform."""
        with pytest.raises(ValueError, match="fitted"):
            LinearScaler().transform(sample_problem)

    def test_inverse_transform(self):
        """Tests that inverse_transform undoes transform."""
        problem = _random_problem(seed=3)
        original = problem.values.copy()
        scaler = LinearScaler(-2.0, 5.0)

        scaler.fit_transform(problem)
        scaler.inverse_transform(problem)

        assert np.allclose(problem.values, original)

    def test_save_and_load_ranges(self, sample_problem, tmp_path):
        """Tests that saved ranges restore both table and interval."""
        path = tmp_path / "scaler.range"
        scaler = LinearScaler(0.0, 2.0).fit(sample_problem)

        scaler.save_ranges(path)
        restored = LinearScaler.load_ranges(path)

        assert restored.interval == (0.0, 2.0)
        assert np.array_equal(restored.ranges_, scaler.ranges_)

    def test_save_requires_fit(self, tmp_path):
        """Tests that an unfitted scaler cannot be saved."""
        with pytest.raises(ValueError):
            LinearScaler().save_ranges(tmp_path / "never.range")

    def test_get_stats_and_repr(self, sample_problem):
        """Tests the summary helpers."""
        scaler = LinearScaler()
        assert "unfitted" in repr(scaler)
        assert scaler.get_stats()["is_fitted"] is False

        scaler.fit(sample_problem)

        stats = scaler.get_stats()
        assert stats["n_features"] == 2
        assert stats["ranges"] == [[0.5, 1.5], [-2.0, 2.0]]
        assert "n_features=2" in repr(scaler)
