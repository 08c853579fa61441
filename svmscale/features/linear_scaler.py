"""
Linear min-max scaling of sparse datasets.

Every stored value is mapped into the target interval [lower, upper] with
the range of its feature position:

    scaled = lower + (upper - lower) * (value - min) / (max - min)

Scaling rewrites `Problem.values` in place; labels and the vector layout are
left untouched. A feature whose min equals its max has no defined image and
produces non-finite values, exactly as the formula does.
"""

import os
import time
from typing import Any, Dict, Optional, Union

import numpy as np

from svmscale.core.logging import get_logger
from svmscale.features.range_computer import as_range_table, compute_ranges
from svmscale.features.range_file import read_ranges, write_ranges
from svmscale.models.problem import Problem, TargetInterval
from svmscale.utils.error_codes import ErrorCode
from svmscale.utils.exceptions import ShapeError

logger = get_logger(__name__)


def _check_table_covers(table: np.ndarray, problem: Problem) -> None:
    n_features = problem.feature_count
    if table.shape[0] < n_features:
        logger.error(
            "Range table shorter than dataset feature count",
            n_ranges=int(table.shape[0]),
            n_features=n_features,
        )
        raise ShapeError(
            f"not enough ranges supplied: got {table.shape[0]}, need {n_features}",
            expected=n_features,
            actual=int(table.shape[0]),
            code=ErrorCode.RANGE_TABLE_TOO_SHORT,
        )


def _apply(problem: Problem, table: np.ndarray, lower: float, upper: float) -> None:
    positions = problem.positions
    mins = table[positions, 0]
    maxs = table[positions, 1]
    # max == min is left unguarded: such features become inf/nan.
    with np.errstate(divide="ignore", invalid="ignore"):
        problem.values[:] = lower + (upper - lower) * (problem.values - mins) / (maxs - mins)


def scale_problem(
    problem: Problem,
    ranges=None,
    lower: float = -1.0,
    upper: float = 1.0,
):
    """Rescales every value of `problem` in place.

    Args:
        problem: The dataset to rescale.
        ranges: Range table with one (min, max) row per feature position. If
            None, it is computed from `problem` first.
        lower: Lower bound of the target interval.
        upper: Upper bound of the target interval.

    Returns:
        The range table actually used: `ranges` itself when it was supplied,
        otherwise the newly computed table.

    Raises:
        ShapeError: If the table has fewer rows than the dataset has feature
            positions, or if ranges must be computed from a ragged dataset.
            The dataset is left unmodified in both cases.
    """
    start_time = time.perf_counter()
    used = compute_ranges(problem) if ranges is None else ranges
    table = as_range_table(used)
    _check_table_covers(table, problem)
    _apply(problem, table, lower, upper)

    logger.debug(
        "Scaled dataset",
        records=len(problem),
        n_features=problem.feature_count,
        lower=lower,
        upper=upper,
        computed_ranges=ranges is None,
        duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
    )
    return used


class LinearScaler:
    """Fits per-position ranges on one dataset and applies them to others.

    Typical use is fitting on a training set, saving the ranges, and later
    loading them to scale a test set identically.

    Attributes:
        lower: Lower bound of the target interval.
        upper: Upper bound of the target interval.
        ranges_: Range table of shape (n_features, 2), None until fitted or loaded.
    """

    def __init__(self, lower: float = -1.0, upper: float = 1.0, ranges=None):
        """Initializes the scaler.

        Args:
            lower: Lower bound of the target interval.
            upper: Upper bound of the target interval.
            ranges: Optional pre-computed range table.
        """
        self.lower = float(lower)
        self.upper = float(upper)
        self.ranges_: Optional[np.ndarray] = None if ranges is None else as_range_table(ranges)

    @property
    def interval(self) -> TargetInterval:
        return TargetInterval(self.lower, self.upper)

    @property
    def is_fitted(self) -> bool:
        return self.ranges_ is not None

    def fit(self, problem: Problem) -> "LinearScaler":
        """Computes the range table of `problem`.

        Raises:
            ShapeError: If the vectors of `problem` differ in length.
        """
        self.ranges_ = compute_ranges(problem)
        return self

    def transform(self, problem: Problem) -> Problem:
        """Scales `problem` in place with the fitted ranges.

        Returns:
            The same Problem, for chaining.

        Raises:
            ValueError: If the scaler has neither been fitted nor loaded.
            ShapeError: If the fitted table is shorter than the dataset's
                feature count.
        """
        if self.ranges_ is None:
            raise ValueError("Scaler must be fitted or loaded before transform")
        scale_problem(problem, self.ranges_, self.lower, self.upper)
        return problem

    def fit_transform(self, problem: Problem) -> Problem:
        """Fits on `problem` and scales it in place."""
        return self.fit(problem).transform(problem)

    def inverse_transform(self, problem: Problem) -> Problem:
        """Maps scaled values of `problem` back to their original units in place.

        Raises:
            ValueError: If the scaler has neither been fitted nor loaded.
            ShapeError: If the fitted table is shorter than the dataset's
                feature count.
        """
        if self.ranges_ is None:
            raise ValueError("Scaler must be fitted or loaded before inverse_transform")
        table = self.ranges_
        _check_table_covers(table, problem)
        positions = problem.positions
        mins = table[positions, 0]
        maxs = table[positions, 1]
        problem.values[:] = mins + (maxs - mins) * (problem.values - self.lower) / (
            self.upper - self.lower
        )
        return problem

    def save_ranges(self, path: Union[str, "os.PathLike[str]"], header: str = "x") -> None:
        """Writes the fitted ranges and target interval to a range file.

        Raises:
            ValueError: If the scaler has neither been fitted nor loaded.
            OSError: If the file cannot be written.
        """
        if self.ranges_ is None:
            raise ValueError("Scaler must be fitted or loaded before saving ranges")
        write_ranges(path, self.ranges_, self.interval, header=header)

    @classmethod
    def load_ranges(cls, path: Union[str, "os.PathLike[str]"]) -> "LinearScaler":
        """Builds a scaler from a range file, restoring its target interval.

        Raises:
            RangeFileError: If the file is malformed.
            OSError: If the file cannot be read.
        """
        table, interval = read_ranges(path)
        return cls(interval.lower, interval.upper, ranges=table)

    def get_stats(self) -> Dict[str, Any]:
        """Returns a summary of the scaler state."""
        return {
            "lower": self.lower,
            "upper": self.upper,
            "n_features": None if self.ranges_ is None else int(self.ranges_.shape[0]),
            "ranges": None if self.ranges_ is None else self.ranges_.tolist(),
            "is_fitted": self.is_fitted,
        }

    def __repr__(self) -> str:
        fitted = "fitted" if self.is_fitted else "unfitted"
        n_features = None if self.ranges_ is None else self.ranges_.shape[0]
        return (
            f"LinearScaler("
            f"lower={self.lower}, "
            f"upper={self.upper}, "
            f"n_features={n_features}, "
            f"{fitted})"
        )
