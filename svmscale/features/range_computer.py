"""
Per-feature-position range computation.

Ranges are aligned by feature position: row `i` of the range table holds
the minimum and maximum of the `i`-th stored coordinate of every vector.
That is only meaningful when all vectors have the same number of
coordinates, so ragged datasets are rejected with a `ShapeError`.
"""

import numpy as np

from svmscale.core.logging import get_logger
from svmscale.models.problem import Problem
from svmscale.utils.exceptions import ShapeError

logger = get_logger(__name__)


def compute_ranges(problem: Problem) -> np.ndarray:
    """Computes the (min, max) of every feature position of a dataset.

    Args:
        problem: The dataset to inspect. It is not modified.

    Returns:
        A float64 array of shape (n_features, 2) whose rows are (min, max).
        An empty dataset yields an empty (0, 2) table.

    Raises:
        ShapeError: If the vectors do not all have the same number of
            coordinates.
    """
    n_records = len(problem)
    if n_records == 0:
        return np.empty((0, 2), dtype=np.float64)

    lengths = problem.lengths
    n_features = int(lengths[0])
    mismatched = np.flatnonzero(lengths != n_features)
    if mismatched.size:
        first = int(mismatched[0])
        logger.error(
            "Vectors disagree on coordinate count",
            expected=n_features,
            record=first,
            actual=int(lengths[first]),
        )
        raise ShapeError(
            f"record {first} has {int(lengths[first])} coordinates, "
            f"but record 0 has {n_features}",
            expected=n_features,
            actual=int(lengths[first]),
            context={"record": first},
        )

    # Uniform lengths make the flat value array a dense (records, features) block.
    block = problem.values.reshape(n_records, n_features)
    ranges = np.column_stack((block.min(axis=0), block.max(axis=0)))

    logger.debug("Computed feature ranges", records=n_records, n_features=n_features)
    return ranges


def as_range_table(ranges) -> np.ndarray:
    """Converts a sequence of (min, max) pairs to a float64 (n, 2) array.

    Raises:
        ValueError: If `ranges` is not a sequence of pairs.
    """
    table = np.asarray(ranges, dtype=np.float64)
    if table.size == 0:
        return table.reshape(0, 2)
    if table.ndim != 2 or table.shape[1] != 2:
        raise ValueError(f"range table must have shape (n, 2), got {table.shape}")
    return table
