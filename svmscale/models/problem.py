"""
In-memory model of a labeled sparse-vector dataset.

A `Problem` stores every vector's coordinates back to back in flat NumPy
arrays and records where each vector starts in an `offsets` array, so vector
`i` spans `offsets[i]:offsets[i + 1]`. No end-of-vector marker is stored.

Coordinates keep the order in which they were read: scaling aligns features
by their ordinal slot within a vector (the "feature position"), not by their
index. Sorting by index only happens when a vector is emitted.
"""

from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Sequence, Tuple, Union

import numpy as np


class Coordinate(NamedTuple):
    """One (index, value) pair of a sparse vector."""

    index: int
    value: float


class TargetInterval(NamedTuple):
    """The output bounds values are linearly mapped into."""

    lower: float = -1.0
    upper: float = 1.0


RecordCoordinates = Union[Mapping[int, float], Iterable[Tuple[int, float]]]


class Problem:
    """A labeled sparse-vector dataset.

    The Problem exclusively owns its arrays: the constructor copies its
    inputs, and the only mutation performed afterwards is the in-place
    rewrite of `values` by the linear scaler.

    Attributes:
        labels: Label of each record, shape (n_records,).
        indices: Coordinate index of every stored coordinate, shape (n_coords,).
        values: Coordinate value of every stored coordinate, shape (n_coords,).
        offsets: Start of each vector in `indices`/`values`, with a final
            entry equal to n_coords, shape (n_records + 1,).
        max_index: Largest coordinate index in the dataset, 0 when empty.
    """

    def __init__(
        self,
        labels: Sequence[float],
        indices: Sequence[int],
        values: Sequence[float],
        offsets: Sequence[int],
    ):
        self.labels = np.array(labels, dtype=np.float64)
        self.indices = np.array(indices, dtype=np.int64)
        self.values = np.array(values, dtype=np.float64)
        self.offsets = np.array(offsets, dtype=np.int64)
        self._check_layout()
        self.max_index = int(self.indices.max()) if self.indices.size else 0

    def _check_layout(self) -> None:
        if self.labels.ndim != 1 or self.indices.ndim != 1 or self.values.ndim != 1:
            raise ValueError("labels, indices and values must be one-dimensional")
        if self.indices.size != self.values.size:
            raise ValueError(
                f"indices ({self.indices.size}) and values ({self.values.size}) differ in length"
            )
        if self.offsets.shape != (self.labels.size + 1,):
            raise ValueError(
                f"offsets must have {self.labels.size + 1} entries, got {self.offsets.size}"
            )
        if self.offsets[0] != 0 or self.offsets[-1] != self.values.size:
            raise ValueError("offsets must start at 0 and end at the number of coordinates")
        if np.any(np.diff(self.offsets) < 0):
            raise ValueError("offsets must be non-decreasing")

    @classmethod
    def from_records(cls, records: Iterable[Tuple[float, RecordCoordinates]]) -> "Problem":
        """Builds a Problem from (label, coordinates) records.

        Args:
            records: Iterable of `(label, coords)` where `coords` is either a
                mapping of index to value or an iterable of (index, value)
                pairs. Coordinate order is preserved.

        Returns:
            A new Problem holding the records in order.
        """
        labels: List[float] = []
        indices: List[int] = []
        values: List[float] = []
        offsets: List[int] = [0]

        for label, coords in records:
            pairs = coords.items() if isinstance(coords, Mapping) else coords
            for index, value in pairs:
                indices.append(int(index))
                values.append(float(value))
            labels.append(float(label))
            offsets.append(len(values))

        return cls(labels, indices, values, offsets)

    def __len__(self) -> int:
        return int(self.labels.size)

    def __iter__(self) -> Iterator[Tuple[float, List[Coordinate]]]:
        for i in range(len(self)):
            yield float(self.labels[i]), self.vector(i)

    def __repr__(self) -> str:
        return (
            f"Problem(records={len(self)}, "
            f"coordinates={self.values.size}, "
            f"max_index={self.max_index})"
        )

    @property
    def lengths(self) -> np.ndarray:
        """Number of coordinates in each vector."""
        return np.diff(self.offsets)

    @property
    def feature_count(self) -> int:
        """Number of feature positions, i.e. the length of the longest vector."""
        return int(self.lengths.max()) if len(self) else 0

    @property
    def is_uniform(self) -> bool:
        """True when every vector has the same number of coordinates."""
        lengths = self.lengths
        return bool(lengths.size == 0 or np.all(lengths == lengths[0]))

    @property
    def positions(self) -> np.ndarray:
        """Feature position of every stored coordinate within its own vector."""
        starts = np.repeat(self.offsets[:-1], self.lengths)
        return np.arange(self.values.size, dtype=np.int64) - starts

    def _span(self, i: int) -> slice:
        if not 0 <= i < len(self):
            raise IndexError(f"record {i} out of range for {len(self)} records")
        return slice(int(self.offsets[i]), int(self.offsets[i + 1]))

    def vector(self, i: int) -> List[Coordinate]:
        """Returns the coordinates of record `i` in stored order."""
        span = self._span(i)
        return [
            Coordinate(int(index), float(value))
            for index, value in zip(self.indices[span], self.values[span])
        ]

    def sorted_vector(self, i: int) -> List[Coordinate]:
        """Returns the coordinates of record `i` in ascending index order."""
        span = self._span(i)
        order = np.argsort(self.indices[span], kind="stable")
        indices = self.indices[span][order]
        values = self.values[span][order]
        return [Coordinate(int(index), float(value)) for index, value in zip(indices, values)]

    def get_line(self, i: int) -> Tuple[float, Dict[int, float]]:
        """Returns the label of record `i` and its coordinates as an index->value map."""
        return float(self.labels[i]), {c.index: c.value for c in self.vector(i)}

    def copy(self) -> "Problem":
        """Returns an independent copy of the dataset."""
        return Problem(self.labels, self.indices, self.values, self.offsets)
