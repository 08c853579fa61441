"""
Range-file codec.

A range file records the target interval and the per-position ranges used
to scale a dataset so that another dataset can be scaled identically:

    x                 <- header, ignored on read
    -1 1              <- target interval (lower upper)
    1 0 10            <- position min max, one line per feature position
    2 -3.5 7.25

Floats are written with `repr`, so reading a written file reproduces the
table and interval exactly.
"""

import os
import time
from typing import IO, Iterable, Optional, Tuple, Union

import numpy as np

from svmscale.core.logging import get_logger, log_scaling_operation
from svmscale.features.range_computer import as_range_table
from svmscale.models.problem import TargetInterval
from svmscale.utils.error_codes import ErrorCode
from svmscale.utils.exceptions import RangeFileError, ShapeError

logger = get_logger(__name__)

DEFAULT_HEADER = "x"

RangeSource = Union[str, "os.PathLike[str]", IO[str]]


def _format_float(value: float) -> str:
    return repr(float(value))


def encode_ranges(
    ranges,
    interval: Tuple[float, float],
    n_features: Optional[int] = None,
    header: str = DEFAULT_HEADER,
) -> str:
    """Serializes a range table and target interval to range-file text.

    Args:
        ranges: Range table of shape (n, 2) with (min, max) rows.
        interval: The (lower, upper) target interval.
        n_features: Number of feature positions to write; all rows by default.
        header: Literal for the first line.

    Returns:
        The range-file text, newline terminated.

    Raises:
        ShapeError: If `n_features` exceeds the number of rows in `ranges`.
    """
    table = as_range_table(ranges)
    if n_features is None:
        n_features = table.shape[0]
    if n_features > table.shape[0]:
        raise ShapeError(
            f"cannot write {n_features} feature ranges from a table of {table.shape[0]}",
            expected=n_features,
            actual=table.shape[0],
            code=ErrorCode.RANGE_TABLE_TOO_SHORT,
        )

    lower, upper = interval
    lines = [header, f"{_format_float(lower)} {_format_float(upper)}"]
    for position in range(n_features):
        low, high = table[position]
        lines.append(f"{position + 1} {_format_float(low)} {_format_float(high)}")
    return "\n".join(lines) + "\n"


def _parse_field(field: str, line_number: int, source: str) -> float:
    try:
        value = float(field)
    except ValueError:
        value = None
    # float() accepts digit separators; range files never contain them.
    if value is None or "_" in field:
        raise RangeFileError(
            "field is not a number", line_number=line_number, token=field, source=source
        )
    return value


def decode_ranges(
    lines: Iterable[str], source: str = "<string>"
) -> Tuple[np.ndarray, TargetInterval]:
    """Parses range-file lines.

    Line 1 is ignored. Line 2 must hold exactly two numbers, the target
    interval. Every later non-blank line must hold at least three fields, of
    which the second and third are the (min, max) of the next feature
    position; further fields are ignored.

    Args:
        lines: The range-file lines.
        source: Name used in error messages.

    Returns:
        The (n, 2) range table and the target interval.

    Raises:
        RangeFileError: If a line has the wrong number of fields, a field is
            not a number, or the interval line is missing.
    """
    interval: Optional[TargetInterval] = None
    rows = []

    for line_number, line in enumerate(lines, start=1):
        if line_number == 1:
            continue
        fields = line.split()
        if line_number == 2:
            if len(fields) != 2:
                raise RangeFileError(
                    f"expected 2 fields in target interval line, got {len(fields)}",
                    line_number=line_number,
                    token=line.rstrip("\n"),
                    source=source,
                )
            interval = TargetInterval(
                _parse_field(fields[0], line_number, source),
                _parse_field(fields[1], line_number, source),
            )
            continue
        if not fields:
            continue
        if len(fields) < 3:
            raise RangeFileError(
                f"expected at least 3 fields in range line, got {len(fields)}",
                line_number=line_number,
                token=line.rstrip("\n"),
                source=source,
            )
        rows.append(
            (_parse_field(fields[1], line_number, source), _parse_field(fields[2], line_number, source))
        )

    if interval is None:
        raise RangeFileError(
            "missing target interval line",
            source=source,
            code=ErrorCode.RANGE_FILE_MISSING_INTERVAL,
        )

    table = np.array(rows, dtype=np.float64).reshape(len(rows), 2)
    return table, interval


def _decode_text(stream: IO[str], name: str) -> Tuple[np.ndarray, TargetInterval]:
    try:
        return decode_ranges(stream, source=name)
    except UnicodeDecodeError as e:
        logger.error("Range file is not valid text", source=name, encoding=e.encoding)
        raise RangeFileError("not valid UTF-8 text", source=name) from e


def read_ranges(source: RangeSource) -> Tuple[np.ndarray, TargetInterval]:
    """Reads a range file from a path or an open text stream.

    Returns:
        The (n, 2) range table and the target interval.

    Raises:
        RangeFileError: If the file content is malformed or is not UTF-8 text.
        OSError: If the path cannot be opened or read.
    """
    start_time = time.perf_counter()

    if hasattr(source, "read"):
        name = str(getattr(source, "name", "<stream>"))
        table, interval = _decode_text(source, name)
    else:
        name = os.fspath(source)
        with open(name, "r", encoding="utf-8") as f:
            table, interval = _decode_text(f, name)

    log_scaling_operation(
        logger,
        operation="load_ranges",
        source=name,
        duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
        n_features=int(table.shape[0]),
        lower=interval.lower,
        upper=interval.upper,
    )
    return table, interval


def write_ranges(
    destination: RangeSource,
    ranges,
    interval: Tuple[float, float],
    n_features: Optional[int] = None,
    header: str = DEFAULT_HEADER,
) -> None:
    """Writes a range file to a path or an open text stream.

    Args:
        destination: A filesystem path or a writable text stream.
        ranges: Range table of shape (n, 2).
        interval: The (lower, upper) target interval.
        n_features: Number of feature positions to write; all rows by default.
        header: Literal for the first line.

    Raises:
        ShapeError: If `n_features` exceeds the number of rows in `ranges`.
        OSError: If the path cannot be written.
    """
    text = encode_ranges(ranges, interval, n_features=n_features, header=header)
    written = len(as_range_table(ranges)) if n_features is None else n_features

    if hasattr(destination, "write"):
        name = str(getattr(destination, "name", "<stream>"))
        destination.write(text)
    else:
        name = os.fspath(destination)
        with open(name, "w", encoding="utf-8") as f:
            f.write(text)

    log_scaling_operation(logger, operation="save_ranges", source=name, n_features=written)
