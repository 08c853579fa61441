"""Writer that re-emits a Problem in libSVM sparse-text format."""

import sys
from typing import IO, Iterator, Optional

from svmscale.models.problem import Problem


def format_number(value: float, precision: Optional[int] = None) -> str:
    """Formats a float for output.

    Without a precision the shortest text that parses back to the same float
    is used, and integral values drop their trailing ".0" ("1", "-1").

    Args:
        value: The number to format.
        precision: Fixed number of decimals, or None for exact output.

    Returns:
        The formatted number.
    """
    if precision is not None:
        return f"{value:.{precision}f}"
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_line(problem: Problem, i: int, precision: Optional[int] = None) -> str:
    """Formats record `i` as `label index:value ...` with ascending indices.

    The label is always written at full precision; `precision` applies to
    coordinate values only.
    """
    fields = [format_number(float(problem.labels[i]))]
    fields.extend(
        f"{coord.index}:{format_number(coord.value, precision)}"
        for coord in problem.sorted_vector(i)
    )
    return " ".join(fields)


def iter_lines(problem: Problem, precision: Optional[int] = None) -> Iterator[str]:
    """Yields one formatted line per record, in input order."""
    for i in range(len(problem)):
        yield format_line(problem, i, precision)


def write_problem(
    problem: Problem,
    stream: Optional[IO[str]] = None,
    precision: Optional[int] = None,
) -> int:
    """Writes every record of `problem` to `stream`, one line each.

    Args:
        problem: The dataset to write.
        stream: Destination text stream; standard output by default.
        precision: Fixed number of decimals for values, or None for exact output.

    Returns:
        The number of records written.
    """
    stream = stream if stream is not None else sys.stdout
    count = 0
    for line in iter_lines(problem, precision):
        stream.write(line + "\n")
        count += 1
    return count
