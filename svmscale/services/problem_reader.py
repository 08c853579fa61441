"""
Reader for libSVM sparse-text datasets.

Each non-blank line holds a record: a numeric label followed by
`index:value` tokens. Everything from the first `#` on a line is a comment.
Lines that are blank once the comment is removed are skipped; any other
malformed line aborts the whole read with a `FormatError`.
"""

import os
import re
import time
from typing import IO, Iterable, List, Optional, Union

import numpy as np

from svmscale.core.logging import get_logger, log_scaling_operation
from svmscale.models.parameter import Parameter
from svmscale.models.problem import Problem
from svmscale.utils.exceptions import FormatError

logger = get_logger(__name__)

_INDEX_PATTERN = re.compile(r"^\+?[0-9]+$")
_MAX_INDEX = int(np.iinfo(np.int64).max)

DataSource = Union[str, "os.PathLike[str]", IO[str]]


def _parse_float(text: str) -> Optional[float]:
    # float() accepts digit separators; the libSVM grammar does not.
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_problem(
    lines: Iterable[str],
    source: str = "<string>",
    param: Optional[Parameter] = None,
) -> Problem:
    """Parses libSVM-formatted lines into a Problem.

    Args:
        lines: The dataset lines, with or without trailing newlines.
        source: Name used in error messages and logs.
        param: Optional model parameters; an unset `gamma` is defaulted to
            `1 / max_index` once the whole dataset has been read.

    Returns:
        The parsed Problem. Its `max_index` attribute reports the largest
        coordinate index seen.

    Raises:
        FormatError: If a label or coordinate token cannot be parsed.
    """
    labels: List[float] = []
    indices: List[int] = []
    values: List[float] = []
    offsets: List[int] = [0]

    for line_number, line in enumerate(lines, start=1):
        tokens = line.split("#", 1)[0].split()
        if not tokens:
            continue

        label = _parse_float(tokens[0])
        if label is None:
            raise FormatError("bad label", line_number=line_number, token=tokens[0], source=source)

        for token in tokens[1:]:
            index_text, sep, value_text = token.partition(":")
            if not _INDEX_PATTERN.match(index_text) or not 0 < int(index_text) <= _MAX_INDEX:
                raise FormatError("bad index", line_number=line_number, token=token, source=source)
            value = _parse_float(value_text) if sep else None
            if value is None:
                raise FormatError("bad value", line_number=line_number, token=token, source=source)
            indices.append(int(index_text))
            values.append(value)

        labels.append(label)
        offsets.append(len(values))

    problem = Problem(labels, indices, values, offsets)

    if param is not None and param.apply_default_gamma(problem.max_index):
        logger.debug("Defaulted gamma from max index", gamma=param.gamma, max_index=problem.max_index)

    return problem


def read_problem(source: DataSource, param: Optional[Parameter] = None) -> Problem:
    """Reads a libSVM dataset from a path or an open text stream.

    Args:
        source: A filesystem path or a readable text stream.
        param: Optional model parameters whose unset `gamma` is defaulted
            from the dataset's largest coordinate index.

    Returns:
        The parsed Problem.

    Raises:
        FormatError: If the content is malformed or is not UTF-8 text.
        OSError: If the path cannot be opened or read.
    """
    start_time = time.perf_counter()

    if hasattr(source, "read"):
        name = getattr(source, "name", "<stream>")
        problem = _read_logged(source, str(name), param)
    else:
        name = os.fspath(source)
        with open(name, "r", encoding="utf-8") as f:
            problem = _read_logged(f, name, param)

    log_scaling_operation(
        logger,
        operation="read",
        source=str(name),
        duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
        records=len(problem),
        coordinates=int(problem.values.size),
        max_index=problem.max_index,
    )
    return problem


def _read_logged(stream: IO[str], name: str, param: Optional[Parameter]) -> Problem:
    try:
        return parse_problem(stream, source=name, param=param)
    except FormatError as e:
        log_scaling_operation(logger, operation="read", source=name, success=False, error=str(e))
        raise
    except UnicodeDecodeError as e:
        error = FormatError("bad encoding", source=name, context={"encoding": e.encoding})
        log_scaling_operation(logger, operation="read", source=name, success=False, error=str(error))
        raise error from e
