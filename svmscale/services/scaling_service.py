"""
Scaling service orchestrating a full svm-scale run.

The service reads a dataset, obtains ranges (from a saved range file when
one is given, otherwise by computing them), scales the dataset in place,
writes the scaled records, and optionally saves the ranges it used. The
dataset is scaled completely before the first record is written, so a shape
error never leaves partial output behind.
"""

import os
from dataclasses import dataclass
from typing import IO, Optional, Union

import numpy as np

from svmscale.core.config import Settings, get_settings
from svmscale.core.logging import get_contextual_logger
from svmscale.features.linear_scaler import scale_problem
from svmscale.features.range_file import read_ranges, write_ranges
from svmscale.models.parameter import Parameter
from svmscale.models.problem import Problem, TargetInterval
from svmscale.services.data_writer import write_problem
from svmscale.services.problem_reader import read_problem
from svmscale.utils.exceptions import ConfigurationError

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class ScalingResult:
    """Outcome of scaling one dataset.

    Attributes:
        problem: The scaled dataset.
        ranges: The range table used for scaling.
        interval: The target interval used for scaling.
        restored: True if the ranges came from a range file.
    """

    problem: Problem
    ranges: np.ndarray
    interval: TargetInterval
    restored: bool = False


class ScalingService:
    """Runs the read, scale, write and save steps of svm-scale."""

    def __init__(self, settings: Optional[Settings] = None, param: Optional[Parameter] = None):
        """Initializes the service.

        Args:
            settings: Settings providing the default interval and output
                precision. Defaults to the cached application settings.
            param: Optional model parameters forwarded to the reader.
        """
        self.settings = settings or get_settings()
        self.param = param

    def scale_file(
        self,
        data_path: PathLike,
        lower: Optional[float] = None,
        upper: Optional[float] = None,
        restore_path: Optional[PathLike] = None,
    ) -> ScalingResult:
        """Reads and scales a dataset without writing anything.

        Args:
            data_path: Path of the libSVM dataset.
            lower: Lower target bound; defaults to the configured value.
            upper: Upper target bound; defaults to the configured value.
            restore_path: Range file to restore ranges and interval from.
                When given, it overrides `lower` and `upper`.

        Returns:
            The scaled dataset together with the ranges and interval used.

        Raises:
            ConfigurationError: If the explicit bounds are not increasing.
            FormatError: If the dataset or range file is malformed.
            ShapeError: If ranges and dataset cannot be aligned.
            OSError: If a file cannot be read.
        """
        run_logger = get_contextual_logger(__name__, source=os.fspath(data_path))

        problem = read_problem(data_path, self.param)

        if restore_path is not None:
            ranges, interval = read_ranges(restore_path)
            run_logger.info(
                "Restored ranges from file",
                range_file=os.fspath(restore_path),
                n_features=int(ranges.shape[0]),
            )
            restored = True
        else:
            interval = TargetInterval(
                self.settings.scaling.lower if lower is None else lower,
                self.settings.scaling.upper if upper is None else upper,
            )
            if not interval.upper > interval.lower:
                raise ConfigurationError(
                    f"upper bound ({interval.upper}) must be greater than "
                    f"lower bound ({interval.lower})"
                )
            ranges = None
            restored = False

        used = scale_problem(problem, ranges, interval.lower, interval.upper)
        run_logger.info(
            "Dataset scaled",
            records=len(problem),
            n_features=problem.feature_count,
            lower=interval.lower,
            upper=interval.upper,
            restored=restored,
        )
        return ScalingResult(problem=problem, ranges=used, interval=interval, restored=restored)

    def run(
        self,
        data_path: PathLike,
        lower: Optional[float] = None,
        upper: Optional[float] = None,
        restore_path: Optional[PathLike] = None,
        save_path: Optional[PathLike] = None,
        output: Optional[IO[str]] = None,
    ) -> ScalingResult:
        """Scales a dataset, writes it to `output` and optionally saves ranges.

        Args:
            data_path: Path of the libSVM dataset.
            lower: Lower target bound; defaults to the configured value.
            upper: Upper target bound; defaults to the configured value.
            restore_path: Range file to restore ranges and interval from.
            save_path: Range file to write the ranges used to.
            output: Text stream for the scaled records; standard output by default.

        Returns:
            The scaling result.
        """
        result = self.scale_file(data_path, lower=lower, upper=upper, restore_path=restore_path)

        write_problem(result.problem, output, precision=self.settings.scaling.value_precision)

        if save_path is not None:
            write_ranges(
                save_path,
                result.ranges,
                result.interval,
                n_features=result.problem.feature_count,
                header=self.settings.scaling.range_file_header,
            )
        return result
