"""
Command-line entry point for svm-scale.

Usage:
    svm-scale [-l lower] [-u upper] [-r range_file] [-s save_file] data_file

The scaled dataset is written to standard output. Ranges restored with -r
take precedence over -l/-u; -s saves the ranges that were used so a second
dataset can later be scaled identically:

    svm-scale -s train.range train > train.scale
    svm-scale -r train.range test > test.scale
"""

import argparse
import sys
from typing import List, Optional

from svmscale.core.config import get_settings
from svmscale.core.logging import get_logger, setup_structured_logging
from svmscale.services.scaling_service import ScalingService
from svmscale.utils.error_codes import ErrorCode, create_error_report
from svmscale.utils.exceptions import ScaleError

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Builds the argument parser for svm-scale."""
    parser = argparse.ArgumentParser(
        prog="svm-scale",
        description="Scale each feature of a libSVM dataset into a target interval",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scale a training set into [-1, 1] and save the ranges
  svm-scale -s train.range train > train.scale

  # Scale a test set with the training ranges
  svm-scale -r train.range test > test.scale
        """,
    )
    parser.add_argument(
        "-l",
        dest="lower",
        type=float,
        default=None,
        help="Scaling lower limit (default: -1, or SVMSCALE_LOWER)",
    )
    parser.add_argument(
        "-u",
        dest="upper",
        type=float,
        default=None,
        help="Scaling upper limit (default: 1, or SVMSCALE_UPPER)",
    )
    parser.add_argument(
        "-y",
        dest="y_bounds",
        nargs=2,
        metavar=("Y_LOWER", "Y_UPPER"),
        default=None,
        help="Label scaling limits. Accepted for compatibility, not used",
    )
    parser.add_argument(
        "-r",
        dest="restore_file",
        default=None,
        help="Restore scaling parameters from file. Overrides -l and -u",
    )
    parser.add_argument(
        "-s",
        dest="save_file",
        default=None,
        help="Save scaling parameters to file",
    )
    parser.add_argument("data_file", help="Dataset in libSVM format")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parses command-line arguments and runs the scaling job.

    Returns:
        The process exit status: 0 on success, 1 on failure.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_structured_logging(settings)

    if args.y_bounds is not None:
        logger.warning("Label scaling is not supported, ignoring -y", y_bounds=args.y_bounds)

    try:
        ScalingService(settings).run(
            args.data_file,
            lower=args.lower,
            upper=args.upper,
            restore_path=args.restore_file,
            save_path=args.save_file,
            output=sys.stdout,
        )
    except ScaleError as e:
        logger.error("Scaling failed", **create_error_report(e.code, str(e)))
        print(f"svm-scale: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error(
            "Scaling failed",
            **create_error_report(ErrorCode.FILE_ACCESS_ERROR, str(e), path=e.filename),
        )
        print(f"svm-scale: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
