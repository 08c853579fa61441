"""
Standardized error codes for the svmscale toolkit.

This module establishes a centralized and consistent vocabulary for the
errors raised while reading sparse datasets, computing feature ranges,
scaling values and reading or writing range files. Every exception in
`svmscale.utils.exceptions` carries one of these codes so that callers (and
the command-line wrapper) can report failures in a predictable way.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Defines standardized error codes for the toolkit.

    Error Code Ranges:
    - 1000-1099: Dataset format errors
    - 2000-2099: Range file format errors
    - 4000-4099: General errors
    - 5000-5099: Configuration errors
    - 6000-6099: Feature shape errors
    """

    # Dataset format errors (1000-1099)
    BAD_LABEL = "E1001"
    BAD_INDEX = "E1002"
    BAD_VALUE = "E1003"
    BAD_ENCODING = "E1004"

    # Range file format errors (2000-2099)
    RANGE_FILE_MALFORMED = "E2001"
    RANGE_FILE_MISSING_INTERVAL = "E2002"

    # General errors (4000-4099)
    INTERNAL_ERROR = "E4001"
    FILE_ACCESS_ERROR = "E4002"

    # Configuration errors (5000-5099)
    SETTINGS_VALIDATION_ERROR = "E5003"

    # Feature shape errors (6000-6099)
    FEATURE_MISMATCH = "E6001"
    RANGE_TABLE_TOO_SHORT = "E6002"


class ErrorMessages:
    """Provides human-readable messages for each defined error code."""

    MESSAGES = {
        ErrorCode.BAD_LABEL: "The record label could not be parsed as a number.",
        ErrorCode.BAD_INDEX: "A coordinate index is missing, not an integer, or not positive.",
        ErrorCode.BAD_VALUE: "A coordinate value is missing or could not be parsed as a number.",
        ErrorCode.BAD_ENCODING: "The file is not valid UTF-8 text.",
        ErrorCode.RANGE_FILE_MALFORMED: "The range file contains a line with the wrong number of fields or a non-numeric field.",
        ErrorCode.RANGE_FILE_MISSING_INTERVAL: "The range file does not contain a target interval line.",
        ErrorCode.INTERNAL_ERROR: "An unexpected error occurred while processing the dataset.",
        ErrorCode.FILE_ACCESS_ERROR: "A dataset or range file could not be read or written.",
        ErrorCode.SETTINGS_VALIDATION_ERROR: "Settings validation failed. Check environment variables and command-line bounds.",
        ErrorCode.FEATURE_MISMATCH: "Vectors in the dataset do not all have the same number of coordinates.",
        ErrorCode.RANGE_TABLE_TOO_SHORT: "The range table has fewer entries than the dataset has feature positions.",
    }

    @classmethod
    def get_message(cls, error_code: ErrorCode) -> str:
        """Retrieves the message for a given error code.

        Args:
            error_code: The `ErrorCode` for which to retrieve the message.

        Returns:
            The corresponding error message, or a generic one for unknown codes.
        """
        return cls.MESSAGES.get(error_code, "An unknown error occurred.")


def create_error_report(
    error_code: ErrorCode,
    detail: Optional[str] = None,
    **additional_context,
) -> Dict[str, Any]:
    """Constructs a standardized dictionary describing an error.

    The command-line wrapper logs this structure when an operation fails, so
    every failure carries the same keys regardless of where it was raised.

    Args:
        error_code: The `ErrorCode` enum member for this error.
        detail: An optional, more specific message about the error.
        **additional_context: Extra key-value pairs for the 'context' field.

    Returns:
        A dictionary with the error code, the standard message and any detail.
    """
    report: Dict[str, Any] = {
        "error_code": error_code.value,
        "error_message": ErrorMessages.get_message(error_code),
    }
    if detail:
        report["detail"] = detail
    if additional_context:
        report["context"] = additional_context
    return report
