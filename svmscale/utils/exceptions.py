"""
Custom exception hierarchy for the svmscale toolkit.

This module defines the domain-specific exceptions raised while parsing
sparse datasets, computing ranges, scaling and handling range files. All of
them derive from `ScaleError`, so a caller can handle every toolkit failure
in one place while still being able to tell format problems from shape
problems. I/O failures are not wrapped: the `OSError` raised by `open`
already names the failing path.
"""

from typing import Any, Optional

from svmscale.utils.error_codes import ErrorCode, ErrorMessages


class ScaleError(Exception):
    """The base exception class for all custom exceptions in this toolkit.

    Attributes:
        code: The `ErrorCode` identifying the failure.
        context: Optional additional information about the error.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        context: Optional[Any] = None,
    ):
        """Initializes the ScaleError.

        Args:
            message: A human-readable message describing the error.
            code: The `ErrorCode` for the error.
            context: An optional dictionary for providing extra context.
        """
        super().__init__(message)
        self.code = code
        self.context = context

    @property
    def description(self) -> str:
        """The standard message associated with this error's code."""
        return ErrorMessages.get_message(self.code)


# --- Format exceptions ---


class FormatError(ScaleError):
    """Raised when a dataset line or token cannot be parsed.

    A malformed token is never skipped: dropping one coordinate would shift
    every following feature position in the vector.

    Attributes:
        reason: Short reason string ("bad label", "bad index", "bad value",
            "bad encoding").
        line_number: 1-based line number of the offending line, if known.
        token: The offending token, if any.
        source: Name of the file or stream being read.
    """

    _REASON_CODES = {
        "bad label": ErrorCode.BAD_LABEL,
        "bad index": ErrorCode.BAD_INDEX,
        "bad value": ErrorCode.BAD_VALUE,
        "bad encoding": ErrorCode.BAD_ENCODING,
    }

    def __init__(
        self,
        reason: str,
        line_number: Optional[int] = None,
        token: Optional[str] = None,
        source: Optional[str] = None,
        code: Optional[ErrorCode] = None,
        context: Optional[Any] = None,
    ):
        """Initializes the FormatError.

        Args:
            reason: Short reason string describing what failed to parse.
            line_number: 1-based line number where the failure occurred.
            token: The token that failed to parse.
            source: Name of the file or stream being read.
            code: Explicit error code; derived from `reason` when omitted.
            context: Optional additional context about the error.
        """
        location = source or "<input>"
        if line_number is not None:
            location = f"{location}:{line_number}"
        message = f"{location}: {reason}"
        if token is not None:
            message = f"{message} in token {token!r}"
        if code is None:
            code = self._REASON_CODES.get(reason, ErrorCode.BAD_VALUE)
        super().__init__(message, code=code, context=context)
        self.reason = reason
        self.line_number = line_number
        self.token = token
        self.source = source


class RangeFileError(FormatError):
    """Raised when a range file has a malformed line or field."""

    def __init__(
        self,
        reason: str,
        line_number: Optional[int] = None,
        token: Optional[str] = None,
        source: Optional[str] = None,
        code: ErrorCode = ErrorCode.RANGE_FILE_MALFORMED,
    ):
        """Initializes the RangeFileError.

        Args:
            reason: Description of the malformed content.
            line_number: 1-based line number of the offending line.
            token: The offending line or field.
            source: Name of the range file.
            code: The error code; defaults to `RANGE_FILE_MALFORMED`.
        """
        super().__init__(reason, line_number=line_number, token=token, source=source, code=code)


# --- Shape exceptions ---


class ShapeError(ScaleError):
    """Raised when feature positions cannot be aligned.

    This covers vectors that disagree on their coordinate count during range
    computation and range tables shorter than the dataset's feature count.
    Both are fatal: guessing an alignment would silently scale features with
    the wrong range.

    Attributes:
        expected: The number of feature positions that was required.
        actual: The number of feature positions that was found.
    """

    def __init__(
        self,
        message: str,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        code: ErrorCode = ErrorCode.FEATURE_MISMATCH,
        context: Optional[Any] = None,
    ):
        """Initializes the ShapeError.

        Args:
            message: A human-readable message describing the mismatch.
            expected: The number of feature positions that was required.
            actual: The number of feature positions that was found.
            code: The error code for the mismatch.
            context: Optional additional context about the error.
        """
        super().__init__(message, code=code, context=context)
        self.expected = expected
        self.actual = actual


# --- Configuration exceptions ---


class ConfigurationError(ScaleError):
    """Raised when scaling options are inconsistent, e.g. an inverted interval."""

    def __init__(self, message: str, context: Optional[Any] = None):
        """Initializes the ConfigurationError.

        Args:
            message: Description of the configuration issue.
            context: Optional additional context about the error.
        """
        super().__init__(message, code=ErrorCode.SETTINGS_VALIDATION_ERROR, context=context)
