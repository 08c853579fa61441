"""Utility package with lazy exports to avoid heavy import side effects."""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

_LAZY_IMPORTS: Dict[str, Tuple[str, str]] = {
    # Exceptions
    "ScaleError": ("svmscale.utils.exceptions", "ScaleError"),
    "FormatError": ("svmscale.utils.exceptions", "FormatError"),
    "RangeFileError": ("svmscale.utils.exceptions", "RangeFileError"),
    "ShapeError": ("svmscale.utils.exceptions", "ShapeError"),
    "ConfigurationError": ("svmscale.utils.exceptions", "ConfigurationError"),
    # Error codes/helpers
    "ErrorCode": ("svmscale.utils.error_codes", "ErrorCode"),
    "ErrorMessages": ("svmscale.utils.error_codes", "ErrorMessages"),
    "create_error_report": ("svmscale.utils.error_codes", "create_error_report"),
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> Any:
    """Dynamically import requested attributes on first access."""

    try:
        module_name, attr_name = _LAZY_IMPORTS[name]
    except KeyError as exc:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}") from exc

    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    """Return sorted attributes for IDE support."""

    return sorted(__all__)
