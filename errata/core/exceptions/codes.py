"""Standardized error codes."""

from enum import Enum


class ErrorCode(str, Enum):
    """Built-in error codes.

    Applications add their own codes by declaring another ``str`` enum and
    registering its members with :class:`ErrorCodeRegistry`.
    """

    # Reserved for failures nobody classified
    GENERAL_ERROR = "GENERAL_ERROR"

    BAD_CONFIG = "BAD_CONFIG"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DATA_FORMAT_ERROR = "DATA_FORMAT_ERROR"
    IO_ERROR = "IO_ERROR"
    NOT_FOUND = "NOT_FOUND"
    DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"
    BATCH_THRESHOLD_NOT_MET = "BATCH_THRESHOLD_NOT_MET"


def code_value(code: Enum) -> str:
    """Return the lookup key for ``code``."""

    if not isinstance(code, Enum):
        raise TypeError(f"Error codes must be enum members, got {type(code).__name__}")
    return str(code.value)
