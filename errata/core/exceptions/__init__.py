"""Exception handling module."""

from errata.core.exceptions.base import (
    AppError,
    ErrataError,
    MissingTemplate,
    MissingTemplateParameterError,
    StartupError,
    TemplateError,
    TemplateNotFoundError,
)
from errata.core.exceptions.chain import describe_cause_chain, describe_failure, iter_cause_chain
from errata.core.exceptions.codes import ErrorCode
from errata.core.exceptions.handler import (
    GENERIC_FALLBACK_MESSAGE,
    BoundaryHandler,
    ErrorTracker,
    ExternalResponse,
)
from errata.core.exceptions.messages import MessageTemplateStore, interpolate, normalize_locale
from errata.core.exceptions.registry import ErrorCodeRegistry
from errata.core.exceptions.wrapping import wrap, wrapped, wrapping

__all__ = [
    "AppError",
    "BoundaryHandler",
    "ErrataError",
    "ErrorCode",
    "ErrorCodeRegistry",
    "ErrorTracker",
    "ExternalResponse",
    "GENERIC_FALLBACK_MESSAGE",
    "MessageTemplateStore",
    "MissingTemplate",
    "MissingTemplateParameterError",
    "StartupError",
    "TemplateError",
    "TemplateNotFoundError",
    "describe_cause_chain",
    "describe_failure",
    "interpolate",
    "iter_cause_chain",
    "normalize_locale",
    "wrap",
    "wrapped",
    "wrapping",
]
