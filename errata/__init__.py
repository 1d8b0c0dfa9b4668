"""errata - classified application errors

Closed error codes with localized message templates, an adapter that
classifies foreign failures at subsystem boundaries, a single boundary
handler that reports failures without leaking internals, and batch helpers
that collect per-item outcomes without stopping at the first failure.
"""

from errata.core.batch import (
    BatchResult,
    Failure,
    Outcome,
    Success,
    amap_collecting_failures,
    map_collecting_failures,
    map_collecting_failures_concurrently,
)
from errata.core.bootstrap import ErrataRuntime, build_runtime, validate_registry
from errata.core.config import ErrataSettings, load_settings
from errata.core.exceptions import (
    AppError,
    BoundaryHandler,
    ErrorCode,
    ErrorCodeRegistry,
    ExternalResponse,
    MessageTemplateStore,
    StartupError,
    wrap,
    wrapped,
    wrapping,
)

__version__ = "0.1.0"

__all__ = [
    "AppError",
    "BatchResult",
    "BoundaryHandler",
    "ErrataRuntime",
    "ErrataSettings",
    "ErrorCode",
    "ErrorCodeRegistry",
    "ExternalResponse",
    "Failure",
    "MessageTemplateStore",
    "Outcome",
    "StartupError",
    "Success",
    "amap_collecting_failures",
    "build_runtime",
    "load_settings",
    "map_collecting_failures",
    "map_collecting_failures_concurrently",
    "validate_registry",
    "wrap",
    "wrapped",
    "wrapping",
]
