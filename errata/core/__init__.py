"""errata core: classification, wrapping, boundary reporting and batch outcomes."""

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

__all__ = [
    "BatchResult",
    "ErrataRuntime",
    "ErrataSettings",
    "Failure",
    "Outcome",
    "Success",
    "amap_collecting_failures",
    "build_runtime",
    "load_settings",
    "map_collecting_failures",
    "map_collecting_failures_concurrently",
    "validate_registry",
]
