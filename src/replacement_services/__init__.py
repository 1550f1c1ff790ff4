"""
Replacement Services Editor

Simulates service disruptions on a transit model: station closures,
bus replacements over line segments, and alternative replacements.
Every edit is applied atomically or rejected without changes.
"""

__version__ = "0.1.0"

from .models import (
    REPLACEMENT_LINE_COLOR,
    OperationKind,
    OperationResult,
    Rejection,
    RejectionReason,
)
from .checks import (
    station_on_line,
    index_on_line,
    is_terminal,
    consecutive_pair_exists,
    find_invariant_violations,
)
from .editor import ReplacementServices

__all__ = [
    "__version__",
    "REPLACEMENT_LINE_COLOR",
    "OperationKind",
    "OperationResult",
    "Rejection",
    "RejectionReason",
    "station_on_line",
    "index_on_line",
    "is_terminal",
    "consecutive_pair_exists",
    "find_invariant_violations",
    "ReplacementServices",
]
