"""
Pydantic models for replacement-service operations.

An operation never raises for a rejected edit; it returns an
`OperationResult` naming the rejection reason instead.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

REPLACEMENT_LINE_COLOR = "#009EE3"


class OperationKind(str, Enum):
    """Editing operations supported by the editor."""
    CLOSE = "close"
    REPLACEMENT = "replacement"
    ALTERNATIVE = "alternative"


class RejectionReason(str, Enum):
    """
    Why an operation was rejected.

    The first six kinds describe invalid disruptions. The remaining ones
    guard model invariants against inputs the editor does not own.
    """

    MISSING_STATION_ON_LINE = "missing-station-on-line"
    MINIMUM_LENGTH_VIOLATION = "minimum-length-violation"
    WHOLE_LINE_SELECTED = "whole-line-selected"
    NO_CONSECUTIVE_PAIR = "no-consecutive-pair"
    DEGENERATE_ALTERNATIVE = "degenerate-alternative"
    EMPTY_SELECTION = "empty-selection"

    UNKNOWN_STATION = "unknown-station"
    UNKNOWN_LINE = "unknown-line"
    DUPLICATE_STATION = "duplicate-station"
    LINE_NAME_CONFLICT = "line-name-conflict"


class Rejection(BaseModel):
    """Rejection details produced while planning an operation."""

    reason: RejectionReason = Field(description="Rejection kind")
    message: str = Field(description="Error message")


class OperationResult(BaseModel):
    """Outcome of a single editing operation."""

    success: bool = Field(description="Whether the operation was applied")
    operation: OperationKind = Field(description="The operation attempted")
    rejection: Optional[RejectionReason] = Field(
        default=None,
        description="Reason the operation was rejected (if any)"
    )
    message: str = Field(default="", description="Human-readable outcome")
    lines_added: list[str] = Field(
        default_factory=list,
        description="Names of lines created by the operation"
    )
    lines_removed: list[str] = Field(
        default_factory=list,
        description="Names of lines removed by the operation"
    )
    lines_modified: list[str] = Field(
        default_factory=list,
        description="Names of lines whose stops changed in place"
    )
    stations_removed: list[str] = Field(
        default_factory=list,
        description="Names of stations no longer served by any line"
    )

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def rejected(
        cls,
        operation: OperationKind,
        rejection: Rejection
    ) -> "OperationResult":
        return cls(
            success=False,
            operation=operation,
            rejection=rejection.reason,
            message=rejection.message,
        )
