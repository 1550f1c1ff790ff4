"""
Pydantic models for operation scripts.

A script holds exactly one operation. Its parsed form is one of the
command models below, discriminated by the `op` field.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field


class InputErrorKind(str, Enum):
    """Categories of script input errors."""
    INVALID_CHARACTER = "invalid-character"
    MISSING_ARTEFACT = "missing-artefact"
    UNKNOWN_OPERATION = "unknown-operation"
    UNRESOLVED_NAME = "unresolved-name"
    EMPTY_FIELD = "empty-field"


class ScriptInputError(ValueError):
    """
    Raised for malformed scripts or names that do not resolve.

    `row` and `column` are 1-based and only set where a position is known.
    """

    def __init__(
        self,
        kind: InputErrorKind,
        message: str,
        row: Optional[int] = None,
        column: Optional[int] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.row = row
        self.column = column

    def __str__(self) -> str:
        if self.row is None:
            return self.message
        if self.column is None:
            return f"{self.message} (row {self.row})"
        return f"{self.message} (row {self.row}, column {self.column})"


class CloseCommand(BaseModel):
    """CLOSE;station;line1;line2;..."""

    op: Literal["CLOSE"] = "CLOSE"
    station: str = Field(..., min_length=1)
    lines: list[str] = Field(..., min_length=1)


class ReplacementCommand(BaseModel):
    """
    REPLACEMENT
    station1;station2;...
    line1;line2;...
    """

    op: Literal["REPLACEMENT"] = "REPLACEMENT"
    stations: list[str] = Field(..., min_length=1)
    lines: list[str] = Field(..., min_length=1)


class AlternativeCommand(BaseModel):
    """ALTERNATIVE;stationA;stationB"""

    op: Literal["ALTERNATIVE"] = "ALTERNATIVE"
    station_a: str = Field(..., min_length=1)
    station_b: str = Field(..., min_length=1)


ScriptOperation = Annotated[
    Union[CloseCommand, ReplacementCommand, AlternativeCommand],
    Field(discriminator="op"),
]
