"""
Rewrite plans.

Each editing operation first describes its effect as a plan. Nothing in
this module touches the model; the editor commits a plan only once every
part of it has been validated.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.transit_model.entities import Line, Station


@dataclass
class LineDraft:
    """A line to be created."""

    name: str
    color: str
    stations: list[Station]


@dataclass
class LineEdit:
    """Resequence an existing line in place (same name and color)."""

    line: Line
    stations: list[Station]


@dataclass
class LineSplit:
    """Replace a line by new lines created in its position."""

    line: Line
    parts: list[LineDraft]


@dataclass
class RewritePlan:
    edits: list[LineEdit] = field(default_factory=list)
    splits: list[LineSplit] = field(default_factory=list)
    additions: list[LineDraft] = field(default_factory=list)
    # Advance of the replacement-line counter on commit
    counter_step: int = 0
    # Station to drop from the station set if no line serves it afterwards
    retired_station: Optional[Station] = None

    def new_line_names(self) -> list[str]:
        names = [part.name for split in self.splits for part in split.parts]
        names.extend(draft.name for draft in self.additions)
        return names

    def removed_line_names(self) -> list[str]:
        return [split.line.name for split in self.splits]
