"""
Replacement services editor.

Owns the lines and stations of a transit model and applies the three
disruption edits: closing a station, organizing a bus replacement over a
segment of one or more lines, and adding an alternative replacement
between two stations.

Every operation is planned first, validated completely, and only then
committed. A rejected operation leaves lines, stations, stops and the
replacement-line counter exactly as they were.
"""

import logging
from typing import Iterable, Optional, Sequence, Union

from src.transit_model.entities import Line, ModelData, Station

from .checks import (
    MINIMUM_LINE_LENGTH,
    consecutive_pair_exists,
    find_invariant_violations,
    is_terminal,
    station_on_line,
)
from .models import (
    REPLACEMENT_LINE_COLOR,
    OperationKind,
    OperationResult,
    Rejection,
    RejectionReason,
)
from .plan import LineDraft, LineEdit, LineSplit, RewritePlan

logger = logging.getLogger(__name__)

PlanOutcome = Union[RewritePlan, Rejection]


class ReplacementServices:
    """
    Stateful editor over a transit model.

    Example:
        >>> editor = ReplacementServices(load_network("network.json"))
        >>> station = editor.find_station("Odeonsplatz")
        >>> result = editor.close_station(station, [editor.find_line("U3")])
        >>> if not result:
        ...     print(result.rejection, result.message)
    """

    def __init__(self, model: Optional[ModelData] = None):
        self._lines: list[Line] = []
        self._stations: list[Station] = []
        self._replacement_line_counter = 0

        if model is not None:
            self._lines.extend(model.lines)
            self._stations.extend(model.stations)

    # --- Construction and accessors ---

    def add_line(self, line: Line) -> None:
        self._lines.append(line)

    def add_station(self, station: Station) -> None:
        self._stations.append(station)

    def get_lines(self) -> list[Line]:
        """Current lines; the returned list is independent of the editor."""
        return list(self._lines)

    def get_stations(self) -> list[Station]:
        """Current stations; the returned list is independent of the editor."""
        return list(self._stations)

    @property
    def replacement_line_counter(self) -> int:
        return self._replacement_line_counter

    def find_station(self, name: str) -> Optional[Station]:
        for station in self._stations:
            if station.name == name:
                return station
        return None

    def find_line(self, name: str) -> Optional[Line]:
        for line in self._lines:
            if line.name == name:
                return line
        return None

    def snapshot(self) -> ModelData:
        """
        Deep copy of the current model.

        The copy shares no entity with the editor, so later operations
        do not show through it.
        """
        copies: dict[int, Station] = {}

        def copy_of(station: Station) -> Station:
            if id(station) not in copies:
                copies[id(station)] = Station(
                    name=station.name,
                    location=station.location,
                )
            return copies[id(station)]

        stations = [copy_of(station) for station in self._stations]
        lines = [
            Line.from_stations(
                line.name,
                line.color,
                [copy_of(station) for station in line.stations],
            )
            for line in self._lines
        ]
        return ModelData(stations=stations, lines=lines)

    def check_invariants(self) -> list[str]:
        """Violations of the model invariants (empty if consistent)."""
        return find_invariant_violations(self._lines, self._stations)

    # --- Operations ---

    def close_station(
        self,
        station: Optional[Station],
        selected_lines: Sequence[Line]
    ) -> OperationResult:
        """
        Close a station on the selected lines.

        The stop of the station is deleted from every selected line and
        its former neighbours become adjacent. A terminal station simply
        shortens the line. The station leaves the station set once no
        line serves it any more.

        Args:
            station: Station to close
            selected_lines: Lines on which the station closes

        Returns:
            OperationResult; rejected if any line does not serve the
            station or would be left with fewer than two stops
        """
        return self._run(
            OperationKind.CLOSE,
            self._plan_close(station, selected_lines),
        )

    def organize_replacement_service(
        self,
        selected_stations: Sequence[Station],
        selected_lines: Sequence[Line]
    ) -> OperationResult:
        """
        Replace a segment of one or more lines by a bus service.

        The first and last selected stations are the primary and secondary
        boundaries. A line with a terminal boundary is cut back to the
        other boundary; a line with two interior boundaries is split into
        `<name>-1` and `<name>-2`. The replacement line serves the selected
        stations in order and is named `P<line>` for a single line or
        `P-<n>` (next counter value) for several.

        Args:
            selected_stations: Ordered stations of the replaced segment
            selected_lines: Lines affected by the disruption

        Returns:
            OperationResult; rejected without any change if any line
            fails validation
        """
        return self._run(
            OperationKind.REPLACEMENT,
            self._plan_replacement(selected_stations, selected_lines),
        )

    def create_alternative_service(
        self,
        station_a: Optional[Station],
        station_b: Optional[Station]
    ) -> OperationResult:
        """
        Add a direct replacement line `P-<n>` between two stations.

        No existing line is modified and the stations need not be
        adjacent anywhere.
        """
        return self._run(
            OperationKind.ALTERNATIVE,
            self._plan_alternative(station_a, station_b),
        )

    # --- Planning ---

    def _plan_close(
        self,
        station: Optional[Station],
        selected_lines: Sequence[Line]
    ) -> PlanOutcome:
        if station is None or not selected_lines:
            return _reject(
                RejectionReason.EMPTY_SELECTION,
                "A station and at least one line must be selected",
            )

        lines = _unique(selected_lines)

        for line in lines:
            if line is None or line not in self._lines:
                return _reject(
                    RejectionReason.UNKNOWN_LINE,
                    f"Line '{getattr(line, 'name', None)}' is not part of "
                    f"the network",
                )
            if not station_on_line(line, station):
                return _reject(
                    RejectionReason.MISSING_STATION_ON_LINE,
                    f"Station '{station.name}' is not served by line "
                    f"'{line.name}'",
                )
            if len(line.stops) <= MINIMUM_LINE_LENGTH:
                return _reject(
                    RejectionReason.MINIMUM_LENGTH_VIOLATION,
                    f"Closing '{station.name}' would leave line "
                    f"'{line.name}' with fewer than {MINIMUM_LINE_LENGTH} stops",
                )

        plan = RewritePlan(retired_station=station)
        for line in lines:
            remaining = [s for s in line.stations if s is not station]
            plan.edits.append(LineEdit(line=line, stations=remaining))
        return plan

    def _plan_replacement(
        self,
        selected_stations: Sequence[Station],
        selected_lines: Sequence[Line]
    ) -> PlanOutcome:
        stations = list(selected_stations)

        if len(stations) < 2 or not selected_lines:
            return _reject(
                RejectionReason.EMPTY_SELECTION,
                "At least two stations and one line must be selected",
            )

        for station in stations:
            if station is None or station not in self._stations:
                return _reject(
                    RejectionReason.UNKNOWN_STATION,
                    f"Station '{getattr(station, 'name', None)}' is not part "
                    f"of the network",
                )

        if len({id(station) for station in stations}) != len(stations):
            return _reject(
                RejectionReason.DUPLICATE_STATION,
                "A station appears more than once in the selection",
            )

        lines = _unique(selected_lines)

        for line in lines:
            if line is None or line not in self._lines:
                return _reject(
                    RejectionReason.UNKNOWN_LINE,
                    f"Line '{getattr(line, 'name', None)}' is not part of "
                    f"the network",
                )
            if not consecutive_pair_exists(line, stations):
                return _reject(
                    RejectionReason.NO_CONSECUTIVE_PAIR,
                    f"No two selected stations are consecutive on line "
                    f"'{line.name}'",
                )

        primary, secondary = stations[0], stations[-1]

        # Replacing a line end to end would erase it entirely
        for line in lines:
            if is_terminal(line, primary) and is_terminal(line, secondary):
                return _reject(
                    RejectionReason.WHOLE_LINE_SELECTED,
                    f"Selection covers line '{line.name}' from end to end",
                )

        plan = RewritePlan()
        if len(lines) == 1:
            replacement_name = "P" + lines[0].name
        else:
            plan.counter_step = 1
            replacement_name = f"P-{self._replacement_line_counter + 1}"

        selected = {id(station) for station in stations}

        for line in lines:
            primary_is_terminal = is_terminal(line, primary)
            secondary_is_terminal = is_terminal(line, secondary)

            if primary_is_terminal or secondary_is_terminal:
                kept_boundary = secondary if primary_is_terminal else primary
                remaining = [
                    station for station in line.stations
                    if id(station) not in selected or station is kept_boundary
                ]
                if len(remaining) < MINIMUM_LINE_LENGTH:
                    return _reject(
                        RejectionReason.MINIMUM_LENGTH_VIOLATION,
                        f"Line '{line.name}' would keep fewer than "
                        f"{MINIMUM_LINE_LENGTH} stops",
                    )
                plan.edits.append(LineEdit(line=line, stations=remaining))
            else:
                first, second = _split_segments(
                    line, primary, secondary, selected
                )
                if min(len(first), len(second)) < MINIMUM_LINE_LENGTH:
                    return _reject(
                        RejectionReason.MINIMUM_LENGTH_VIOLATION,
                        f"Splitting line '{line.name}' leaves a segment with "
                        f"fewer than {MINIMUM_LINE_LENGTH} stops",
                    )
                plan.splits.append(LineSplit(
                    line=line,
                    parts=[
                        LineDraft(f"{line.name}-1", line.color, first),
                        LineDraft(f"{line.name}-2", line.color, second),
                    ],
                ))

        plan.additions.append(
            LineDraft(replacement_name, REPLACEMENT_LINE_COLOR, stations)
        )
        return self._check_names(plan)

    def _plan_alternative(
        self,
        station_a: Optional[Station],
        station_b: Optional[Station]
    ) -> PlanOutcome:
        if station_a is None or station_b is None or station_a is station_b:
            return _reject(
                RejectionReason.DEGENERATE_ALTERNATIVE,
                "An alternative service needs two distinct stations",
            )

        for station in (station_a, station_b):
            if station not in self._stations:
                return _reject(
                    RejectionReason.UNKNOWN_STATION,
                    f"Station '{station.name}' is not part of the network",
                )

        plan = RewritePlan(counter_step=1)
        plan.additions.append(LineDraft(
            f"P-{self._replacement_line_counter + 1}",
            REPLACEMENT_LINE_COLOR,
            [station_a, station_b],
        ))
        return self._check_names(plan)

    def _check_names(self, plan: RewritePlan) -> PlanOutcome:
        """Reject a plan whose new lines would clash with existing names."""
        removed = set(plan.removed_line_names())
        taken = {line.name for line in self._lines if line.name not in removed}

        for name in plan.new_line_names():
            if name in taken:
                return _reject(
                    RejectionReason.LINE_NAME_CONFLICT,
                    f"A line named '{name}' already exists",
                )
            taken.add(name)
        return plan

    # --- Commit ---

    def _run(self, operation: OperationKind, planned: PlanOutcome) -> OperationResult:
        if isinstance(planned, Rejection):
            logger.info(
                "Rejected %s | reason=%s message=%s",
                operation.value,
                planned.reason.value,
                planned.message,
            )
            return OperationResult.rejected(operation, planned)

        result = self._commit(operation, planned)
        logger.info(
            "Applied %s | added=%s removed=%s modified=%s stations_removed=%s",
            operation.value,
            result.lines_added,
            result.lines_removed,
            result.lines_modified,
            result.stations_removed,
        )
        return result

    def _commit(self, operation: OperationKind, plan: RewritePlan) -> OperationResult:
        modified: list[str] = []
        for edit in plan.edits:
            edit.line.replace_stations(edit.stations)
            modified.append(edit.line.name)

        for split in plan.splits:
            index = self._lines.index(split.line)
            split.line.detach()
            self._lines[index:index + 1] = [
                Line.from_stations(part.name, part.color, part.stations)
                for part in split.parts
            ]

        for draft in plan.additions:
            self._lines.append(
                Line.from_stations(draft.name, draft.color, draft.stations)
            )

        self._replacement_line_counter += plan.counter_step

        stations_removed: list[str] = []
        retired = plan.retired_station
        if retired is not None and not any(
            station_on_line(line, retired) for line in self._lines
        ):
            self._stations = [s for s in self._stations if s is not retired]
            stations_removed.append(retired.name)

        return OperationResult(
            success=True,
            operation=operation,
            message=f"{operation.value} applied",
            lines_added=plan.new_line_names(),
            lines_removed=plan.removed_line_names(),
            lines_modified=modified,
            stations_removed=stations_removed,
        )


def _reject(reason: RejectionReason, message: str) -> Rejection:
    return Rejection(reason=reason, message=message)


def _unique(lines: Iterable[Line]) -> list[Line]:
    """Drop repeated lines, keeping the first occurrence."""
    result: list[Line] = []
    for line in lines:
        if not any(line is seen for seen in result):
            result.append(line)
    return result


def _split_segments(
    line: Line,
    primary: Station,
    secondary: Station,
    selected: set[int]
) -> tuple[list[Station], list[Station]]:
    """
    Cut a line around the replaced segment.

    Stations up to and including the primary boundary form the first
    segment. Later stations join the second segment only if they are
    outside the selection or are the secondary boundary.
    """
    first: list[Station] = []
    second: list[Station] = []
    reached = False

    for station in line.stations:
        if station is primary:
            reached = True
            first.append(station)
            continue

        if not reached:
            first.append(station)
        elif id(station) not in selected or station is secondary:
            second.append(station)

    return first, second
