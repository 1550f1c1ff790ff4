"""
Invariant checks for the transit model.

Pure predicates used by the editor to validate operations before
anything is changed. None of them mutate their arguments.
"""

from typing import Optional, Sequence

from src.transit_model.entities import Line, Station

MINIMUM_LINE_LENGTH = 2


def index_on_line(line: Line, station: Station) -> Optional[int]:
    """
    Position of a station on a line.

    Args:
        line: The line to search
        station: The station to locate

    Returns:
        Index of the station's stop, or None if the line does not serve it
    """
    for i, stop in enumerate(line.stops):
        if stop.station is station:
            return i
    return None


def station_on_line(line: Line, station: Station) -> bool:
    return index_on_line(line, station) is not None


def is_terminal(line: Line, station: Station) -> bool:
    """True if the station is the first or last stop of the line."""
    if not line.stops:
        return False
    return line.stops[0].station is station or line.stops[-1].station is station


def consecutive_pair_exists(line: Line, stations: Sequence[Station]) -> bool:
    """
    Check whether a station sequence touches the line along an edge.

    True as soon as one adjacent pair of the sequence occupies adjacent
    positions on the line. Other pairs of the sequence are not checked.
    """
    for current, following in zip(stations, stations[1:]):
        i = index_on_line(line, current)
        j = index_on_line(line, following)
        if i is not None and j is not None and abs(i - j) == 1:
            return True
    return False


def find_invariant_violations(
    lines: Sequence[Line],
    stations: Sequence[Station]
) -> list[str]:
    """
    Collect violations of the model invariants.

    Args:
        lines: Lines of the model
        stations: Station set of the model

    Returns:
        List of violation messages (empty if the model is consistent)
    """
    violations: list[str] = []

    line_names = [line.name for line in lines]
    if len(set(line_names)) != len(line_names):
        violations.append("Line names are not unique")

    station_names = [station.name for station in stations]
    if len(set(station_names)) != len(station_names):
        violations.append("Station names are not unique")

    station_ids = {id(station) for station in stations}

    for line in lines:
        if len(line.stops) < MINIMUM_LINE_LENGTH:
            violations.append(
                f"Line '{line.name}' has {len(line.stops)} stop(s)"
            )

        seen: set[int] = set()
        for stop in line.stops:
            if stop.line is not line:
                violations.append(
                    f"Stop of '{stop.station.name}' on '{line.name}' "
                    f"points at another line"
                )
            if id(stop.station) in seen:
                violations.append(
                    f"Station '{stop.station.name}' appears twice on "
                    f"'{line.name}'"
                )
            seen.add(id(stop.station))
            if id(stop.station) not in station_ids:
                violations.append(
                    f"Station '{stop.station.name}' on '{line.name}' is "
                    f"missing from the station set"
                )
            if not any(s is stop for s in stop.station.stops):
                violations.append(
                    f"Station '{stop.station.name}' does not reference its "
                    f"stop on '{line.name}'"
                )

    owned_stop_ids = {id(stop) for line in lines for stop in line.stops}
    for station in stations:
        if not station.stops:
            violations.append(f"Station '{station.name}' has no stops")
        for stop in station.stops:
            if id(stop) not in owned_stop_ids:
                violations.append(
                    f"Station '{station.name}' references a stop of "
                    f"discarded line '{stop.line.name}'"
                )

    return violations
