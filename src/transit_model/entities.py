"""
Transit model entities.

Stations, lines and stops form a cycle: a line owns its stops, every
stop points at a station, and every station keeps a back-reference list
of the stops that target it. Entities compare by identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.latitude <= 90.0):
            raise ValueError(f"Invalid latitude: {self.latitude}")
        if not (-180.0 <= self.longitude <= 180.0):
            raise ValueError(f"Invalid longitude: {self.longitude}")


@dataclass(eq=False)
class Station:
    """A named geographic point that may be served by several lines."""

    name: str
    location: Coordinate
    stops: list[Stop] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Station name must not be empty")

    def line_names(self) -> list[str]:
        """Sorted names of the lines stopping at this station."""
        return sorted(stop.line.name for stop in self.stops)

    def is_served(self) -> bool:
        return bool(self.stops)


@dataclass(eq=False)
class Stop:
    station: Station
    line: Line = field(repr=False)


@dataclass(eq=False)
class Line:
    """
    A named, ordered sequence of stops.

    Use `Line.from_stations` to build a line; it registers the created
    stops on their stations so back-references stay consistent.
    """

    name: str
    color: str
    stops: list[Stop] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Line name must not be empty")

    @classmethod
    def from_stations(
        cls,
        name: str,
        color: str,
        stations: Iterable[Station]
    ) -> "Line":
        line = cls(name=name, color=color)
        line.replace_stations(stations)
        return line

    @property
    def stations(self) -> list[Station]:
        """Ordered station sequence of this line."""
        return [stop.station for stop in self.stops]

    def stop_for(self, station: Station) -> Optional[Stop]:
        for stop in self.stops:
            if stop.station is station:
                return stop
        return None

    def replace_stations(self, stations: Iterable[Station]) -> None:
        """
        Rewrite the stop sequence in place.

        Stops of stations that stay on the line are reused. Stops that
        disappear are unregistered from their station, new stops are
        registered on theirs.
        """
        current = {id(stop.station): stop for stop in self.stops}
        new_stops: list[Stop] = []

        for station in stations:
            stop = current.pop(id(station), None)
            if stop is None:
                stop = Stop(station=station, line=self)
                station.stops.append(stop)
            new_stops.append(stop)

        for dropped in current.values():
            _unregister(dropped)

        self.stops = new_stops

    def detach(self) -> None:
        """Unregister every stop; the line is being discarded."""
        for stop in self.stops:
            _unregister(stop)
        self.stops = []


def _unregister(stop: Stop) -> None:
    station_stops = stop.station.stops
    for i, candidate in enumerate(station_stops):
        if candidate is stop:
            del station_stops[i]
            return


@dataclass
class ModelData:
    """The model shape exchanged with importers and serializers."""

    stations: list[Station] = field(default_factory=list)
    lines: list[Line] = field(default_factory=list)
