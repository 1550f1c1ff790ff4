"""
Network document: the JSON import/export contract of the transit model.

A document lists stations with their coordinates and lines with their
ordered stop names. Converting a document to a `ModelData` wires the
entity graph; converting back serializes the current model.
"""

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, model_validator

from .entities import Coordinate, Line, ModelData, Station


class StationRecord(BaseModel):
    """A station as it appears in a network document."""

    name: str = Field(..., min_length=1, description="Unique station name")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class LineRecord(BaseModel):
    """A line as it appears in a network document."""

    name: str = Field(..., min_length=1, description="Unique line name")
    color: str = Field(
        default="#000000",
        description="Display color, usually a hex code"
    )
    stops: list[str] = Field(
        ...,
        min_length=2,
        description="Ordered station names served by the line"
    )

    @model_validator(mode="after")
    def no_repeated_station(self) -> "LineRecord":
        """A station may appear at most once on a line."""
        seen: set[str] = set()
        for name in self.stops:
            if name in seen:
                raise ValueError(
                    f"Station '{name}' appears more than once on line '{self.name}'"
                )
            seen.add(name)
        return self


class NetworkDocument(BaseModel):
    """
    Serialized transit model.

    Example:
        {
            "stations": [
                {"name": "A", "latitude": 48.1, "longitude": 11.5},
                {"name": "B", "latitude": 48.2, "longitude": 11.6}
            ],
            "lines": [
                {"name": "U1", "color": "#3C8C3D", "stops": ["A", "B"]}
            ]
        }
    """

    stations: list[StationRecord] = Field(default_factory=list)
    lines: list[LineRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_references(self) -> "NetworkDocument":
        """Names are unique, stops resolve, and every station is served."""
        station_names = [s.name for s in self.stations]
        duplicates = _duplicates(station_names)
        if duplicates:
            raise ValueError(f"Duplicate station names: {', '.join(duplicates)}")

        duplicates = _duplicates([line.name for line in self.lines])
        if duplicates:
            raise ValueError(f"Duplicate line names: {', '.join(duplicates)}")

        known = set(station_names)
        served: set[str] = set()
        for line in self.lines:
            for name in line.stops:
                if name not in known:
                    raise ValueError(
                        f"Line '{line.name}' stops at unknown station '{name}'"
                    )
                served.add(name)

        unserved = [name for name in station_names if name not in served]
        if unserved:
            raise ValueError(
                f"Stations not served by any line: {', '.join(unserved)}"
            )
        return self

    def to_model(self) -> ModelData:
        """Build the entity graph described by this document."""
        stations = {
            record.name: Station(
                name=record.name,
                location=Coordinate(record.latitude, record.longitude),
            )
            for record in self.stations
        }
        lines = [
            Line.from_stations(
                record.name,
                record.color,
                [stations[name] for name in record.stops],
            )
            for record in self.lines
        ]
        return ModelData(stations=list(stations.values()), lines=lines)

    @classmethod
    def from_model(cls, model: ModelData) -> "NetworkDocument":
        """Serialize a model, preserving station and line order."""
        return cls(
            stations=[
                StationRecord(
                    name=station.name,
                    latitude=station.location.latitude,
                    longitude=station.location.longitude,
                )
                for station in model.stations
            ],
            lines=[
                LineRecord(
                    name=line.name,
                    color=line.color,
                    stops=[station.name for station in line.stations],
                )
                for line in model.lines
            ],
        )


def load_network(path: Union[str, Path]) -> ModelData:
    """
    Read a network document from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the document is inconsistent
    """
    text = Path(path).read_text(encoding="utf-8")
    return NetworkDocument.model_validate(json.loads(text)).to_model()


def _duplicates(names: list[str]) -> list[str]:
    seen: set[str] = set()
    repeated: list[str] = []
    for name in names:
        if name in seen and name not in repeated:
            repeated.append(name)
        seen.add(name)
    return repeated
