"""
Semantic comparison of two transit models.

Two models are equal when stations match by name, coordinates and the
lines that touch them, and lines match by name, color and stop order
(a line read backwards is the same line).
"""

from .entities import Line, ModelData, Station

COORDINATE_TOLERANCE = 1e-4


def _close(a: float, b: float) -> bool:
    return abs(a - b) < COORDINATE_TOLERANCE


def stations_semantically_equal(a: Station, b: Station) -> bool:
    return (
        a.name == b.name
        and _close(a.location.latitude, b.location.latitude)
        and _close(a.location.longitude, b.location.longitude)
        and a.line_names() == b.line_names()
    )


def lines_semantically_equal(a: Line, b: Line) -> bool:
    if a.name != b.name or a.color != b.color:
        return False
    stops_a = [station.name for station in a.stations]
    stops_b = [station.name for station in b.stations]
    return stops_a == stops_b or stops_a == stops_b[::-1]


def models_semantically_equal(a: ModelData, b: ModelData) -> bool:
    """
    Compare two models in both directions.

    Every station and line of each model needs a counterpart in the
    other one.
    """
    return (
        _covered(a.stations, b.stations, stations_semantically_equal)
        and _covered(b.stations, a.stations, stations_semantically_equal)
        and _covered(a.lines, b.lines, lines_semantically_equal)
        and _covered(b.lines, a.lines, lines_semantically_equal)
    )


def _covered(items, candidates, equal) -> bool:
    return all(
        any(equal(item, candidate) for candidate in candidates)
        for item in items
    )
