"""Builders shared by the test suites."""

from src.replacement_services import ReplacementServices
from src.transit_model import LineRecord, NetworkDocument, StationRecord


def network_document(
    lines: dict[str, list[str]],
    colors: dict[str, str] | None = None
) -> NetworkDocument:
    """
    Document for {line name: [station names]}.

    Stations get distinct coordinates in order of first appearance.
    """
    colors = colors or {}
    station_names: list[str] = []
    for stops in lines.values():
        for name in stops:
            if name not in station_names:
                station_names.append(name)

    return NetworkDocument(
        stations=[
            StationRecord(name=name, latitude=48.0 + i * 0.01, longitude=11.0 + i * 0.01)
            for i, name in enumerate(station_names)
        ],
        lines=[
            LineRecord(name=name, color=colors.get(name, "#3C8C3D"), stops=stops)
            for name, stops in lines.items()
        ],
    )


def build_editor(lines: dict[str, list[str]]) -> ReplacementServices:
    return ReplacementServices(network_document(lines).to_model())


def line_map(editor: ReplacementServices) -> dict[str, list[str]]:
    """Current lines as {name: [station names]}."""
    return {
        line.name: [station.name for station in line.stations]
        for line in editor.get_lines()
    }


def station_names(editor: ReplacementServices) -> list[str]:
    return [station.name for station in editor.get_stations()]


def model_state(editor: ReplacementServices) -> tuple[NetworkDocument, int]:
    """Comparable picture of everything an operation may change."""
    return (
        NetworkDocument.from_model(editor.snapshot()),
        editor.replacement_line_counter,
    )
