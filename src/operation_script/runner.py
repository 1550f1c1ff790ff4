"""
Drive the replacement services editor from an operation script.

Every name in the script is resolved before the editor is called, so an
input error never leaves a partially edited model behind.
"""

import logging

from src.replacement_services import OperationResult, ReplacementServices
from src.transit_model.entities import Line, Station

from .models import (
    AlternativeCommand,
    CloseCommand,
    InputErrorKind,
    ReplacementCommand,
    ScriptInputError,
)
from .parser import Command, parse_script

logger = logging.getLogger(__name__)


def resolve_station(editor: ReplacementServices, name: str) -> Station:
    station = editor.find_station(name)
    if station is None:
        raise ScriptInputError(
            InputErrorKind.UNRESOLVED_NAME,
            f"Station not found: {name}",
        )
    return station


def resolve_line(editor: ReplacementServices, name: str) -> Line:
    line = editor.find_line(name)
    if line is None:
        raise ScriptInputError(
            InputErrorKind.UNRESOLVED_NAME,
            f"Line not found: {name}",
        )
    return line


def resolve_station_line(station: Station, name: str) -> Line:
    """Find a line by name among the lines that stop at a station."""
    for stop in station.stops:
        if stop.line.name == name:
            return stop.line
    raise ScriptInputError(
        InputErrorKind.UNRESOLVED_NAME,
        f"Line not found: {name}",
    )


def apply_command(editor: ReplacementServices, command: Command) -> OperationResult:
    """
    Resolve the names of a parsed command and run it on the editor.

    Raises:
        ScriptInputError: If a station or line name does not resolve
    """
    if isinstance(command, CloseCommand):
        station = resolve_station(editor, command.station)
        lines = [resolve_station_line(station, name) for name in command.lines]
        return editor.close_station(station, lines)

    if isinstance(command, ReplacementCommand):
        stations = [resolve_station(editor, name) for name in command.stations]
        lines = [resolve_line(editor, name) for name in command.lines]
        return editor.organize_replacement_service(stations, lines)

    if isinstance(command, AlternativeCommand):
        missing = [
            name for name in (command.station_a, command.station_b)
            if editor.find_station(name) is None
        ]
        if missing:
            label = "Stations" if len(missing) > 1 else "Station"
            raise ScriptInputError(
                InputErrorKind.UNRESOLVED_NAME,
                f"{label} not found: {', '.join(missing)}",
            )
        return editor.create_alternative_service(
            editor.find_station(command.station_a),
            editor.find_station(command.station_b),
        )

    raise ScriptInputError(
        InputErrorKind.UNKNOWN_OPERATION,
        f"Unsupported command: {type(command).__name__}",
    )


def run_script(editor: ReplacementServices, text: str) -> OperationResult:
    """
    Parse a script and apply its operation.

    Args:
        editor: Editor holding the model to modify
        text: Script contents

    Returns:
        OperationResult of the editor operation

    Raises:
        ScriptInputError: If the script is malformed or references
            unknown stations or lines
    """
    command = parse_script(text)
    logger.info("Running script operation | op=%s", command.op)
    return apply_command(editor, command)
