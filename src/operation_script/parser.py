"""
Operation script parsing.

A script is UTF-8 text with semicolon-separated fields. The first field
of the first row names the operation:

    CLOSE;station;line1;line2
    ALTERNATIVE;stationA;stationB
    REPLACEMENT
    station1;station2;station3
    line1;line2

Only letters, digits, ';', '_', '-', spaces and line breaks are allowed.
"""

from pathlib import Path
from typing import Union

from .models import (
    AlternativeCommand,
    CloseCommand,
    InputErrorKind,
    ReplacementCommand,
    ScriptInputError,
)

ALLOWED_PUNCTUATION = frozenset(";_- \r\n")

Command = Union[CloseCommand, ReplacementCommand, AlternativeCommand]
ScriptField = tuple[str, int]


def find_invalid_character(row: str) -> int:
    """
    Locate the first character that is not allowed in a script row.

    Returns:
        0-based index of the offending character, or -1 if the row is clean
    """
    for i, char in enumerate(row):
        if char.isalpha() or char.isdecimal() or char in ALLOWED_PUNCTUATION:
            continue
        return i
    return -1


def split_fields(row: str, row_number: int) -> list[ScriptField]:
    """
    Split a row into trimmed fields with their 1-based start columns.

    Trailing empty fields are dropped; any other blank field is an error.
    """
    raw = row.split(";")
    while raw and raw[-1] == "":
        raw.pop()

    fields: list[ScriptField] = []
    column = 1
    for value in raw:
        trimmed = value.strip()
        if not trimmed:
            raise ScriptInputError(
                InputErrorKind.EMPTY_FIELD,
                "Empty field",
                row=row_number,
                column=column,
            )
        fields.append((trimmed, column))
        column += len(value) + 1
    return fields


def parse_script(text: str) -> Command:
    """
    Parse an operation script.

    Args:
        text: Script contents

    Returns:
        The parsed command

    Raises:
        ScriptInputError: On invalid characters, missing rows or fields,
            blank fields, or an unknown operation keyword
    """
    rows = text.split("\n")

    for row_index, row in enumerate(rows):
        column = find_invalid_character(row)
        if column != -1:
            raise ScriptInputError(
                InputErrorKind.INVALID_CHARACTER,
                f"Invalid character '{row[column]}'",
                row=row_index + 1,
                column=column + 1,
            )

    while rows and not rows[-1].strip():
        rows.pop()

    if not rows:
        raise ScriptInputError(
            InputErrorKind.MISSING_ARTEFACT,
            "No operation found",
        )

    header = split_fields(rows[0], 1)
    if not header:
        raise ScriptInputError(
            InputErrorKind.MISSING_ARTEFACT,
            "No operation found",
            row=1,
        )

    keyword = header[0][0]
    arguments = [value for value, _ in header[1:]]

    if keyword == "CLOSE":
        if not arguments:
            raise ScriptInputError(
                InputErrorKind.MISSING_ARTEFACT,
                "CLOSE requires a station",
                row=1,
            )
        if len(arguments) < 2:
            raise ScriptInputError(
                InputErrorKind.MISSING_ARTEFACT,
                "CLOSE requires at least one line",
                row=1,
            )
        return CloseCommand(station=arguments[0], lines=arguments[1:])

    if keyword == "REPLACEMENT":
        stations = _required_row(rows, 2, "stations")
        lines = _required_row(rows, 3, "lines")
        return ReplacementCommand(stations=stations, lines=lines)

    if keyword == "ALTERNATIVE":
        if len(arguments) != 2:
            raise ScriptInputError(
                InputErrorKind.MISSING_ARTEFACT,
                "ALTERNATIVE requires exactly two stations",
                row=1,
            )
        return AlternativeCommand(station_a=arguments[0], station_b=arguments[1])

    raise ScriptInputError(
        InputErrorKind.UNKNOWN_OPERATION,
        f"Unsupported operation: {keyword}",
        row=1,
        column=header[0][1],
    )


def load_script(path: Union[str, Path]) -> str:
    """Read a script file, reporting a missing or undecodable file as an input error."""
    script_path = Path(path)
    if not script_path.is_file():
        raise ScriptInputError(
            InputErrorKind.MISSING_ARTEFACT,
            f"Operation script not found: {script_path}",
        )
    try:
        return script_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ScriptInputError(
            InputErrorKind.INVALID_CHARACTER,
            f"Operation script is not valid UTF-8: {script_path}",
        ) from e


def _required_row(rows: list[str], row_number: int, label: str) -> list[str]:
    if len(rows) < row_number:
        raise ScriptInputError(
            InputErrorKind.MISSING_ARTEFACT,
            f"REPLACEMENT requires a row of {label}",
            row=row_number,
        )
    fields = split_fields(rows[row_number - 1], row_number)
    if not fields:
        raise ScriptInputError(
            InputErrorKind.MISSING_ARTEFACT,
            f"REPLACEMENT requires a row of {label}",
            row=row_number,
        )
    return [value for value, _ in fields]
