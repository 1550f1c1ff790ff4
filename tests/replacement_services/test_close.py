"""Tests for closing stations."""

import pytest
from src.replacement_services import OperationKind, RejectionReason
from src.transit_model import Coordinate, Line, Station
from tests.helpers import build_editor, line_map, model_state, station_names


class TestCloseStation:
    """Tests for successful closures."""

    def test_close_non_terminal_single_line(self):
        """Neighbours of a closed interior station become adjacent."""
        editor = build_editor({"U1": ["A", "B", "C", "D", "E"]})

        result = editor.close_station(
            editor.find_station("C"), [editor.find_line("U1")]
        )

        assert result.success is True
        assert result.operation == OperationKind.CLOSE
        assert line_map(editor) == {"U1": ["A", "B", "D", "E"]}
        assert "C" not in station_names(editor)
        assert result.stations_removed == ["C"]
        assert result.lines_modified == ["U1"]

    def test_close_terminal_on_several_lines(self):
        """Closing a shared terminal shortens every selected line."""
        editor = build_editor({"U1": ["A", "B", "C"], "U2": ["C", "D", "E"]})

        result = editor.close_station(
            editor.find_station("C"),
            [editor.find_line("U1"), editor.find_line("U2")],
        )

        assert result
        assert line_map(editor) == {"U1": ["A", "B"], "U2": ["D", "E"]}
        assert "C" not in station_names(editor)

    def test_station_kept_when_still_served(self):
        """A station served by an unselected line stays in the model."""
        editor = build_editor({"U1": ["A", "B", "C"], "U2": ["D", "B", "E"]})

        result = editor.close_station(
            editor.find_station("B"), [editor.find_line("U1")]
        )

        assert result
        assert line_map(editor) == {"U1": ["A", "C"], "U2": ["D", "B", "E"]}
        assert "B" in station_names(editor)
        assert editor.find_station("B").line_names() == ["U2"]
        assert result.stations_removed == []

    def test_stop_count_drops_by_one(self):
        """Each affected line loses exactly one stop."""
        editor = build_editor({
            "U1": ["A", "B", "C", "D"],
            "U2": ["E", "B", "F"],
        })
        before = {name: len(stops) for name, stops in line_map(editor).items()}

        editor.close_station(
            editor.find_station("B"),
            [editor.find_line("U1"), editor.find_line("U2")],
        )

        after = {name: len(stops) for name, stops in line_map(editor).items()}
        assert after == {name: count - 1 for name, count in before.items()}

    def test_repeated_line_closes_once(self):
        """A line listed twice is edited once."""
        editor = build_editor({"U1": ["A", "B", "C", "D"]})
        u1 = editor.find_line("U1")

        result = editor.close_station(editor.find_station("B"), [u1, u1])

        assert result
        assert line_map(editor) == {"U1": ["A", "C", "D"]}

    def test_line_identity_preserved(self):
        """Closing resequences the line object in place."""
        editor = build_editor({"U1": ["A", "B", "C"]})
        u1 = editor.find_line("U1")

        editor.close_station(editor.find_station("B"), [u1])

        assert editor.find_line("U1") is u1
        assert editor.check_invariants() == []


class TestCloseStationRejected:
    """Tests for rejected closures; the model must stay untouched."""

    def test_minimum_length(self):
        """A two-stop line cannot lose a stop."""
        editor = build_editor({"U1": ["A", "B"]})
        before = model_state(editor)

        result = editor.close_station(
            editor.find_station("A"), [editor.find_line("U1")]
        )

        assert result.success is False
        assert result.rejection == RejectionReason.MINIMUM_LENGTH_VIOLATION
        assert model_state(editor) == before

    def test_minimum_length_on_second_line(self):
        """One failing line rejects the closure on every line."""
        editor = build_editor({"U1": ["A", "B", "C", "D"], "U2": ["C", "E"]})
        before = model_state(editor)

        result = editor.close_station(
            editor.find_station("C"),
            [editor.find_line("U1"), editor.find_line("U2")],
        )

        assert result.rejection == RejectionReason.MINIMUM_LENGTH_VIOLATION
        assert model_state(editor) == before

    def test_station_not_on_line(self):
        """Every selected line must serve the station."""
        editor = build_editor({"U1": ["A", "B", "C"], "U2": ["D", "E", "F"]})
        before = model_state(editor)

        result = editor.close_station(
            editor.find_station("B"),
            [editor.find_line("U1"), editor.find_line("U2")],
        )

        assert result.rejection == RejectionReason.MISSING_STATION_ON_LINE
        assert model_state(editor) == before

    @pytest.mark.parametrize("use_station, lines", [
        (False, ["U1"]),
        (True, []),
    ])
    def test_empty_selection(self, use_station, lines):
        """A missing station or an empty line selection is rejected."""
        editor = build_editor({"U1": ["A", "B", "C"]})
        station = editor.find_station("B") if use_station else None

        result = editor.close_station(
            station, [editor.find_line(name) for name in lines]
        )

        assert result.rejection == RejectionReason.EMPTY_SELECTION
        assert line_map(editor) == {"U1": ["A", "B", "C"]}

    def test_foreign_line(self):
        """A line that is not part of the network is rejected."""
        editor = build_editor({"U1": ["A", "B", "C"]})
        x = Station(name="X", location=Coordinate(48.0, 11.0))
        y = Station(name="Y", location=Coordinate(48.1, 11.1))
        z = Station(name="Z", location=Coordinate(48.2, 11.2))
        foreign = Line.from_stations("U9", "#000000", [x, y, z])

        result = editor.close_station(y, [foreign])

        assert result.rejection == RejectionReason.UNKNOWN_LINE
        assert [s.name for s in foreign.stations] == ["X", "Y", "Z"]
