"""Tests for the network document import/export contract."""

import json

import pytest
from pydantic import ValidationError

from src.transit_model import NetworkDocument, load_network


@pytest.fixture
def payload():
    return {
        "stations": [
            {"name": "A", "latitude": 48.10, "longitude": 11.50},
            {"name": "B", "latitude": 48.11, "longitude": 11.51},
            {"name": "C", "latitude": 48.12, "longitude": 11.52},
        ],
        "lines": [
            {"name": "U1", "color": "#3C8C3D", "stops": ["A", "B", "C"]},
            {"name": "U2", "color": "#C3022D", "stops": ["C", "B"]},
        ],
    }


class TestToModel:
    """Tests for building the entity graph from a document."""

    def test_wires_entities(self, payload):
        """Lines, stops and station back-references are connected."""
        model = NetworkDocument.model_validate(payload).to_model()

        assert [s.name for s in model.stations] == ["A", "B", "C"]
        u1, u2 = model.lines
        assert [s.name for s in u1.stations] == ["A", "B", "C"]
        assert u2.color == "#C3022D"

        b = model.stations[1]
        assert b.line_names() == ["U1", "U2"]
        assert u1.stations[1] is b
        assert u2.stations[1] is b

    def test_from_model_preserves_order(self, payload):
        """Serializing a freshly built model gives back the same document."""
        document = NetworkDocument.model_validate(payload)
        assert NetworkDocument.from_model(document.to_model()) == document


class TestValidation:
    """Tests for document consistency checks."""

    def test_duplicate_station_names(self, payload):
        """Station names must be unique."""
        payload["stations"].append(
            {"name": "A", "latitude": 48.0, "longitude": 11.0}
        )
        with pytest.raises(ValidationError, match="Duplicate station names"):
            NetworkDocument.model_validate(payload)

    def test_duplicate_line_names(self, payload):
        """Line names must be unique."""
        payload["lines"][1]["name"] = "U1"
        with pytest.raises(ValidationError, match="Duplicate line names"):
            NetworkDocument.model_validate(payload)

    def test_unknown_stop(self, payload):
        """Stops must reference known stations."""
        payload["lines"][1]["stops"] = ["C", "Z"]
        with pytest.raises(ValidationError, match="unknown station 'Z'"):
            NetworkDocument.model_validate(payload)

    def test_line_too_short(self, payload):
        """A line needs at least two stops."""
        payload["lines"][1]["stops"] = ["C"]
        with pytest.raises(ValidationError):
            NetworkDocument.model_validate(payload)

    def test_repeated_station_on_line(self, payload):
        """A station may not appear twice on a line."""
        payload["lines"][0]["stops"] = ["A", "B", "A"]
        with pytest.raises(ValidationError, match="more than once"):
            NetworkDocument.model_validate(payload)

    def test_unserved_station(self, payload):
        """Every station must be served by a line."""
        payload["stations"].append(
            {"name": "D", "latitude": 48.0, "longitude": 11.0}
        )
        with pytest.raises(ValidationError, match="not served"):
            NetworkDocument.model_validate(payload)


class TestLoadNetwork:
    """Tests for reading documents from disk."""

    def test_load_network(self, tmp_path, payload):
        """A JSON file is read into a model."""
        path = tmp_path / "network.json"
        path.write_text(json.dumps(payload), encoding="utf-8")

        model = load_network(path)

        assert len(model.stations) == 3
        assert [line.name for line in model.lines] == ["U1", "U2"]

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_network(tmp_path / "missing.json")
