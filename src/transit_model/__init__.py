"""
Transit Model

In-memory model of a public transit network: stations, lines and the
stops linking them, plus the JSON document used to import and export it.
"""

__version__ = "0.1.0"

from .entities import (
    Coordinate,
    Station,
    Stop,
    Line,
    ModelData,
)
from .document import (
    StationRecord,
    LineRecord,
    NetworkDocument,
    load_network,
)
from .equality import models_semantically_equal

__all__ = [
    "__version__",
    "Coordinate",
    "Station",
    "Stop",
    "Line",
    "ModelData",
    "StationRecord",
    "LineRecord",
    "NetworkDocument",
    "load_network",
    "models_semantically_equal",
]
