"""
Operation Scripts

Parses the semicolon-separated operation scripts describing one
disruption and applies them to a replacement services editor.
"""

__version__ = "0.1.0"

from .models import (
    InputErrorKind,
    ScriptInputError,
    CloseCommand,
    ReplacementCommand,
    AlternativeCommand,
    ScriptOperation,
)
from .parser import (
    parse_script,
    load_script,
)
from .runner import (
    apply_command,
    run_script,
)

__all__ = [
    "__version__",
    "InputErrorKind",
    "ScriptInputError",
    "CloseCommand",
    "ReplacementCommand",
    "AlternativeCommand",
    "ScriptOperation",
    "parse_script",
    "load_script",
    "apply_command",
    "run_script",
]
