"""Shared FastAPI dependencies."""

from fastapi import Request

from src.replacement_services import ReplacementServices


def get_editor(request: Request) -> ReplacementServices:
    """Editor holding the network served by this application."""
    editor = getattr(request.app.state, "editor", None)
    if editor is None:
        editor = ReplacementServices()
        request.app.state.editor = editor
    return editor
