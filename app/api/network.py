"""
Network editing endpoints.

Expose the replacement services editor over HTTP. The model is held in
memory only; every request works on the editor stored on the app state.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from app.api.dependencies import get_editor
from src.operation_script import (
    AlternativeCommand,
    CloseCommand,
    InputErrorKind,
    ReplacementCommand,
    ScriptInputError,
    ScriptOperation,
    apply_command,
    run_script,
)
from src.replacement_services import OperationResult, ReplacementServices
from src.transit_model import NetworkDocument

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Request/Response Models ---

class ScriptRequest(BaseModel):
    """Request body carrying a raw operation script."""

    script: str = Field(
        ...,
        description="Operation script, e.g. 'CLOSE;Odeonsplatz;U3;U6'"
    )


class OperationRequest(BaseModel):
    """Request body carrying a single structured operation."""

    operation: ScriptOperation = Field(
        ...,
        description="Operation keyed by its 'op' field"
    )


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(description="Error type")
    message: str = Field(description="Error message")
    detail: Any = Field(default=None, description="Additional error details")


ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Unknown station or line"},
    409: {"model": ErrorResponse, "description": "Operation rejected"},
    422: {"model": ErrorResponse, "description": "Invalid input"},
}


# --- Helpers ---

def _execute(editor: ReplacementServices, command) -> OperationResult:
    """Run a command and translate failures into HTTP errors."""
    try:
        result = apply_command(editor, command)
    except ScriptInputError as e:
        raise _input_error(e)
    return _checked(result)


def _checked(result: OperationResult) -> OperationResult:
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error": result.rejection.value,
                "message": result.message,
            },
        )
    return result


def _input_error(error: ScriptInputError) -> HTTPException:
    logger.error("Script input error: %s", str(error))
    code = (
        status.HTTP_404_NOT_FOUND
        if error.kind == InputErrorKind.UNRESOLVED_NAME
        else status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    return HTTPException(
        status_code=code,
        detail={
            "error": error.kind.value,
            "message": error.message,
            "detail": {"row": error.row, "column": error.column},
        },
    )


# --- Endpoints ---

@router.get("", response_model=NetworkDocument)
async def get_network(
    editor: ReplacementServices = Depends(get_editor),
) -> NetworkDocument:
    """Current network as a network document."""
    return NetworkDocument.from_model(editor.snapshot())


@router.put("", response_model=NetworkDocument)
async def replace_network(
    document: NetworkDocument,
    request: Request,
) -> NetworkDocument:
    """
    Replace the network with a new document.

    Starts a fresh editor, so the replacement-line counter restarts at 0.
    """
    editor = ReplacementServices(document.to_model())
    request.app.state.editor = editor
    logger.info(
        "Network replaced | stations=%d lines=%d",
        len(document.stations),
        len(document.lines),
    )
    return NetworkDocument.from_model(editor.snapshot())


@router.post(
    "/close",
    response_model=OperationResult,
    responses=ERROR_RESPONSES,
    summary="Close a station on selected lines",
)
async def close_station(
    command: CloseCommand,
    editor: ReplacementServices = Depends(get_editor),
) -> OperationResult:
    """Close a station; its neighbours on each selected line become adjacent."""
    logger.info(
        "Close request | station=%s lines=%s", command.station, command.lines
    )
    return _execute(editor, command)


@router.post(
    "/replacement",
    response_model=OperationResult,
    responses=ERROR_RESPONSES,
    summary="Organize a bus replacement service",
)
async def organize_replacement(
    command: ReplacementCommand,
    editor: ReplacementServices = Depends(get_editor),
) -> OperationResult:
    """
    Replace the segment between the first and last selected stations.

    Lines reaching the segment from a terminal are cut back; lines passing
    through it are split in two. A replacement line serves the selection.
    """
    logger.info(
        "Replacement request | stations=%s lines=%s",
        command.stations,
        command.lines,
    )
    return _execute(editor, command)


@router.post(
    "/alternative",
    response_model=OperationResult,
    responses=ERROR_RESPONSES,
    summary="Introduce an alternative replacement service",
)
async def create_alternative(
    command: AlternativeCommand,
    editor: ReplacementServices = Depends(get_editor),
) -> OperationResult:
    """Add a direct replacement line between two stations."""
    logger.info(
        "Alternative request | a=%s b=%s", command.station_a, command.station_b
    )
    return _execute(editor, command)


@router.post(
    "/operations",
    response_model=OperationResult,
    responses=ERROR_RESPONSES,
    summary="Apply a structured operation",
)
async def apply_operation(
    request: OperationRequest,
    editor: ReplacementServices = Depends(get_editor),
) -> OperationResult:
    """Apply any supported operation, selected by its 'op' field."""
    return _execute(editor, request.operation)


@router.post(
    "/script",
    response_model=OperationResult,
    responses=ERROR_RESPONSES,
    summary="Run an operation script",
)
async def apply_script(
    request: ScriptRequest,
    editor: ReplacementServices = Depends(get_editor),
) -> OperationResult:
    """Parse an operation script and apply it to the network."""
    try:
        result = run_script(editor, request.script)
    except ScriptInputError as e:
        raise _input_error(e)
    return _checked(result)
