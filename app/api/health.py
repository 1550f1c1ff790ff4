"""Health check endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app import __version__
from app.api.dependencies import get_editor
from src.replacement_services import ReplacementServices

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class HealthDetailResponse(HealthResponse):
    """Detailed health check response with network status."""

    stations: int
    lines: int
    invariant_violations: list[str]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=HealthDetailResponse)
async def readiness_check(
    editor: ReplacementServices = Depends(get_editor),
) -> HealthDetailResponse:
    """Readiness check including the consistency of the loaded network."""
    violations = editor.check_invariants()
    return HealthDetailResponse(
        status="ok" if not violations else "degraded",
        version=__version__,
        stations=len(editor.get_stations()),
        lines=len(editor.get_lines()),
        invariant_violations=violations,
    )
