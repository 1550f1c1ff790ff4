"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app import __version__
from app.api import health, network
from app.config import settings
from src.replacement_services import ReplacementServices
from src.transit_model import load_network

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the configured network into a fresh editor."""
    if settings.network_path is not None:
        model = load_network(settings.network_path)
        logger.info(
            "Loaded network | path=%s stations=%d lines=%d",
            settings.network_path,
            len(model.stations),
            len(model.lines),
        )
        app.state.editor = ReplacementServices(model)
    else:
        logger.info("No network configured, starting with an empty model")
        app.state.editor = ReplacementServices()
    yield


app = FastAPI(
    title="Transit Replacement Services",
    description="Simulates station closures and bus replacement services on a transit network",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(network.router, prefix="/network", tags=["network"])
