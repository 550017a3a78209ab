"""tavern-dice — FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from importlib.metadata import version, PackageNotFoundError

from fastapi import FastAPI

from tavern.api import dice
from tavern.infra.config import settings

logger = logging.getLogger("tavern-dice")

try:
    __version__ = version("tavern-dice")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore[no-untyped-def]
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("tavern-dice %s ready", __version__)
    yield


app = FastAPI(
    title="tavern-dice",
    description="Dice resolution and narrative-directive engine for tabletop RPG companions",
    version=__version__,
    debug=settings.app_debug,
    lifespan=lifespan,
)

app.include_router(dice.router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "engine": "tavern-dice", "version": __version__}
