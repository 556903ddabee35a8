from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from smartmask.api import health, masking
from smartmask.core.dependencies import get_registry, get_settings
from smartmask.core.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level, get_registry())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting smartmask on port %s with %d sensitive keys",
        settings.port,
        len(settings.sensitive_keys),
    )
    yield


app = FastAPI(title="smartmask", version="1.0.0", lifespan=lifespan)
app.include_router(health.router)
app.include_router(masking.router)
