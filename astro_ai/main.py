"""Astro AI FastAPI application with lifespan-managed clients and agent graph."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from astro_ai.agent.graph import build_graph
from astro_ai.agent.models import get_primary_model
from astro_ai.clients.drive import DriveImageStore
from astro_ai.config import settings
from astro_ai.middleware.request_log import RequestLogMiddleware
from astro_ai.routes.health import router as health_router
from astro_ai.routes.reading import router as reading_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the Drive image store and build the agent graph."""
    image_store = DriveImageStore(settings)
    try:
        app.state.image_store = image_store
        app.state.expose_error_details = settings.expose_error_details

        model = get_primary_model(settings)
        app.state.agent_graph = build_graph(
            model, max_tool_rounds=settings.max_tool_rounds
        )

        logger.info(
            "Astro AI started — model %s, max %d tool rounds",
            settings.primary_model,
            settings.max_tool_rounds,
        )
        yield
    finally:
        await image_store.close()
        logger.info("Astro AI shutdown — clients closed")


app = FastAPI(title="Astro AI Palm and Birth Chart Reader", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLogMiddleware)

app.include_router(health_router)
app.include_router(reading_router)
