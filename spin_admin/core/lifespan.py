"""Application lifespan: startup and shutdown.

Wiring only: logging, Firebase clients, the dashboard session registry,
and telemetry. Components receive the Firebase clients from app.state
through the dependencies in spin_admin.api.v1.dependencies.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from spin_admin.api.websocket import FeedSessionRegistry
from spin_admin.core.config import get_settings
from spin_admin.infrastructure.firebase import init_firebase
from spin_admin.shared.telemetry import (
    Telemetry,
    get_telemetry,
    set_telemetry,
    setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Firebase, session registry, telemetry.
    Shutdown order: live feed sessions, Firebase HTTP pool, telemetry.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.firebase = init_firebase(settings)
    app.state.feed_sessions = FeedSessionRegistry()

    if settings.telemetry_enabled:
        telemetry = Telemetry.from_settings(settings)
        if telemetry.start(app):
            set_telemetry(telemetry)
    else:
        logger.info("Telemetry disabled")

    yield

    # ---- Shutdown ----
    closed = await app.state.feed_sessions.close_all()
    if closed:
        logger.info("Closed %d live feed sessions", closed)

    if getattr(app.state, "firebase", None) is not None:
        await app.state.firebase.aclose()
        app.state.firebase = None

    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
