import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_api.application.use_cases.activity import purge_expired_activities
from portfolio_api.application.use_cases.analytics import SessionTracker
from portfolio_api.config import get_settings
from portfolio_api.infrastructure.database import SessionLocal, engine, initialize_database
from portfolio_api.infrastructure.retention import ActivityRetentionSweeper
from portfolio_api.interfaces.api.exception_handlers import register_exception_handlers
from portfolio_api.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def _purge_expired_activities() -> int:
    session = SessionLocal()
    try:
        return purge_expired_activities(session)
    finally:
        session.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the database and background services; release them on shutdown."""

    settings = get_settings()
    initialize_database()
    app.state.session_tracker = SessionTracker(
        active_window=timedelta(seconds=settings.analytics_active_window_seconds)
    )
    sweeper = ActivityRetentionSweeper(
        _purge_expired_activities,
        interval=settings.activity_sweep_interval_seconds,
    )
    sweeper.start()
    logger.info("Portfolio API started")
    try:
        yield
    finally:
        await sweeper.stop()
        engine.dispose()
        logger.info("Portfolio API stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="Portfolio API", lifespan=lifespan)

    # Allow the admin dashboard and public site configured in CORS_ORIGINS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()
