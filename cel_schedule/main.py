"""
CEL Schedule - Volunteer Scheduling Backend
FastAPI Application Entry Point
"""
import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cel_schedule.config import settings
from cel_schedule.database import create_tables, engine
from cel_schedule.routers import auth as auth_router
from cel_schedule.routers import auth_users as auth_users_router
from cel_schedule.routers import batch_import as batch_import_router
from cel_schedule.routers import departments as departments_router
from cel_schedule.routers import logs as logs_router
from cel_schedule.routers import volunteers as volunteers_router
from cel_schedule.services.import_session_store import import_session_store


def configure_logging():
    """Configure application logging."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    logger.info("Starting CEL Schedule application...")
    if settings.use_in_memory_backends:
        logger.info("Using in-memory backends")
    else:
        # Startup: Create database tables
        await create_tables()
        logger.info("Database tables created/verified")

    # Expired import sessions are swept in the background
    sweeper = asyncio.create_task(
        import_session_store.run_sweeper(
            timedelta(minutes=settings.import_session_sweep_minutes)
        )
    )
    yield
    # Shutdown: Clean up resources
    logger.info("Shutting down CEL Schedule application...")
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    await engine.dispose()


app = FastAPI(
    title="CEL Schedule",
    description="Volunteer and department management with spreadsheet batch import",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router.router, prefix="/api/auth", tags=["auth"])
app.include_router(auth_users_router.router, prefix="/api/auth-users", tags=["auth-users"])
app.include_router(volunteers_router.router, prefix="/api/volunteers", tags=["volunteers"])
app.include_router(departments_router.router, prefix="/api/departments", tags=["departments"])
app.include_router(logs_router.router, prefix="/api/logs", tags=["logs"])
app.include_router(batch_import_router.router, prefix="/api/batch-import", tags=["batch-import"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}
