"""CourtHub API application."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from courthub.core.config import settings
from courthub.core.database import database
from courthub.core.errors import register_error_handlers
from courthub.routes import announcements, auth, bookings, coupons, courts, payments, users

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    if settings.database_create_tables:
        try:
            await database.create_all()
            logger.info("Database ready")
        except (SQLAlchemyError, OSError):
            # Keep serving; requests will fail individually until the database is reachable
            logger.exception("Database unavailable at startup")
    yield
    await database.dispose()


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    lifespan=lifespan,
)

# CORS - permissive in dev, only the client app in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [settings.client_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Mount routes
app.include_router(auth.router)
app.include_router(courts.router)
app.include_router(bookings.router)
app.include_router(payments.router)
app.include_router(users.router)
app.include_router(coupons.router)
app.include_router(announcements.router)


@app.get("/health")
async def health():
    return {"status": "ok", "app": settings.app_name}


def run() -> None:
    uvicorn.run("courthub.main:app", host=settings.host, port=settings.port)
