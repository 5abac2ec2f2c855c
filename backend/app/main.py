"""Survivor Exchange API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ExchangeError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager; the default
      catalogue is seeded when empty and seed_catalogue is set
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app.infrastructure.database as database
from app.api.error_handlers import register_error_handlers
from app.api.routes import health, survivors, trade_items, trades
from app.config import get_settings
from app.db.seed import seed_trade_items
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    if settings.seed_catalogue:
        async with database.db_manager.session() as db:
            await seed_trade_items(db)
    logger.info("Survivor Exchange API started")
    yield
    logger.info("Survivor Exchange API shutting down")
    await database.db_manager.dispose()


app = FastAPI(
    title="Survivor Exchange API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(survivors.router)
app.include_router(trades.router)
app.include_router(trade_items.router)

register_error_handlers(app)
