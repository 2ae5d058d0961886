"""Wardrobe API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map WardrobeError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Both stores are opened on startup and disposed on shutdown via the lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store handles live on app.state; requests reach them through get_stores,
      so tests swap them with dependency_overrides
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wardrobe_api.api.error_handlers import register_error_handlers
from wardrobe_api.api.routes import (
    activity_logs, billing, dresses, health, onboarding, outfits, payments,
    taxonomy, users, wardrobes,
)
from wardrobe_api.config import get_settings
from wardrobe_api.db.base import DocumentBase
from wardrobe_api.infrastructure.database import init_stores
from wardrobe_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.stores = init_stores(settings)
    # Collections are created on demand; the relational schema is owned by Alembic
    await app.state.stores.documents.create_all(DocumentBase.metadata)
    logger.info("Wardrobe API started")
    yield
    logger.info("Wardrobe API shutting down")
    await app.state.stores.dispose()


app = FastAPI(title="Wardrobe API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(onboarding.router)
app.include_router(wardrobes.router)
app.include_router(dresses.router)
app.include_router(outfits.router)
app.include_router(activity_logs.router)
app.include_router(billing.products)
app.include_router(billing.plans)
app.include_router(billing.features)
app.include_router(billing.subscriptions)
app.include_router(payments.payments)
app.include_router(payments.credit_transactions)
app.include_router(taxonomy.categories)
app.include_router(taxonomy.colour_families)
app.include_router(taxonomy.occasions)

register_error_handlers(app)
