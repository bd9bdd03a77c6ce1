"""
Superstore Analytics — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from superstore.config import INBOX_FOLDER
from superstore.data.store import DataStore
from superstore.errors import SuperstoreError
from superstore.api.dependencies import set_store
from superstore.api.router_meta import router as meta_router
from superstore.api.router_queries import router as queries_router

logger = logging.getLogger(__name__)


def _startup_store(inbox: Path) -> None:
    """Load and clean the inputs; a failure leaves the store unloaded with its error."""
    store = DataStore()
    try:
        store.load(inbox)
    except SuperstoreError as exc:
        logger.error("Data load failed: %s", exc)
        set_store(store, load_error=str(exc))
        return
    set_store(store)
    logger.info("Superstore Analytics ready — %s order lines, %s orders",
                f"{store.row_count():,}", f"{store.order_count():,}")


def create_app(inbox: Path = INBOX_FOLDER) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load all data at startup."""
        logger.info("INBOX_FOLDER = %s (exists = %s)", inbox, inbox.exists())
        _startup_store(inbox)
        yield

    app = FastAPI(
        title="Superstore Analytics API",
        description="Retail sales analytics — query catalog over orders, people and returns",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(queries_router)
    return app


app = create_app()
