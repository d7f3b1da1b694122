"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.controller import manufacturer_router, product_router
from src.api.error_handlers import register_error_handlers
from src.api.graphql import create_graphql_router
from src.clients import MongoDBClient
from src.config import AppConfig, get_config
from src.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[MongoDBClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application configuration. Loaded with get_config() on
            startup when omitted.
        store: Store client to use. When omitted, a MongoDBClient is built
            from the configuration, connected on startup and closed on
            shutdown. An injected store is used as is and never closed here.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.config is None:
            app.state.config = get_config()
        configure_logging(app.state.config.logging)

        owned_store: Optional[MongoDBClient] = None
        if app.state.store is None:
            mongodb = app.state.config.mongodb
            owned_store = MongoDBClient(
                uri=mongodb.uri,
                database_name=mongodb.database_name,
                server_selection_timeout_ms=mongodb.server_selection_timeout_ms,
            )
            await owned_store.connect()
            app.state.store = owned_store

        try:
            yield
        finally:
            if owned_store is not None:
                await owned_store.close()
                app.state.store = None
                logger.info("MongoDB connection closed")

    app = FastAPI(
        title="Inventory Management API",
        description="REST and GraphQL API for products, manufacturers and stock reports",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins if config else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(product_router, prefix="/api")
    app.include_router(manufacturer_router, prefix="/api")
    app.include_router(create_graphql_router(), prefix="/graphql")

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
