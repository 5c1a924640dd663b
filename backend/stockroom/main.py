import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockroom.api import activity_log, auth, categories, inventory, reports, stats, users
from stockroom.core.config import settings
from stockroom.core.errors import register_error_handlers
from stockroom.repositories.base import DataStore

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


def build_store() -> DataStore:
    """SQL store when DATABASE_URL is configured, in-memory demo store otherwise."""
    if settings.DATABASE_URL:
        from stockroom.db.base import Database
        from stockroom.repositories.sql import SqlDataStore

        return SqlDataStore(
            Database(
                settings.DATABASE_URL,
                echo=settings.DATABASE_ECHO,
                pool_size=settings.DATABASE_POOL_SIZE,
            )
        )
    from stockroom.repositories.memory import MemoryDataStore

    return MemoryDataStore()


def create_app(store: DataStore | None = None) -> FastAPI:
    store = store or build_store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.connect()
        logger.info("%s started (storage: %s)", settings.PROJECT_NAME, store.mode)
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} API",
        description="Inventory management: items, categories, activity log, reports and staff accounts",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Routers
    for module in (auth, inventory, categories, activity_log, stats, reports, users):
        app.include_router(module.router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "version": "0.1.0", "storage": store.mode}

    return app


app = create_app()
