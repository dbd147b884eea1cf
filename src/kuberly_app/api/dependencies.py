"""Dependency injection configuration for the FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Store and cache handles are created once per process in the lifespan
    - Services and handlers receive them through their constructors
    - Dependency functions retrieve handlers from request.app.state
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request

from kuberly_app.config import Settings
from kuberly_app.handlers import CacheHandler, DataHandler, HealthHandler
from kuberly_app.protocols import CacheStore, RecordStore
from kuberly_app.repositories import PostgresRecordRepository, RedisCacheRepository
from kuberly_app.services import CacheService, DataService, HealthService
from kuberly_app.utils.logging import get_logger

logger = get_logger(__name__)


def _from_state(request: Request, name: str) -> Any:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized. Check lifespan setup.")
    return value


def get_data_handler(request: Request) -> DataHandler:
    """Dependency injection for DataHandler from app.state."""
    return _from_state(request, "data_handler")


def get_cache_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state."""
    return _from_state(request, "cache_handler")


def get_health_handler(request: Request) -> HealthHandler:
    """Dependency injection for HealthHandler from app.state."""
    return _from_state(request, "health_handler")


def _connect_store(settings: Settings) -> PostgresRecordRepository:
    store = PostgresRecordRepository.create(settings)
    try:
        store.open()
    except Exception:
        store.close()
        raise
    logger.info(
        "Connected to PostgreSQL at %s:%s/%s",
        settings.postgres_host,
        settings.postgres_port,
        settings.postgres_db,
    )
    return store


def _connect_cache(settings: Settings) -> RedisCacheRepository:
    cache = RedisCacheRepository.create(settings)
    try:
        cache.ping()
    except Exception:
        cache.close()
        raise
    logger.info("Connected to Redis at %s:%s", settings.redis_host, settings.redis_port)
    return cache


def build_lifespan(
    settings: Settings,
    store: RecordStore | None = None,
    cache: CacheStore | None = None,
) -> Callable[[FastAPI], Any]:
    """Create the lifespan context manager for the app.

    Store and cache default to PostgreSQL and Redis built from ``settings``.
    Either one failing to connect aborts startup. Handles passed in by the
    caller are used as-is and are not closed on shutdown.

    Args:
        settings: Application settings
        store: Optional pre-built record store
        cache: Optional pre-built cache store

    Returns:
        A lifespan function for ``FastAPI(lifespan=...)``
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting KubeRLy Test App %s", settings.app_version)

        owned: list[Any] = []
        record_store = store
        cache_store = cache
        try:
            if record_store is None:
                record_store = _connect_store(settings)
                owned.append(record_store)
            if cache_store is None:
                cache_store = _connect_cache(settings)
                owned.append(cache_store)
            record_store.ensure_schema()
        except Exception:
            logger.error("Startup failed; dependencies unavailable")
            for resource in owned:
                resource.close()
            raise

        data_service = DataService(store=record_store, cache=cache_store)
        cache_service = CacheService(cache=cache_store)
        health_service = HealthService(
            store=record_store,
            cache=cache_store,
            version=settings.app_version,
        )

        app.state.data_handler = DataHandler(data_service=data_service)
        app.state.cache_handler = CacheHandler(cache_service=cache_service)
        app.state.health_handler = HealthHandler(health_service=health_service)

        yield

        del app.state.health_handler
        del app.state.cache_handler
        del app.state.data_handler
        for resource in owned:
            resource.close()
        logger.info("KubeRLy Test App shut down")

    return lifespan


# Type aliases for cleaner dependency injection
DataHandlerDep = Annotated[DataHandler, Depends(get_data_handler)]
CacheHandlerDep = Annotated[CacheHandler, Depends(get_cache_handler)]
HealthHandlerDep = Annotated[HealthHandler, Depends(get_health_handler)]
