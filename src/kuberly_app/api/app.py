from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from kuberly_app.api.dependencies import (
    CacheHandlerDep,
    DataHandlerDep,
    HealthHandlerDep,
    build_lifespan,
)
from kuberly_app.config import Settings, get_settings
from kuberly_app.dto import (
    CacheValueResponse,
    CreateRecordRequest,
    HealthCheckResponse,
    RecordItem,
    SetCacheRequest,
    StatusResponse,
)
from kuberly_app.protocols import CacheStore, RecordStore


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Summarize pydantic errors as a single client-facing message."""
    parts = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return "Invalid JSON"
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400 rather than FastAPI's default 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _describe_validation_error(exc)},
    )


def create_app(
    settings: Settings | None = None,
    store: RecordStore | None = None,
    cache: CacheStore | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings. If None, loaded from the environment.
        store: Record store to use instead of PostgreSQL.
        cache: Cache store to use instead of Redis.

    Returns:
        The configured application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="KubeRLy Test App",
        description="Demo service with PostgreSQL storage and a Redis cache-aside layer",
        version=settings.app_version,
        lifespan=build_lifespan(settings, store=store, cache=cache),
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]

    @app.get("/", response_class=PlainTextResponse)
    def root(handler: HealthHandlerDep) -> str:
        """Plain-text listing of the available endpoints."""
        return handler.root()

    @app.get("/health", response_model=HealthCheckResponse)
    def health(handler: HealthHandlerDep) -> HealthCheckResponse:
        """Health check covering PostgreSQL and Redis."""
        return handler.health_check()

    @app.get("/api/test", response_model=list[RecordItem])
    def list_test_data(handler: DataHandlerDep) -> list[RecordItem]:
        """All records straight from the database."""
        return handler.list_records_uncached()

    @app.get("/api/data")
    def list_data(handler: DataHandlerDep) -> Response:
        """All records through the cache; see the X-Cache header."""
        return handler.list_records()

    @app.post("/api/data", response_model=StatusResponse, status_code=status.HTTP_201_CREATED)
    def create_data(request: CreateRecordRequest, handler: DataHandlerDep) -> StatusResponse:
        """Insert a record and invalidate the cached listing."""
        return handler.create_record(request)

    @app.get("/api/cache", response_model=CacheValueResponse)
    def get_cache_value(handler: CacheHandlerDep, key: str | None = None) -> CacheValueResponse:
        """Read a value from Redis."""
        return handler.get_value(key)

    @app.post("/api/cache", response_model=StatusResponse, status_code=status.HTTP_201_CREATED)
    def set_cache_value(request: SetCacheRequest, handler: CacheHandlerDep) -> StatusResponse:
        """Store a value in Redis (ttl 0 means 300 seconds)."""
        return handler.set_value(request)

    return app


app = create_app()
