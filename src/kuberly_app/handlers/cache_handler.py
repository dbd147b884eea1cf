"""HTTP handlers for the cache passthrough."""

from fastapi import HTTPException, status

from kuberly_app.dto import CacheValueResponse, SetCacheRequest, StatusResponse
from kuberly_app.services import CacheService


class CacheHandler:
    """HTTP handlers for ``/api/cache``."""

    def __init__(self, cache_service: CacheService) -> None:
        self._cache = cache_service

    def get_value(self, key: str | None) -> CacheValueResponse:
        """Handle GET /api/cache?key=K requests.

        Raises:
            HTTPException: 400 without a key, 404 for an unknown key,
                500 if the cache cannot be read
        """
        if not key:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing key parameter",
            )

        try:
            value = self._cache.get(key)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Cache get error: {e}",
            ) from e

        if value is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Key not found",
            )

        return CacheValueResponse(key=key, value=value)

    def set_value(self, request: SetCacheRequest) -> StatusResponse:
        """Handle POST /api/cache requests.

        Raises:
            HTTPException: 500 if the cache cannot be written
        """
        try:
            self._cache.set(request.key, request.value, request.ttl)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Cache set error: {e}",
            ) from e

        return StatusResponse(status="cached")
