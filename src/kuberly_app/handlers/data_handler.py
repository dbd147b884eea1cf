"""HTTP handlers for record operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, headers and error responses.
"""

from fastapi import HTTPException, Response, status

from kuberly_app.dto import CreateRecordRequest, RecordItem, StatusResponse
from kuberly_app.services import DataService

CACHE_HEADER = "X-Cache"


class DataHandler:
    """HTTP handlers for ``/api/data`` and ``/api/test``.

    Example:
        ```python
        handler = DataHandler(data_service=DataService(store=store, cache=cache))

        @app.get("/api/data")
        def list_data():
            return handler.list_records()
        ```
    """

    def __init__(self, data_service: DataService) -> None:
        """Initialize the data handler.

        Args:
            data_service: The record service for business logic (required).
        """
        self._data = data_service

    def create_record(self, request: CreateRecordRequest) -> StatusResponse:
        """Handle POST /api/data requests.

        Raises:
            HTTPException: 500 if the insert fails
        """
        try:
            self._data.create_record(name=request.name, data=request.data)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Insert error: {e}",
            ) from e

        return StatusResponse(status="created")

    def list_records(self) -> Response:
        """Handle GET /api/data requests.

        The body is sent as-is so a HIT returns exactly the bytes cached on
        the preceding MISS.

        Raises:
            HTTPException: 500 if the store cannot be read
        """
        try:
            snapshot = self._data.list_records()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Database error: {e}",
            ) from e

        return Response(
            content=snapshot.payload,
            media_type="application/json",
            headers={CACHE_HEADER: "HIT" if snapshot.cache_hit else "MISS"},
        )

    def list_records_uncached(self) -> list[RecordItem]:
        """Handle GET /api/test requests.

        Raises:
            HTTPException: 500 if the store cannot be read
        """
        try:
            records = self._data.list_records_uncached()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Database error: {e}",
            ) from e

        return [RecordItem.from_entity(record) for record in records]
