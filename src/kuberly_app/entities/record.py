"""Record domain entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RecordEntity:
    """Domain entity for one row of the ``test_data`` table.

    Attributes:
        id: Generated primary key
        name: Required record name
        data: Optional free-form payload
        created_at: Timestamp defaulted by the database on insert
    """

    id: int
    name: str
    data: str | None
    created_at: datetime | None = None
