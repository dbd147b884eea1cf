"""Record storage protocol.

Defines the interface for the relational store holding ``test_data`` rows.

Implementations can include:
- PostgreSQL through a psycopg connection pool (default)
- An in-memory list (tests)
"""

from typing import Protocol, runtime_checkable

from kuberly_app.entities import RecordEntity


@runtime_checkable
class RecordStore(Protocol):
    """Protocol for record storage backends."""

    def ensure_schema(self) -> None:
        """Create the records table if it does not exist."""
        ...

    def insert(self, name: str, data: str | None) -> int:
        """Insert a record.

        Args:
            name: Record name
            data: Optional payload

        Returns:
            The generated record id
        """
        ...

    def list_all(self) -> list[RecordEntity]:
        """Return every record ordered by id ascending."""
        ...

    def delete_all(self) -> int:
        """Delete every record, returning the number of rows removed."""
        ...

    def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
