"""PostgreSQL implementation of RecordStore.

Rows live in the ``test_data`` table; every statement is parameterized and
runs on a connection borrowed from a shared ``psycopg_pool.ConnectionPool``.
"""

import psycopg
from psycopg_pool import ConnectionPool

from kuberly_app.config import Settings, get_settings
from kuberly_app.entities import RecordEntity

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS test_data (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        data TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

INSERT_SQL = "INSERT INTO test_data (name, data) VALUES (%s, %s) RETURNING id"
SELECT_ALL_SQL = "SELECT id, name, data, created_at FROM test_data ORDER BY id"
DELETE_ALL_SQL = "DELETE FROM test_data"


class PostgresRecordRepository:
    """PostgreSQL-backed record store.

    Satisfies the RecordStore protocol. The pool is created closed; call
    ``open()`` once at startup, which waits for the first connection and
    raises if the database is unreachable.
    """

    def __init__(
        self,
        pool: ConnectionPool,
        connect_timeout: float = 5.0,
    ) -> None:
        """Initialize the repository.

        Args:
            pool: Connection pool shared by every request.
            connect_timeout: Seconds to wait for a pooled connection.
        """
        self._pool = pool
        self._timeout = connect_timeout

    @classmethod
    def create(cls, settings: Settings | None = None) -> "PostgresRecordRepository":
        """Factory method building the pool from settings.

        Args:
            settings: Connection settings. If None, uses the cached settings.

        Returns:
            Repository wrapping a not-yet-opened pool
        """
        settings = settings or get_settings()
        pool = ConnectionPool(
            conninfo=settings.postgres_dsn,
            min_size=1,
            max_size=10,
            open=False,
        )
        return cls(pool=pool, connect_timeout=settings.postgres_connect_timeout)

    def open(self, wait: bool = True) -> None:
        """Open the pool.

        Args:
            wait: Block until a first connection is available

        Raises:
            psycopg_pool.PoolTimeout: If waiting and no connection could be made in time
        """
        self._pool.open(wait=wait, timeout=self._timeout)

    def close(self) -> None:
        self._pool.close()

    def ensure_schema(self) -> None:
        with self._pool.connection(timeout=self._timeout) as conn:
            conn.execute(SCHEMA_SQL)

    def insert(self, name: str, data: str | None) -> int:
        with self._pool.connection(timeout=self._timeout) as conn:
            row = conn.execute(INSERT_SQL, (name, data)).fetchone()
        return row[0]

    def list_all(self) -> list[RecordEntity]:
        with self._pool.connection(timeout=self._timeout) as conn:
            rows = conn.execute(SELECT_ALL_SQL).fetchall()
        return [
            RecordEntity(id=row[0], name=row[1], data=row[2], created_at=row[3])
            for row in rows
        ]

    def delete_all(self) -> int:
        with self._pool.connection(timeout=self._timeout) as conn:
            cur = conn.execute(DELETE_ALL_SQL)
            return cur.rowcount

    def health_check(self) -> bool:
        """Check if PostgreSQL is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            with self._pool.connection(timeout=self._timeout) as conn:
                conn.execute("SELECT 1")
            return True
        except (psycopg.Error, OSError):
            return False
