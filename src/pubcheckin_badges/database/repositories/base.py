"""Base repository class for the pub check-in badge engine."""

from abc import ABC
from abc import abstractmethod
from typing import Any
from typing import Generic
from typing import TypeVar

from asyncpg import Record

from pubcheckin_badges.database.connection import get_db_connection

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Base repository class with common database operations."""

    def __init__(self, table_name: str, order_by: str = "created_at DESC"):
        self.table_name = table_name
        self.order_by = order_by

    @abstractmethod
    def _record_to_model(self, record: Record) -> T:
        """Convert database record to model instance."""

    async def get_by_id(self, record_id: str) -> T | None:
        """Get a record by id."""
        query = f"SELECT * FROM {self.table_name} WHERE id = $1"

        async with get_db_connection() as connection:
            record = await connection.fetchrow(query, record_id)
            return self._record_to_model(record) if record else None

    async def get_all(self, limit: int = 100, offset: int = 0) -> list[T]:
        """Get all records with pagination."""
        query = f"""
            SELECT * FROM {self.table_name}
            ORDER BY {self.order_by}
            LIMIT $1 OFFSET $2
        """

        async with get_db_connection() as connection:
            records = await connection.fetch(query, limit, offset)
            return [self._record_to_model(record) for record in records]

    async def delete_by_id(self, record_id: str) -> bool:
        """Delete a record by id."""
        query = f"DELETE FROM {self.table_name} WHERE id = $1"

        async with get_db_connection() as connection:
            result = await connection.execute(query, record_id)
            return result == "DELETE 1"

    async def create_from_dict(self, data: dict[str, Any]) -> T:
        """Create a new record."""
        columns = list(data.keys())
        placeholders = [f"${i + 1}" for i in range(len(columns))]
        values = list(data.values())

        query = f"""
            INSERT INTO {self.table_name} ({", ".join(columns)})
            VALUES ({", ".join(placeholders)})
            RETURNING *
        """

        async with get_db_connection() as connection:
            record = await connection.fetchrow(query, *values)
            if record is None:
                raise ValueError(f"Failed to create record in {self.table_name}")
            return self._record_to_model(record)

    async def update_from_dict(self, record_id: str, data: dict[str, Any]) -> T | None:
        """Update a record by id."""
        if not data:
            return await self.get_by_id(record_id)

        set_clauses = [f"{column} = ${i + 1}" for i, column in enumerate(data)]
        values = [*data.values(), record_id]

        query = f"""
            UPDATE {self.table_name}
            SET {", ".join(set_clauses)}, updated_at = NOW()
            WHERE id = ${len(values)}
            RETURNING *
        """

        async with get_db_connection() as connection:
            record = await connection.fetchrow(query, *values)
            return self._record_to_model(record) if record else None

    async def find_by(self, **kwargs) -> list[T]:
        """Find records by field values."""
        if not kwargs:
            return await self.get_all()

        conditions = []
        values = []
        for i, (field, value) in enumerate(kwargs.items()):
            conditions.append(f"{field} = ${i + 1}")
            values.append(value)

        query = f"""
            SELECT * FROM {self.table_name}
            WHERE {" AND ".join(conditions)}
            ORDER BY {self.order_by}
        """

        async with get_db_connection() as connection:
            records = await connection.fetch(query, *values)
            return [self._record_to_model(record) for record in records]

    async def find_one_by(self, **kwargs) -> T | None:
        """Find a single record by field values."""
        results = await self.find_by(**kwargs)
        return results[0] if results else None
