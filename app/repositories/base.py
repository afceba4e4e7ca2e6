"""
Base repository class with common CRUD operations over a Supabase table.
Provides generic table operations that can be extended by specific repositories.
"""

from supabase import AsyncClient
from typing import Optional, List, Dict, Any, Union
import logging

from app.utils.exceptions import RepositoryError

logger = logging.getLogger(__name__)

RecordId = Union[int, str]


class BaseRepository:
    """
    Base repository class providing common CRUD operations.

    Every client failure is re-raised as RepositoryError so that services
    only ever deal with one database error type.
    """

    table_name: str = ""

    def __init__(self, client: AsyncClient, table_name: Optional[str] = None):
        """
        Initialize repository with a Supabase client.

        Args:
            client: Async Supabase client
            table_name: Table to operate on (defaults to the class attribute)
        """
        self.client = client
        self.table_name = table_name or self.table_name

    def _table(self):
        return self.client.table(self.table_name)

    async def list_all(self, columns: str = "*") -> List[Dict[str, Any]]:
        """
        Get every row of the table.

        Returns:
            List of row dictionaries (empty when the table is empty)
        """
        try:
            response = await self._table().select(columns).execute()
        except Exception as e:
            logger.error(f"Failed to list {self.table_name}: {e}")
            raise RepositoryError(f"Failed to list {self.table_name}", str(e)) from e
        return response.data or []

    async def get_by_id(self, id: RecordId, columns: str = "*") -> Optional[Dict[str, Any]]:
        """
        Get a row by its ID.

        Args:
            id: Primary key of the row
            columns: Column list to select

        Returns:
            Row dictionary if found, None otherwise
        """
        try:
            response = await self._table().select(columns).eq("id", id).limit(1).execute()
        except Exception as e:
            logger.error(f"Failed to get {self.table_name} {id}: {e}")
            raise RepositoryError(f"Failed to read {self.table_name}", str(e)) from e
        rows = response.data or []
        return rows[0] if rows else None

    async def exists(self, id: RecordId) -> bool:
        """Check whether a row with the given ID exists."""
        return await self.get_by_id(id, columns="id") is not None

    async def create(self, obj_in: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new row.

        Args:
            obj_in: Column values for the new row

        Returns:
            The inserted row as returned by the store
        """
        try:
            response = await self._table().insert(obj_in).execute()
        except Exception as e:
            logger.error(f"Failed to create {self.table_name} row: {e}")
            raise RepositoryError(f"Failed to create {self.table_name} row", str(e)) from e
        rows = response.data or []
        if not rows:
            raise RepositoryError(f"Failed to create {self.table_name} row", "Insert returned no rows")
        logger.debug(f"Created {self.table_name} row with id: {rows[0].get('id')}")
        return rows[0]

    async def update(self, id: RecordId, obj_in: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Apply a partial update to a row.

        Args:
            id: Primary key of the row
            obj_in: Columns to change; other columns are left untouched

        Returns:
            Updated row, or None if no row matched
        """
        try:
            response = await self._table().update(obj_in).eq("id", id).execute()
        except Exception as e:
            logger.error(f"Failed to update {self.table_name} {id}: {e}")
            raise RepositoryError(f"Failed to update {self.table_name} row", str(e)) from e
        rows = response.data or []
        return rows[0] if rows else None

    async def delete(self, id: RecordId) -> None:
        """Delete a row by its ID."""
        try:
            await self._table().delete().eq("id", id).execute()
        except Exception as e:
            logger.error(f"Failed to delete {self.table_name} {id}: {e}")
            raise RepositoryError(f"Failed to delete {self.table_name} row", str(e)) from e
        logger.debug(f"Deleted {self.table_name} row with id: {id}")
