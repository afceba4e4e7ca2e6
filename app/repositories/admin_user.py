"""
Admin user repository for the `admin_users` flag table.
Maps auth provider identities to their admin flag.
"""

from typing import Optional, Dict, Any
import logging

from app.repositories.base import BaseRepository
from app.utils.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class AdminUserRepository(BaseRepository):
    """
    Repository for admin-flag rows.
    Each auth identity has at most one row; no row means "not admin".
    """

    table_name = "admin_users"

    async def get_by_auth_user_id(self, auth_user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the admin-flag row for an identity.

        Args:
            auth_user_id: Identity ID issued by the auth provider

        Returns:
            Row with auth_user_id and is_admin, or None if absent

        Raises:
            RepositoryError: If the lookup itself fails
        """
        try:
            response = await (
                self._table()
                .select("auth_user_id, is_admin")
                .eq("auth_user_id", auth_user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Admin lookup failed for {auth_user_id}: {e}")
            raise RepositoryError("Failed to read admin_users", str(e)) from e
        rows = response.data or []
        return rows[0] if rows else None

    async def ensure_admin(self, auth_user_id: str) -> Dict[str, Any]:
        """
        Upsert an admin-flag row with is_admin set to true.

        Args:
            auth_user_id: Identity to promote

        Returns:
            The upserted row
        """
        payload = {"auth_user_id": auth_user_id, "is_admin": True}
        try:
            response = await self._table().upsert(payload, on_conflict="auth_user_id").execute()
        except Exception as e:
            raise RepositoryError("Failed to upsert admin_users", str(e)) from e
        rows = response.data or []
        return rows[0] if rows else payload
