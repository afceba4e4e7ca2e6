"""
Supabase client construction and connectivity checks.
The clients are built once during application startup and handed to request
handlers through FastAPI dependencies.
"""

from supabase import AsyncClient, AsyncClientOptions, acreate_client
from app.config import Settings
import logging

logger = logging.getLogger(__name__)


async def create_supabase_client(settings: Settings) -> AsyncClient:
    """
    Create the service-role client used for table and storage access.

    The service role key bypasses Row Level Security, which is appropriate
    for server-side operations only.
    """
    client = await acreate_client(settings.supabase_url, settings.supabase_service_role_key)
    logger.info("Supabase client initialized")
    return client


async def create_auth_client(settings: Settings) -> AsyncClient:
    """
    Create a client dedicated to password sign-in.

    Signing in stores the user's session on the client that performed it;
    keeping sign-in on a separate client leaves the service-role client's
    credentials untouched.
    """
    options = AsyncClientOptions(auto_refresh_token=False, persist_session=False)
    return await acreate_client(settings.supabase_url, settings.supabase_service_role_key, options=options)


async def check_database_connection(client: AsyncClient) -> bool:
    """
    Test database connectivity.
    Returns True if a trivial query against the admin table succeeds, False otherwise.
    """
    try:
        await client.table("admin_users").select("auth_user_id").limit(1).execute()
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
