import logging
from typing import Optional
from supabase import create_client, Client
from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

_client: Optional[Client] = None

def create_supabase_client(settings: Settings) -> Client:
    """
    Create and validate Supabase client connection.

    Returns:
        Client: Configured Supabase client

    Raises:
        RuntimeError: If connection validation fails
    """
    try:
        # Use service role key for database operations to bypass RLS issues
        supabase: Client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)

        # Validate connection by attempting a simple query
        # This will raise an exception if the connection is invalid
        supabase.table('assignments').select('id').limit(1).execute()
        logger.info("Supabase connection validated successfully")

        return supabase

    except Exception as e:
        error_msg = f"Failed to connect to Supabase: {str(e)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

def get_supabase() -> Client:
    """Get the shared Supabase client, connecting on first use"""
    global _client
    if _client is None:
        _client = create_supabase_client(get_settings())
    return _client
