"""
Database client factory for Supabase.

The backend always talks to Supabase with the service role (bypassing RLS);
authorization is enforced by the session cookies and the access gate.
"""

from typing import Optional
from supabase import create_client, Client

from .config import Settings, get_settings
from .exceptions import DatabaseNotConfiguredError

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client(settings: Optional[Settings] = None) -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Args:
        settings: Optional explicit settings; defaults to the cached ones

    Returns:
        Supabase client configured with service role key

    Raises:
        DatabaseNotConfiguredError: If URL or service role key is missing
    """
    global _service_client

    if _service_client is None:
        settings = settings or get_settings()
        if not settings.database_configured:
            raise DatabaseNotConfiguredError()
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
