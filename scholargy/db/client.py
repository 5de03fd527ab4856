"""
Supabase client factory for the backing store.

The next-steps flow has no user session, so the backend reads profiles,
match snapshots and scholarships with a server-side key. The client is
built lazily once per process and reused across requests.
"""

import logging
from typing import Optional

from scholargy.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)

# Initialize Supabase client (lazy initialization)
_supabase_client: Optional[Client] = None


def get_supabase_client() -> Optional[Client]:
    """
    Return the process-wide Supabase client.

    Returns:
        A Supabase client, or None when SUPABASE_URL / SUPABASE_KEY are not
        configured or the client could not be created. Callers treat None as
        "database service unavailable".
    """
    global _supabase_client

    if _supabase_client is not None:
        return _supabase_client

    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        logger.warning(
            "SUPABASE_URL or SUPABASE_KEY not configured. "
            "Dashboard data will be unavailable."
        )
        return None

    try:
        _supabase_client = create_client(
            supabase_url=settings.SUPABASE_URL,
            supabase_key=settings.SUPABASE_KEY
        )
        logger.info("Supabase client initialized successfully")
        return _supabase_client
    except Exception as e:
        logger.error(f"Failed to initialize Supabase client: {e}")
        return None
