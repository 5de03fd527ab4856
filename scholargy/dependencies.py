"""
FastAPI dependencies for the dashboard routes.

The backing store and the next-steps generator are built once per process
from the lazily-initialized Supabase and Gemini clients. Tests replace them
through ``app.dependency_overrides``.
"""

import logging
from typing import Optional

from scholargy.config import settings
from scholargy.db.client import get_supabase_client
from scholargy.db.store import BackingStore, SupabaseBackingStore
from scholargy.services.next_steps_service import NextStepsGenerator
from scholargy.services.reasoning_client import get_reasoning_client

logger = logging.getLogger(__name__)

_generator: Optional[NextStepsGenerator] = None


def get_backing_store() -> Optional[BackingStore]:
    """Backing store, or None when the database is not configured."""
    client = get_supabase_client()
    if client is None:
        return None
    return SupabaseBackingStore(client)


def get_next_steps_generator() -> NextStepsGenerator:
    """Process-wide generator wired to the Gemini reasoning client."""
    global _generator

    if _generator is None or _generator.client is None:
        _generator = NextStepsGenerator(
            client=get_reasoning_client(),
            model=settings.NEXT_STEPS_MODEL,
            temperature=settings.NEXT_STEPS_TEMPERATURE,
            timeout_s=settings.NEXT_STEPS_TIMEOUT_S,
        )
        logger.debug("NextStepsGenerator created")
    return _generator
