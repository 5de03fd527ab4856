"""
Database access layer for the Scholargy backend.

Includes:
- Supabase client initialization
- BackingStore protocol describing the read shapes the services rely on
- SupabaseBackingStore, the production implementation
"""

from .client import get_supabase_client
from .store import BackingStore, SupabaseBackingStore

__all__ = ["get_supabase_client", "BackingStore", "SupabaseBackingStore"]
