"""
Backing store read shapes.

The recommendation core only needs a handful of reads from three logical
collections (user profiles, cached college-match snapshots, scholarships),
plus the IPEDS college table used by the dashboard fallback. ``BackingStore``
describes those reads; ``SupabaseBackingStore`` implements them over the
Supabase (PostgREST) client.

Tables:
- user_applications: one row per saved student profile (user_id, updated_at, ...)
- college_matches:   cached match snapshots (user_id, snapshot_at, matches jsonb)
- scholarships:      title, amount, deadline, description, min_gpa
- ipeds_colleges:    unitid, general_info jsonb, cost_and_aid jsonb, enrollment_total
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, cast

from supabase import Client

logger = logging.getLogger(__name__)


class BackingStore(Protocol):
    """Read-only view of the document store used by the dashboard."""

    def get_latest_profile(self, user_id: str) -> Optional[Dict[str, Any]]:  # pragma: no cover
        ...

    def get_latest_match_snapshot(self, user_id: str) -> Optional[Dict[str, Any]]:  # pragma: no cover
        ...

    def get_top_scholarships(self, limit: int) -> List[Dict[str, Any]]:  # pragma: no cover
        ...

    def list_scholarships(self, max_min_gpa: Optional[float] = None) -> List[Dict[str, Any]]:  # pragma: no cover
        ...

    def list_scholarships_due_between(self, start: datetime, end: datetime) -> List[Dict[str, Any]]:  # pragma: no cover
        ...

    def get_largest_colleges(self, limit: int) -> List[Dict[str, Any]]:  # pragma: no cover
        ...


def _first_row(data: Any) -> Optional[Dict[str, Any]]:
    if not data or len(data) == 0:
        return None
    return cast(Dict[str, Any], data[0])


class SupabaseBackingStore:
    """``BackingStore`` over a Supabase client."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_latest_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Most recently updated profile row for ``user_id``, or None."""
        logger.debug(f"Fetching latest profile for user {user_id}")
        result = (
            self.client.table("user_applications")
            .select("*")
            .eq("user_id", user_id)
            .order("updated_at", desc=True, nullsfirst=False)
            .limit(1)
            .execute()
        )
        return _first_row(result.data)

    def get_latest_match_snapshot(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Most recent cached college-match snapshot for ``user_id``, or None."""
        logger.debug(f"Fetching latest match snapshot for user {user_id}")
        result = (
            self.client.table("college_matches")
            .select("*")
            .eq("user_id", user_id)
            .order("snapshot_at", desc=True, nullsfirst=False)
            .limit(1)
            .execute()
        )
        return _first_row(result.data)

    def get_top_scholarships(self, limit: int) -> List[Dict[str, Any]]:
        """Top ``limit`` scholarships by amount, projected to title/amount/deadline."""
        result = (
            self.client.table("scholarships")
            .select("title,amount,deadline")
            .order("amount", desc=True, nullsfirst=False)
            .limit(limit)
            .execute()
        )
        return cast(List[Dict[str, Any]], result.data or [])

    def list_scholarships(self, max_min_gpa: Optional[float] = None) -> List[Dict[str, Any]]:
        """
        All scholarships, optionally restricted to those a student with GPA
        ``max_min_gpa`` is eligible for (min_gpa <= GPA, or no minimum).
        """
        query = self.client.table("scholarships").select("*")
        if max_min_gpa is not None:
            query = query.or_(f"min_gpa.lte.{max_min_gpa},min_gpa.is.null")
        result = query.execute()
        return cast(List[Dict[str, Any]], result.data or [])

    def list_scholarships_due_between(self, start: datetime, end: datetime) -> List[Dict[str, Any]]:
        """Scholarships with a deadline in [start, end], soonest first."""
        result = (
            self.client.table("scholarships")
            .select("*")
            .gte("deadline", start.isoformat())
            .lte("deadline", end.isoformat())
            .order("deadline")
            .execute()
        )
        return cast(List[Dict[str, Any]], result.data or [])

    def get_largest_colleges(self, limit: int) -> List[Dict[str, Any]]:
        """Largest ``limit`` IPEDS colleges by total enrollment."""
        result = (
            self.client.table("ipeds_colleges")
            .select("*")
            .order("enrollment_total", desc=True, nullsfirst=False)
            .limit(limit)
            .execute()
        )
        return cast(List[Dict[str, Any]], result.data or [])
