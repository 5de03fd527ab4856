"""
Profile aggregator for the next-steps flow.

Resolves the three generator inputs (student profile, college matches,
scholarships) from caller data or the backing store. Each input is
resolved independently:

- studentProfile: caller value, else latest profile for userId, else {}
- collegeMatches: caller value, else latest match snapshot for userId, else []
- scholarships:   caller value, else top 5 scholarships by amount

Caller values count as supplied whenever they are not None ({} and [] are
used as-is). The aggregator never raises: store gaps and store errors fall
back to the empty default.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from scholargy.db.store import BackingStore

logger = logging.getLogger(__name__)

DEFAULT_SCHOLARSHIP_CONTEXT_SIZE = 5

T = TypeVar("T")


@dataclass
class NextStepsInputs:
    """Resolved generator inputs for a single request."""
    student_profile: Dict[str, Any] = field(default_factory=dict)
    college_matches: List[Dict[str, Any]] = field(default_factory=list)
    scholarships: List[Dict[str, Any]] = field(default_factory=list)


async def _read(description: str, fn: Callable[[], T], default: T) -> T:
    """Run a blocking store read off the event loop; failures resolve to ``default``."""
    try:
        return await asyncio.to_thread(fn)
    except Exception as e:
        logger.warning(f"Failed to fetch {description}, using default: {e}")
        return default


def _fetch_profile(store: BackingStore, user_id: str) -> Dict[str, Any]:
    return store.get_latest_profile(user_id) or {}


def _fetch_matches(store: BackingStore, user_id: str) -> List[Dict[str, Any]]:
    snapshot = store.get_latest_match_snapshot(user_id)
    matches = snapshot.get("matches") if snapshot else None
    return list(matches) if isinstance(matches, list) else []


def _fetch_scholarships(store: BackingStore, limit: int) -> List[Dict[str, Any]]:
    return [
        {
            "title": row.get("title"),
            "amount": row.get("amount") or 0,
            "deadline": row.get("deadline"),
        }
        for row in store.get_top_scholarships(limit)
    ]


async def _resolved(value: T) -> T:
    return value


async def resolve_next_steps_inputs(
    store: Optional[BackingStore],
    student_profile: Optional[Dict[str, Any]] = None,
    college_matches: Optional[List[Dict[str, Any]]] = None,
    scholarships: Optional[List[Dict[str, Any]]] = None,
    user_id: Optional[str] = None,
    scholarship_limit: int = DEFAULT_SCHOLARSHIP_CONTEXT_SIZE,
) -> NextStepsInputs:
    """
    Resolve the generator inputs, fetching whatever the caller did not supply.

    Store reads are independent and run concurrently.

    Args:
        store: Backing store, or None when the database is not configured
        student_profile: Caller-supplied profile (optional)
        college_matches: Caller-supplied matches (optional)
        scholarships: Caller-supplied scholarships (optional)
        user_id: Identifier used to look up the profile and match snapshot
        scholarship_limit: Number of scholarships fetched for context

    Returns:
        NextStepsInputs with every field populated (possibly empty)
    """
    if store is None and (student_profile is None or college_matches is None or scholarships is None):
        logger.warning("Backing store unavailable; missing next-steps inputs default to empty")

    profile_task: Awaitable[Dict[str, Any]]
    if student_profile is not None:
        profile_task = _resolved(student_profile)
    elif user_id and store is not None:
        profile_task = _read("student profile", lambda: _fetch_profile(store, user_id), {})
    else:
        profile_task = _resolved({})

    matches_task: Awaitable[List[Dict[str, Any]]]
    if college_matches is not None:
        matches_task = _resolved(college_matches)
    elif user_id and store is not None:
        matches_task = _read("college match snapshot", lambda: _fetch_matches(store, user_id), [])
    else:
        matches_task = _resolved([])

    scholarships_task: Awaitable[List[Dict[str, Any]]]
    if scholarships is not None:
        scholarships_task = _resolved(scholarships)
    elif store is not None:
        scholarships_task = _read(
            "top scholarships", lambda: _fetch_scholarships(store, scholarship_limit), []
        )
    else:
        scholarships_task = _resolved([])

    profile, matches, scholarship_list = await asyncio.gather(
        profile_task, matches_task, scholarships_task
    )

    logger.info(
        f"Resolved next-steps inputs: profile_fields={len(profile)}, "
        f"matches={len(matches)}, scholarships={len(scholarship_list)}"
    )

    return NextStepsInputs(
        student_profile=profile,
        college_matches=matches,
        scholarships=scholarship_list,
    )
