"""
Dashboard read models.

Builds the top-matches, scholarship-stats and upcoming-deadlines views from
the backing store. Store errors propagate; the routes turn them into 500s.
"""

import logging
import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from scholargy.db.store import BackingStore
from scholargy.schemas.dashboard import (
    ScholarshipOpportunity,
    ScholarshipStatsResponse,
    TopMatch,
    UpcomingDeadline,
)

logger = logging.getLogger(__name__)

FALLBACK_COLLEGE_COUNT = 3


def placeholder_logo(name: Optional[str]) -> str:
    """Placeholder logo showing the first letter of the college name."""
    initial = (name or "")[:1] or "C"
    return f"https://placehold.co/80x80?text={quote(initial, safe='')}"


def parse_gpa(value: Any) -> Optional[float]:
    """Numeric GPA from a stored profile value, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        n = float(value)
    except (TypeError, ValueError):
        return None
    return n if math.isfinite(n) else None


def parse_deadline(value: Any) -> Optional[datetime]:
    """
    Parse a stored deadline (date, datetime or ISO string) as an aware UTC datetime.

    Date-only values are taken as midnight UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        try:
            dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Unparseable scholarship deadline: {value!r}")
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _match_to_card(m: Dict[str, Any]) -> TopMatch:
    return TopMatch(
        unitid=m.get("unitid"),
        name=m.get("name") or "Unknown",
        logo=m.get("logo") or placeholder_logo(m.get("name")),
        net_cost=m.get("netCost") or m.get("estimatedCost"),
        likelihood=m.get("likelihood") or m.get("category") or "target",
        details=m.get("details") or "",
    )


def _college_to_card(doc: Dict[str, Any]) -> TopMatch:
    general_info = doc.get("general_info") or {}
    cost_and_aid = doc.get("cost_and_aid") or {}
    name = general_info.get("name") or "Unknown"
    details = ""
    if general_info:
        details = f"{general_info.get('city')}, {general_info.get('state')}"
    return TopMatch(
        unitid=doc.get("unitid") or doc.get("id"),
        name=name,
        logo=doc.get("logo") or placeholder_logo(general_info.get("name")),
        net_cost=cost_and_aid.get("tuition_in_state"),
        likelihood="target",
        details=details,
    )


def get_top_matches(store: BackingStore, user_id: Optional[str] = None) -> List[TopMatch]:
    """
    College cards for the dashboard.

    Uses the user's latest cached match snapshot when it has matches,
    otherwise the largest colleges by enrollment as generic suggestions.
    """
    if user_id:
        snapshot = store.get_latest_match_snapshot(user_id)
        matches = snapshot.get("matches") if snapshot else None
        if isinstance(matches, list) and len(matches) > 0:
            logger.info(f"Using cached match snapshot for user {user_id}: {len(matches)} matches")
            return [_match_to_card(m) for m in matches]

    logger.info("No cached matches, falling back to largest colleges")
    return [_college_to_card(d) for d in store.get_largest_colleges(FALLBACK_COLLEGE_COUNT)]


def get_scholarship_stats(store: BackingStore, user_id: Optional[str] = None) -> ScholarshipStatsResponse:
    """
    Scholarships the user is eligible for, plus their total amount.

    Eligibility is only filtered when the user's stored profile carries a
    numeric GPA.
    """
    profile = store.get_latest_profile(user_id) if user_id else None
    gpa = parse_gpa(profile.get("gpa")) if profile else None

    opportunities = []
    for d in store.list_scholarships(max_min_gpa=gpa):
        deadline = parse_deadline(d.get("deadline"))
        opportunities.append(ScholarshipOpportunity(
            title=d.get("title"),
            amount=d.get("amount") or 0,
            deadline=deadline.date().isoformat() if deadline else None,
            description=d.get("description") or "",
        ))

    total = sum(o.amount for o in opportunities)
    return ScholarshipStatsResponse(total_eligible_amount=total, opportunities=opportunities)


def get_upcoming_deadlines(
    store: BackingStore,
    days: int = 30,
    now: Optional[datetime] = None,
) -> List[UpcomingDeadline]:
    """Scholarship deadlines in the next ``days`` days, soonest first."""
    now = now or datetime.now(timezone.utc)
    future = now + timedelta(days=days)

    deadlines = []
    for d in store.list_scholarships_due_between(now, future):
        deadline = parse_deadline(d.get("deadline"))
        if deadline is None:
            continue
        days_left = math.ceil((deadline - now).total_seconds() / 86400)
        deadlines.append(UpcomingDeadline(
            title=d.get("title"),
            deadline=deadline.date().isoformat(),
            days_left=days_left,
        ))
    return deadlines
