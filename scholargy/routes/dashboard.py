"""
FastAPI routes for the student dashboard.

Endpoints:
- GET  /api/dashboard/top-matches: College cards (cached matches or generic fallback)
- GET  /api/dashboard/scholarship-stats: Eligible scholarships and total amount
- GET  /api/dashboard/upcoming-deadlines: Scholarship deadlines in the next N days
- POST /api/dashboard/next-steps: Three prioritized next steps from Gemini

Error responses never include provider or database error text; details are
logged server-side only.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from scholargy.db.store import BackingStore
from scholargy.dependencies import get_backing_store, get_next_steps_generator
from scholargy.schemas.dashboard import (
    ScholarshipStatsResponse,
    TopMatchesResponse,
    UpcomingDeadlinesResponse,
)
from scholargy.schemas.next_steps import (
    ErrorResponse,
    NextStepsError,
    NextStepsRequest,
    NextStepsResponse,
    to_payload,
)
from scholargy.services.dashboard_service import (
    get_scholarship_stats,
    get_top_matches,
    get_upcoming_deadlines,
)
from scholargy.services.next_steps_service import NextStepsGenerator
from scholargy.services.profile_aggregator import resolve_next_steps_inputs
from scholargy.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"]
)

ERROR_RESPONSES = {
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _database_unavailable() -> JSONResponse:
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Database service unavailable")


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get(
    "/top-matches",
    response_model=TopMatchesResponse,
    responses=ERROR_RESPONSES,
    summary="Top college matches",
)
async def top_matches_endpoint(
    user_id: Optional[str] = Query(None, alias="userId"),
    store: Optional[BackingStore] = Depends(get_backing_store),
) -> Union[TopMatchesResponse, JSONResponse]:
    """
    Returns the user's cached college matches, or the three largest colleges
    by enrollment when no snapshot exists.
    """
    if store is None:
        return _database_unavailable()

    try:
        results = get_top_matches(store, user_id)
    except Exception as e:
        logger.error(f"GET /api/dashboard/top-matches error: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch top matches")

    return TopMatchesResponse(results=results)


@router.get(
    "/scholarship-stats",
    response_model=ScholarshipStatsResponse,
    responses=ERROR_RESPONSES,
    summary="Eligible scholarship totals",
)
async def scholarship_stats_endpoint(
    user_id: Optional[str] = Query(None, alias="userId"),
    store: Optional[BackingStore] = Depends(get_backing_store),
) -> Union[ScholarshipStatsResponse, JSONResponse]:
    """
    Lists scholarships the user is eligible for. When the user's profile has
    a GPA, scholarships with a higher minimum GPA are excluded.
    """
    if store is None:
        return _database_unavailable()

    try:
        return get_scholarship_stats(store, user_id)
    except Exception as e:
        logger.error(f"GET /api/dashboard/scholarship-stats error: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch scholarship stats")


@router.get(
    "/upcoming-deadlines",
    response_model=UpcomingDeadlinesResponse,
    responses=ERROR_RESPONSES,
    summary="Upcoming scholarship deadlines",
)
async def upcoming_deadlines_endpoint(
    days: int = Query(30, ge=1, le=365),
    store: Optional[BackingStore] = Depends(get_backing_store),
) -> Union[UpcomingDeadlinesResponse, JSONResponse]:
    """Scholarship deadlines between now and ``days`` days from now."""
    if store is None:
        return _database_unavailable()

    try:
        deadlines = get_upcoming_deadlines(store, days=days)
    except Exception as e:
        logger.error(f"GET /api/dashboard/upcoming-deadlines error: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch upcoming deadlines")

    return UpcomingDeadlinesResponse(deadlines=deadlines)


@router.post(
    "/next-steps",
    response_model=NextStepsResponse,
    responses=ERROR_RESPONSES,
    summary="Generate prioritized next steps",
    description="""
    Generates three prioritized next steps for the student.

    **Body:** `{ studentProfile?, collegeMatches?, scholarships?, userId? }`

    Missing inputs are resolved from the backing store when `userId` is
    given; scholarships default to the five largest awards.

    **Responses:**
    - 200: `{ nextSteps: [{ task }, ...] }`. A malformed model reply still
      returns 200 with generic fallback steps.
    - 503: The reasoning service could not be reached.
    - 500: Unexpected internal error.
    """
)
async def next_steps_endpoint(
    request: NextStepsRequest,
    store: Optional[BackingStore] = Depends(get_backing_store),
    generator: NextStepsGenerator = Depends(get_next_steps_generator),
) -> Union[NextStepsResponse, JSONResponse]:
    """
    Next steps endpoint.

    - Resolve inputs: profile aggregator (never fails)
    - Call LLM: single Gemini call through the generator
    - Map output: NextStep list -> 200, NextStepsError -> 503
    """
    logger.info(f"POST /api/dashboard/next-steps called, user_id={request.user_id}")

    try:
        inputs = await resolve_next_steps_inputs(
            store,
            student_profile=to_payload(request.student_profile) if request.student_profile is not None else None,
            college_matches=(
                [to_payload(m) for m in request.college_matches]
                if request.college_matches is not None else None
            ),
            scholarships=(
                [to_payload(s) for s in request.scholarships]
                if request.scholarships is not None else None
            ),
            user_id=request.user_id,
        )

        result = await generator.generate(
            inputs.student_profile,
            inputs.college_matches,
            inputs.scholarships,
        )
    except Exception as e:
        logger.error(f"POST /api/dashboard/next-steps error: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate next steps")

    if isinstance(result, NextStepsError):
        logger.error(f"Next steps generation failed: {result.error}")
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Recommendation service unavailable")

    logger.info(f"Returning {len(result)} next steps")
    return NextStepsResponse(next_steps=result)
