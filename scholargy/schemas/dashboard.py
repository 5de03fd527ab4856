"""
Pydantic schemas for the read-only dashboard endpoints.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TopMatch(BaseModel):
    """College card shown on the dashboard."""
    model_config = ConfigDict(populate_by_name=True)

    unitid: Optional[Union[int, str]] = None
    name: str
    logo: str
    net_cost: Optional[float] = Field(None, alias="netCost")
    likelihood: str = Field("target", examples=["reach", "target", "safety"])
    details: str = ""


class TopMatchesResponse(BaseModel):
    """Response for GET /api/dashboard/top-matches."""
    results: List[TopMatch]


class ScholarshipOpportunity(BaseModel):
    """Scholarship row with the deadline formatted as YYYY-MM-DD."""
    title: Optional[str] = None
    amount: float = 0
    deadline: Optional[str] = Field(None, examples=["2026-12-01"])
    description: str = ""


class ScholarshipStatsResponse(BaseModel):
    """Response for GET /api/dashboard/scholarship-stats."""
    model_config = ConfigDict(populate_by_name=True)

    total_eligible_amount: float = Field(..., alias="totalEligibleAmount")
    opportunities: List[ScholarshipOpportunity]


class UpcomingDeadline(BaseModel):
    """A scholarship deadline inside the requested window."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    deadline: str
    days_left: int = Field(..., alias="daysLeft")


class UpcomingDeadlinesResponse(BaseModel):
    """Response for GET /api/dashboard/upcoming-deadlines."""
    deadlines: List[UpcomingDeadline]
