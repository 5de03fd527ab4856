"""
Pydantic schemas for the next-steps endpoint.

Wire format is camelCase (what the dashboard frontend sends); Python
attributes are snake_case. Every input model is permissive: no field is
required, unknown keys are kept, and caller data is forwarded to the
reasoning service exactly as supplied.
"""

import math
from datetime import date
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ============================================================================
# INPUT MODELS
# ============================================================================

class StudentProfile(BaseModel):
    """
    Student academic profile.

    All attributes are optional; an empty profile is valid and the
    reasoning service is told to make flagged assumptions for gaps.
    Apart from gpa, attribute shapes are not checked: profiles saved by
    older clients are forwarded as they are.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: Optional[Any] = Field(None, description="Student's name", examples=["Alex"])
    gpa: Optional[float] = Field(
        None,
        description="Unweighted or weighted GPA. Unparseable values are treated as absent.",
        ge=0.0,
        le=5.0,
        examples=[3.6]
    )
    test_scores: Optional[Any] = Field(
        None,
        alias="testScores",
        examples=[{"SAT": 1380, "ACT": 30}]
    )
    goals: Optional[Any] = Field(
        None,
        examples=["Study engineering close to home"]
    )
    intended_major: Optional[Any] = Field(None, alias="intendedMajor", examples=["Computer Science"])
    extracurriculars: Optional[Any] = Field(
        None,
        examples=[["Robotics club", "Varsity soccer"]]
    )

    @field_validator("gpa", mode="before")
    @classmethod
    def coerce_gpa(cls, v: Any) -> Optional[float]:
        """Non-numeric GPA values become None instead of failing the request."""
        if v is None or isinstance(v, bool):
            return None
        try:
            n = float(v)
        except (TypeError, ValueError):
            return None
        return n if math.isfinite(n) else None


class CollegeMatch(BaseModel):
    """A single college match; list order is the caller's priority."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    unitid: Optional[Union[int, str]] = Field(None, description="IPEDS unit id or other identifier")
    name: Optional[str] = None
    logo: Optional[str] = None
    likelihood: Optional[str] = Field(
        None,
        description="Admission likelihood, typically reach / target / safety (not enforced)",
        examples=["reach", "target", "safety"]
    )
    net_cost: Optional[float] = Field(None, alias="netCost", examples=[18500.0])
    details: Optional[str] = None


class Scholarship(BaseModel):
    """A scholarship opportunity. Missing amounts default to 0."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: Optional[str] = None
    amount: float = Field(0, ge=0, examples=[5000])
    deadline: Optional[date] = Field(None, examples=["2026-12-01"])
    description: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def default_amount(cls, data: Any) -> Any:
        # amount must be in fields_set so to_payload() always carries it
        if isinstance(data, dict) and data.get("amount") is None:
            return {**data, "amount": 0}
        return data

    @field_validator("deadline", mode="before")
    @classmethod
    def trim_timestamp(cls, v: Any) -> Any:
        """Accept ISO timestamps ('2026-12-01T00:00:00Z') as plain dates; blank means no deadline."""
        if isinstance(v, str) and not v.strip():
            return None
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v


class NextStepsRequest(BaseModel):
    """
    Request body for POST /api/dashboard/next-steps.

    The frontend may send any subset of the three inputs; whatever is
    missing is resolved from the backing store (when userId is given) or
    defaulted to empty.
    """
    model_config = ConfigDict(populate_by_name=True)

    student_profile: Optional[StudentProfile] = Field(None, alias="studentProfile")
    college_matches: Optional[List[CollegeMatch]] = Field(None, alias="collegeMatches")
    scholarships: Optional[List[Scholarship]] = None
    user_id: Optional[str] = Field(None, alias="userId", max_length=200, examples=["alex123"])


# ============================================================================
# OUTPUT MODELS
# ============================================================================

class NextStep(BaseModel):
    """One prioritized, user-facing recommended action."""
    task: str = Field(..., min_length=1, description="1-2 sentence concrete action")


class NextStepsResponse(BaseModel):
    """Response for POST /api/dashboard/next-steps. List order is priority."""
    model_config = ConfigDict(populate_by_name=True)

    next_steps: List[NextStep] = Field(..., alias="nextSteps")


class NextStepsError(BaseModel):
    """
    Returned by the generator when the reasoning service could not be
    reached (network, auth, quota, timeout). ``error`` carries the
    underlying message and is meant for logs, not end users.
    """
    error: str


class ErrorResponse(BaseModel):
    """Generic error body returned to clients."""
    error: str = Field(..., examples=["Failed to generate next steps"])


def to_payload(model: BaseModel) -> Dict[str, Any]:
    """Serialize a caller-supplied model back to the keys the caller used."""
    return model.model_dump(mode="json", by_alias=True, exclude_unset=True)
