"""
Pytest configuration for Scholargy backend tests.

Sets up test environment and global fixtures.
"""
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytest
from unittest.mock import MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-supabase-key")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")


class InMemoryBackingStore:
    """BackingStore over plain lists, mirroring the Supabase query semantics."""

    def __init__(
        self,
        profiles: Optional[List[Dict[str, Any]]] = None,
        match_snapshots: Optional[List[Dict[str, Any]]] = None,
        scholarships: Optional[List[Dict[str, Any]]] = None,
        colleges: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        self.profiles = profiles or []
        self.match_snapshots = match_snapshots or []
        self.scholarships = scholarships or []
        self.colleges = colleges or []
        self.calls: List[str] = []

    def get_latest_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        self.calls.append("get_latest_profile")
        rows = [p for p in self.profiles if p.get("user_id") == user_id]
        rows.sort(key=lambda p: p.get("updated_at", ""), reverse=True)
        return rows[0] if rows else None

    def get_latest_match_snapshot(self, user_id: str) -> Optional[Dict[str, Any]]:
        self.calls.append("get_latest_match_snapshot")
        rows = [s for s in self.match_snapshots if s.get("user_id") == user_id]
        rows.sort(key=lambda s: s.get("snapshot_at", ""), reverse=True)
        return rows[0] if rows else None

    def get_top_scholarships(self, limit: int) -> List[Dict[str, Any]]:
        self.calls.append("get_top_scholarships")
        # NULL amounts sort last, like ORDER BY amount DESC NULLS LAST
        rows = sorted(
            self.scholarships,
            key=lambda s: (s.get("amount") is not None, s.get("amount") or 0),
            reverse=True,
        )
        return [
            {"title": s.get("title"), "amount": s.get("amount"), "deadline": s.get("deadline")}
            for s in rows[:limit]
        ]

    def list_scholarships(self, max_min_gpa: Optional[float] = None) -> List[Dict[str, Any]]:
        self.calls.append("list_scholarships")
        if max_min_gpa is None:
            return list(self.scholarships)
        return [
            s for s in self.scholarships
            if s.get("min_gpa") is None or s["min_gpa"] <= max_min_gpa
        ]

    def list_scholarships_due_between(self, start: datetime, end: datetime) -> List[Dict[str, Any]]:
        self.calls.append("list_scholarships_due_between")
        rows = [
            s for s in self.scholarships
            if s.get("deadline") and start.isoformat() <= s["deadline"] <= end.isoformat()
        ]
        return sorted(rows, key=lambda s: s["deadline"])

    def get_largest_colleges(self, limit: int) -> List[Dict[str, Any]]:
        self.calls.append("get_largest_colleges")
        rows = sorted(
            self.colleges,
            key=lambda c: (c.get("enrollment_total") is not None, c.get("enrollment_total") or 0),
            reverse=True,
        )
        return rows[:limit]


class StubReasoningClient:
    """Deterministic ReasoningClient: returns a fixed body or raises a fixed error."""

    def __init__(self, response: str = "", error: Optional[BaseException] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def complete(
        self,
        system_instruction: str,
        user_message: str,
        model: str,
        temperature: float,
    ) -> str:
        self.calls.append({
            "system_instruction": system_instruction,
            "user_message": user_message,
            "model": model,
            "temperature": temperature,
        })
        if self.error is not None:
            raise self.error
        return self.response


WELL_FORMED_BODY = (
    '{"nextSteps": [{"task": "A"}, {"task": "B"}, {"task": "C"}]}'
)


@pytest.fixture
def sample_scholarships() -> List[Dict[str, Any]]:
    """Seven scholarships, unsorted, some without amounts or deadlines."""
    return [
        {"title": "Community Award", "amount": 1000, "deadline": "2026-11-01", "description": "Local", "min_gpa": 2.5},
        {"title": "STEM Excellence", "amount": 10000, "deadline": "2026-12-15", "description": "STEM majors", "min_gpa": 3.5},
        {"title": "First Gen Grant", "amount": 5000, "deadline": None, "description": "First generation"},
        {"title": "Essay Prize", "amount": None, "deadline": "2026-10-25", "description": "Essay contest"},
        {"title": "Leadership Fund", "amount": 7500, "deadline": "2027-01-10", "description": "Leaders", "min_gpa": 3.0},
        {"title": "Arts Scholarship", "amount": 2500, "deadline": "2026-11-20", "description": "Arts"},
        {"title": "National Merit", "amount": 12000, "deadline": "2027-02-01", "description": "Merit", "min_gpa": 3.9},
    ]


@pytest.fixture
def store(sample_scholarships) -> InMemoryBackingStore:
    """In-memory store with one user (alex123) and a scholarship catalog."""
    return InMemoryBackingStore(
        profiles=[
            {"user_id": "alex123", "name": "Alex (old)", "gpa": 3.1, "updated_at": "2026-01-01T00:00:00Z"},
            {"user_id": "alex123", "name": "Alex", "gpa": "3.6", "intendedMajor": "Biology",
             "updated_at": "2026-09-01T00:00:00Z"},
        ],
        match_snapshots=[
            {"user_id": "alex123", "snapshot_at": "2026-08-01T00:00:00Z",
             "matches": [{"unitid": 1, "name": "Old State", "likelihood": "safety"}]},
            {"user_id": "alex123", "snapshot_at": "2026-09-15T00:00:00Z",
             "matches": [
                 {"unitid": 110635, "name": "UC Berkeley", "likelihood": "reach", "netCost": 18000},
                 {"unitid": 236948, "name": "University of Washington", "likelihood": "target"},
             ]},
        ],
        scholarships=sample_scholarships,
        colleges=[
            {"unitid": 1, "general_info": {"name": "Small College", "city": "Ames", "state": "IA"},
             "enrollment_total": 2000},
            {"unitid": 2, "general_info": {"name": "Big State", "city": "Columbus", "state": "OH"},
             "enrollment_total": 60000, "cost_and_aid": {"tuition_in_state": 12000}},
            {"unitid": 3, "general_info": {"name": "Mid University", "city": "Austin", "state": "TX"},
             "enrollment_total": 30000},
            {"unitid": 4, "enrollment_total": 40000},
        ],
    )


@pytest.fixture
def empty_store() -> InMemoryBackingStore:
    return InMemoryBackingStore()


@pytest.fixture
def make_store():
    """Factory for custom in-memory stores."""
    return InMemoryBackingStore


@pytest.fixture
def make_reasoning_client():
    """Factory for deterministic reasoning clients."""
    return StubReasoningClient


@pytest.fixture
def well_formed_body() -> str:
    return WELL_FORMED_BODY


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client
