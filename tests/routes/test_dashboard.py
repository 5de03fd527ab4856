"""
Tests for the dashboard endpoints.

Tests cover:
- POST /api/dashboard/next-steps success, fallback and failure paths
- Request validation (camelCase body, permissive inputs)
- GET top-matches / scholarship-stats / upcoming-deadlines
- Database-unavailable and internal-error responses
"""

import json

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, patch

from scholargy.dependencies import get_backing_store, get_next_steps_generator
from scholargy.main import app
from scholargy.services.next_steps_normalizer import FALLBACK_NEXT_STEPS
from scholargy.services.next_steps_service import NextStepsGenerator

client = TestClient(app)


@pytest.fixture
def override_store(store):
    """Serve the in-memory store to the routes."""
    app.dependency_overrides[get_backing_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_backing_store, None)


@pytest.fixture
def no_store():
    """Simulate an unconfigured database."""
    app.dependency_overrides[get_backing_store] = lambda: None
    yield
    app.dependency_overrides.pop(get_backing_store, None)


@pytest.fixture
def use_reasoning(make_reasoning_client):
    """Install a generator backed by a stub reasoning client; returns the stub."""
    installed = {}

    def _install(response: str = "", error=None):
        stub = make_reasoning_client(response=response, error=error)
        generator = NextStepsGenerator(stub, model="gemini-test", temperature=0.7)
        app.dependency_overrides[get_next_steps_generator] = lambda: generator
        installed["stub"] = stub
        return stub

    yield _install
    app.dependency_overrides.pop(get_next_steps_generator, None)


def _sent_inputs(stub) -> dict:
    """Parse the three JSON payloads out of the user message sent to the stub."""
    sent = {}
    for line in stub.calls[0]["user_message"].strip().splitlines():
        key, _, payload = line.partition(": ")
        sent[key] = json.loads(payload)
    return sent


class TestNextSteps:
    """Tests for POST /api/dashboard/next-steps"""

    def test_success(self, override_store, use_reasoning, well_formed_body):
        use_reasoning(response=well_formed_body)

        response = client.post("/api/dashboard/next-steps", json={})

        assert response.status_code == 200
        assert response.json() == {"nextSteps": [{"task": "A"}, {"task": "B"}, {"task": "C"}]}

    def test_malformed_reply_returns_fallback_with_200(self, override_store, use_reasoning):
        use_reasoning(response="Sure! Here are your steps: ...")

        response = client.post("/api/dashboard/next-steps", json={})

        assert response.status_code == 200
        assert [s["task"] for s in response.json()["nextSteps"]] == list(FALLBACK_NEXT_STEPS)

    def test_transport_failure_returns_503_without_leaking(self, override_store, use_reasoning):
        use_reasoning(error=RuntimeError("401 UNAUTHENTICATED: API key sk-secret invalid"))

        response = client.post("/api/dashboard/next-steps", json={})

        assert response.status_code == 503
        assert response.json() == {"error": "Recommendation service unavailable"}
        assert "sk-secret" not in response.text

    def test_caller_data_forwarded_verbatim(self, override_store, use_reasoning, well_formed_body):
        stub = use_reasoning(response=well_formed_body)
        body = {
            "studentProfile": {"name": "Alex", "gpa": 3.6, "intendedMajor": "Biology", "clubs": 3},
            "collegeMatches": [
                {"unitid": 236948, "name": "University of Washington", "likelihood": "target", "netCost": 21000},
                {"name": "UC Berkeley", "likelihood": "reach"},
            ],
            "scholarships": [{"title": "Mine", "amount": 500, "deadline": "2026-12-01"}],
        }

        response = client.post("/api/dashboard/next-steps", json=body)

        assert response.status_code == 200
        sent = _sent_inputs(stub)
        assert sent["studentProfile"] == body["studentProfile"]
        assert sent["collegeMatches"] == [
            {"unitid": 236948, "name": "University of Washington", "likelihood": "target", "netCost": 21000.0},
            {"name": "UC Berkeley", "likelihood": "reach"},
        ]
        assert sent["scholarships"] == body["scholarships"]
        assert override_store.calls == []

    def test_missing_scholarship_amount_defaults_to_zero(self, override_store, use_reasoning, well_formed_body):
        stub = use_reasoning(response=well_formed_body)

        client.post("/api/dashboard/next-steps", json={"scholarships": [{"title": "No Amount"}]})

        assert _sent_inputs(stub)["scholarships"] == [{"title": "No Amount", "amount": 0.0}]

    def test_loosely_shaped_profile_forwarded_as_is(self, override_store, use_reasoning, well_formed_body):
        stub = use_reasoning(response=well_formed_body)
        profile = {
            "testScores": [{"test": "SAT", "score": 1380}],
            "extracurriculars": "Robotics club",
            "goals": {"short_term": "Visit campuses"},
            "intendedMajor": ["Biology", "Chemistry"],
        }

        response = client.post("/api/dashboard/next-steps", json={"studentProfile": profile})

        assert response.status_code == 200
        assert _sent_inputs(stub)["studentProfile"] == profile

    def test_blank_scholarship_deadline_is_absent(self, override_store, use_reasoning, well_formed_body):
        stub = use_reasoning(response=well_formed_body)

        response = client.post(
            "/api/dashboard/next-steps",
            json={"scholarships": [{"title": "X", "amount": 100, "deadline": ""}]},
        )

        assert response.status_code == 200
        assert _sent_inputs(stub)["scholarships"] == [{"title": "X", "amount": 100.0, "deadline": None}]

    def test_user_id_resolves_from_store(self, override_store, use_reasoning, well_formed_body):
        stub = use_reasoning(response=well_formed_body)

        response = client.post("/api/dashboard/next-steps", json={"userId": "alex123"})

        assert response.status_code == 200
        sent = _sent_inputs(stub)
        assert sent["studentProfile"]["name"] == "Alex"
        assert [m["name"] for m in sent["collegeMatches"]] == ["UC Berkeley", "University of Washington"]
        assert len(sent["scholarships"]) == 5

    def test_no_database_still_generates(self, no_store, use_reasoning, well_formed_body):
        stub = use_reasoning(response=well_formed_body)

        response = client.post("/api/dashboard/next-steps", json={"userId": "alex123"})

        assert response.status_code == 200
        assert _sent_inputs(stub) == {"studentProfile": {}, "collegeMatches": [], "scholarships": []}

    def test_unparseable_gpa_is_treated_as_absent(self, override_store, use_reasoning, well_formed_body):
        stub = use_reasoning(response=well_formed_body)

        response = client.post("/api/dashboard/next-steps", json={"studentProfile": {"gpa": "N/A"}})

        assert response.status_code == 200
        assert _sent_inputs(stub)["studentProfile"] == {"gpa": None}

    def test_out_of_range_gpa_rejected(self, override_store, use_reasoning, well_formed_body):
        use_reasoning(response=well_formed_body)

        response = client.post("/api/dashboard/next-steps", json={"studentProfile": {"gpa": 9.5}})

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_unexpected_error_returns_500(self, override_store, use_reasoning):
        use_reasoning(response="{}")

        with patch(
            "scholargy.routes.dashboard.resolve_next_steps_inputs",
            side_effect=RuntimeError("boom"),
        ):
            response = client.post("/api/dashboard/next-steps", json={})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate next steps"}


class TestTopMatches:
    """Tests for GET /api/dashboard/top-matches"""

    def test_cached_matches(self, override_store):
        response = client.get("/api/dashboard/top-matches", params={"userId": "alex123"})

        assert response.status_code == 200
        results = response.json()["results"]
        assert results[0]["name"] == "UC Berkeley"
        assert results[0]["netCost"] == 18000
        assert results[1]["logo"].startswith("https://placehold.co/")

    def test_fallback(self, override_store):
        response = client.get("/api/dashboard/top-matches")

        assert response.status_code == 200
        assert len(response.json()["results"]) == 3

    def test_database_unavailable(self, no_store):
        response = client.get("/api/dashboard/top-matches")

        assert response.status_code == 503
        assert response.json() == {"error": "Database service unavailable"}

    def test_store_error(self):
        broken = MagicMock()
        broken.get_largest_colleges.side_effect = RuntimeError("relation does not exist")
        app.dependency_overrides[get_backing_store] = lambda: broken
        try:
            response = client.get("/api/dashboard/top-matches")
        finally:
            app.dependency_overrides.pop(get_backing_store, None)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch top matches"}


class TestScholarshipStats:
    """Tests for GET /api/dashboard/scholarship-stats"""

    def test_stats(self, override_store):
        response = client.get("/api/dashboard/scholarship-stats")

        assert response.status_code == 200
        data = response.json()
        assert data["totalEligibleAmount"] == 38000
        assert len(data["opportunities"]) == 7

    def test_gpa_filter(self, override_store):
        response = client.get("/api/dashboard/scholarship-stats", params={"userId": "alex123"})

        titles = {o["title"] for o in response.json()["opportunities"]}
        assert "National Merit" not in titles

    def test_database_unavailable(self, no_store):
        assert client.get("/api/dashboard/scholarship-stats").status_code == 503


class TestUpcomingDeadlines:
    """Tests for GET /api/dashboard/upcoming-deadlines"""

    def test_deadlines_shape(self, override_store):
        with patch("scholargy.routes.dashboard.get_upcoming_deadlines", return_value=[]) as mock_get:
            response = client.get("/api/dashboard/upcoming-deadlines", params={"days": 14})

        assert response.status_code == 200
        assert response.json() == {"deadlines": []}
        assert mock_get.call_args.kwargs["days"] == 14

    def test_invalid_days(self, override_store):
        response = client.get("/api/dashboard/upcoming-deadlines", params={"days": 0})
        assert response.status_code == 422

    def test_database_unavailable(self, no_store):
        assert client.get("/api/dashboard/upcoming-deadlines").status_code == 503


class TestHealth:
    """Tests for GET /health"""

    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
