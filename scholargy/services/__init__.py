"""
Service layer for the Scholargy backend.

Services act as the glue between routes (HTTP layer) and the backing
store / reasoning service.
"""

from .dashboard_service import get_scholarship_stats, get_top_matches, get_upcoming_deadlines
from .next_steps_normalizer import FALLBACK_NEXT_STEPS, normalize_next_steps, parse_model_output
from .next_steps_service import NextStepsGenerator
from .profile_aggregator import NextStepsInputs, resolve_next_steps_inputs
from .reasoning_client import GeminiReasoningClient, ReasoningClient, get_reasoning_client

__all__ = [
    "get_top_matches",
    "get_scholarship_stats",
    "get_upcoming_deadlines",
    "FALLBACK_NEXT_STEPS",
    "normalize_next_steps",
    "parse_model_output",
    "NextStepsGenerator",
    "NextStepsInputs",
    "resolve_next_steps_inputs",
    "GeminiReasoningClient",
    "ReasoningClient",
    "get_reasoning_client",
]
