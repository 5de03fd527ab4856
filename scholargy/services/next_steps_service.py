"""
Next Steps Service - Gemini recommendation generator

Turns a resolved student profile, college matches and scholarships into
three prioritized next steps.

Architecture:
- Pattern: Single-shot LLM call, no retry
- Model: Gemini 2.5 Flash (NEXT_STEPS_MODEL)
- Temperature: 0.7 (NEXT_STEPS_TEMPERATURE)
- Output: JSON parsed from text by next_steps_normalizer

Failure handling has two tiers, and callers can tell them apart by type:
- Transport failure (network, non-2xx, quota, timeout, client not
  configured): ``NextStepsError`` with the underlying message.
- Malformed reply: handled by the normalizer, which substitutes the fixed
  fallback steps. The request still succeeds.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from scholargy.agents.next_steps.prompts import (
    NEXT_STEPS_SYSTEM_PROMPT,
    build_next_steps_user_prompt,
)
from scholargy.config import settings
from scholargy.schemas.next_steps import NextStep, NextStepsError
from scholargy.services.next_steps_normalizer import normalize_next_steps
from scholargy.services.reasoning_client import ReasoningClient

logger = logging.getLogger(__name__)

NextStepsResult = Union[List[NextStep], NextStepsError]


class NextStepsGenerator:
    """
    Generates next steps with an injected reasoning client.

    Args:
        client: Reasoning client, or None when the service is not configured
        model: Model identifier passed to the client
        temperature: Sampling temperature
        timeout_s: Optional bound on the reasoning call; None means unbounded
    """

    def __init__(
        self,
        client: Optional[ReasoningClient],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.client = client
        self.model = model or settings.NEXT_STEPS_MODEL
        self.temperature = settings.NEXT_STEPS_TEMPERATURE if temperature is None else temperature
        self.timeout_s = timeout_s

    async def _call(self, client: ReasoningClient, user_prompt: str) -> str:
        call = client.complete(
            system_instruction=NEXT_STEPS_SYSTEM_PROMPT,
            user_message=user_prompt,
            model=self.model,
            temperature=self.temperature,
        )
        if self.timeout_s is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.timeout_s)

    async def generate(
        self,
        student_profile: Dict[str, Any],
        college_matches: List[Dict[str, Any]],
        scholarships: List[Dict[str, Any]],
    ) -> NextStepsResult:
        """
        Generate prioritized next steps.

        Args:
            student_profile: Resolved profile ({} when unknown)
            college_matches: Resolved matches in caller priority order
            scholarships: Resolved scholarships

        Returns:
            A list of NextStep (three unless the model returned a short
            list), or NextStepsError when the reasoning service failed.
        """
        logger.info(
            f"NextStepsGenerator invoked: matches={len(college_matches)}, "
            f"scholarships={len(scholarships)}"
        )

        if self.client is None:
            logger.error("Reasoning client not available")
            return NextStepsError(error="Reasoning service is not configured")

        user_prompt = build_next_steps_user_prompt(
            student_profile=student_profile,
            college_matches=college_matches,
            scholarships=scholarships,
        )

        try:
            content = await self._call(self.client, user_prompt)
        except asyncio.TimeoutError:
            logger.error(f"Reasoning service timed out after {self.timeout_s}s")
            return NextStepsError(error=f"Reasoning service timed out after {self.timeout_s}s")
        except Exception as e:
            logger.error(f"Error calling reasoning service: {e}")
            return NextStepsError(error=str(e))

        return normalize_next_steps(content)
