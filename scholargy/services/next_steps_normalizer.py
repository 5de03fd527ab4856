"""
Response normalizer for the next-steps generator.

Model output is untrusted text that is usually, but not always, JSON.
Parsing is strict and has two outcomes:

- parse OK: ``nextSteps`` is mapped to NextStep models as-is. A reply that
  is valid JSON but has no ``nextSteps`` list yields an empty list, and a
  short list is returned unpadded.
- parse failure (prose, markdown fences, empty body, nesting too deep to
  decode) or a literal ``null``: no partial recovery, a warning is logged
  and FALLBACK_NEXT_STEPS is returned.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from scholargy.schemas.next_steps import NextStep

logger = logging.getLogger(__name__)

FALLBACK_NEXT_STEPS = (
    "Complete your college applications early to meet deadlines",
    "Research and apply for scholarships that match your profile",
    "Prepare for college entrance exams and improve your test scores",
)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a model reply: either ``value`` or ``error`` is meaningful."""
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def fallback_next_steps() -> List[NextStep]:
    """Fresh copy of the fixed fallback steps."""
    return [NextStep(task=task) for task in FALLBACK_NEXT_STEPS]


def parse_model_output(raw_text: Optional[str]) -> ParseResult:
    """Strict JSON parse of the raw reply."""
    try:
        return ParseResult(value=json.loads(raw_text or ""))
    except (ValueError, TypeError, RecursionError) as e:
        return ParseResult(error=str(e))


def _to_next_steps(items: List[Any]) -> List[NextStep]:
    steps = []
    for idx, item in enumerate(items):
        task = item.get("task") if isinstance(item, dict) else None
        if not isinstance(task, str) or not task.strip():
            logger.warning(f"Dropping next step {idx}: missing or empty 'task'")
            continue
        steps.append(NextStep(task=task))
    return steps


def normalize_next_steps(raw_text: Optional[str]) -> List[NextStep]:
    """
    Turn the reasoning service's raw reply into a list of NextStep.

    Args:
        raw_text: Response body returned by the reasoning service

    Returns:
        The parsed steps, [] for valid JSON of the wrong shape, or the
        fallback steps when the body is not valid JSON.
    """
    parsed = parse_model_output(raw_text)

    if not parsed.ok:
        logger.warning(f"Reasoning service returned invalid JSON, using fallback steps: {parsed.error}")
        return fallback_next_steps()

    data = parsed.value
    if data is None:
        logger.warning("Reasoning service returned a null body, using fallback steps")
        return fallback_next_steps()

    items = data.get("nextSteps") if isinstance(data, dict) else None
    if not isinstance(items, list):
        logger.warning("Reasoning service reply has no 'nextSteps' array")
        return []

    steps = _to_next_steps(items)
    if len(steps) != len(FALLBACK_NEXT_STEPS):
        logger.info(f"Reasoning service returned {len(steps)} next steps")
    return steps
