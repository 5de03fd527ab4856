"""
Next Steps - prompt templates for the recommendation generator.

The service layer is in:
- scholargy/services/next_steps_service.py
"""

from scholargy.agents.next_steps.prompts import (
    NEXT_STEPS_SYSTEM_PROMPT,
    build_next_steps_user_prompt,
)

__all__ = [
    "NEXT_STEPS_SYSTEM_PROMPT",
    "build_next_steps_user_prompt",
]
