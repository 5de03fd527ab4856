"""
Next Steps Prompt Templates

Contains the system prompt and user prompt builder for the NextStepsGenerator.

Architecture:
- Pattern: Single-shot LLM call (no tools, no retry)
- Model: Gemini 2.5 Flash (configurable via NEXT_STEPS_MODEL)
- Temperature: 0.7 (varied but not erratic phrasing)
- Output: JSON object parsed from the response text

Prompt Engineering Pattern:
- System prompt defines role, output contract and behavior rules
- User prompt carries the three inputs serialized verbatim as JSON
"""

import json
from typing import Any, Dict, List

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

NEXT_STEPS_SYSTEM_PROMPT = """You are a knowledgeable and empathetic educational guidance assistant for Scholargy, a college planning app.

<role>
Provide actionable, personalized guidance to a student based on their academic profile, college matches and scholarship opportunities.
</role>

<input_context>
- studentProfile: name, GPA, test scores, goals, intended major, extracurriculars and any other relevant info.
- collegeMatches: colleges with name, likelihood (reach, target, safety), net cost and details.
- scholarships: scholarships with title, amount, deadline and description.
</input_context>

<output_format>
Return ONLY a JSON object with this exact shape. No markdown code blocks, no explanatory text:
{
  "nextSteps": [
    {"task": "Highest priority action with specific details"},
    {"task": "Secondary action with specific details"},
    {"task": "Tertiary action with specific details"}
  ]
}
</output_format>

<behavior_rules>
- Provide exactly 3 steps, ordered from highest to lowest priority
- Each step is 1-2 sentences, concrete and actionable
- Prioritize by eligibility, deadlines and admission likelihood
- Avoid vague recommendations; name the college, scholarship or exam when possible
- Personalize suggestions to the student's profile and goals
- Use friendly, motivating language
- Focus on college prep, scholarship strategy and career prep
</behavior_rules>

<missing_data>
If any input is missing or empty, make reasonable assumptions and say so explicitly in the step (e.g. "Assuming you have not taken the SAT yet, ...").
</missing_data>
"""


# =============================================================================
# USER PROMPT BUILDER
# =============================================================================

def build_next_steps_user_prompt(
    student_profile: Dict[str, Any],
    college_matches: List[Dict[str, Any]],
    scholarships: List[Dict[str, Any]],
) -> str:
    """
    Build the user message for the reasoning service.

    The inputs are serialized as-is (no filtering or redaction). Values that
    are not JSON-native, such as dates from the backing store, are rendered
    with ``str()``.

    Args:
        student_profile: Resolved student profile ({} when unknown)
        college_matches: Resolved college matches in caller priority order
        scholarships: Resolved scholarship list

    Returns:
        The formatted user prompt string
    """
    return (
        f"studentProfile: {json.dumps(student_profile, default=str, ensure_ascii=False)}\n"
        f"collegeMatches: {json.dumps(college_matches, default=str, ensure_ascii=False)}\n"
        f"scholarships: {json.dumps(scholarships, default=str, ensure_ascii=False)}\n"
    )
