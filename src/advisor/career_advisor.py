"""
LLM-based career advice with a fixed response shape.
"""

from typing import Any, Optional

from loguru import logger

from shared.errors import ValidationError
from shared.llm import LLMClient, parse_json_object
from shared.models import CareerAdvice

SYSTEM_PROMPT = """You are an expert career coach who gives practical, personalized advice to software professionals.

IMPORTANT: Respond ONLY with valid JSON in the exact format specified. No markdown formatting."""

DEFAULT_ADVICE = (
    "Based on your profile, I recommend focusing on continuous skill "
    "development and networking in your field."
)
UNPARSED_ADVICE = (
    "Based on your skills and goals, I recommend focusing on continuous "
    "learning and skill development in your chosen field."
)

# Returned when the model replies with something that is not JSON
FALLBACK_ROLES = [
    {
        "title": "Senior Developer",
        "description": "Matches your experience level and skills",
        "matchScore": "High",
    }
]
FALLBACK_SKILLS = [
    {
        "skill": "Advanced Technical Skills",
        "priority": "High",
        "reason": "Essential for career growth",
    }
]
FALLBACK_PATHS = [
    {
        "path": "Online Courses",
        "resources": ["Coursera", "Udemy", "edX"],
        "timeline": "3-6 months",
    }
]


def build_prompt(skills: str, experience: str, goals: str) -> str:
    return f"""Based on the following information, provide personalized career advice:

Skills: {skills}
Experience Level: {experience}
Career Goals: {goals}

Respond in the following JSON format:
{{
  "advice": "A detailed paragraph (3-4 sentences) with personalized career advice based on the user's profile",
  "recommendedRoles": [
    {{"title": "Job Title", "description": "Brief description of why this role fits", "matchScore": "High/Medium/Low"}}
  ],
  "skillsToDevelop": [
    {{"skill": "Skill Name", "priority": "High/Medium/Low", "reason": "Why this skill is important"}}
  ],
  "learningPaths": [
    {{"path": "Learning path name", "resources": ["Resource 1", "Resource 2"], "timeline": "Estimated timeline"}}
  ]
}}"""


def fallback_advice(raw_text: str) -> dict[str, Any]:
    """Fixed-shape advice built around an unparseable model reply."""
    return {
        "advice": raw_text[:500] or UNPARSED_ADVICE,
        "recommendedRoles": FALLBACK_ROLES,
        "skillsToDevelop": FALLBACK_SKILLS,
        "learningPaths": FALLBACK_PATHS,
    }


def normalize_advice(data: dict[str, Any]) -> CareerAdvice:
    """Coerce model output into CareerAdvice; non-list arrays become empty."""

    def as_list(key: str) -> list[Any]:
        value = data.get(key)
        return value if isinstance(value, list) else []

    advice = data.get("advice")
    return CareerAdvice(
        advice=str(advice) if advice else DEFAULT_ADVICE,
        recommended_roles=as_list("recommendedRoles"),
        skills_to_develop=as_list("skillsToDevelop"),
        learning_paths=as_list("learningPaths"),
    )


class CareerAdvisor:
    """Generates structured career advice from free-text profile details."""

    def __init__(self, llm: Optional[LLMClient] = None):
        self.llm = llm or LLMClient()

    async def generate_advice(
        self,
        skills: Optional[str],
        experience: Optional[str],
        goals: Optional[str],
    ) -> CareerAdvice:
        """
        Ask the LLM for career advice.

        Raises:
            ValidationError: A required field is missing
            LLMNotConfiguredError: No API key configured
            AllModelsFailedError: Every model in the chain failed
        """
        if not skills or not experience or not goals:
            raise ValidationError(
                "Missing required fields. Please provide skills, experience, and goals."
            )

        completion = await self.llm.complete(
            build_prompt(skills, experience, goals), system=SYSTEM_PROMPT
        )

        try:
            data = parse_json_object(completion.text)
        except ValueError as e:
            logger.error(f"Failed to parse JSON from AI response: {e}")
            data = fallback_advice(completion.text)

        advice = normalize_advice(data)
        logger.info(
            f"Generated career advice with {completion.model}: "
            f"{len(advice.recommended_roles)} roles, "
            f"{len(advice.skills_to_develop)} skills, "
            f"{len(advice.learning_paths)} learning paths"
        )
        return advice
