"""
Advisor Service - AI career advice.

Sends a user's skills, experience and goals to the LLM and normalizes the
reply into recommended roles, skills to develop and learning paths.
"""

from .career_advisor import CareerAdvisor, fallback_advice, normalize_advice

__all__ = ["CareerAdvisor", "fallback_advice", "normalize_advice"]
