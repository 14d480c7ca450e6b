"""
Matcher Service - profile-to-job match scoring and recommendations.

Scores how well each job posting fits a user profile (0-100) and ranks
active jobs using a fallback cascade of queries.
"""

from .recommendations import JobStore, RecommendationAssembler, experience_filter, rank_jobs
from .scorer import ScoringWeights, calculate_match_percentage
from .trending import demand_label, trending_skills

__all__ = [
    "JobStore",
    "RecommendationAssembler",
    "ScoringWeights",
    "calculate_match_percentage",
    "demand_label",
    "experience_filter",
    "rank_jobs",
    "trending_skills",
]
