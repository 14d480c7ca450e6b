"""
Weighted multi-factor job match scoring.

Compares a user profile against a job posting and produces an integer
match percentage between 0 and 100.
"""

import math
from dataclasses import dataclass

from shared.models import JobPosting, UserProfile, experience_rank


@dataclass(frozen=True)
class ScoringWeights:
    """Maximum points per factor. Each weight always counts toward the maximum."""

    skills: int = 60
    experience: int = 20
    projects: int = 10
    education: int = 5
    goals: int = 5

    # Partial credit
    near_experience: int = 15
    project_points: int = 3
    education_points: int = 2
    goal_points: int = 2

    # Prefix lengths used for keyword matching
    project_prefix: int = 20
    education_prefix: int = 15
    goal_description_prefix: int = 20
    goal_title_prefix: int = 15


DEFAULT_WEIGHTS = ScoringWeights()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _count_prefix_matches(entries: list[str], text: str, prefix: int) -> int:
    """Count entries whose lower-cased prefix occurs in the (lower-cased) text."""
    matches = 0
    for entry in entries:
        needle = entry[:prefix].lower()
        if needle in text:
            matches += 1
    return matches


def skill_points(
    profile: UserProfile, job: JobPosting, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> float:
    if not profile.skills or not job.skills:
        return 0.0
    user_skills = set(profile.skills)
    overlap = sum(1 for skill in job.skills if skill in user_skills)
    return weights.skills * overlap / len(job.skills)


def experience_points(
    profile: UserProfile, job: JobPosting, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> int:
    user_rank = experience_rank(profile.experience)
    job_rank = experience_rank(job.experience)
    if user_rank is None or job_rank is None:
        return 0
    if job_rank == user_rank:
        return weights.experience
    # A job one tier above the user (or any tier below) is a near match
    if job_rank <= user_rank + 1:
        return weights.near_experience
    return 0


def project_points(
    profile: UserProfile, job: JobPosting, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> int:
    if not profile.projects or not job.description:
        return 0
    matches = _count_prefix_matches(
        profile.projects, job.description.lower(), weights.project_prefix
    )
    return min(weights.projects, weights.project_points * matches)


def education_points(
    profile: UserProfile, job: JobPosting, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> int:
    if not profile.education or not job.description:
        return 0
    matches = _count_prefix_matches(
        profile.education, job.description.lower(), weights.education_prefix
    )
    return min(weights.education, weights.education_points * matches)


def goal_points(
    profile: UserProfile, job: JobPosting, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> int:
    if not profile.career_goals:
        return 0
    description = job.description.lower()
    title = job.title.lower()

    matches = 0
    for goal in profile.career_goals:
        in_description = goal[: weights.goal_description_prefix].lower()
        in_title = goal[: weights.goal_title_prefix].lower()
        if in_description in description or in_title in title:
            matches += 1
    return min(weights.goals, weights.goal_points * matches)


def calculate_match_percentage(
    profile: UserProfile,
    job: JobPosting,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """
    Score how well a job fits a profile.

    Every factor adds its weight to the maximum whether or not it could be
    evaluated, so a profile without skills can reach at most 40.

    Returns:
        Integer match percentage in [0, 100]
    """
    score = 0.0
    max_score = 0

    score += skill_points(profile, job, weights)
    max_score += weights.skills

    score += experience_points(profile, job, weights)
    max_score += weights.experience

    score += project_points(profile, job, weights)
    max_score += weights.projects

    score += education_points(profile, job, weights)
    max_score += weights.education

    score += goal_points(profile, job, weights)
    max_score += weights.goals

    if max_score == 0:
        return 0
    return max(0, min(100, _round_half_up(100 * score / max_score)))
