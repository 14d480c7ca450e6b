"""
Job recommendations for a user.

Candidate jobs are fetched with progressively broader queries until one
returns results, then each job is scored and the list is ranked.
"""

from typing import Any, Optional, Protocol

from loguru import logger

from shared.models import (
    EXPERIENCE_ORDER,
    JobPosting,
    MatchResult,
    UserProfile,
    experience_rank,
)

from .scorer import calculate_match_percentage


class JobStore(Protocol):
    """Read access to active job postings."""

    async def find_active_jobs(
        self,
        experience_levels: Optional[list[str]] = None,
        skills: Optional[list[str]] = None,
        limit: int = 20,
    ) -> list[dict[str, Any]]: ...


def experience_filter(level: Any) -> Optional[list[str]]:
    """
    Experience tiers at or above the given tier (inclusive).

    Returns None for an unrecognized tier, meaning no experience filter.
    """
    rank = experience_rank(level)
    if rank is None:
        return None
    return EXPERIENCE_ORDER[rank:]


def rank_jobs(profile: UserProfile, jobs: list[JobPosting]) -> list[MatchResult]:
    """Score jobs for a profile, best match first. Ties keep their input order."""
    results = [
        MatchResult(
            **job.model_dump(exclude={"days_since_posted"}),
            match_percentage=calculate_match_percentage(profile, job),
        )
        for job in jobs
    ]
    # sorted() is stable
    return sorted(results, key=lambda r: r.match_percentage, reverse=True)


class RecommendationAssembler:
    """Finds and ranks job recommendations for a user profile."""

    def __init__(self, store: JobStore, limit: int = 20):
        self.store = store
        self.limit = limit

    async def candidate_jobs(
        self, profile: UserProfile
    ) -> tuple[str, list[dict[str, Any]]]:
        """
        Run the fallback cascade, stopping at the first non-empty result.

        Returns:
            Tuple of (stage name, job documents)
        """
        levels = experience_filter(profile.experience)
        skills = list(profile.skills)

        stages: list[tuple[str, Optional[list[str]], Optional[list[str]]]] = []
        if skills:
            stages.append(("skills", levels, skills))
        if levels is not None:
            stages.append(("experience", levels, None))
        stages.append(("all", None, None))

        docs: list[dict[str, Any]] = []
        stage = "all"
        for stage, stage_levels, stage_skills in stages:
            docs = await self.store.find_active_jobs(
                experience_levels=stage_levels,
                skills=stage_skills,
                limit=self.limit,
            )
            if docs:
                break
            logger.debug(f"No jobs for stage '{stage}', broadening query")

        return stage, docs

    async def recommend(self, profile: UserProfile) -> list[MatchResult]:
        """Return up to `limit` scored jobs for the profile, best match first."""
        stage, docs = await self.candidate_jobs(profile)
        jobs = [JobPosting.model_validate(doc) for doc in docs[: self.limit]]
        jobs = [job for job in jobs if job.is_active]

        recommendations = rank_jobs(profile, jobs)
        logger.info(
            f"Recommended {len(recommendations)} jobs for user {profile.id} "
            f"(stage: {stage})"
        )
        return recommendations
