"""
Job listings, personalized recommendations and trending skills.
"""

import math
import random
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from matcher import RecommendationAssembler, trending_skills
from shared.config import Settings
from shared.database import Database
from shared.errors import NotFoundError
from shared.models import JobPosting, UserProfile

from ..dependencies import get_app_settings, get_current_user, get_db

router = APIRouter(prefix="/career", tags=["career"])


def get_rng(request: Request) -> random.Random:
    return request.app.state.rng


@router.get("/recommendations")
async def recommendations(
    user: UserProfile = Depends(get_current_user),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    assembler = RecommendationAssembler(db, limit=settings.recommendations_limit)
    results = await assembler.recommend(user)
    return {"recommendations": [r.to_api() for r in results]}


@router.get("/jobs")
async def list_jobs(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    location: Optional[str] = None,
    experience: Optional[str] = None,
    skills: Optional[list[str]] = Query(default=None),
    db: Database = Depends(get_db),
):
    if skills:
        # Accept both ?skills=a&skills=b and ?skills=a,b
        skills = [s.strip() for value in skills for s in value.split(",") if s.strip()]

    docs, total = await db.list_jobs(
        page=page,
        limit=limit,
        location=location,
        experience=experience,
        skills=skills or None,
    )
    return {
        "jobs": [JobPosting.model_validate(doc).to_api() for doc in docs],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        },
    }


@router.get("/jobs/{job_id}")
async def get_job(job_id: str, db: Database = Depends(get_db)):
    doc = await db.get_job(job_id)
    if doc is None:
        raise NotFoundError("Job not found.")
    return {"job": JobPosting.model_validate(doc).to_api()}


@router.get("/trending-skills")
async def get_trending_skills(
    db: Database = Depends(get_db),
    rng: random.Random = Depends(get_rng),
):
    skills = await trending_skills(db, rng=rng)
    return {"trendingSkills": [s.to_api() for s in skills]}
