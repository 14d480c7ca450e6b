"""Unit tests for the recommendation fallback cascade and ranking."""

import pytest

from matcher.recommendations import RecommendationAssembler, experience_filter, rank_jobs
from shared.models import JobPosting, UserProfile


@pytest.mark.unit
@pytest.mark.parametrize(
    "level, expected",
    [
        ("entry", ["entry", "mid", "senior", "executive"]),
        ("mid", ["mid", "senior", "executive"]),
        ("executive", ["executive"]),
        ("unknown", None),
    ],
)
def test_experience_filter(level, expected):
    assert experience_filter(level) == expected


@pytest.mark.unit
async def test_skill_stage_used_when_skills_match(fake_db, job_factory):
    await fake_db.insert_jobs([
        job_factory(title="React Dev", skills=["React"], experience="mid"),
        job_factory(title="Java Dev", skills=["Java"], experience="mid"),
    ])
    user = UserProfile(skills=["React"], experience="mid")

    stage, docs = await RecommendationAssembler(fake_db).candidate_jobs(user)

    assert stage == "skills"
    assert [d["title"] for d in docs] == ["React Dev"]
    assert fake_db.active_queries[0]["skills"] == ["React"]


@pytest.mark.unit
async def test_falls_back_to_tier_when_no_skill_matches(fake_db, job_factory):
    await fake_db.insert_jobs([
        job_factory(title="Senior Java", skills=["Java"], experience="senior"),
        job_factory(title="Entry Java", skills=["Java"], experience="entry"),
    ])
    user = UserProfile(skills=["Elixir"], experience="mid")

    stage, docs = await RecommendationAssembler(fake_db).candidate_jobs(user)

    assert stage == "experience"
    assert [d["title"] for d in docs] == ["Senior Java"]


@pytest.mark.unit
async def test_falls_back_to_all_active_jobs(fake_db, job_factory):
    await fake_db.insert_jobs([job_factory(title="Entry Java", skills=["Java"], experience="entry")])
    user = UserProfile(skills=["Elixir"], experience="executive")

    results = await RecommendationAssembler(fake_db).recommend(user)

    assert [r.title for r in results] == ["Entry Java"]
    assert len(fake_db.active_queries) == 3


@pytest.mark.unit
async def test_user_without_skills_skips_skill_stage(fake_db, job_factory):
    await fake_db.insert_jobs([job_factory(experience="mid")])
    user = UserProfile(experience="mid")

    stage, _ = await RecommendationAssembler(fake_db).candidate_jobs(user)

    assert stage == "experience"
    assert fake_db.active_queries[0]["skills"] is None


@pytest.mark.unit
async def test_never_returns_more_than_limit_or_inactive(fake_db, job_factory):
    await fake_db.insert_jobs(
        [job_factory(title=f"Job {i}", skills=["Python"]) for i in range(30)]
        + [job_factory(title="Closed", skills=["Python"], is_active=False)]
    )
    user = UserProfile(skills=["Python"], experience="mid")

    results = await RecommendationAssembler(fake_db, limit=20).recommend(user)

    assert len(results) == 20
    assert all(r.is_active for r in results)
    assert "Closed" not in {r.title for r in results}


@pytest.mark.unit
async def test_no_active_jobs_returns_empty(fake_db, job_factory):
    await fake_db.insert_jobs([job_factory(is_active=False)])

    results = await RecommendationAssembler(fake_db).recommend(UserProfile(skills=["Go"]))

    assert results == []


@pytest.mark.unit
def test_rank_jobs_sorts_descending_and_keeps_ties_in_order(job_factory):
    user = UserProfile(skills=["React", "Node.js"], experience="mid")
    jobs = [
        JobPosting.model_validate(job_factory(title="Tie A", skills=["React", "Java"])),
        JobPosting.model_validate(job_factory(title="Best", skills=["React", "Node.js"])),
        JobPosting.model_validate(job_factory(title="Tie B", skills=["Node.js", "Go"])),
    ]

    ranked = rank_jobs(user, jobs)

    assert [r.title for r in ranked] == ["Best", "Tie A", "Tie B"]
    assert ranked[0].match_percentage == 80
    assert ranked[1].match_percentage == ranked[2].match_percentage == 50
