"""
Profile management, skills, saved/applied jobs and resume import.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, File, UploadFile
from loguru import logger
from pydantic import BaseModel

from resume_parser import ResumeExtractor, merge_resume_into_profile
from shared.database import Database, to_object_id
from shared.errors import NotFoundError, ValidationError
from shared.models import ExtractedResumeData, JobPosting, ProfileUpdate, UserProfile

from ..dependencies import get_current_user, get_db, get_resume_extractor

router = APIRouter(prefix="/user", tags=["user"])


class SkillRequest(BaseModel):
    skill: Optional[str] = None


class JobRequest(BaseModel):
    jobId: Optional[str] = None


def _require_skill(body: SkillRequest) -> str:
    skill = (body.skill or "").strip()
    if not skill:
        raise ValidationError("Skill is required.")
    return skill


async def _require_job(db: Database, body: JobRequest) -> dict[str, Any]:
    if not body.jobId:
        raise ValidationError("Job ID is required.")
    job = await db.get_job(body.jobId)
    if job is None:
        raise NotFoundError("Job not found.")
    return job


def _updated(doc: Optional[dict[str, Any]]) -> UserProfile:
    if doc is None:
        raise NotFoundError("User not found.")
    return UserProfile.model_validate(doc)


@router.get("/me")
async def me(user: UserProfile = Depends(get_current_user)):
    return {"success": True, "message": "User retrieved successfully.", "user": user.to_api()}


@router.put("/profile")
async def update_profile(
    body: ProfileUpdate,
    user: UserProfile = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    fields = body.to_update_dict()
    if not fields:
        return {"success": True, "message": "No changes to apply.", "user": user.to_api()}

    updated = _updated(await db.update_user(user.id, fields))
    logger.info(f"Updated profile for user {user.id}: {sorted(fields)}")
    return {"success": True, "message": "Profile updated successfully.", "user": updated.to_api()}


@router.post("/skills")
async def add_skill(
    body: SkillRequest,
    user: UserProfile = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    skill = _require_skill(body)
    updated = _updated(await db.add_to_user_set(user.id, "skills", skill))
    return {"success": True, "message": "Skill added successfully.", "skills": updated.skills}


@router.delete("/skills")
async def remove_skill(
    body: SkillRequest,
    user: UserProfile = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    skill = _require_skill(body)
    updated = _updated(await db.pull_from_user_set(user.id, "skills", skill))
    return {"success": True, "message": "Skill removed successfully.", "skills": updated.skills}


@router.post("/save-job")
async def save_job(
    body: JobRequest,
    user: UserProfile = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    job = await _require_job(db, body)
    updated = _updated(await db.add_to_user_set(user.id, "savedJobs", job["_id"]))
    return {"success": True, "message": "Job saved successfully.", "savedJobs": updated.saved_jobs}


@router.delete("/saved-job")
async def unsave_job(
    body: JobRequest,
    user: UserProfile = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    job_oid = to_object_id(body.jobId) if body.jobId else None
    if job_oid is None:
        raise ValidationError("Job ID is required.")
    updated = _updated(await db.pull_from_user_set(user.id, "savedJobs", job_oid))
    return {
        "success": True,
        "message": "Job removed from saved jobs.",
        "savedJobs": updated.saved_jobs,
    }


@router.post("/apply-job")
async def apply_job(
    body: JobRequest,
    user: UserProfile = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    job = await _require_job(db, body)
    updated = _updated(await db.add_to_user_set(user.id, "appliedJobs", job["_id"]))
    logger.info(f"User {user.id} applied to job {job['_id']}")
    return {
        "success": True,
        "message": "Job application recorded.",
        "appliedJobs": updated.applied_jobs,
    }


@router.get("/saved-jobs")
async def saved_jobs(
    user: UserProfile = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    docs = await db.get_jobs_by_ids(user.saved_jobs)
    return {
        "success": True,
        "message": "Saved jobs retrieved successfully.",
        "savedJobs": [JobPosting.model_validate(doc).to_api() for doc in docs],
    }


@router.get("/applied-jobs")
async def applied_jobs(
    user: UserProfile = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    docs = await db.get_jobs_by_ids(user.applied_jobs)
    return {
        "success": True,
        "message": "Applied jobs retrieved successfully.",
        "appliedJobs": [JobPosting.model_validate(doc).to_api() for doc in docs],
    }


@router.post("/upload-resume")
async def upload_resume(
    resume: Optional[UploadFile] = File(default=None),
    user: UserProfile = Depends(get_current_user),
    extractor: ResumeExtractor = Depends(get_resume_extractor),
):
    content = await resume.read() if resume is not None else None
    data, used_ai = await extractor.extract_from_upload(
        content,
        resume.content_type if resume is not None else None,
        filename=resume.filename if resume is not None else None,
    )
    logger.info(f"Parsed resume for user {user.id} (ai={used_ai})")
    message = (
        "Resume parsed successfully."
        if used_ai
        else "Resume parsed using basic extraction. Please review the results."
    )
    return {"success": True, "message": message, "data": data.to_api()}


@router.post("/apply-resume")
async def apply_resume(
    body: ExtractedResumeData,
    user: UserProfile = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    fields = merge_resume_into_profile(user, body)
    if fields:
        user = _updated(await db.update_user(user.id, fields))
    return {
        "success": True,
        "message": "Resume data applied to your profile.",
        "user": user.to_api(),
    }
