"""Applying extracted resume data to a user profile."""

from typing import Any

from shared.models import ExtractedResumeData, UserProfile


def merge_unique(existing: list[str], incoming: list[str]) -> list[str]:
    """Existing entries first, then new ones, without duplicates."""
    return list(dict.fromkeys([*existing, *incoming]))


def merge_resume_into_profile(
    profile: UserProfile, data: ExtractedResumeData
) -> dict[str, Any]:
    """
    Build the profile update for extracted resume data.

    Skills, projects and education are merged into the existing lists,
    never replacing them. Empty extracted lists leave a field untouched.

    Returns:
        Update fields keyed by their stored (camelCase) names
    """
    update: dict[str, Any] = {}

    if data.skills:
        update["skills"] = merge_unique(profile.skills, data.skills)
    if data.projects:
        update["projects"] = merge_unique(profile.projects, data.projects)
    if data.education:
        update["education"] = merge_unique(profile.education, data.education)
    if data.experience:
        update["experienceSummary"] = data.experience

    return update
