"""Unit tests for merging extracted resume data into a profile."""

import pytest

from resume_parser import merge_resume_into_profile
from resume_parser.merge import merge_unique
from shared.models import ExtractedResumeData, UserProfile


@pytest.mark.unit
def test_merge_unique_keeps_existing_order():
    assert merge_unique(["React", "Go"], ["Go", "Rust", "React"]) == ["React", "Go", "Rust"]


@pytest.mark.unit
def test_resume_data_is_merged_not_overwritten():
    profile = UserProfile(
        skills=["React", "Go"],
        projects=["CLI tool"],
        education=["BSc Physics"],
    )
    data = ExtractedResumeData(
        skills=["Go", "Python"],
        projects=["CLI tool", "Chat app"],
        education=["MSc Computing"],
        experience="Four years of backend work",
    )

    update = merge_resume_into_profile(profile, data)

    assert update == {
        "skills": ["React", "Go", "Python"],
        "projects": ["CLI tool", "Chat app"],
        "education": ["BSc Physics", "MSc Computing"],
        "experienceSummary": "Four years of backend work",
    }


@pytest.mark.unit
def test_empty_extraction_changes_nothing():
    profile = UserProfile(skills=["React"])

    assert merge_resume_into_profile(profile, ExtractedResumeData()) == {}
