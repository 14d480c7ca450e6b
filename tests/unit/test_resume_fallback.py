"""Unit tests for keyword-based resume extraction."""

import pytest

from resume_parser.fallback import (
    DEFAULT_EXPERIENCE,
    extract_basic_info,
    extract_education,
    extract_experience,
    extract_projects,
    extract_skills,
)

RESUME = """Jane Doe
Software Engineer

Summary
I have 6 years of experience in building web platforms with Python and React for fintech companies.

Projects
Built an invoicing platform with Django, PostgreSQL and Docker for small businesses
Developed a realtime dashboard for payments monitoring using React and GraphQL

Education
Bachelor of Science in Computer Science, State University, 2016
"""


@pytest.mark.unit
def test_extract_skills_matches_whole_words_only():
    skills = extract_skills("Worked with Java, javascript and Go. Also Google Docs.")

    assert "Java" in skills
    assert "JavaScript" in skills
    assert "Go" in skills
    # "Google" must not count as "Go"
    assert skills.count("Go") == 1


@pytest.mark.unit
def test_extract_skills_handles_symbols():
    skills = extract_skills("Languages: C++, C#, Node.js; pipelines with CI/CD")

    assert {"C++", "C#", "Node.js", "CI/CD"} <= set(skills)


@pytest.mark.unit
def test_extract_skills_avoids_substring_matches():
    assert "AI" not in extract_skills("Maintained a mail server")


@pytest.mark.unit
def test_extract_projects():
    projects = extract_projects(RESUME)

    assert any(p.startswith("an invoicing platform with Django") for p in projects)
    assert any("realtime dashboard" in p for p in projects)
    assert len(projects) <= 5
    assert all(len(p) <= 200 for p in projects)


@pytest.mark.unit
def test_extract_education():
    education = extract_education(RESUME)

    assert any("Bachelor of Science in Computer Science" in e for e in education)
    assert len(education) <= 3


@pytest.mark.unit
def test_experience_prefers_years_of_experience_sentence():
    experience = extract_experience(RESUME)

    assert experience.startswith("6 years of experience in building web platforms")


@pytest.mark.unit
def test_short_years_statement_is_synthesized():
    """A bare "5 years of experience" still yields a summary mentioning 5."""
    experience = extract_experience("Jane Doe\n5 years of experience\n")

    assert experience
    assert "5" in experience


@pytest.mark.unit
def test_experience_placeholder_when_nothing_found():
    assert extract_experience("Jane Doe\nhello world") == DEFAULT_EXPERIENCE


@pytest.mark.unit
def test_extract_basic_info_never_returns_nulls():
    data = extract_basic_info("")

    assert data.skills == []
    assert data.projects == []
    assert data.education == []
    assert data.experience == DEFAULT_EXPERIENCE
    assert data.summary == ""
