"""
Deterministic resume extraction used when the LLM is unavailable.

Pulls skills from a fixed vocabulary and projects, education and an
experience summary from keyword patterns.
"""

import re

from loguru import logger

from shared.models import ExtractedResumeData

SKILL_KEYWORDS = [
    # Programming languages
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "PHP", "Ruby",
    "Go", "Rust", "Swift", "Kotlin",
    # Frontend
    "React", "Angular", "Vue", "Next.js", "HTML", "CSS", "SASS", "SCSS",
    "Tailwind", "Bootstrap", "jQuery",
    # Backend
    "Node.js", "Express", "Django", "Flask", "Spring", "Laravel", "ASP.NET",
    "FastAPI",
    # Databases
    "SQL", "MongoDB", "PostgreSQL", "MySQL", "Redis", "Firebase", "DynamoDB",
    "Oracle",
    # Cloud & DevOps
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Jenkins", "CI/CD",
    "Terraform",
    # Tools
    "Git", "GitHub", "GitLab", "Agile", "Scrum", "JIRA", "Confluence",
    # Technologies
    "Machine Learning", "AI", "Data Science", "TensorFlow", "PyTorch",
    "REST API", "GraphQL", "WebSocket", "Microservices", "Serverless",
    "Blockchain", "Solidity",
]

MAX_PROJECTS = 5
MAX_EDUCATION = 3
MATCHES_PER_PATTERN = 5

PROJECT_PATTERNS = [
    re.compile(r"\b(?:projects?|portfolio)\b[^\n]{0,300}", re.IGNORECASE),
    re.compile(r"\b(?:built|developed|created|designed)\b[^\n]{0,300}", re.IGNORECASE),
]
PROJECT_KEYWORD = re.compile(
    r"^(?:projects?|portfolio|built|developed|created|designed)[:\s\-]*",
    re.IGNORECASE,
)

EDUCATION_PATTERNS = [
    re.compile(
        r"\b(?:bachelors?|masters?|ph\.?d|doctorate|degree|b\.?sc?|m\.?sc?)\b[^\n]{0,200}",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:university|college|institute)\b[^\n]{0,150}", re.IGNORECASE),
]

# Checked in order; the first match longer than 50 characters wins
EXPERIENCE_PATTERNS = [
    re.compile(
        r"(?:\d+\+?\s*)?\b(?:years? of|experience in|worked as|role as)\b[\s\S]{0,300}",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:experience|work history|employment)\b[\s\S]{0,300}", re.IGNORECASE),
]
YEARS_OF_EXPERIENCE = re.compile(
    r"(\d+)\s*\+?\s*(?:years?|yrs?)\s*(?:of\s*)?(?:experience|exp)", re.IGNORECASE
)
DEFAULT_EXPERIENCE = "Professional experience extracted from resume"


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def extract_skills(text: str) -> list[str]:
    """Vocabulary skills mentioned as whole words, case-insensitive."""
    skills = []
    for skill in SKILL_KEYWORDS:
        pattern = r"(?<!\w)" + re.escape(skill) + r"(?!\w)"
        if re.search(pattern, text, re.IGNORECASE):
            skills.append(skill)
    return _dedupe(skills)


def extract_projects(text: str) -> list[str]:
    projects = []
    for pattern in PROJECT_PATTERNS:
        for match in list(pattern.finditer(text))[:MATCHES_PER_PATTERN]:
            cleaned = _collapse(PROJECT_KEYWORD.sub("", match.group(0).strip()))
            if 30 < len(cleaned) < 300:
                projects.append(cleaned[:200])
    return _dedupe(projects)[:MAX_PROJECTS]


def extract_education(text: str) -> list[str]:
    education = []
    for pattern in EDUCATION_PATTERNS:
        for match in list(pattern.finditer(text))[:MAX_EDUCATION]:
            cleaned = _collapse(match.group(0))
            if 10 < len(cleaned) < 200:
                education.append(cleaned[:150])
    return _dedupe(education)[:MAX_EDUCATION]


def extract_experience(text: str) -> str:
    """Experience summary, a synthesized "N years" line, or a placeholder."""
    for pattern in EXPERIENCE_PATTERNS:
        match = pattern.search(text)
        if match:
            summary = _collapse(match.group(0))[:300]
            if len(summary) > 50:
                return summary

    years = YEARS_OF_EXPERIENCE.search(text)
    if years:
        return f"{years.group(1)} years of professional experience"

    return DEFAULT_EXPERIENCE


def extract_basic_info(resume_text: str) -> ExtractedResumeData:
    """Extract structured resume data with regex and keyword heuristics."""
    logger.info("Using fallback resume extraction")

    result = ExtractedResumeData(
        skills=extract_skills(resume_text),
        experience=extract_experience(resume_text),
        projects=extract_projects(resume_text),
        education=extract_education(resume_text),
        summary="",
    )

    logger.info(
        f"Fallback extraction: {len(result.skills)} skills, "
        f"{len(result.projects)} projects, {len(result.education)} education entries"
    )
    return result
