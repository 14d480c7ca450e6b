"""
Resume extraction: PDF text -> LLM structured extraction -> regex fallback.
"""

from typing import Any, Optional

from loguru import logger

from shared.config import Settings, get_settings
from shared.errors import UpstreamError
from shared.llm import LLMClient, parse_json_object
from shared.models import ExtractedResumeData

from .fallback import extract_basic_info
from .pdf import extract_text_from_pdf, validate_pdf_upload

SYSTEM_PROMPT = """You are an expert resume parser. You extract structured data from resume text.

IMPORTANT: Respond ONLY with valid JSON in the exact format specified. No markdown code blocks, no explanations."""

DEFAULT_EXPERIENCE = "Experience extracted from resume"


def build_prompt(resume_text: str, max_chars: int = 8000) -> str:
    return f"""Extract the following information from this resume text.

Resume Text:
{resume_text[:max_chars]}

Return JSON in this EXACT format (all fields are required):
{{
  "skills": ["JavaScript", "React", "Node.js", "Python", "MongoDB"],
  "experience": "3 years of full-stack development experience working with React, Node.js, and MongoDB. Led multiple projects and collaborated with cross-functional teams.",
  "projects": ["E-commerce platform built with React and Node.js", "Real-time chat application using WebSockets"],
  "education": ["Bachelor of Science in Computer Science"],
  "summary": "Experienced software developer with expertise in modern web technologies"
}}

Rules:
- Extract ALL technical skills mentioned (languages, frameworks, tools, technologies)
- Summarize work experience in 2-3 sentences
- Extract ALL projects mentioned (name and brief description)
- Extract education degrees and certifications
- Extract the professional summary if available"""


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def normalize_extracted(data: dict[str, Any]) -> ExtractedResumeData:
    """Coerce an LLM reply into a fully populated ExtractedResumeData."""
    experience = data.get("experience")
    summary = data.get("summary")
    return ExtractedResumeData(
        skills=list(dict.fromkeys(_string_list(data.get("skills")))),
        experience=str(experience) if experience else DEFAULT_EXPERIENCE,
        projects=_string_list(data.get("projects")),
        education=_string_list(data.get("education")),
        summary=str(summary) if summary else "",
    )


class ResumeExtractor:
    """Extracts structured resume data, degrading to regex heuristics."""

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.llm = llm or LLMClient(settings=self.settings)

    async def extract_from_text(self, resume_text: str) -> tuple[ExtractedResumeData, bool]:
        """
        Extract structured data from resume text.

        Returns:
            Tuple of (extracted data, whether the LLM path succeeded)
        """
        logger.info(f"Parsing resume text ({len(resume_text)} chars)")
        prompt = build_prompt(resume_text, self.settings.resume_prompt_chars)

        try:
            completion = await self.llm.complete(prompt, system=SYSTEM_PROMPT)
        except UpstreamError as e:
            logger.warning(f"AI resume parsing unavailable, using fallback: {e}")
            return extract_basic_info(resume_text), False

        try:
            data = parse_json_object(completion.text)
        except ValueError as e:
            logger.warning(f"Failed to parse AI resume response: {e}")
            logger.debug(f"Raw AI response: {completion.text[:1000]}")
            return extract_basic_info(resume_text), False

        result = normalize_extracted(data)
        logger.info(
            f"AI extracted {len(result.skills)} skills and "
            f"{len(result.projects)} projects with {completion.model}"
        )
        return result, True

    async def extract_from_upload(
        self,
        content: Optional[bytes],
        content_type: Optional[str],
        filename: Optional[str] = None,
    ) -> tuple[ExtractedResumeData, bool]:
        """
        Validate an uploaded PDF, read its text and extract structured data.

        Raises:
            ValidationError: Invalid upload or no readable text
        """
        pdf_bytes = validate_pdf_upload(
            content,
            content_type,
            filename=filename,
            max_bytes=self.settings.resume_max_bytes,
        )
        text = extract_text_from_pdf(pdf_bytes)
        return await self.extract_from_text(text)
