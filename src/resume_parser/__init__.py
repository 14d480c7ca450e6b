"""
Resume Parser - turns uploaded PDF resumes into structured profile data.

Uses the LLM when available and keyword heuristics otherwise.
"""

from .extractor import ResumeExtractor
from .fallback import extract_basic_info
from .merge import merge_resume_into_profile
from .pdf import extract_text_from_pdf, validate_pdf_upload

__all__ = [
    "ResumeExtractor",
    "extract_basic_info",
    "extract_text_from_pdf",
    "merge_resume_into_profile",
    "validate_pdf_upload",
]
