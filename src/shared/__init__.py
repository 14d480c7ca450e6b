# Shared configuration, storage, models and LLM access for every service
from .config import Settings, get_settings
from .database import Database, to_object_id
from .errors import (
    AuthenticationError,
    CareerCoachError,
    ConflictError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from .llm import AllModelsFailedError, LLMClient, LLMNotConfiguredError
from .logging_config import setup_logging
from .models import (
    CareerAdvice,
    ExperienceLevel,
    ExtractedResumeData,
    JobPosting,
    MatchResult,
    UserProfile,
)

__all__ = [
    "Settings",
    "get_settings",
    "Database",
    "to_object_id",
    "AuthenticationError",
    "CareerCoachError",
    "ConflictError",
    "NotFoundError",
    "UpstreamError",
    "ValidationError",
    "AllModelsFailedError",
    "LLMClient",
    "LLMNotConfiguredError",
    "setup_logging",
    "CareerAdvice",
    "ExperienceLevel",
    "ExtractedResumeData",
    "JobPosting",
    "MatchResult",
    "UserProfile",
]
