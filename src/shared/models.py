"""
Pydantic models for users, job postings, match results and LLM outputs.

Documents are stored and serialized with camelCase keys (``firstName``,
``isActive``, ``postedDate``); attributes are snake_case.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Mongo ObjectIds are exposed as plain strings
ObjectIdStr = Annotated[str, BeforeValidator(str)]


class ExperienceLevel(str, Enum):
    """Experience tier, ordered from most junior to most senior."""

    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"


EXPERIENCE_ORDER = ["entry", "mid", "senior", "executive"]


def experience_rank(level: Any) -> Optional[int]:
    """Ordinal index of an experience tier, None when unrecognized."""
    value = level.value if isinstance(level, ExperienceLevel) else level
    try:
        return EXPERIENCE_ORDER.index(value)
    except ValueError:
        return None


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class CamelModel(BaseModel):
    """Base model reading and writing camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )

    def to_api(self, **kwargs: Any) -> dict[str, Any]:
        """Dump to a JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


StrList = Annotated[list[str], BeforeValidator(_none_to_list)]


class Salary(CamelModel):
    min: int = 0
    max: int = 0
    currency: str = "USD"


class JobPosting(CamelModel):
    """A job posting as stored in the ``jobs`` collection."""

    id: Optional[ObjectIdStr] = Field(
        default=None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="id",
    )
    title: str
    company: str
    location: str = ""
    salary: Optional[Salary] = None
    skills: StrList = Field(default_factory=list)
    experience: ExperienceLevel
    type: JobType = JobType.FULL_TIME
    description: str = ""
    requirements: StrList = Field(default_factory=list)
    benefits: StrList = Field(default_factory=list)
    posted_date: datetime = Field(default_factory=_utcnow)
    application_url: str = ""
    is_active: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def days_since_posted(self) -> int:
        """Whole days elapsed since the posting date ("posted N days ago")."""
        posted = self.posted_date
        if posted.tzinfo is None:
            posted = posted.replace(tzinfo=timezone.utc)
        return max(0, (_utcnow() - posted).days)

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to a document for database insert."""
        return self.model_dump(by_alias=True, exclude={"id", "days_since_posted"})


class MatchResult(JobPosting):
    """A job posting annotated with its match percentage for one user."""

    match_percentage: int = Field(ge=0, le=100)


class UserProfile(CamelModel):
    """A registered user and the profile data used for matching."""

    id: Optional[ObjectIdStr] = Field(
        default=None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="id",
    )
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    title: str = "Developer"
    bio: str = Field(default="", max_length=500)
    location: str = ""
    profile_picture: str = ""
    skills: StrList = Field(default_factory=list)
    career_goals: StrList = Field(default_factory=list)
    projects: StrList = Field(default_factory=list)
    education: StrList = Field(default_factory=list)
    experience: ExperienceLevel = ExperienceLevel.ENTRY
    experience_summary: str = ""
    saved_jobs: Annotated[list[ObjectIdStr], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )
    applied_jobs: Annotated[list[ObjectIdStr], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class ProfileUpdate(CamelModel):
    """Partial profile update; fields that were omitted or sent as null are left unchanged."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    location: Optional[str] = None
    profile_picture: Optional[str] = None
    skills: Optional[list[str]] = None
    career_goals: Optional[list[str]] = None
    projects: Optional[list[str]] = None
    education: Optional[list[str]] = None
    experience: Optional[ExperienceLevel] = None
    experience_summary: Optional[str] = None

    def to_update_dict(self) -> dict[str, Any]:
        """Non-null fields set by the client, with camelCase keys."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class ExtractedResumeData(CamelModel):
    """Structured data extracted from a resume. Never has null fields."""

    skills: StrList = Field(default_factory=list)
    experience: str = ""
    projects: StrList = Field(default_factory=list)
    education: StrList = Field(default_factory=list)
    summary: str = ""

    @field_validator("experience", "summary", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class CareerAdvice(CamelModel):
    """Normalized career advice; the arrays are always present."""

    advice: str = ""
    recommended_roles: list[Any] = Field(default_factory=list)
    skills_to_develop: list[Any] = Field(default_factory=list)
    learning_paths: list[Any] = Field(default_factory=list)


class TrendingSkill(CamelModel):
    skill: str
    demand: str
    growth: str  # mock figure, see trending_skills()
