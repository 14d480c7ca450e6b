"""
Shared fixtures: settings, an in-memory Database, a scripted LLM client and sample PDFs.
"""

import copy
import re
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest
from bson import ObjectId
from pydantic import SecretStr
from pymongo.errors import DuplicateKeyError

from shared.config import Settings
from shared.database import to_object_id
from shared.llm import LLMAttempt, LLMClient


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        mongodb_uri="mongodb://unused:27017",
        jwt_secret=SecretStr("test-secret-with-at-least-32-bytes!!"),
        bcrypt_rounds=4,
        openai_api_key=SecretStr("sk-test"),
        llm_models="model-a,model-b,model-c",
        log_format="pretty",
    )


class FakeDatabase:
    """In-memory stand-in implementing the Database methods used by the services."""

    def __init__(self) -> None:
        self.jobs: list[dict[str, Any]] = []
        self.users: dict[ObjectId, dict[str, Any]] = {}
        self.active_queries: list[dict[str, Any]] = []

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def ensure_indexes(self) -> None:
        pass

    # Jobs

    async def find_active_jobs(
        self,
        experience_levels: Optional[list[str]] = None,
        skills: Optional[list[str]] = None,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        self.active_queries.append(
            {"experience_levels": experience_levels, "skills": skills, "limit": limit}
        )
        found = [
            job
            for job in self.jobs
            if job.get("isActive", True)
            and (experience_levels is None or job.get("experience") in experience_levels)
            and (skills is None or set(job.get("skills", [])) & set(skills))
        ]
        return copy.deepcopy(found[:limit])

    async def list_jobs(
        self,
        page: int = 1,
        limit: int = 10,
        location: Optional[str] = None,
        experience: Optional[str] = None,
        skills: Optional[list[str]] = None,
    ) -> tuple[list[dict[str, Any]], int]:
        found = [
            job
            for job in self.jobs
            if job.get("isActive", True)
            and (not location or re.search(re.escape(location), job.get("location", ""), re.I))
            and (not experience or job.get("experience") == experience)
            and (not skills or set(job.get("skills", [])) & set(skills))
        ]
        found.sort(key=lambda j: j["postedDate"], reverse=True)
        start = (page - 1) * limit
        return copy.deepcopy(found[start : start + limit]), len(found)

    async def get_job(self, job_id: Any) -> Optional[dict[str, Any]]:
        oid = to_object_id(job_id)
        for job in self.jobs:
            if job["_id"] == oid:
                return copy.deepcopy(job)
        return None

    async def get_jobs_by_ids(self, job_ids: list[Any]) -> list[dict[str, Any]]:
        jobs = [await self.get_job(job_id) for job_id in job_ids]
        return [job for job in jobs if job is not None]

    async def count_skills(self, limit: int = 10) -> list[dict[str, Any]]:
        counts = Counter(
            skill for job in self.jobs if job.get("isActive", True) for skill in job["skills"]
        )
        return [{"_id": skill, "count": count} for skill, count in counts.most_common(limit)]

    async def insert_jobs(self, jobs: list[dict[str, Any]]) -> int:
        for job in jobs:
            job.setdefault("_id", ObjectId())
            self.jobs.append(job)
        return len(jobs)

    async def clear_jobs(self) -> int:
        deleted = len(self.jobs)
        self.jobs = []
        return deleted

    async def count_jobs_by_experience(self) -> dict[str, int]:
        return dict(Counter(job["experience"] for job in self.jobs))

    # Users

    async def insert_user(self, user: dict[str, Any]) -> str:
        if any(u["email"] == user["email"] for u in self.users.values()):
            raise DuplicateKeyError("duplicate email")
        oid = ObjectId()
        self.users[oid] = {**copy.deepcopy(user), "_id": oid}
        return str(oid)

    async def get_user(self, user_id: Any) -> Optional[dict[str, Any]]:
        user = self.users.get(to_object_id(user_id))
        return copy.deepcopy(user) if user else None

    async def get_user_by_email(self, email: str) -> Optional[dict[str, Any]]:
        email = email.strip().lower()
        for user in self.users.values():
            if user["email"] == email:
                return copy.deepcopy(user)
        return None

    async def update_user(self, user_id: Any, fields: dict[str, Any]) -> Optional[dict[str, Any]]:
        user = self.users.get(to_object_id(user_id))
        if user is None:
            return None
        user.update(copy.deepcopy(fields))
        return copy.deepcopy(user)

    async def add_to_user_set(self, user_id: Any, field: str, value: Any) -> Optional[dict[str, Any]]:
        user = self.users.get(to_object_id(user_id))
        if user is None:
            return None
        values = user.setdefault(field, [])
        if value not in values:
            values.append(value)
        return copy.deepcopy(user)

    async def pull_from_user_set(
        self, user_id: Any, field: str, value: Any
    ) -> Optional[dict[str, Any]]:
        user = self.users.get(to_object_id(user_id))
        if user is None:
            return None
        user[field] = [v for v in user.get(field, []) if v != value]
        return copy.deepcopy(user)


class ScriptedLLM(LLMClient):
    """LLMClient whose models reply from a script; None marks a failing model."""

    def __init__(
        self,
        settings: Settings,
        replies: dict[str, Optional[str]],
        configured: bool = True,
    ):
        super().__init__(settings=settings, models=list(replies))
        self.replies = replies
        self._configured = configured
        self.calls: list[str] = []

    @property
    def configured(self) -> bool:
        return self._configured

    async def attempt(self, model: str, messages: list[dict[str, str]]) -> LLMAttempt:
        self.calls.append(model)
        reply = self.replies[model]
        if reply is None:
            return LLMAttempt(model=model, error=f"{model} is unavailable")
        return LLMAttempt(model=model, text=reply)


def build_pdf(text: str = "") -> bytes:
    """A single-page PDF that draws ``text`` in Helvetica, or nothing when empty."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = b"%PDF-1.4\n"
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    # Byte offsets must be exact for the cross-reference table
    xref_at = len(out)
    out += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_at,
    )
    return out


def make_job(
    title: str = "Developer",
    skills: Optional[list[str]] = None,
    experience: str = "mid",
    description: str = "",
    posted_days_ago: int = 0,
    is_active: bool = True,
    **extra: Any,
) -> dict[str, Any]:
    """A job document as stored in the jobs collection."""
    doc = {
        "_id": ObjectId(),
        "title": title,
        "company": "Acme",
        "location": "Remote",
        "skills": skills if skills is not None else [],
        "experience": experience,
        "type": "full-time",
        "description": description,
        "postedDate": datetime.now(timezone.utc) - timedelta(days=posted_days_ago),
        "isActive": is_active,
    }
    doc.update(extra)
    return doc


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def scripted_llm(settings):
    def build(replies: dict[str, Optional[str]], configured: bool = True) -> ScriptedLLM:
        return ScriptedLLM(settings, replies, configured=configured)

    return build


@pytest.fixture
def job_factory():
    return make_job


@pytest.fixture
def pdf_factory():
    return build_pdf
