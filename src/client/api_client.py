"""
Async HTTP client for the Career Coach API.

The auth state is an explicit ``ApiSession`` value: login/register return a
new session, logout returns an anonymous one, and every call takes the
session it should act as.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

import httpx
from loguru import logger


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}")


@dataclass(frozen=True)
class ApiSession:
    base_url: str = "http://localhost:5000/api"
    token: Optional[str] = None
    user: dict[str, Any] = field(default_factory=dict)

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    def headers(self) -> dict[str, str]:
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


class CareerCoachClient:
    """Thin wrapper over the REST endpoints."""

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self.transport)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "CareerCoachClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(
        self,
        session: ApiSession,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        client = await self._get_client()
        url = f"{session.base_url.rstrip('/')}{path}"
        response = await client.request(method, url, headers=session.headers(), **kwargs)

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text}

        if response.is_error:
            message = payload.get("message") or response.reason_phrase
            logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message)
        return payload

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    async def register(
        self,
        session: ApiSession,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> ApiSession:
        data = await self._request(
            session,
            "POST",
            "/auth/register",
            json={
                "email": email,
                "password": password,
                "firstName": first_name,
                "lastName": last_name,
            },
        )
        return replace(session, token=data["token"], user=data["user"])

    async def login(self, session: ApiSession, email: str, password: str) -> ApiSession:
        data = await self._request(
            session, "POST", "/auth/login", json={"email": email, "password": password}
        )
        return replace(session, token=data["token"], user=data["user"])

    def logout(self, session: ApiSession) -> ApiSession:
        return ApiSession(base_url=session.base_url)

    async def current_user(self, session: ApiSession) -> dict[str, Any]:
        data = await self._request(session, "GET", "/user/me")
        return data["user"]

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    async def update_profile(self, session: ApiSession, **fields: Any) -> ApiSession:
        """Update profile fields (camelCase keys), returning the refreshed session."""
        data = await self._request(session, "PUT", "/user/profile", json=fields)
        return replace(session, user=data["user"])

    async def add_skill(self, session: ApiSession, skill: str) -> list[str]:
        data = await self._request(session, "POST", "/user/skills", json={"skill": skill})
        return data["skills"]

    async def remove_skill(self, session: ApiSession, skill: str) -> list[str]:
        data = await self._request(session, "DELETE", "/user/skills", json={"skill": skill})
        return data["skills"]

    async def save_job(self, session: ApiSession, job_id: str) -> list[str]:
        data = await self._request(session, "POST", "/user/save-job", json={"jobId": job_id})
        return data["savedJobs"]

    async def unsave_job(self, session: ApiSession, job_id: str) -> list[str]:
        data = await self._request(session, "DELETE", "/user/saved-job", json={"jobId": job_id})
        return data["savedJobs"]

    async def apply_job(self, session: ApiSession, job_id: str) -> list[str]:
        data = await self._request(session, "POST", "/user/apply-job", json={"jobId": job_id})
        return data["appliedJobs"]

    async def saved_jobs(self, session: ApiSession) -> list[dict[str, Any]]:
        data = await self._request(session, "GET", "/user/saved-jobs")
        return data["savedJobs"]

    async def applied_jobs(self, session: ApiSession) -> list[dict[str, Any]]:
        data = await self._request(session, "GET", "/user/applied-jobs")
        return data["appliedJobs"]

    async def upload_resume(
        self,
        session: ApiSession,
        content: bytes,
        filename: str = "resume.pdf",
    ) -> dict[str, Any]:
        data = await self._request(
            session,
            "POST",
            "/user/upload-resume",
            files={"resume": (filename, content, "application/pdf")},
        )
        return data["data"]

    async def apply_resume(self, session: ApiSession, extracted: dict[str, Any]) -> ApiSession:
        data = await self._request(session, "POST", "/user/apply-resume", json=extracted)
        return replace(session, user=data["user"])

    # -------------------------------------------------------------------------
    # Career
    # -------------------------------------------------------------------------

    async def recommendations(self, session: ApiSession) -> list[dict[str, Any]]:
        data = await self._request(session, "GET", "/career/recommendations")
        return data["recommendations"]

    async def list_jobs(
        self,
        session: ApiSession,
        page: int = 1,
        limit: int = 10,
        location: Optional[str] = None,
        experience: Optional[str] = None,
        skills: Optional[list[str]] = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if location:
            params["location"] = location
        if experience:
            params["experience"] = experience
        if skills:
            params["skills"] = skills
        return await self._request(session, "GET", "/career/jobs", params=params)

    async def get_job(self, session: ApiSession, job_id: str) -> dict[str, Any]:
        data = await self._request(session, "GET", f"/career/jobs/{job_id}")
        return data["job"]

    async def trending_skills(self, session: ApiSession) -> list[dict[str, Any]]:
        data = await self._request(session, "GET", "/career/trending-skills")
        return data["trendingSkills"]

    async def career_advice(
        self,
        session: ApiSession,
        skills: str,
        experience: str,
        goals: str,
    ) -> dict[str, Any]:
        return await self._request(
            session,
            "POST",
            "/ai/recommend",
            json={"skills": skills, "experience": experience, "goals": goals},
        )
