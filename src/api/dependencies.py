"""
FastAPI dependencies: settings, database, services and the current user.

Services are built per request from objects held on ``app.state`` so that
nothing request-scoped lives at module level.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from advisor import CareerAdvisor
from resume_parser import ResumeExtractor
from shared.config import Settings
from shared.database import Database
from shared.errors import AuthenticationError
from shared.llm import LLMClient
from shared.models import UserProfile

from .security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_llm(request: Request) -> LLMClient:
    return request.app.state.llm


def get_resume_extractor(
    llm: LLMClient = Depends(get_llm),
    settings: Settings = Depends(get_app_settings),
) -> ResumeExtractor:
    return ResumeExtractor(llm=llm, settings=settings)


def get_career_advisor(llm: LLMClient = Depends(get_llm)) -> CareerAdvisor:
    return CareerAdvisor(llm=llm)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> UserProfile:
    """
    Resolve the bearer token to a user.

    Raises:
        AuthenticationError: Missing/invalid token or unknown user
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required. Please log in.")

    claims = decode_access_token(credentials.credentials, settings)
    user_doc = await db.get_user(claims["userId"])
    if user_doc is None:
        raise AuthenticationError("Invalid token. User not found.")

    return UserProfile.model_validate(user_doc)
