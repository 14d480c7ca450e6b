"""
Registration, login and token verification.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from loguru import logger
from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError

from shared.config import Settings
from shared.database import Database
from shared.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from shared.models import CamelModel, UserProfile

from ..dependencies import get_app_settings, get_current_user, get_db
from ..security import (
    check_credentials,
    create_access_token,
    hash_password,
    validate_password,
    verify_password,
)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_LOGIN = "Invalid email or password. Please check your credentials."


class RegisterRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


def _auth_response(message: str, user: UserProfile, settings: Settings) -> dict:
    return {
        "success": True,
        "message": message,
        "token": create_access_token(user.id or "", user.email, settings),
        "user": user.to_api(),
    }


@router.post("/register", status_code=201)
async def register(
    body: RegisterRequest,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    if not body.email or not body.password or not body.first_name or not body.last_name:
        raise ValidationError(
            "Missing required fields. Please provide email, password, first name, and last name."
        )
    email = check_credentials(body.email, body.password)
    if not validate_password(body.password):
        raise ValidationError("Password must be at least 6 characters long.")

    if await db.get_user_by_email(email) is not None:
        raise ConflictError("An account with this email already exists. Please log in instead.")

    profile = UserProfile(
        email=email,
        first_name=body.first_name.strip(),
        last_name=body.last_name.strip(),
    )
    doc = profile.model_dump(by_alias=True, exclude={"id"})
    doc["password"] = hash_password(body.password, settings.bcrypt_rounds)

    try:
        user_id = await db.insert_user(doc)
    except DuplicateKeyError as e:
        # Lost a race with a concurrent registration
        raise ConflictError(
            "An account with this email already exists. Please log in instead."
        ) from e

    user = profile.model_copy(update={"id": user_id})
    logger.info(f"Registered user {user_id}")
    return _auth_response("Account created successfully! Welcome to Career Coach.", user, settings)


@router.post("/login")
async def login(
    body: LoginRequest,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    email = check_credentials(body.email, body.password)

    user_doc = await db.get_user_by_email(email)
    if user_doc is None or not verify_password(body.password or "", user_doc.get("password", "")):
        raise AuthenticationError(INVALID_LOGIN)

    user = UserProfile.model_validate(user_doc)
    logger.info(f"User {user.id} logged in")
    return _auth_response("Login successful! Welcome back.", user, settings)


@router.get("/verify")
async def verify(user: UserProfile = Depends(get_current_user)):
    return {"success": True, "message": "Token is valid.", "user": user.to_api()}


@router.get("/me")
async def me(user: UserProfile = Depends(get_current_user)):
    return {"success": True, "message": "User retrieved successfully.", "user": user.to_api()}


@router.get("/profile/{user_id}")
async def public_profile(user_id: str, db: Database = Depends(get_db)):
    user_doc = await db.get_user(user_id)
    if user_doc is None:
        raise NotFoundError("User not found.")
    return {
        "success": True,
        "message": "User profile retrieved successfully.",
        "user": UserProfile.model_validate(user_doc).to_api(),
    }
