"""
Password hashing (bcrypt), JWT access tokens (PyJWT) and credential checks.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
import jwt

from shared.config import Settings, get_settings
from shared.errors import AuthenticationError, ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def validate_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_password(password: str) -> bool:
    return len(password) >= MIN_PASSWORD_LENGTH


def check_credentials(email: Optional[str], password: Optional[str]) -> str:
    """
    Validate login credentials, returning the normalized email.

    Raises:
        ValidationError: Missing credentials or invalid email format
    """
    if not email or not password:
        raise ValidationError(
            "Missing credentials. Please provide both email and password."
        )
    email = email.strip().lower()
    if not validate_email(email):
        raise ValidationError("Invalid email format. Please enter a valid email address.")
    return email


def create_access_token(
    user_id: str,
    email: str,
    settings: Optional[Settings] = None,
) -> str:
    """Create a signed JWT for a user."""
    settings = settings or get_settings()
    payload = {
        "userId": user_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(days=settings.jwt_expire_days),
    }
    return jwt.encode(
        payload,
        settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str, settings: Optional[Settings] = None) -> dict[str, Any]:
    """
    Verify a JWT and return its claims.

    Raises:
        AuthenticationError: Token is expired, malformed or badly signed
    """
    settings = settings or get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token has expired. Please log in again.") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid or expired token. Please log in again.") from e

    if not claims.get("userId"):
        raise AuthenticationError("Invalid token. Please log in again.")
    return claims
