"""Unit tests for password hashing, tokens and credential checks."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from api.security import (
    check_credentials,
    create_access_token,
    decode_access_token,
    hash_password,
    validate_email,
    validate_password,
    verify_password,
)
from shared.errors import AuthenticationError, ValidationError


@pytest.mark.unit
def test_password_round_trip():
    hashed = hash_password("s3cret!", rounds=4)

    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


@pytest.mark.unit
def test_verify_password_with_malformed_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


@pytest.mark.unit
def test_token_round_trip(settings):
    token = create_access_token("abc123", "dev@example.com", settings)

    claims = decode_access_token(token, settings)

    assert claims["userId"] == "abc123"
    assert claims["email"] == "dev@example.com"
    assert claims["exp"] > datetime.now(timezone.utc).timestamp() + 6 * 24 * 3600


@pytest.mark.unit
def test_expired_token_rejected(settings):
    token = jwt.encode(
        {"userId": "abc123", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(AuthenticationError, match="expired"):
        decode_access_token(token, settings)


@pytest.mark.unit
def test_token_with_wrong_signature_rejected(settings):
    token = jwt.encode(
        {"userId": "abc123"}, "another-secret-that-is-32-bytes-long", algorithm="HS256"
    )

    with pytest.raises(AuthenticationError):
        decode_access_token(token, settings)


@pytest.mark.unit
@pytest.mark.parametrize(
    "email, valid",
    [("dev@example.com", True), ("dev@example", False), ("dev example@x.io", False), ("", False)],
)
def test_validate_email(email, valid):
    assert validate_email(email) is valid


@pytest.mark.unit
def test_validate_password():
    assert validate_password("123456")
    assert not validate_password("12345")


@pytest.mark.unit
def test_check_credentials_normalizes_email():
    assert check_credentials("  Dev@Example.COM ", "pw") == "dev@example.com"

    with pytest.raises(ValidationError, match="Missing credentials"):
        check_credentials("dev@example.com", None)
    with pytest.raises(ValidationError, match="Invalid email format"):
        check_credentials("not-an-email", "pw")
