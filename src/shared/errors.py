"""Error taxonomy shared by the services and mapped to HTTP responses by the API."""

from typing import Optional


class CareerCoachError(Exception):
    """
    Base error with a client-facing message and an HTTP status code.

    Attributes:
        message: Stable, user-facing description
        status_code: HTTP status the API responds with
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(CareerCoachError):
    """Missing or malformed input."""

    status_code = 400


class AuthenticationError(CareerCoachError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class NotFoundError(CareerCoachError):
    status_code = 404


class ConflictError(CareerCoachError):
    """Resource already exists (e.g. duplicate registration)."""

    status_code = 409


class UpstreamError(CareerCoachError):
    """An external dependency (LLM) is unavailable or misconfigured."""

    status_code = 500
