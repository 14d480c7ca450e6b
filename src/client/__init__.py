"""
Client - async HTTP client for the Career Coach API.
"""

from .api_client import ApiError, ApiSession, CareerCoachClient

__all__ = ["ApiError", "ApiSession", "CareerCoachClient"]
