"""
API Service - HTTP surface for the career coach.

Exposes auth, career, user and AI endpoints under ``/api``.
"""

from .app import create_app

__all__ = ["create_app"]
