"""HTTP route modules, mounted under the ``/api`` prefix."""

from . import ai, auth, career, user

__all__ = ["ai", "auth", "career", "user"]
