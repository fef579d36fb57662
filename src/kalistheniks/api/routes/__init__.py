"""API route modules."""

from . import auth, plans, sessions

__all__ = ["auth", "plans", "sessions"]
