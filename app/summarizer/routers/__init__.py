"""
Routers package for FastAPI endpoints.

- summarize: POST /summarize
"""

from . import summarize

__all__ = ["summarize"]
