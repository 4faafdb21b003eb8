"""
Estudar.Pro API package.

Provides the FastAPI application for the Estudar.Pro legal study platform.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
