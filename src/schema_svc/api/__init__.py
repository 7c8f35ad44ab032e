"""HTTP boundary - FastAPI routes and response models."""

from .routes import configure, router

__all__ = ["configure", "router"]
