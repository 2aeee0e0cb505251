"""API routes package."""

from . import ai, export, health, quotes, workflow

__all__ = ["ai", "export", "health", "quotes", "workflow"]
