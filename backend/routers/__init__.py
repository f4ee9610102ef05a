"""Routers module - FastAPI route handlers"""

from . import agent, config, diff

__all__ = ["agent", "config", "diff"]
