"""File storage provider."""

from .base import DataSource, Resource, ResourceData
from .registry import Provider
from .waiters import WaitPolicy

__all__ = ["DataSource", "Provider", "Resource", "ResourceData", "WaitPolicy"]
