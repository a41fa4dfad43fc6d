"""Data models for temporary folder management."""

from .config import FolderManagerConfig
from .schemas import CleanupResult

__all__ = ["FolderManagerConfig", "CleanupResult"]
