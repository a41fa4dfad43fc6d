"""Process-scoped temporary folders with cross-process orphan cleanup."""

from tempfolders.core import (
    BasePathError,
    ConfigError,
    FolderCreationError,
    TemporaryFolder,
    TemporaryFolderError,
    TemporaryFolderManager,
)
from tempfolders.models import CleanupResult, FolderManagerConfig


def get_default_manager() -> TemporaryFolderManager:
    """プロセス共通の既定マネージャーを返す."""
    return TemporaryFolderManager.default()


__all__ = [
    "TemporaryFolderManager",
    "TemporaryFolder",
    "TemporaryFolderError",
    "BasePathError",
    "FolderCreationError",
    "ConfigError",
    "CleanupResult",
    "FolderManagerConfig",
    "get_default_manager",
]
