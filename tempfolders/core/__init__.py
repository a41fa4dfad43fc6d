"""Core temporary folder management."""

from tempfolders.core.errors import (
    BasePathError,
    ConfigError,
    FolderCreationError,
    TemporaryFolderError,
)
from tempfolders.core.folder_manager import TemporaryFolderManager
from tempfolders.core.temporary_folder import TemporaryFolder

__all__ = [
    "TemporaryFolderManager",
    "TemporaryFolder",
    "TemporaryFolderError",
    "BasePathError",
    "FolderCreationError",
    "ConfigError",
]
