"""一時フォルダとロックファイルの命名規則およびパス解決."""

import os
import re
import tempfile
import uuid
from pathlib import Path
from typing import Optional, Union


# 予約済みのフォルダ名プレフィックスとロックファイルのサフィックス
FOLDER_PREFIX = "[TMPDIR] "
LOCK_SUFFIX = ".lock"

# 既定のベースディレクトリ名（システム一時ディレクトリ配下）
DEFAULT_FOLDER_NAME = "Temporary Folders"

# "[TMPDIR] " + 8-4-4-4-12形式のUUID
FOLDER_NAME_PATTERN = re.compile(
    r"^\[TMPDIR\] (?P<id>[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}"
    r"-[0-9a-fA-F]{4}-[0-9a-fA-F]{12})$"
)


def folder_name(folder_id: uuid.UUID) -> str:
    """IDから一時フォルダ名を生成する."""
    return f"{FOLDER_PREFIX}{folder_id}"


def lock_file_name(folder_id: uuid.UUID) -> str:
    """IDからロックファイル名を生成する."""
    return folder_name(folder_id) + LOCK_SUFFIX


def parse_folder_name(name: str) -> Optional[uuid.UUID]:
    """
    フォルダ名が予約パターンに一致する場合、そのIDを返す.
    
    Args:
        name: ディレクトリ名（パスではなく名前のみ）
        
    Returns:
        一致した場合はUUID、一致しない場合はNone
    """
    match = FOLDER_NAME_PATTERN.match(name)
    if not match:
        return None
    return uuid.UUID(match.group("id"))


def lock_file_path_for(folder_path: Path) -> Path:
    """フォルダパスに対応するロックファイルのパスを返す."""
    return folder_path.with_name(folder_path.name + LOCK_SUFFIX)


def default_base_path() -> Path:
    """システム一時ディレクトリ配下の既定ベースディレクトリを返す."""
    return Path(tempfile.gettempdir()) / DEFAULT_FOLDER_NAME


def resolve_base_path(path: Optional[Union[str, Path]] = None) -> Path:
    """
    ベースディレクトリのパスを解決する.
    
    環境変数参照を展開し、絶対パスに変換する。
    pathが指定されない場合はシステム一時ディレクトリ配下の既定パスを使う。
    
    Args:
        path: ベースディレクトリのパス（環境変数参照を含んでもよい）
        
    Returns:
        絶対パス
    """
    if path is None:
        return default_base_path().absolute()
    expanded = os.path.expandvars(str(path))
    return Path(os.path.abspath(expanded))
