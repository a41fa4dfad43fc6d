"""ロックファイルで保護された一時フォルダ."""

import logging
import shutil
import threading
import uuid
import weakref
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Optional

from tempfolders.core import file_lock
from tempfolders.core.errors import FolderCreationError
from tempfolders.core.naming import folder_name, lock_file_name

if TYPE_CHECKING:
    from tempfolders.core.folder_manager import TemporaryFolderManager


logger = logging.getLogger(__name__)


class TemporaryFolder:
    """
    一時フォルダ1つと、その使用中を示すロックファイルを管理するクラス.
    
    ロックファイルはフォルダの存続期間中ずっと排他ロックしたまま開いておく。
    このハンドルが、他プロセスから見て「使用中」であることを示す唯一の証拠になる。
    
    インスタンスはTemporaryFolderManager.create_temporary_folder()からのみ生成する。
    withブロックで使うと、ブロック終了時に必ず解放される。
    """
    
    def __init__(self, manager: "TemporaryFolderManager", base_path: Path):
        """
        Args:
            manager: 所有するマネージャー（弱参照で保持）
            base_path: ベースディレクトリの絶対パス
            
        Raises:
            FolderCreationError: ロックファイルまたはフォルダの作成に失敗した場合
        """
        self._manager_ref = weakref.ref(manager)
        self._id = uuid.uuid4()
        self._folder_path = base_path / folder_name(self._id)
        self._lock_file_path = base_path / lock_file_name(self._id)
        self._released = False
        self._disposing = False
        self._dispose_lock = threading.Lock()
        self._lock_file: Optional[BinaryIO] = None
        
        # ロックファイルを先に確保してからフォルダを作成する
        try:
            self._lock_file = file_lock.create_exclusive(self._lock_file_path)
        except OSError as e:
            raise FolderCreationError(
                f"Failed to create lock file: {self._lock_file_path}"
            ) from e
        
        try:
            self._folder_path.mkdir()
        except OSError as e:
            file_lock.release(self._lock_file)
            self._lock_file_path.unlink(missing_ok=True)
            raise FolderCreationError(
                f"Failed to create temporary folder: {self._folder_path}"
            ) from e
        
        logger.debug(f"Created temporary folder: {self._folder_path}")
    
    @property
    def id(self) -> uuid.UUID:
        """フォルダのID."""
        return self._id
    
    @property
    def folder_path(self) -> Path:
        """一時フォルダの絶対パス."""
        return self._folder_path
    
    @property
    def lock_file_path(self) -> Path:
        """ロックファイルの絶対パス."""
        return self._lock_file_path
    
    @property
    def released(self) -> bool:
        """解放済みかどうか."""
        return self._released
    
    def dispose(self) -> None:
        """
        フォルダとロックファイルを削除する.
        
        処理順:
        1. フォルダを再帰的に削除
        2. ロックファイルのハンドルを閉じる
        3. ロックファイルを削除
        4. マネージャーの管理対象から外す
        
        各ステップの失敗は記録するだけで、呼び出し元には送出しない。
        2回目以降の呼び出しは何もしない（複数スレッドから同時に呼ばれても1回だけ実行）。
        """
        with self._dispose_lock:
            if self._disposing:
                return
            self._disposing = True
        
        manager = self._manager_ref()
        
        try:
            shutil.rmtree(self._folder_path)
        except OSError as e:
            self._report_error(manager, self._folder_path, e)
        
        try:
            if self._lock_file is not None:
                file_lock.release(self._lock_file)
        except OSError as e:
            self._report_error(manager, self._lock_file_path, e)
        
        try:
            self._lock_file_path.unlink()
        except OSError as e:
            self._report_error(manager, self._lock_file_path, e)
        
        self._released = True
        logger.debug(f"Released temporary folder: {self._folder_path}")
        
        if manager is not None:
            manager._remove_folder(self)
    
    def _report_error(
        self,
        manager: Optional["TemporaryFolderManager"],
        path: Path,
        error: BaseException,
    ) -> None:
        if manager is not None:
            manager._report_error("dispose", path, error)
        else:
            logger.warning(f"Failed to clean up {path}: {error}")
    
    def __enter__(self) -> "TemporaryFolder":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
    
    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return f"<TemporaryFolder {str(self._folder_path)!r} ({state})>"
