"""一時フォルダの生成・追跡と、孤立フォルダの回収."""

import logging
import shutil
import threading
from pathlib import Path
from typing import Callable, ClassVar, List, Optional, Union

from tempfolders.core import file_lock
from tempfolders.core.errors import BasePathError
from tempfolders.core.naming import lock_file_path_for, parse_folder_name, resolve_base_path
from tempfolders.core.temporary_folder import TemporaryFolder
from tempfolders.models.config import FolderManagerConfig
from tempfolders.models.schemas import CleanupResult


logger = logging.getLogger(__name__)

# (操作名, 対象パス, 例外) を受け取る観測用コールバック
ErrorHook = Callable[[str, Path, BaseException], None]


class TemporaryFolderManager:
    """
    ベースディレクトリ配下の一時フォルダを管理するクラス.
    
    主な責務:
    - 一意な名前の一時フォルダの生成と追跡
    - 追跡中フォルダの一括解放
    - 起動時の孤立フォルダ（所有プロセスが解放せずに終了したもの）の回収
    
    同じベースディレクトリを共有する複数のマネージャー（別プロセスを含む）は、
    ロックファイルの排他ロックのみを通じて協調する。
    """
    
    _default: ClassVar[Optional["TemporaryFolderManager"]] = None
    _default_lock: ClassVar[threading.Lock] = threading.Lock()
    
    def __init__(
        self,
        base_path: Optional[Union[str, Path]] = None,
        on_error: Optional[ErrorHook] = None,
    ):
        """
        Args:
            base_path: ベースディレクトリのパス（環境変数参照を含んでもよい）
                       デフォルト: <システム一時ディレクトリ>/Temporary Folders
            on_error: 解放・回収時に握りつぶしたエラーを通知するコールバック
            
        Raises:
            BasePathError: ベースディレクトリの解決または作成に失敗した場合
        """
        try:
            self._base_path = resolve_base_path(base_path)
            self._base_path.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as e:
            raise BasePathError(
                f"Failed to prepare base directory: {base_path}"
            ) from e
        
        self._on_error = on_error
        self._folders: List[TemporaryFolder] = []
        self._lock = threading.RLock()
        
        logger.info(f"Temporary folder manager started: {self._base_path}")
        
        # 呼び出し元に渡す前に孤立フォルダを回収しておく
        self.cleanup_orphaned_folders()
    
    @classmethod
    def default(cls) -> "TemporaryFolderManager":
        """プロセス共通の既定マネージャーを返す（初回アクセス時に生成）."""
        if cls._default is None:
            with cls._default_lock:
                if cls._default is None:
                    cls._default = cls()
        return cls._default
    
    @classmethod
    def from_config(
        cls,
        config: FolderManagerConfig,
        on_error: Optional[ErrorHook] = None,
    ) -> "TemporaryFolderManager":
        """設定オブジェクトからマネージャーを生成する."""
        return cls(base_path=config.base_path, on_error=on_error)
    
    @property
    def base_path(self) -> Path:
        """ベースディレクトリの絶対パス."""
        return self._base_path
    
    @property
    def folders(self) -> List[TemporaryFolder]:
        """追跡中の一時フォルダのスナップショット."""
        with self._lock:
            return list(self._folders)
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._folders)
    
    def create_temporary_folder(self) -> TemporaryFolder:
        """
        新しい一時フォルダを作成する.
        
        Returns:
            TemporaryFolder: 作成済みでロックファイルを保持した一時フォルダ
            
        Raises:
            FolderCreationError: ロックファイルまたはフォルダの作成に失敗した場合
        """
        with self._lock:
            folder = TemporaryFolder(self, self._base_path)
            self._folders.append(folder)
            return folder
    
    def dispose(self) -> None:
        """追跡中の一時フォルダをすべて解放する（2回目以降は何もしない）."""
        with self._lock:
            for folder in list(self._folders):
                folder.dispose()
            self._folders.clear()
    
    def _remove_folder(self, folder: TemporaryFolder) -> None:
        """解放されたフォルダを追跡対象から外す（TemporaryFolderから呼ばれる）."""
        with self._lock:
            for i, tracked in enumerate(self._folders):
                if tracked is folder:
                    del self._folders[i]
                    break
    
    def cleanup_orphaned_folders(self) -> CleanupResult:
        """
        ベースディレクトリ内の孤立フォルダを回収する.
        
        処理フロー:
        1. ベースディレクトリ直下のディレクトリを列挙
        2. 予約パターン "[TMPDIR] <uuid>" に一致しないものは無視
        3. 対応するロックファイルが存在し、かつ排他保持されていればスキップ
        4. それ以外はフォルダを再帰削除し、ロックファイルを削除
        
        削除の失敗はエントリ単位で握りつぶし、次のエントリに進む。
        ベースディレクトリ自体の読み取りエラーも握りつぶす。
        
        Note:
            マネージャーのロックは取得しない。構築時に一度だけ実行される前提。
            確認から削除までの間に他プロセスがロックを取得する可能性は残る。
        
        Returns:
            CleanupResult: 回収・スキップ・失敗したディレクトリの一覧
        """
        result = CleanupResult(base_path=str(self._base_path))
        
        try:
            entries = sorted(self._base_path.iterdir())
        except OSError as e:
            self._report_error("cleanup", self._base_path, e)
            return result
        
        for directory_path in entries:
            if parse_folder_name(directory_path.name) is None:
                continue
            
            try:
                if not directory_path.is_dir():
                    continue
                
                lock_path = lock_file_path_for(directory_path)
                if lock_path.exists() and not file_lock.is_lock_free(lock_path):
                    logger.debug(f"Skipping folder in use: {directory_path}")
                    result.skipped.append(str(directory_path))
                    continue
                
                shutil.rmtree(directory_path)
                lock_path.unlink(missing_ok=True)
                logger.info(f"Removed orphaned temporary folder: {directory_path}")
                result.removed.append(str(directory_path))
            except OSError as e:
                self._report_error("cleanup", directory_path, e)
                result.failed.append(str(directory_path))
        
        return result
    
    def _report_error(self, operation: str, path: Path, error: BaseException) -> None:
        """握りつぶしたエラーをログに記録し、コールバックに通知する."""
        logger.warning(f"Temporary folder {operation} failed for {path}: {error}")
        if self._on_error is None:
            return
        try:
            self._on_error(operation, path, error)
        except Exception as hook_error:
            logger.warning(f"Error hook raised during {operation}: {hook_error}")
    
    def __enter__(self) -> "TemporaryFolderManager":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
    
    def __repr__(self) -> str:
        return f"<TemporaryFolderManager {str(self._base_path)!r} folders={len(self)}>"
