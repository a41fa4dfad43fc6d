"""
ロックファイルの排他オープンとプローブ.

POSIXではfcntl.flock、Windowsではmsvcrt.lockingを使用する。
どちらもハンドル単位のロックで、プロセス終了時にOSが自動的に解放する。
"""

import os
import sys
from pathlib import Path
from typing import BinaryIO

if sys.platform == "win32":
    import msvcrt
else:
    import fcntl


def _lock_exclusive(handle: BinaryIO) -> None:
    if sys.platform == "win32":
        msvcrt.locking(handle.fileno(), msvcrt.LK_NBLCK, 1)
    else:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)


def _try_lock_shared(handle: BinaryIO) -> None:
    if sys.platform == "win32":
        msvcrt.locking(handle.fileno(), msvcrt.LK_NBRLCK, 1)
    else:
        fcntl.flock(handle.fileno(), fcntl.LOCK_SH | fcntl.LOCK_NB)


def _unlock(handle: BinaryIO) -> None:
    if sys.platform == "win32":
        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def create_exclusive(path: Path) -> BinaryIO:
    """
    ロックファイルを新規作成し、排他ロックを取得したハンドルを返す.
    
    ファイルが既に存在する場合は失敗する。ハンドルを閉じるとロックは解放される。
    
    Args:
        path: ロックファイルのパス
        
    Returns:
        排他ロック済みの書き込みハンドル
        
    Raises:
        FileExistsError: ファイルが既に存在する
        OSError: 作成またはロック取得に失敗した
    """
    flags = os.O_CREAT | os.O_EXCL | os.O_WRONLY | getattr(os, "O_BINARY", 0)
    fd = os.open(str(path), flags, 0o600)
    handle = os.fdopen(fd, "wb")
    try:
        _lock_exclusive(handle)
    except OSError:
        handle.close()
        Path(path).unlink(missing_ok=True)
        raise
    return handle


def is_lock_free(path: Path) -> bool:
    """
    ロックファイルが他のハンドルに排他保持されていないか確認する.
    
    読み取り専用で開き、共有ロックを非ブロッキングで試みる。
    確認後はすぐにハンドルを閉じる（ロックは保持しない）。
    
    Args:
        path: ロックファイルのパス
        
    Returns:
        開けて共有ロックも取れた場合True、保持中または開けない場合False
    """
    try:
        handle = open(path, "rb")
    except OSError:
        return False
    
    with handle:
        try:
            _try_lock_shared(handle)
        except OSError:
            return False
        _unlock(handle)
    return True


def release(handle: BinaryIO) -> None:
    """
    ロックを解除してからハンドルを閉じる.
    
    解除に失敗した場合もハンドルは必ず閉じ、例外はそのまま送出する。
    """
    try:
        _unlock(handle)
    finally:
        handle.close()
