"""一時フォルダ管理のエラー定義."""


class TemporaryFolderError(Exception):
    """一時フォルダ管理関連のエラー基底クラス."""
    pass


class BasePathError(TemporaryFolderError):
    """ベースディレクトリの解決・作成に失敗したエラー."""
    pass


class FolderCreationError(TemporaryFolderError):
    """ロックファイルまたは一時フォルダの作成に失敗したエラー."""
    pass


class ConfigError(TemporaryFolderError):
    """設定ファイルの読み込み・検証に失敗したエラー."""
    pass
