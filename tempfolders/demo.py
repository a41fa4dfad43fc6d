"""一時フォルダマネージャーのデモプログラム."""

import logging

from tempfolders.core.folder_manager import TemporaryFolderManager


def main() -> None:
    """既定のベースディレクトリとカスタムのベースディレクトリで一時フォルダを作成する."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    
    # 既定のベースディレクトリに一時フォルダを作成（withブロック終了時に削除される）
    with TemporaryFolderManager.default().create_temporary_folder() as folder:
        print(f"Successfully created temporary folder: {folder.folder_path}")
    
    # 作業ディレクトリからの相対パスをベースディレクトリにする
    with TemporaryFolderManager("Temporary Folders") as manager:
        with manager.create_temporary_folder() as folder:
            print(f"Successfully created temporary folder: {folder.folder_path}")


if __name__ == "__main__":
    main()
