"""命名規則とパス解決のテスト."""

import os
import tempfile
import uuid
from pathlib import Path

from tempfolders.core.naming import (
    DEFAULT_FOLDER_NAME,
    folder_name,
    lock_file_name,
    lock_file_path_for,
    parse_folder_name,
    resolve_base_path,
)


class TestFolderNames:
    """フォルダ名・ロックファイル名のテストクラス."""
    
    def test_folder_name_format(self):
        """フォルダ名が "[TMPDIR] <uuid>" 形式であることを確認."""
        folder_id = uuid.UUID("0f8fad5b-d9cb-469f-a165-70867728950e")
        assert folder_name(folder_id) == "[TMPDIR] 0f8fad5b-d9cb-469f-a165-70867728950e"
    
    def test_lock_file_name_format(self):
        """ロックファイル名にサフィックスが付くことを確認."""
        folder_id = uuid.UUID("0f8fad5b-d9cb-469f-a165-70867728950e")
        assert lock_file_name(folder_id) == "[TMPDIR] 0f8fad5b-d9cb-469f-a165-70867728950e.lock"
    
    def test_parse_roundtrip(self):
        """生成した名前からIDを取り出せることを確認."""
        folder_id = uuid.uuid4()
        assert parse_folder_name(folder_name(folder_id)) == folder_id
    
    def test_parse_accepts_uppercase_hex(self):
        """大文字の16進数も受け付けることを確認."""
        parsed = parse_folder_name("[TMPDIR] 0F8FAD5B-D9CB-469F-A165-70867728950E")
        assert parsed == uuid.UUID("0f8fad5b-d9cb-469f-a165-70867728950e")
    
    def test_parse_rejects_non_matching_names(self):
        """予約パターンに一致しない名前はNoneになることを確認."""
        rejected = [
            "data",
            "[TMPDIR]",
            "[TMPDIR] not-a-guid",
            "[TMPDIR] 0f8fad5bd9cb469fa16570867728950e",
            "[TMPDIR]  0f8fad5b-d9cb-469f-a165-70867728950e",
            "[TMPDIR] 0f8fad5b-d9cb-469f-a165-70867728950e.lock",
            "[TMPDIR] 0f8fad5b-d9cb-469f-a165-70867728950e-extra",
            "x[TMPDIR] 0f8fad5b-d9cb-469f-a165-70867728950e",
        ]
        for name in rejected:
            assert parse_folder_name(name) is None, name
    
    def test_lock_file_path_for(self, tmp_path):
        """フォルダパスから対応するロックファイルパスを求められることを確認."""
        folder_path = tmp_path / folder_name(uuid.uuid4())
        lock_path = lock_file_path_for(folder_path)
        assert lock_path.parent == tmp_path
        assert lock_path.name == folder_path.name + ".lock"


class TestResolveBasePath:
    """ベースディレクトリ解決のテストクラス."""
    
    def test_default_under_system_temp(self):
        """未指定時はシステム一時ディレクトリ配下になることを確認."""
        path = resolve_base_path()
        assert path.is_absolute()
        assert path == Path(tempfile.gettempdir()).absolute() / DEFAULT_FOLDER_NAME
    
    def test_relative_path_made_absolute(self, tmp_path, monkeypatch):
        """相対パスが作業ディレクトリ基準の絶対パスになることを確認."""
        monkeypatch.chdir(tmp_path)
        path = resolve_base_path("Temporary Folders")
        assert path.is_absolute()
        assert path == Path(os.getcwd()) / "Temporary Folders"
    
    def test_environment_variables_expanded(self, tmp_path, monkeypatch):
        """環境変数参照が展開されることを確認."""
        monkeypatch.setenv("TEMPFOLDERS_TEST_ROOT", str(tmp_path))
        path = resolve_base_path("$TEMPFOLDERS_TEST_ROOT/base")
        assert path == Path(os.path.abspath(str(tmp_path / "base")))
    
    def test_accepts_path_objects(self, tmp_path):
        """Pathオブジェクトも受け付けることを確認."""
        assert resolve_base_path(tmp_path / "base") == Path(os.path.abspath(tmp_path / "base"))
