"""
一時フォルダ管理の結果スキーマ定義
"""
from typing import List
from pydantic import BaseModel, Field


class CleanupResult(BaseModel):
    """孤立フォルダ回収の結果"""
    base_path: str = Field(..., description="走査したベースディレクトリの絶対パス")
    removed: List[str] = Field(default_factory=list, description="回収したディレクトリのリスト")
    skipped: List[str] = Field(default_factory=list, description="ロック保持中のためスキップしたディレクトリのリスト")
    failed: List[str] = Field(default_factory=list, description="削除に失敗したディレクトリのリスト")
