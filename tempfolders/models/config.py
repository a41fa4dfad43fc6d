"""一時フォルダマネージャーの設定."""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from tempfolders.core.errors import ConfigError


# YAML内で設定をまとめるセクション名
CONFIG_SECTION = "temporary_folders"


class FolderManagerConfig(BaseModel):
    """TemporaryFolderManagerの設定."""
    
    base_path: Optional[str] = Field(
        None,
        description="ベースディレクトリのパス（環境変数参照可）。未指定時はシステム一時ディレクトリ配下",
    )
    
    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "FolderManagerConfig":
        """
        YAML設定ファイルから設定を読み込む.
        
        設定はトップレベル、または temporary_folders セクションに記述できる。
        ファイルが存在しない場合は既定値を返す。
        
        Args:
            config_path: 設定ファイルのパス
            
        Returns:
            FolderManagerConfig: 読み込んだ設定
            
        Raises:
            ConfigError: 読み込みまたは検証に失敗した場合
        """
        config_path = Path(config_path)
        if not config_path.exists():
            return cls()
        
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config file: {config_path}") from e
        
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {config_path}")
        
        section = data.get(CONFIG_SECTION, data)
        if section is None:
            return cls()
        if not isinstance(section, dict):
            raise ConfigError(
                f"'{CONFIG_SECTION}' section must be a mapping: {config_path}"
            )
        
        try:
            return cls.model_validate(section)
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {config_path}: {e}") from e
