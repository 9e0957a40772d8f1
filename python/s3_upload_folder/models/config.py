"""設定管理用のデータクラス"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import json
import logging
import os


DEFAULT_REGION = "us-east-1"
DEFAULT_MAX_CONCURRENT_UPLOADS = 6


class ConfigError(ValueError):
    """設定内容が不正"""


class MissingParameterError(ConfigError):
    """必須パラメータが不足している"""

    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(f"Missing required parameters: {', '.join(missing)}")


def check_type(name: str, value: Any, expected: Tuple[type, ...], optional: bool = False):
    """JSONから読み込んだ値の型をチェック"""
    if value is None and optional:
        return
    # boolはintのサブクラスなので別扱い
    if isinstance(value, bool) and bool not in expected:
        valid = False
    else:
        valid = isinstance(value, expected)
    if not valid:
        names = " or ".join(t.__name__ for t in expected)
        raise ConfigError(f"{name} must be {names}, got {value!r}")


@dataclass
class LoggingConfig:
    """ロギング設定"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    file: Optional[str] = None

    def __post_init__(self):
        check_type("logging.level", self.level, (str,))
        check_type("logging.format", self.format, (str,))
        check_type("logging.file", self.file, (str,), optional=True)
        if not isinstance(logging.getLevelName(self.level.upper()), int):
            raise ConfigError(f"Unknown log level: {self.level}")


@dataclass
class S3Config:
    """S3接続設定"""
    bucket: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    endpoint: Optional[str] = None
    region: str = DEFAULT_REGION
    force_path_style: bool = True

    def __post_init__(self):
        # CLIのフラグ名で不足分をまとめて報告する
        missing = []
        if not self.bucket:
            missing.append("bucket")
        if not self.access_key_id:
            missing.append("ak")
        if not self.secret_access_key:
            missing.append("sk")
        if missing:
            raise MissingParameterError(missing)

        check_type("s3.bucket", self.bucket, (str,))
        check_type("s3.access_key_id", self.access_key_id, (str,))
        check_type("s3.secret_access_key", self.secret_access_key, (str,))
        check_type("s3.endpoint", self.endpoint, (str,), optional=True)
        check_type("s3.region", self.region, (str,), optional=True)
        check_type("s3.force_path_style", self.force_path_style, (bool,))

        if not self.region:
            self.region = DEFAULT_REGION


@dataclass
class UploadOptions:
    """アップロードオプション"""
    prefix: str = ""
    max_concurrent_uploads: int = DEFAULT_MAX_CONCURRENT_UPLOADS
    content_type: Optional[str] = None  # 単一ファイルの場合のみ
    s3_key: Optional[str] = None  # 単一ファイルの場合のみ
    dry_run: bool = False
    enable_progress: bool = True

    def __post_init__(self):
        if self.prefix is None:
            self.prefix = ""
        check_type("options.prefix", self.prefix, (str,))
        check_type("options.max_concurrent_uploads", self.max_concurrent_uploads, (int,))
        check_type("options.content_type", self.content_type, (str,), optional=True)
        check_type("options.s3_key", self.s3_key, (str,), optional=True)
        check_type("options.dry_run", self.dry_run, (bool,))
        check_type("options.enable_progress", self.enable_progress, (bool,))
        if self.max_concurrent_uploads < 1:
            raise ConfigError(
                f"Invalid max_concurrent_uploads: {self.max_concurrent_uploads}. Must be 1 or greater"
            )


@dataclass
class Config:
    """メイン設定クラス

    ``folder`` と ``file`` はどちらか一方のみ指定する。
    """
    s3: S3Config
    options: UploadOptions = field(default_factory=UploadOptions)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    folder: Optional[str] = None
    file: Optional[str] = None

    def __post_init__(self):
        check_type("folder", self.folder, (str,), optional=True)
        check_type("file", self.file, (str,), optional=True)
        if self.folder and self.file:
            raise ConfigError("--file and --dist cannot be used together")
        if not self.folder and not self.file:
            raise ConfigError("Either --file or --dist must be specified")
        if self.folder and self.options.s3_key:
            raise ConfigError("--key can only be used when uploading a single file")
        if self.folder and self.options.content_type:
            raise ConfigError("--content-type can only be used when uploading a single file")

    @property
    def is_folder_mode(self) -> bool:
        return bool(self.folder)

    @property
    def source(self) -> str:
        return self.folder or self.file

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """辞書から設定を構築"""
        for section in ("logging", "s3", "options"):
            check_type(section, data.get(section), (dict,), optional=True)
        try:
            logging_config = LoggingConfig(**(data.get("logging") or {}))
            s3_config = S3Config(**(data.get("s3") or {}))
            options = UploadOptions(**(data.get("options") or {}))
        except TypeError as e:
            # 未知のキーが含まれている
            raise ConfigError(f"Invalid configuration: {e}")

        return cls(
            s3=s3_config,
            options=options,
            logging=logging_config,
            folder=data.get("folder"),
            file=data.get("file"),
        )

    @classmethod
    def from_file(cls, config_path: Optional[str], overrides: Optional[Dict[str, Any]] = None) -> 'Config':
        """設定ファイルから読み込み、overridesで上書き"""
        data: Dict[str, Any] = {}
        if config_path:
            if not os.path.exists(config_path):
                raise FileNotFoundError(f"Configuration file {config_path} not found.")
            try:
                with open(config_path, "r", encoding="utf-8") as file:
                    data = json.load(file)
            except json.JSONDecodeError as e:
                raise ValueError(f"Error decoding JSON from {config_path}: {e}")
            if not isinstance(data, dict):
                raise ConfigError(f"Configuration root must be an object: {config_path}")

        return cls.from_dict(merge_settings(data, overrides or {}))


def merge_settings(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """セクション単位で設定をマージ

    overrides側のNoneは未指定として扱い、どの階層でも無視する。
    """
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict):
            current = merged.get(key)
            merged[key] = merge_settings(current if isinstance(current, dict) else {}, value)
        else:
            merged[key] = value
    return merged
