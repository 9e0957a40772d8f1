"""ロギング設定ユーティリティ"""
import logging
import os
from typing import List, Optional
from ..models.config import LoggingConfig


LOGGER_NAME = "s3_upload_folder"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggerManager:
    """ロガーの設定と管理

    同じ設定での再セットアップは既存のロガーをそのまま返す。
    設定が変わった場合は古いハンドラーを閉じて作り直す。
    """

    _logger: Optional[logging.Logger] = None
    _config: Optional[LoggingConfig] = None

    @classmethod
    def setup(cls, config: LoggingConfig) -> logging.Logger:
        """ロガーをセットアップ"""
        if cls._logger is not None and cls._config == config:
            return cls._logger

        logger = logging.getLogger(LOGGER_NAME)
        cls._close_handlers(logger)
        logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
        logger.handlers = cls._build_handlers(config)

        cls._logger = logger
        cls._config = config
        return logger

    @staticmethod
    def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
        """コンソール用と（指定があれば）ファイル用のハンドラーを作成"""
        formatter = logging.Formatter(config.format, datefmt=DATE_FORMAT)
        handlers: List[logging.Handler] = [logging.StreamHandler()]

        if config.file:
            log_dir = os.path.dirname(config.file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(config.file, encoding="utf-8"))

        for handler in handlers:
            handler.setFormatter(formatter)
        return handlers

    @staticmethod
    def _close_handlers(logger: logging.Logger):
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """ロガーを取得（setup前はハンドラー未設定のロガー）"""
        if cls._logger is None:
            return logging.getLogger(LOGGER_NAME)
        return cls._logger

    @classmethod
    def reset(cls):
        """セットアップ済みのハンドラーを閉じて初期状態に戻す"""
        if cls._logger is not None:
            cls._close_handlers(cls._logger)
            cls._logger.setLevel(logging.NOTSET)
        cls._logger = None
        cls._config = None
