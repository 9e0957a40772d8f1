"""S3 Upload Folder パッケージ"""
from .models.config import Config
from .utils.logger import LoggerManager
from .utils.progress import ProgressCounter
from .core.task_runner import TaskRunner

__version__ = "1.0.0"


class S3Uploader:
    """S3アップローダーのメインクラス"""

    def __init__(self, config: Config, s3_client=None):
        self.config = config

        # ロガーをセットアップ
        self.logger = LoggerManager.setup(self.config.logging)
        self.logger.info("S3 Uploader initialized")

        # タスクランナーを作成
        self.task_runner = TaskRunner(self.config, s3_client=s3_client)

    @classmethod
    def from_file(cls, config_path: str, s3_client=None) -> 'S3Uploader':
        """設定ファイルから作成"""
        return cls(Config.from_file(config_path), s3_client=s3_client)

    def run(self) -> ProgressCounter:
        """アップロードを実行"""
        self.logger.info(f"Starting S3 upload of {self.config.source}...")
        return self.task_runner.run()


__all__ = ['S3Uploader', 'Config', '__version__']
