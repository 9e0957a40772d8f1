"""S3クライアント管理"""
import boto3
from typing import Optional
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError
from ..models.config import S3Config
from ..utils.logger import LoggerManager


class S3ClientManager:
    """S3クライアントの作成と管理

    クライアントは1回の実行につき1つだけ作成し、全アップロードで共有する。
    """

    def __init__(self, s3_config: S3Config):
        self.s3_config = s3_config
        self.logger = LoggerManager.get_logger()
        self._client = None

    def get_client(self):
        """S3クライアントを取得（必要に応じて作成）"""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """S3クライアントを作成"""
        # path-style: バケット名をURLのパスに含める（MinIO等で必要）
        addressing_style = "path" if self.s3_config.force_path_style else "auto"
        endpoint_url: Optional[str] = self.s3_config.endpoint or None

        try:
            s3_client = boto3.client(
                's3',
                region_name=self.s3_config.region,
                endpoint_url=endpoint_url,
                aws_access_key_id=self.s3_config.access_key_id,
                aws_secret_access_key=self.s3_config.secret_access_key,
                config=BotoConfig(s3={"addressing_style": addressing_style}),
            )
        except (BotoCoreError, ValueError) as e:
            self.logger.error(f"Error creating S3 client: {e}")
            raise

        self.logger.info(
            f"S3 client created (endpoint={endpoint_url or 'default'}, "
            f"region={self.s3_config.region}, addressing_style={addressing_style})"
        )
        return s3_client
