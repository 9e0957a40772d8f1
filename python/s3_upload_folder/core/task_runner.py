"""アップロードタスクの実行"""
from typing import List

from ..models.config import Config
from ..utils.content_type import guess_content_type
from ..utils.logger import LoggerManager
from ..utils.file_utils import FileScanner, generate_remote_key
from ..utils.progress import ProgressCounter
from .uploader import UploadExecutor, BatchUploadExecutor, UploadTask
from .s3_client import S3ClientManager


class TaskRunner:
    """フォルダまたは単一ファイルのアップロードを実行"""

    def __init__(self, config: Config, s3_client=None):
        self.config = config
        self.logger = LoggerManager.get_logger()

        # S3クライアントとアップローダーを初期化
        if s3_client is None:
            s3_client = S3ClientManager(config.s3).get_client()
        self.s3_client = s3_client
        self.executor = UploadExecutor(
            self.s3_client,
            config.s3.bucket,
            dry_run=config.options.dry_run,
        )
        self.batch_executor = BatchUploadExecutor(
            self.executor,
            config.options.max_concurrent_uploads,
            show_progress=config.options.enable_progress,
        )
        self.file_scanner = FileScanner()

    def run(self) -> ProgressCounter:
        """設定に応じてアップロードを実行"""
        if self.config.is_folder_mode:
            return self.upload_folder(self.config.folder)
        return self.upload_file(self.config.file)

    def build_task(self, root: str, file_path: str) -> UploadTask:
        """1ファイル分のUploadTaskを作成"""
        options = self.config.options
        key = generate_remote_key(root, options.prefix, file_path)
        # 明示指定のContent-Typeを優先
        content_type = options.content_type or guess_content_type(file_path)
        return UploadTask(path=file_path, key=key, content_type=content_type)

    def upload_folder(self, folder: str) -> ProgressCounter:
        """フォルダ配下を再帰的にアップロード"""
        files = self.file_scanner.list_files(folder)
        self.logger.info(
            f"Found {len(files)} files in {folder} -> {self.config.s3.bucket}"
        )
        tasks: List[UploadTask] = [self.build_task(folder, path) for path in files]
        return self.batch_executor.upload_files(tasks)

    def upload_file(self, file_path: str) -> ProgressCounter:
        """単一ファイルをアップロード

        ルートは空扱いなので、キーは prefix と指定されたパスをそのまま結合したものになる。
        """
        size = self.file_scanner.get_file_size(file_path)
        task = self.build_task("", file_path)
        if self.config.options.s3_key:
            task = UploadTask(
                path=task.path,
                key=self.config.options.s3_key.lstrip("/"),
                content_type=task.content_type,
            )

        self.logger.info(f"Uploading {file_path} ({size} bytes) to {self.config.s3.bucket}/{task.key}")
        counter = ProgressCounter(1)
        self.executor.upload(task)
        counter.increment()
        return counter
