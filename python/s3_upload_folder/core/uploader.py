"""S3アップロード実行クラス"""
from typing import Iterator, List, Optional, Sequence, TypeVar
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor, as_completed

from botocore.exceptions import BotoCoreError, ClientError
from ..utils.logger import LoggerManager
from ..utils.progress import ProgressBar, ProgressCounter

T = TypeVar("T")


@dataclass(frozen=True)
class UploadTask:
    """1ファイル分のアップロード内容"""
    path: str
    key: str
    content_type: Optional[str] = None


def iter_windows(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """itemsを先頭からsize件ずつに区切る"""
    if size < 1:
        raise ValueError(f"Window size must be 1 or greater, got {size}")
    for start in range(0, len(items), size):
        yield items[start:start + size]


class UploadExecutor:
    """ファイルアップロードの実行"""

    def __init__(self, s3_client, bucket: str, dry_run: bool = False):
        self.s3_client = s3_client
        self.bucket = bucket
        self.dry_run = dry_run
        self.logger = LoggerManager.get_logger()

    def upload(self, task: UploadTask):
        """単一ファイルをPUTする

        失敗時はキーを含むエラーをログに出して例外をそのまま再送出する。
        リトライはしない。
        """
        if self.dry_run:
            self.logger.info(f"[DRY RUN]: Would upload {task.path} to {self.bucket}/{task.key}")
            return

        try:
            # ファイル全体をメモリに読み込む
            with open(task.path, "rb") as file:
                body = file.read()

            params = {
                "Bucket": self.bucket,
                "Key": task.key,
                "Body": body,
            }
            if task.content_type:
                params["ContentType"] = task.content_type

            self.s3_client.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            self.logger.error(f"Failed to upload: {task.key}: {e}")
            raise
        except OSError as e:
            self.logger.error(f"Failed to read {task.path} for {task.key}: {e}")
            raise

        self.logger.info(f"Uploaded: {task.key}")


class BatchUploadExecutor:
    """ウィンドウ単位の並列アップロード"""

    def __init__(self, executor: UploadExecutor, max_workers: int = 6, show_progress: bool = True):
        if max_workers < 1:
            raise ValueError(f"max_workers must be 1 or greater, got {max_workers}")
        self.executor = executor
        self.max_workers = max_workers
        self.show_progress = show_progress
        self.logger = LoggerManager.get_logger()

    def upload_files(self, tasks: List[UploadTask]) -> ProgressCounter:
        """複数ファイルをmax_workers件ずつ並列でアップロード

        ウィンドウ内の全タスクが終わるまで次のウィンドウには進まない。
        ウィンドウ内で失敗があれば、残りが終わった後に最初の例外を再送出し、
        以降のウィンドウは実行しない。

        Returns:
            完了数と総数を持つカウンター
        """
        counter = ProgressCounter(len(tasks))
        if not tasks:
            self.logger.warning("No files to upload")
            return counter

        progress = ProgressBar(counter) if self.show_progress else None
        self.logger.info(
            f"Starting upload of {counter.total} files with {self.max_workers} concurrent uploads"
        )

        try:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                for window in iter_windows(tasks, self.max_workers):
                    self._upload_window(pool, window, counter, progress)
        finally:
            if progress:
                progress.finish()

        self.logger.info(f"Upload completed: {counter.completed}/{counter.total} files")
        return counter

    def _upload_window(self, pool: ThreadPoolExecutor, window: Sequence[UploadTask],
                       counter: ProgressCounter, progress: Optional[ProgressBar]):
        future_to_task = {pool.submit(self.executor.upload, task): task for task in window}

        first_error: Optional[BaseException] = None
        for future in as_completed(future_to_task):
            error = future.exception()
            if error is not None:
                if first_error is None:
                    first_error = error
                continue
            counter.increment()
            if progress:
                progress.update()

        if first_error is not None:
            raise first_error
