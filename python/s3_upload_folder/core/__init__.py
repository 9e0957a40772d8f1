"""S3 Upload Folder コアモジュール"""
from .s3_client import S3ClientManager
from .uploader import UploadExecutor, BatchUploadExecutor, UploadTask
from .task_runner import TaskRunner

__all__ = [
    'S3ClientManager',
    'UploadExecutor',
    'BatchUploadExecutor',
    'UploadTask',
    'TaskRunner'
]
