"""ファイル操作関連のユーティリティ"""
import os
import re
from typing import List, Set

from .logger import LoggerManager


class KeyDerivationError(ValueError):
    """ルートフォルダ外のファイルに対してキーを生成しようとした"""


def generate_remote_key(root: str, prefix: str, file_path: str) -> str:
    """ローカルパスからS3のキーを生成

    Args:
        root: アップロード元のルートフォルダ（単一ファイルの場合は空文字）
        prefix: リモート側のプレフィックス
        file_path: アップロードするファイルのパス

    Returns:
        スラッシュ区切りで先頭にスラッシュを含まないキー
    """
    if root:
        root_path = os.path.abspath(root)
        absolute_path = os.path.abspath(file_path)
        try:
            inside = os.path.commonpath([root_path, absolute_path]) == root_path
        except ValueError:
            # Windowsでドライブが異なる場合
            inside = False
        if not inside or absolute_path == root_path:
            raise KeyDerivationError(
                f'filepath "{file_path}" must be inside dist directory "{root}"'
            )
        relative_path = os.path.relpath(absolute_path, root_path)
    else:
        relative_path = os.path.normpath(file_path)

    relative_path = relative_path.replace(os.sep, "/")
    if os.altsep:
        relative_path = relative_path.replace(os.altsep, "/")

    remote_key = re.sub(r"/+", "/", f"{prefix or ''}/{relative_path}")
    return remote_key.lstrip("/")


class FileScanner:
    """ファイルスキャン機能"""

    def list_files(self, directory: str) -> List[str]:
        """ディレクトリ配下の全ファイルの絶対パスを返す

        サブディレクトリも再帰的に辿る。ディレクトリ自体は含めない。
        シンボリックリンクのディレクトリも辿るが、訪問済みの実体はスキップする。
        """
        if not os.path.isdir(directory):
            raise ValueError(f"Not a directory: {directory}")

        files = []
        visited: Set[str] = set()
        for root, dirs, names in os.walk(os.path.abspath(directory), followlinks=True):
            real_root = os.path.realpath(root)
            if real_root in visited:
                LoggerManager.get_logger().warning(
                    f"Skipping already visited directory (symlink loop?): {root}"
                )
                dirs[:] = []
                continue
            visited.add(real_root)

            dirs.sort()
            for name in sorted(names):
                files.append(os.path.join(root, name))
        return files

    def get_file_size(self, file_path: str) -> int:
        """単一ファイルのサイズを取得"""
        if not os.path.isfile(file_path):
            raise ValueError(f"Not a file: {file_path}")
        return os.path.getsize(file_path)
