"""pytest共通フィクスチャ"""
import pytest

from s3_upload_folder.utils.logger import LoggerManager


@pytest.fixture(autouse=True)
def reset_logger():
    """テストごとにロガーを初期化"""
    yield
    LoggerManager.reset()


@pytest.fixture
def site_dir(tmp_path):
    """アップロード対象のサンプルフォルダ"""
    root = tmp_path / "dist"
    (root / "img").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "index.html").write_text("<html></html>")
    (root / "img" / "logo.png").write_bytes(b"\x89PNG")
    (root / "data.unknownext").write_bytes(b"raw")
    return root
