#!/usr/bin/env python3
"""キー生成とフォルダ走査のテスト"""
import os

import pytest

from s3_upload_folder.utils.file_utils import FileScanner, KeyDerivationError, generate_remote_key


def test_key_without_prefix_is_relative_path(tmp_path):
    """プレフィックスなしならルートからの相対パスになる"""
    file_path = tmp_path / "a" / "b" / "c.txt"
    assert generate_remote_key(str(tmp_path), "", str(file_path)) == "a/b/c.txt"


def test_key_with_prefix_has_single_slash(tmp_path):
    file_path = tmp_path / "img" / "logo.png"
    assert generate_remote_key(str(tmp_path), "assets", str(file_path)) == "assets/img/logo.png"
    assert generate_remote_key(str(tmp_path), "assets/", str(file_path)) == "assets/img/logo.png"
    assert generate_remote_key(str(tmp_path), "/assets//", str(file_path)) == "assets/img/logo.png"


def test_key_accepts_root_with_trailing_separator(tmp_path):
    file_path = tmp_path / "index.html"
    root = str(tmp_path) + os.sep
    assert generate_remote_key(root, "", str(file_path)) == "index.html"


def test_key_for_file_outside_root_fails(tmp_path):
    """ルート外のファイルはエラー"""
    root = tmp_path / "dist"
    other = tmp_path / "dist-other" / "x.txt"
    with pytest.raises(KeyDerivationError):
        generate_remote_key(str(root), "", str(other))
    with pytest.raises(KeyDerivationError):
        generate_remote_key(str(root), "", str(root))


def test_key_with_empty_root_uses_path_as_given():
    """単一ファイルではパスがそのままキーになる"""
    assert generate_remote_key("", "", "dist/test.txt") == "dist/test.txt"
    assert generate_remote_key("", "site", "dist/test.txt") == "site/dist/test.txt"
    assert generate_remote_key("", "", "./test.txt") == "test.txt"


@pytest.mark.skipif(os.sep != "/", reason="POSIX paths only")
def test_key_never_starts_with_slash():
    assert generate_remote_key("", "", "/var/www/index.html") == "var/www/index.html"


def test_list_files_recurses_and_skips_directories(site_dir):
    files = FileScanner().list_files(str(site_dir))

    assert all(os.path.isabs(path) for path in files)
    relative = sorted(os.path.relpath(path, site_dir).replace(os.sep, "/") for path in files)
    assert relative == ["data.unknownext", "img/logo.png", "index.html"]


def test_list_files_rejects_non_directory(site_dir):
    with pytest.raises(ValueError):
        FileScanner().list_files(str(site_dir / "index.html"))


def test_get_file_size(site_dir):
    assert FileScanner().get_file_size(str(site_dir / "data.unknownext")) == 3
    with pytest.raises(ValueError):
        FileScanner().get_file_size(str(site_dir / "img"))


@pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="needs POSIX symlinks")
def test_list_files_follows_symlinked_directory(site_dir, tmp_path):
    """シンボリックリンクのディレクトリ配下も対象になる"""
    shared = tmp_path / "shared"
    shared.mkdir()
    (shared / "common.css").write_text("body {}")
    os.symlink(str(shared), str(site_dir / "css"))

    files = FileScanner().list_files(str(site_dir))

    keys = sorted(generate_remote_key(str(site_dir), "", path) for path in files)
    assert keys == ["css/common.css", "data.unknownext", "img/logo.png", "index.html"]


@pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="needs POSIX symlinks")
def test_list_files_stops_at_symlink_loop(site_dir, caplog):
    os.symlink(str(site_dir), str(site_dir / "img" / "loop"))

    files = FileScanner().list_files(str(site_dir))

    assert len(files) == 3
    assert "Skipping already visited directory" in caplog.text
