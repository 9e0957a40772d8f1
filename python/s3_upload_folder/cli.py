"""コマンドラインインターフェース"""
import argparse
import os
import sys
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from . import S3Uploader, __version__
from .models.config import Config, ConfigError, MissingParameterError, DEFAULT_MAX_CONCURRENT_UPLOADS
from .utils.logger import LoggerManager

PROG = "s3-upload-folder"

EPILOG = f"""examples:
  upload a folder:
    {PROG} -d <localFolderPath> -b <bucket> -ak <accessKeyId> -sk <secretAccessKey> [options]

  upload a single file:
    {PROG} --file <filePath> -b <bucket> -ak <accessKeyId> -sk <secretAccessKey> [options]
"""


def build_parser() -> argparse.ArgumentParser:
    """引数パーサーを作成"""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Upload a local folder or a single file to an S3-compatible object store.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument("-d", "--dist", help="local folder to upload (folder mode)")
    source.add_argument("--file", help="single file to upload (single-file mode)")

    required = parser.add_argument_group("required parameters")
    required.add_argument("-b", "--bucket", help="target bucket name")
    required.add_argument("-ak", "--ak", "--access-key-id", dest="ak", help="access key ID")
    required.add_argument("-sk", "--sk", "--secret-access-key", dest="sk", help="secret access key")

    optional = parser.add_argument_group("optional parameters")
    optional.add_argument("-e", "--endpoint", help="endpoint URL for non-AWS services")
    optional.add_argument("-r", "--region", help="region (default: us-east-1)")
    optional.add_argument("-p", "--prefix", help="remote key prefix (default: empty)")
    optional.add_argument(
        "--force-path-style", "--forcePathStyle",
        dest="force_path_style",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="use path-style addressing (default: enabled)",
    )
    optional.add_argument(
        "-c", "--concurrency",
        type=int,
        help=f"maximum number of concurrent uploads (default: {DEFAULT_MAX_CONCURRENT_UPLOADS})",
    )
    optional.add_argument(
        "--content-type",
        help="Content-Type of the file, overrides detection (single-file mode only)",
    )
    optional.add_argument("-k", "--key", help="explicit remote key (single-file mode only)")
    optional.add_argument("--config", help="JSON configuration file; flags take precedence")
    optional.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="log what would be uploaded without uploading",
    )
    optional.add_argument(
        "--no-progress",
        dest="enable_progress",
        action="store_false",
        default=None,
        help="do not display the progress bar",
    )
    optional.add_argument("--log-level", help="log level (default: INFO)")
    optional.add_argument("--log-file", help="also write logs to this file")
    optional.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """コマンドライン引数を設定辞書の形に変換"""
    overrides: Dict[str, Any] = {
        "logging": {
            "level": args.log_level,
            "file": args.log_file,
        },
        "s3": {
            "bucket": args.bucket,
            "access_key_id": args.ak,
            "secret_access_key": args.sk,
            "endpoint": args.endpoint,
            "region": args.region,
            "force_path_style": args.force_path_style,
        },
        "options": {
            "prefix": args.prefix,
            "max_concurrent_uploads": args.concurrency,
            "content_type": args.content_type,
            "s3_key": args.key,
            "dry_run": args.dry_run,
            "enable_progress": args.enable_progress,
        },
    }
    # コマンドラインで指定したモードが設定ファイルより優先
    if args.dist:
        overrides["folder"] = args.dist
        overrides["file"] = ""
    elif args.file:
        overrides["file"] = args.file
        overrides["folder"] = ""
    return overrides


def validate_source(config: Config) -> Optional[str]:
    """ローカルパスの存在と種類をチェックし、問題があればメッセージを返す"""
    if config.is_folder_mode:
        if not os.path.exists(config.folder):
            return f"Folder does not exist: {config.folder}"
        if not os.path.isdir(config.folder):
            return f"Not a directory: {config.folder}"
    else:
        if not os.path.exists(config.file):
            return f"File does not exist: {config.file}"
        if not os.path.isfile(config.file):
            return f"Not a file: {config.file}"
    return None


def main(argv: Optional[List[str]] = None, s3_client=None) -> int:
    """エントリーポイント。終了コードを返す"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_file(args.config, build_overrides(args))
    except MissingParameterError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    problem = validate_source(config)
    if problem:
        print(f"Error: {problem}", file=sys.stderr)
        return 1

    try:
        uploader = S3Uploader(config, s3_client=s3_client)
        counter = uploader.run()
    except (BotoCoreError, ClientError, OSError, ValueError) as e:
        LoggerManager.get_logger().error(f"Upload aborted: {e}")
        return 1

    LoggerManager.get_logger().info(f"Done: {counter.completed}/{counter.total} files uploaded")
    return 0
