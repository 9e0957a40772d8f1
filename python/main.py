#!/usr/bin/env python3
"""S3 Upload Folder - エントリーポイント"""
import sys

from s3_upload_folder.cli import main


if __name__ == "__main__":
    sys.exit(main())
