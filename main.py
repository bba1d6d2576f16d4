#!/usr/bin/env python
"""
Upload every file below a directory to an S3-compatible bucket and
record each object's public URL in the database.

Usage:
    python main.py
    python main.py --dir ./export --bucket my-bucket

Settings are read from the environment or a .env file:
    DATABASE_HOST, DATABASE_PORT, DATABASE_USER, DATABASE_PASSWORD,
    DATABASE_NAME (or DATABASE_URI), S3_REGION, S3_ENDPOINT, S3_BUCKET,
    S3_ACCESS_KEY, S3_SECRET_KEY, S3_DIR_PATH, LOG_LEVEL
"""

import argparse
import sys

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from core.config import get_settings
from core.logger import logger, log_settings, set_log_level
from files.services import FileRecordStore
from storage.services import get_s3_client
from walker.services import WalkError, format_report, upload_tree


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Upload a directory tree to object storage and record each file",
    )
    parser.add_argument("--dir", help="Directory to upload (overrides S3_DIR_PATH)")
    parser.add_argument("--bucket", help="Target bucket (overrides S3_BUCKET)")
    return parser.parse_args(argv)


def fatal(message: str):
    logger.critical(message)
    sys.exit(1)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        fatal(f"Error loading configuration: {e}")

    set_log_level(settings.LOG_LEVEL)
    log_settings(settings)

    root = args.dir or settings.S3_DIR_PATH
    bucket = args.bucket or settings.S3_BUCKET

    store = FileRecordStore(settings)
    try:
        store.connect()
    except SQLAlchemyError as e:
        fatal(f"Failed to connect to database: {e}")

    try:
        try:
            store.prepare_schema()
        except SQLAlchemyError as e:
            fatal(f"Failed to make migrations: {e}")

        s3_client = get_s3_client(settings)

        try:
            result = upload_tree(root, bucket, s3_client, store, settings.S3_ENDPOINT)
        except WalkError as e:
            fatal(str(e))
    finally:
        store.close()

    logger.info("=" * 50)
    logger.info("UPLOAD SUMMARY")
    logger.info("=" * 50)
    logger.info(f"Files scanned:  {result.scanned}")
    logger.info(f"Files uploaded: {result.uploaded}")
    logger.info(f"Files recorded: {result.recorded}")
    logger.info(f"Errors:         {result.errors}")

    print(format_report(result.identifiers))
    return 0


if __name__ == "__main__":
    sys.exit(main())
