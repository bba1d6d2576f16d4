"""
Services for uploading files to object storage
"""

from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from core.config import Settings
from core.logger import logger
from files.models import MAX_URL_LENGTH
from storage.content_type import detect_content_type


class UploadError(Exception):
    """A single file could not be uploaded."""

    def __init__(self, path: str, key: str, cause: Exception | str):
        self.path = path
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to upload {path} as {key}: {cause}")


def get_s3_client(settings: Settings):
    """
    Create the S3 client used for every upload in this process.
    Credentials fall back to the default boto3 chain when not configured.
    """
    return boto3.client(
        "s3",
        region_name=settings.S3_REGION,
        endpoint_url=settings.S3_ENDPOINT,
        aws_access_key_id=settings.S3_ACCESS_KEY,
        aws_secret_access_key=settings.S3_SECRET_KEY,
    )


def build_object_url(endpoint: str, bucket: str, key: str) -> str:
    """Public URL of an object, <endpoint>/<bucket>/<key>"""
    return f"{endpoint.rstrip('/')}/{bucket}/{key}"


def upload_file(
    s3_client, file_path: str, bucket: str, key: str, endpoint: str
) -> str:
    """
    Upload one file as a public-read object and return its URL.

    The whole file is read into memory and sent in a single PUT; the
    content type is detected from the bytes.

    Args:
        s3_client: boto3 S3 client
        file_path: Local file to upload
        bucket: Target bucket
        key: Object key
        endpoint: Storage endpoint used to build the public URL

    Returns:
        The object's URL

    Raises:
        UploadError: If the file cannot be read, the URL would be longer
            than a file record allows, or the PUT fails
    """
    url = build_object_url(endpoint, bucket, key)
    if len(url) > MAX_URL_LENGTH:
        raise UploadError(
            file_path, key, f"URL is {len(url)} characters, limit is {MAX_URL_LENGTH}"
        )

    try:
        body = Path(file_path).read_bytes()
    except OSError as e:
        raise UploadError(file_path, key, e) from e

    content_type = detect_content_type(body)
    logger.debug(f"Uploading {file_path} ({len(body)} bytes, {content_type})")

    try:
        s3_client.put_object(
            Bucket=bucket,
            Key=key,
            ACL="public-read",
            Body=body,
            ContentLength=len(body),
            ContentType=content_type,
        )
    except (ClientError, BotoCoreError) as e:
        raise UploadError(file_path, key, e) from e

    return url
