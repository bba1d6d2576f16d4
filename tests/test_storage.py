"""
Test object storage uploads and content type detection
"""

from unittest.mock import patch

import pytest

from storage.content_type import detect_content_type
from storage.services import (
    UploadError,
    build_object_url,
    get_s3_client,
    upload_file,
)


class TestDetectContentType:
    """Test content sniffing from leading bytes"""

    def test_empty_input(self):
        assert detect_content_type(b"") == "application/octet-stream"

    def test_plain_text(self):
        assert detect_content_type(b"hello") == "text/plain; charset=utf-8"
        assert detect_content_type("привет\n".encode()) == "text/plain; charset=utf-8"

    def test_binary(self):
        assert detect_content_type(b"\x00\x01\x02\x03garbage") == "application/octet-stream"

    @pytest.mark.parametrize(
        "data, expected",
        [
            (b"%PDF-1.7\n", "application/pdf"),
            (b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR", "image/png"),
            (b"\xff\xd8\xff\xe0\x00\x10JFIF", "image/jpeg"),
            (b"GIF89a\x01\x00", "image/gif"),
            (b"PK\x03\x04\x14\x00", "application/zip"),
            (b"\x1f\x8b\x08\x00", "application/x-gzip"),
            (b"RIFF\x24\x00\x00\x00WEBPVP8 ", "image/webp"),
            (b"RIFF\x24\x00\x00\x00WAVEfmt ", "audio/wave"),
            (b"\xef\xbb\xbfhello", "text/plain; charset=utf-8"),
            (b"\xff\xfeh\x00i\x00", "text/plain; charset=utf-16le"),
            (b"\x00asm\x01\x00\x00\x00", "application/wasm"),
        ],
    )
    def test_signatures(self, data, expected):
        assert detect_content_type(data) == expected

    def test_markup(self):
        assert detect_content_type(b"  <!DOCTYPE html><html>") == "text/html; charset=utf-8"
        assert detect_content_type(b"<html>\n<body></body>") == "text/html; charset=utf-8"
        assert detect_content_type(b'<?xml version="1.0"?><a/>') == "text/xml; charset=utf-8"

    def test_tag_prefix_needs_terminator(self):
        """<Alpha is not an <A tag"""
        assert detect_content_type(b"<Alpha>") == "text/plain; charset=utf-8"

    def test_mp4(self):
        data = b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom"
        assert detect_content_type(data) == "video/mp4"

    def test_only_leading_bytes_are_inspected(self):
        data = b"a" * 512 + b"\x00"
        assert detect_content_type(data) == "text/plain; charset=utf-8"


class TestStorageServices:
    """Test the S3 upload functions"""

    def test_build_object_url(self):
        assert (
            build_object_url("https://storage.example.com", "bucket", "data/a.txt")
            == "https://storage.example.com/bucket/data/a.txt"
        )
        assert (
            build_object_url("https://storage.example.com/", "bucket", "a.txt")
            == "https://storage.example.com/bucket/a.txt"
        )

    @patch("storage.services.boto3.client")
    def test_get_s3_client(self, mock_client, settings):
        get_s3_client(settings)

        mock_client.assert_called_once_with(
            "s3",
            region_name="ru-central1",
            endpoint_url="https://storage.example.com",
            aws_access_key_id="test-access-key",
            aws_secret_access_key="test-secret-key",
        )

    def test_upload_file(self, tmp_path, mock_s3_client):
        path = tmp_path / "x.txt"
        path.write_text("hello")

        url = upload_file(
            mock_s3_client, str(path), "bucket", str(path), "https://storage.example.com"
        )

        assert url == f"https://storage.example.com/bucket/{path}"
        put = mock_s3_client.objects[("bucket", str(path))]
        assert put["Body"] == b"hello"
        assert put["ACL"] == "public-read"
        assert put["ContentLength"] == 5
        assert put["ContentType"] == "text/plain; charset=utf-8"

    def test_upload_empty_file(self, tmp_path, mock_s3_client):
        path = tmp_path / "empty"
        path.write_bytes(b"")

        url = upload_file(mock_s3_client, str(path), "bucket", "empty", "https://s3.local")

        assert url == "https://s3.local/bucket/empty"
        put = mock_s3_client.objects[("bucket", "empty")]
        assert put["ContentLength"] == 0
        assert put["ContentType"] == "application/octet-stream"

    def test_upload_missing_file(self, tmp_path, mock_s3_client):
        path = tmp_path / "missing.txt"

        with pytest.raises(UploadError) as exc_info:
            upload_file(mock_s3_client, str(path), "bucket", "missing.txt", "https://s3.local")

        assert exc_info.value.path == str(path)
        assert isinstance(exc_info.value.cause, FileNotFoundError)
        assert mock_s3_client.objects == {}

    @pytest.mark.parametrize("error_type", ["NoSuchBucket", "NoCredentialsError"])
    def test_upload_service_errors(self, tmp_path, mock_s3_client, error_type):
        path = tmp_path / "x.txt"
        path.write_text("hello")
        mock_s3_client.simulate_error(error_type)

        with pytest.raises(UploadError) as exc_info:
            upload_file(mock_s3_client, str(path), "bucket", "x.txt", "https://s3.local")

        assert exc_info.value.key == "x.txt"
        assert str(path) in str(exc_info.value)

    def test_upload_rejects_overlong_url(self, tmp_path, mock_s3_client):
        path = tmp_path / "x.txt"
        path.write_text("hello")
        key = "k" * 2000

        with pytest.raises(UploadError, match="limit is 2000"):
            upload_file(mock_s3_client, str(path), "bucket", key, "https://s3.local")

        assert mock_s3_client.objects == {}
