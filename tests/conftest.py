import pytest
from botocore.exceptions import ClientError, NoCredentialsError

from core.config import Settings
from files.services import FileRecordStore


class MockS3Client:
    """Mock S3 client for testing"""

    def __init__(self):
        self.objects = {}  # Store uploads: {(bucket, key): put_object kwargs}
        self.error_mode = None  # For simulating errors
        self.failing_keys = set()  # Keys whose upload is denied

    def put_object(self, **kwargs):
        """Mock put_object operation"""
        if self.error_mode == "NoCredentialsError":
            raise NoCredentialsError()
        if self.error_mode == "NoSuchBucket":
            raise ClientError(
                {
                    "Error": {
                        "Code": "NoSuchBucket",
                        "Message": "The specified bucket does not exist",
                    }
                },
                "PutObject",
            )
        if kwargs["Key"] in self.failing_keys:
            raise ClientError(
                {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
                "PutObject",
            )

        self.objects[(kwargs["Bucket"], kwargs["Key"])] = kwargs
        return {"ETag": '"mock-etag"'}

    def simulate_error(self, error_type: str):
        """
        Configure client to raise specific errors

        Args:
            error_type: One of "NoSuchBucket", "NoCredentialsError"
        """
        self.error_mode = error_type

    def fail_key(self, key: str):
        """Deny uploads of a single key"""
        self.failing_keys.add(key)


@pytest.fixture(name="settings")
def settings_fixture(tmp_path):
    return Settings(
        DATABASE_URI="sqlite://",
        S3_REGION="ru-central1",
        S3_ENDPOINT="https://storage.example.com",
        S3_BUCKET="test-bucket",
        S3_ACCESS_KEY="test-access-key",
        S3_SECRET_KEY="test-secret-key",
        S3_DIR_PATH=str(tmp_path),
    )


@pytest.fixture(name="store")
def store_fixture(settings: Settings):
    store = FileRecordStore(settings)
    store.connect()
    store.prepare_schema()
    yield store
    store.close()


@pytest.fixture(name="mock_s3_client")
def mock_s3_client_fixture():
    """Provide a mock S3 client for testing"""
    return MockS3Client()
