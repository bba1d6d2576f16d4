"""
Application Configuration
Add constants, secrets, env variables here
"""

from functools import lru_cache
from pathlib import Path
from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL
from dotenv import load_dotenv

# Load .env file into os.environ before the Settings class is instantiated
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


# Define settings class for univeral access
class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"

    # Database connection
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_USER: str | None = None
    DATABASE_PASSWORD: str | None = None
    DATABASE_NAME: str | None = None

    # Full URI override, e.g. sqlite:// for local runs
    DATABASE_URI: str | None = None

    # Object storage
    S3_REGION: str | None = None
    S3_ENDPOINT: str
    S3_BUCKET: str
    S3_ACCESS_KEY: str | None = None
    S3_SECRET_KEY: str | None = None

    # Directory to upload
    S3_DIR_PATH: str

    # SQLAlchemy - Create db connection string
    @computed_field
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Use DATABASE_URI if given, otherwise build a PostgreSQL URI from parts"""
        if self.DATABASE_URI:
            return self.DATABASE_URI
        return URL.create(
            "postgresql+psycopg2",
            username=self.DATABASE_USER,
            password=self.DATABASE_PASSWORD,
            host=self.DATABASE_HOST,
            port=self.DATABASE_PORT,
            database=self.DATABASE_NAME,
        ).render_as_string(hide_password=False)

    # Read environment variables from .env file, if it exists
    # extra='ignore' prevents validation errors from extra env vars
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Export settings
@lru_cache
def get_settings() -> Settings:
    """
    Get settings instance, cached for performance
    """
    return Settings()
