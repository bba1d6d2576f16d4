"""
Services for persisting FileRecords
"""

import uuid

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from core.config import Settings
from core.db import create_db_and_tables, make_engine
from core.logger import logger
from files.models import FileRecord, RecordResult, MAX_URL_LENGTH


class FileRecordStore:
    """Owns the database connection used to record uploaded files."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: Engine | None = None

    def connect(self) -> None:
        """
        Open the database engine and verify it answers.

        Raises:
            SQLAlchemyError: If the database cannot be reached
        """
        engine = make_engine(str(self.settings.SQLALCHEMY_DATABASE_URI))
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            engine.dispose()
            raise
        self.engine = engine
        logger.info("Connected to database")

    def prepare_schema(self) -> None:
        """
        Ensure the files table exists with every model column.

        Raises:
            RuntimeError: If connect() has not succeeded
            SQLAlchemyError: If the schema cannot be created or altered
        """
        if self.engine is None:
            raise RuntimeError("Database is not connected")
        create_db_and_tables(self.engine)

    def create(self, file_record: FileRecord) -> RecordResult:
        """
        Insert a FileRecord.

        The record store generates the id at insert time; the passed
        instance is refreshed in place, so the id is readable afterwards.
        Failures are reported in the result rather than raised.
        """
        if self.engine is None:
            return RecordResult(error="Database is not connected")

        if not file_record.url:
            return RecordResult(error="File record url is empty")
        if len(file_record.url) > MAX_URL_LENGTH:
            return RecordResult(
                error=f"File record url exceeds {MAX_URL_LENGTH} characters"
            )

        file_record.id = uuid.uuid4()
        with Session(self.engine, expire_on_commit=False) as session:
            try:
                session.add(file_record)
                session.commit()
                session.refresh(file_record)
            except SQLAlchemyError as e:
                session.rollback()
                file_record.id = None
                return RecordResult(error=str(e))

        return RecordResult(file_record=file_record)

    def close(self) -> None:
        """Release the engine; a no-op if connect() never succeeded."""
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
