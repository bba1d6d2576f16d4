"""
FileRecord Models - one row per object uploaded to the bucket.
"""

import uuid
from dataclasses import dataclass
import sqlalchemy as sa
from sqlmodel import Field

from core.models import TimestampMixin, new_uuid

# Longest URL the url column accepts
MAX_URL_LENGTH = 2000


# ============================================================================
# Database Tables
# ============================================================================


class FileRecord(TimestampMixin, table=True):
    """
    Public location of an uploaded object.

    The id is left unset by callers; FileRecordStore.create() assigns it,
    and rows inserted outside the store get the column default.
    """
    __tablename__ = "files"

    id: uuid.UUID | None = Field(
        default=None,
        primary_key=True,
        sa_column_kwargs={"server_default": new_uuid()},
    )
    url: str = Field(max_length=MAX_URL_LENGTH, nullable=False)
    is_confirmed: bool = Field(
        default=False,
        nullable=False,
        sa_column_kwargs={"server_default": sa.false()},
    )



# ============================================================================
# Results
# ============================================================================


@dataclass
class RecordResult:
    """
    Outcome of inserting a FileRecord.

    Attributes:
        file_record: The persisted record, with its generated id (None on failure)
        error: Error description (None if successful)
    """

    file_record: FileRecord | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.file_record is not None

    @property
    def identifier(self) -> str:
        """Generated id as a string, empty if the insert failed"""
        if self.file_record is None or self.file_record.id is None:
            return ""
        return str(self.file_record.id)
