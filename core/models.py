"""
Configure generic models not specific
to a particular feature.
"""

from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement
from sqlalchemy.types import Uuid
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class new_uuid(FunctionElement):
    """
    Database-side random UUID, usable as a column server_default.
    """
    type = Uuid()
    inherit_cache = True


@compiles(new_uuid)
def _new_uuid_default(element, compiler, **kw):
    return "gen_random_uuid()"


@compiles(new_uuid, "sqlite")
def _new_uuid_sqlite(element, compiler, **kw):
    # Uuid columns are stored as 32 hex digits on SQLite
    return "(lower(hex(randomblob(16))))"


class TimestampMixin(SQLModel):
    """
    Bookkeeping columns shared by persisted records.
    A row with deleted_at set is considered soft-deleted.
    """
    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utcnow},
    )
    deleted_at: datetime | None = Field(
        default=None, index=True, sa_type=DateTime(timezone=True)
    )
