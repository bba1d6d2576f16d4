"""
Database configuration
"""
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine
from sqlmodel.pool import StaticPool

from core.logger import logger


def make_engine(database_uri: str) -> Engine:
    """
    Create the database engine for the given URI.
    In-memory SQLite gets a single shared connection so every
    session sees the same database.
    """
    if database_uri in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_uri,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_uri, echo=False, pool_pre_ping=True)


def create_db_and_tables(engine: Engine) -> None:
    """
    Create missing tables, then add any model columns the existing
    tables lack. Columns are never dropped or retyped.
    """
    SQLModel.metadata.create_all(engine)

    inspector = inspect(engine)
    quote = engine.dialect.identifier_preparer.quote
    with engine.begin() as conn:
        for table in SQLModel.metadata.sorted_tables:
            existing = {col["name"] for col in inspector.get_columns(table.name)}
            for column in table.columns:
                if column.name in existing:
                    continue
                col_type = column.type.compile(dialect=engine.dialect)
                logger.info(f"Adding column {table.name}.{column.name} ({col_type})")
                conn.execute(
                    text(
                        f"ALTER TABLE {quote(table.name)} "
                        f"ADD COLUMN {quote(column.name)} {col_type}"
                    )
                )
