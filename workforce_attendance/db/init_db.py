"""
Table creation for local development and tests

Production schemas are managed by migrations.
"""
from sqlalchemy import text
from sqlalchemy.engine import Engine

from atams.db import Base
from workforce_attendance import models  # noqa: F401  (registers tables on Base.metadata)

SCHEMA_NAME = "workforce"


def create_tables(engine: Engine) -> None:
    """Create the workforce schema (PostgreSQL only) and every attendance table"""
    if engine.dialect.name == "postgresql":
        with engine.begin() as conn:
            conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {SCHEMA_NAME}"))

    tables = [table for table in Base.metadata.sorted_tables if table.schema == SCHEMA_NAME]
    Base.metadata.create_all(bind=engine, tables=tables)
