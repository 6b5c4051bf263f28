"""
Base configurations and mixins for database models.

Provides the declarative base shared by every model, a serialization helper,
and the id/timestamp mixins. Column types are kept portable so the same models
run on SQLite (development and tests) and PostgreSQL.
"""

from datetime import date, datetime

from sqlalchemy import Column, DateTime, Integer, inspect
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.functions import now as db_now


class CustomBase:
    """
    Custom base class for SQLAlchemy models with enhanced serialization.

    ``to_dict`` converts model instances to plain dictionaries, rendering
    dates and datetimes in ISO format.
    """

    def to_dict(self) -> dict:
        d = {}
        if not self:
            return d
        for column in inspect(self).mapper.column_attrs:
            value = getattr(self, column.key)
            if isinstance(value, datetime | date):
                d[column.key] = value.isoformat()
            else:
                d[column.key] = value
        return d


# Create the base class for all models
Base = declarative_base(cls=CustomBase)


class TimestampMixin:
    """
    Adds database-managed ``created_at`` and ``updated_at`` columns.
    """

    created_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        nullable=False,
        comment="Timestamp when the record was created",
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        onupdate=db_now(),
        nullable=False,
        comment="Timestamp when the record was last updated",
    )


class IntegerIDMixin:
    """
    Adds an auto-incrementing integer primary key.
    """

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        index=True,
        comment="Auto-incrementing primary key",
    )


__all__ = ["Base", "TimestampMixin", "IntegerIDMixin"]
