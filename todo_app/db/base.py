"""
SQLAlchemy declarative base.

All database models inherit from this Base class so that Alembic
and ``metadata.create_all`` see every table.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
