"""
SQLAlchemy declarative base.

All ORM models inherit from Base so Alembic and init_db see one metadata.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
