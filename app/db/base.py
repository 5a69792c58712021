"""
Declarative base - every ORM model inherits from Base.

Importing the models here registers their tables on Base.metadata, which
is what create_all() (tests) and Alembic autogenerate look at.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


# Register models on Base.metadata (imported for side effects)
from app.models import user, project, study_subject, study_topic, task, annual_goal, quiz  # noqa: E402,F401
