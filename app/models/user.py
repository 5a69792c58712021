"""
User model - represents a registered user of Chronos.
Users own tasks, projects, study topics and annual goals, and may connect
a Google account so their dated tasks are mirrored into Google Calendar.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class User(Base):
    """
    SQLAlchemy ORM model for the 'users' table.

    Google tokens are stored encrypted (see app.core.crypto). They are only
    decrypted for the duration of a single calendar call.
    """

    __tablename__ = "users"

    # ---------------------------------------------------------------------------
    # PRIMARY KEY
    # ---------------------------------------------------------------------------
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    # ---------------------------------------------------------------------------
    # USER CREDENTIALS
    # ---------------------------------------------------------------------------
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    # hashed_password: Bcrypt hash, never the plain text
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    is_active: Mapped[bool] = mapped_column(default=True)

    # ---------------------------------------------------------------------------
    # GOOGLE CALENDAR CREDENTIALS (encrypted at rest)
    # ---------------------------------------------------------------------------
    # encrypted_google_access_token: None until the user connects Google
    encrypted_google_access_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    # encrypted_google_refresh_token: Optional, Google only returns it on consent
    encrypted_google_refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ---------------------------------------------------------------------------
    # TIMESTAMPS
    # ---------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # ---------------------------------------------------------------------------
    # RELATIONSHIPS
    # ---------------------------------------------------------------------------
    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="owner", cascade="all, delete-orphan"
    )

    @property
    def calendar_connected(self) -> bool:
        """True when a Google access token is stored for this user."""
        return bool(self.encrypted_google_access_token)
