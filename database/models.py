"""
SQLAlchemy ORM models.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Uuid
from sqlalchemy.orm import DeclarativeBase


ACCOUNT_ID_MAX_LENGTH = 64
EMAIL_MAX_LENGTH = 255
NAME_MAX_LENGTH = 128


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    account_id = Column(String(ACCOUNT_ID_MAX_LENGTH), unique=True, nullable=False)
    email = Column(String(EMAIL_MAX_LENGTH), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<User {self.user_id} {self.email}>"
