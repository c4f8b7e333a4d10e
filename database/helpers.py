"""
Database helper functions — single-record lookups and inserts for users.

"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    """Look up a user by an already-normalized email."""
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_account_id(session: AsyncSession, account_id: str) -> Optional[User]:
    result = await session.execute(
        select(User).where(User.account_id == account_id)
    )
    return result.scalar_one_or_none()


async def get_user_by_id(session: AsyncSession, user_id: str | uuid.UUID) -> Optional[User]:
    """Return the user or ``None``; malformed ids are treated as unknown."""
    try:
        uid = _to_uuid(user_id)
    except (ValueError, AttributeError, TypeError):
        return None
    result = await session.execute(select(User).where(User.user_id == uid))
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    *,
    account_id: str,
    email: str,
    name: str,
    password_hash: str,
) -> User:
    """Insert a new ``User`` and flush so defaults and constraints apply."""
    user = User(
        user_id=uuid.uuid4(),
        account_id=account_id,
        email=email,
        name=name,
        password_hash=password_hash,
        created_at=datetime.now(timezone.utc),
    )
    session.add(user)
    await session.flush()
    logger.debug("Inserted user row %s", user.user_id)
    return user
