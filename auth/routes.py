"""
Auth API routes — register, login, current user.

Route prefix: /api/v1/auth
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user_id
from auth.password import dummy_hash, hash_password, verify_password
from auth.tokens import create_token
from auth.validators import validate_login, validate_registration
from database.helpers import (
    create_user,
    get_user_by_account_id,
    get_user_by_email,
    get_user_by_id,
)
from database.models import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────
# Request fields are optional so that missing values get the same 400
# message as blank ones.


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    id: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PublicUser(BaseModel):
    user_id: str
    id: str
    email: str
    name: str
    created_at: Optional[datetime] = None


class AuthData(BaseModel):
    user: PublicUser
    token: str


class UserData(BaseModel):
    user: PublicUser


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    data: AuthData


class UserResponse(BaseModel):
    success: bool = True
    message: str
    data: UserData


def _public_user(user: User) -> Dict[str, Any]:
    """Client-facing view of a user record; never includes the hash."""
    return {
        "user_id": str(user.user_id),
        "id": user.account_id,
        "email": user.email,
        "name": user.name,
        "created_at": user.created_at,
    }


def _server_error(message: str, exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": message, "error": str(exc)},
    )


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user and return it with a signed token."""
    try:
        fields = validate_registration(req.email, req.password, req.name, req.id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    try:
        if await get_user_by_email(session, fields.email) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already exists.",
            )
        if await get_user_by_account_id(session, fields.account_id) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Account id already exists.",
            )

        password_hash = await asyncio.to_thread(hash_password, fields.password)
        user = await create_user(
            session,
            account_id=fields.account_id,
            email=fields.email,
            name=fields.name,
            password_hash=password_hash,
        )
        await session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email / id.
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email or account id already exists.",
        )
    except SQLAlchemyError as exc:
        logger.exception("Registration failed for %s", fields.email)
        await session.rollback()
        raise _server_error("An error occurred during registration.", exc)

    token = create_token(str(user.user_id), user.email)
    logger.info("Registered user %s (%s)", user.account_id, user.user_id)

    return {
        "success": True,
        "message": "Registration completed.",
        "data": {"user": _public_user(user), "token": token},
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email + password."""
    try:
        email, password = validate_login(req.email, req.password)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    try:
        user = await get_user_by_email(session, email)
    except SQLAlchemyError as exc:
        logger.exception("Login lookup failed for %s", email)
        raise _server_error("An error occurred during login.", exc)

    stored_hash = user.password_hash if user is not None else dummy_hash()
    password_ok = await asyncio.to_thread(verify_password, password, stored_hash)
    if user is None or not password_ok:
        logger.info("Failed login for %s", email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )

    token = create_token(str(user.user_id), user.email)
    logger.info("Login: %s (%s)", user.account_id, user.user_id)

    return {
        "success": True,
        "message": "Logged in successfully.",
        "data": {"user": _public_user(user), "token": token},
    }


@router.get("/me", response_model=UserResponse)
async def me(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Return the user behind the bearer token."""
    try:
        user = await get_user_by_id(session, user_id)
    except SQLAlchemyError as exc:
        logger.exception("User lookup failed for %s", user_id)
        raise _server_error("An error occurred while loading the user.", exc)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found.",
        )
    return {
        "success": True,
        "message": "Authenticated.",
        "data": {"user": _public_user(user)},
    }
