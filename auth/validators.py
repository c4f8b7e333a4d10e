"""
Input validation for the register / login payloads.

Validators raise ``ValueError`` with a client-facing message; routes turn
that into a 400 response.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional, Tuple

from auth.password import MAX_PASSWORD_BYTES
from config.settings import config
from database.models import ACCOUNT_ID_MAX_LENGTH, EMAIL_MAX_LENGTH, NAME_MAX_LENGTH

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class RegistrationFields(NamedTuple):
    email: str
    password: str
    name: str
    account_id: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def validate_registration(
    email: Optional[str],
    password: Optional[str],
    name: Optional[str],
    account_id: Optional[str],
) -> RegistrationFields:
    """
    Check a registration payload and return the normalized fields.

    Order matters: required fields, email format, password length, then
    the stored lengths of email, id and name.
    """
    if not password or not all(_present(v) for v in (email, name, account_id)):
        raise ValueError("Email, password, id and name are required.")

    email = normalize_email(email)
    if not is_valid_email(email):
        raise ValueError("Invalid email format.")

    if len(password) < config.password_min_length:
        raise ValueError(
            f"Password must be at least {config.password_min_length} characters."
        )
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")

    name = name.strip()
    account_id = account_id.strip()
    for label, value, limit in (
        ("Email", email, EMAIL_MAX_LENGTH),
        ("Id", account_id, ACCOUNT_ID_MAX_LENGTH),
        ("Name", name, NAME_MAX_LENGTH),
    ):
        if len(value) > limit:
            raise ValueError(f"{label} must be at most {limit} characters.")

    return RegistrationFields(
        email=email,
        password=password,
        name=name,
        account_id=account_id,
    )


def validate_login(email: Optional[str], password: Optional[str]) -> Tuple[str, str]:
    if not _present(email) or not password:
        raise ValueError("Email and password are required.")
    return normalize_email(email), password
