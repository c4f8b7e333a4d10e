"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-me-jwt-secret-key-at-least-32-bytes"


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = ""               # e.g. postgresql+asyncpg://user:pw@localhost:5432/auth
    database_echo: bool = False

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = DEFAULT_JWT_SECRET  # HMAC secret for auth tokens
    jwt_algorithm: str = "HS256"
    jwt_expiry_seconds: int = 604800      # 7 days
    bcrypt_rounds: int = 10               # bcrypt work factor
    password_min_length: int = 6

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 8000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }


config = Settings()
