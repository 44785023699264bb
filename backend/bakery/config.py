# backend/bakery/config.py
from __future__ import annotations
import os


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    # Signs bearer tokens; override in every deployed environment
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///bakery.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Only applied to server databases; SQLite keeps the Flask-SQLAlchemy defaults
    DB_POOL_SIZE = int(os.environ.get("DB_POOL_SIZE", "10"))

    TOKEN_TTL_DAYS = int(os.environ.get("TOKEN_TTL_DAYS", "7"))
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))
    LOW_STOCK_THRESHOLD = int(os.environ.get("LOW_STOCK_THRESHOLD", "5"))

    CORS_ORIGINS = _env_list(
        "CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:5000",
    )

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def engine_options_for(uri: str, pool_size: int) -> dict:
    """SQLAlchemy engine options for the configured database URI."""
    if uri.startswith("sqlite"):
        return {}
    return {"pool_size": pool_size, "pool_pre_ping": True}
