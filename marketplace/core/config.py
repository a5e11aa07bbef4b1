"""
Application settings.

Values are read from environment variables when the module is imported.
A ``.env`` file in the working directory is loaded first so local
development does not need exported variables.  Every field has a
default suitable for running the API against a local SQLite file.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _parse_csv_env(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Local Services Marketplace API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Tokens are signed with this secret; override it in every deployment.
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))

    # Any SQLAlchemy URL.  Relative SQLite paths resolve against the
    # current working directory.
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./marketplace.db")

    cors_origins: list[str] = field(default_factory=lambda: _parse_csv_env("CORS_ORIGINS", "*"))

    default_location: str = os.getenv("DEFAULT_LOCATION", "Leuven")
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))


settings = Settings()
