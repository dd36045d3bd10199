"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so that
the API starts locally against a development MongoDB cluster; in a
production deployment override them via environment variables.
"""

import os
from dataclasses import dataclass
from typing import List


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Help Hive Events API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # ``production`` switches the auth cookie to ``Secure`` and
    # ``SameSite=None`` so that a separately hosted front end can send it.
    environment: str = os.getenv("ENVIRONMENT", "development")

    secret_key: str = os.getenv("JWT_SECRET", "change_me")
    access_token_expire_seconds: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", "3600"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    # Either a full connection string or the Atlas credentials it is
    # built from.  ``MONGODB_URI`` wins when both are set.
    mongodb_uri: str = os.getenv("MONGODB_URI", "")
    db_user: str = os.getenv("DB_USER", "")
    db_password: str = os.getenv("DB_PASSWORD", "")
    db_cluster: str = os.getenv("DB_CLUSTER", "cluster0.osatkz4.mongodb.net")
    db_name: str = os.getenv("DB_NAME", "events_db")

    # Comma-separated list of origins allowed to call the API with
    # credentials.
    cors_origins: str = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:5175,https://help-hive-client-side.vercel.app",
    )

    seed_sample_data: bool = _env_flag("SEED_SAMPLE_DATA", "true")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def database_uri(self) -> str:
        """Connection string for the MongoDB client."""
        if self.mongodb_uri:
            return self.mongodb_uri
        return (
            f"mongodb+srv://{self.db_user}:{self.db_password}@{self.db_cluster}/"
            "?retryWrites=true&w=majority&appName=Cluster0"
        )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
