import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class JwtSettings:
    """Token issuer settings, present only when auth is enabled"""
    issuer: str
    audience: str
    secret_key: str
    expires_minutes: int = 60
    algorithm: str = "HS256"


@dataclass(frozen=True)
class Settings:
    """Configuration snapshot handed to every component at construction"""
    default_connection: str
    jwt: Optional[JwtSettings] = None
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"
    sql_echo: bool = False

    @property
    def auth_enabled(self) -> bool:
        return self.jwt is not None


def load_settings() -> Settings:
    """
    Read settings from the environment (and a .env file if present)

    Raises:
        ValueError: If the connection string is missing, or auth is enabled
            without a complete set of JWT settings
    """
    load_dotenv()

    default_connection = os.getenv("DEFAULT_CONNECTION")
    if not default_connection:
        raise ValueError("DEFAULT_CONNECTION environment variable is not set")

    jwt_settings = None
    if _env_flag("AUTH_ENABLED", True):
        issuer = os.getenv("JWT_ISSUER")
        audience = os.getenv("JWT_AUDIENCE")
        secret_key = os.getenv("JWT_SECRET_KEY")
        missing = [
            name
            for name, value in (
                ("JWT_ISSUER", issuer),
                ("JWT_AUDIENCE", audience),
                ("JWT_SECRET_KEY", secret_key),
            )
            if not value
        ]
        if missing:
            raise ValueError(
                f"Auth is enabled but {', '.join(missing)} environment variable(s) are not set"
            )
        jwt_settings = JwtSettings(
            issuer=issuer,
            audience=audience,
            secret_key=secret_key,
            expires_minutes=int(os.getenv("JWT_EXPIRES_MINUTES", "60")),
        )

    cors_origins = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]

    return Settings(
        default_connection=default_connection,
        jwt=jwt_settings,
        cors_origins=cors_origins,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        sql_echo=_env_flag("SQL_ECHO", False),
    )
