import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv
from jwt.algorithms import get_default_algorithms
from sqlalchemy.engine import URL


DEFAULT_JWT_SECRET = "change-me"
# 23 hours
DEFAULT_JWT_EXPIRES_MINUTES = 23 * 60


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


def build_database_url(
    host: str,
    port: int,
    user: str,
    password: str,
    database: str,
) -> str:
    return URL.create(
        "postgresql+psycopg",
        username=user,
        password=password or None,
        host=host,
        port=port,
        database=database,
    ).render_as_string(hide_password=False)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration read from the environment."""

    app_env: str
    database_url: str
    jwt_secret_key: str
    jwt_algorithm: str
    jwt_expires_minutes: int
    host: str
    port: int
    log_dir: str
    log_level: str
    cors_origins: list[str]
    graphiql_enabled: bool
    expose_password_hash: bool
    db_retry_attempts: int
    db_retry_backoff_seconds: float

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "Settings":
        if env_file:
            load_dotenv(dotenv_path=env_file)

        app_env = os.getenv("APP_ENV", "development")
        database_url = os.getenv("DATABASE_URL") or build_database_url(
            host=os.getenv("DB_HOST", "localhost"),
            port=int(os.getenv("DB_PORT", "5432")),
            user=os.getenv("DB_USER", "postgres"),
            password=os.getenv("DB_PASSWORD", ""),
            database=os.getenv("DB_NAME", "postgres"),
        )

        return cls(
            app_env=app_env,
            database_url=database_url,
            jwt_secret_key=os.getenv("JWT_SECRET_KEY", DEFAULT_JWT_SECRET),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expires_minutes=int(
                os.getenv("JWT_EXPIRES_MINUTES", str(DEFAULT_JWT_EXPIRES_MINUTES))
            ),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_dir=os.getenv("LOG_DIR", "logs"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=_get_list(os.getenv("CORS_ORIGINS"), default=["*"]),
            graphiql_enabled=_get_bool(
                os.getenv("GRAPHIQL_ENABLED"),
                default=app_env.lower() != "production",
            ),
            expose_password_hash=_get_bool(os.getenv("EXPOSE_PASSWORD_HASH"), default=False),
            db_retry_attempts=max(1, int(os.getenv("DB_RETRY_ATTEMPTS", "3"))),
            db_retry_backoff_seconds=float(os.getenv("DB_RETRY_BACKOFF_SECONDS", "0.5")),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env(os.getenv("ENV_FILE", ".env"))


def validate_runtime_config(settings: Settings) -> None:
    if settings.is_production and settings.jwt_secret_key == DEFAULT_JWT_SECRET:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if settings.jwt_algorithm not in get_default_algorithms():
        raise RuntimeError(f"Unsupported JWT_ALGORITHM: {settings.jwt_algorithm}")
