import os

from dotenv import load_dotenv
from sqlalchemy.engine import URL


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

DATABASE_URL = os.getenv("DATABASE_URL")
DB_DRIVER = os.getenv("DB_DRIVER", "mysql+pymysql")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", "3306"))
DB_USER = os.getenv("DB_USER", "root")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_NAME = os.getenv("DB_NAME", "booking")
DB_ECHO = _get_bool(os.getenv("DB_ECHO"), default=False)

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), default=["http://localhost:3000"])


def get_database_url() -> str | URL:
    if DATABASE_URL:
        return DATABASE_URL
    return URL.create(
        DB_DRIVER,
        username=DB_USER,
        password=DB_PASSWORD or None,
        host=DB_HOST,
        port=DB_PORT,
        database=DB_NAME,
    )


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and not DATABASE_URL and not DB_PASSWORD:
        raise RuntimeError("DB_PASSWORD or DATABASE_URL must be set in production.")
