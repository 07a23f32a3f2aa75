import os

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.split(",") if p.strip()]


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./coursetrack.db")
SQL_ECHO = _env_bool("SQL_ECHO", False)

API_PREFIX = os.getenv("API_PREFIX", "/api")
CORS_ORIGINS = _env_list("CORS_ORIGINS", ["*"])

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "")

# inclusive window, in calendar days, for "due soon" counts and "In N days" labels
DUE_SOON_DAYS = 7
