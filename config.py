# config.py
from __future__ import annotations
import os, logging
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv, find_dotenv

# Load .env once, globally
load_dotenv(find_dotenv() or (Path(__file__).parent / ".env"))

def _clean(val: Optional[str], default: Optional[str] = None) -> Optional[str]:
    if val is None:
        return default
    v = val.strip()
    if (v.startswith('"') and v.endswith('"')) or (v.startswith("'") and v.endswith("'")):
        v = v[1:-1].strip()
    return v or default

def _must(name: str) -> str:
    v = _clean(os.getenv(name))
    if not v:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return v

def _maybe_int(name: str, default: Optional[int] = None) -> Optional[int]:
    v = _clean(os.getenv(name))
    try:
        return int(v) if v is not None else default
    except ValueError:
        return default

def _maybe_bool(name: str, default: bool = False) -> bool:
    v = _clean(os.getenv(name))
    if v is None:
        return default
    return v.lower() in {"1", "true", "yes", "y", "on"}

# ----- Logging -----
LOG_LEVEL = (_clean(os.getenv("LOG_LEVEL"), "INFO") or "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# App timezone (used for created_at display)
APP_TZ = _clean(os.getenv("APP_TZ"), "America/Sao_Paulo")

# ----- App Defaults -----
EVENT_NAME = _clean(os.getenv("EVENT_NAME"), "Virtuosas")

# ----- Database -----
# DATABASE_URL wins (any SQLAlchemy URL); otherwise build the Postgres URL from parts.
DB_HOST = _clean(os.getenv("DB_HOST"))
DB_PORT = _maybe_int("DB_PORT", 5432) or 5432
DB_NAME = _clean(os.getenv("DB_NAME"))
DB_USER = _clean(os.getenv("DB_USER"))
DB_PASSWORD = _clean(os.getenv("DB_PASSWORD"))

DATABASE_URL = _clean(os.getenv("DATABASE_URL"))
if DATABASE_URL and DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql+psycopg2://", 1)
if not DATABASE_URL and DB_HOST:
    DATABASE_URL = f"postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"

# Create tables on first engine use (local dev / SQLite). Hosted DBs manage their own schema.
DB_BOOTSTRAP_SCHEMA = _maybe_bool("DB_BOOTSTRAP_SCHEMA", False)

# ----- Postal code (CEP) lookup -----
VIACEP_URL = _clean(os.getenv("VIACEP_URL"), "https://viacep.com.br/ws")
CEP_TIMEOUT_SECONDS = _maybe_int("CEP_TIMEOUT_SECONDS", 6) or 6

# ----- Admin list -----
ADMIN_PAGE_SIZE = _maybe_int("ADMIN_PAGE_SIZE", 25) or 25

def database_url() -> str:
    if not DATABASE_URL:
        raise RuntimeError("Missing database config: set DATABASE_URL or DB_HOST/DB_NAME/DB_USER/DB_PASSWORD")
    return DATABASE_URL

def validate_config() -> None:
    if not VIACEP_URL.lower().startswith(("http://", "https://")):
        raise RuntimeError("VIACEP_URL must be an absolute http(s) URL")
    if DATABASE_URL and "://" not in DATABASE_URL:
        raise RuntimeError("DATABASE_URL must be a SQLAlchemy URL (dialect://...)")
