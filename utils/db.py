# utils/db.py
import logging
from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

import config

logger = logging.getLogger(__name__)

# Portable DDL (Postgres + SQLite). The hosted database keeps its own copy of this schema.
SCHEMA_SQL = [
    """
    CREATE TABLE IF NOT EXISTS registrations (
        id                 VARCHAR(36) PRIMARY KEY,
        nome_completo      TEXT NOT NULL,
        cpf                VARCHAR(14) NOT NULL UNIQUE,
        whats_participante TEXT,
        cep                VARCHAR(10) NOT NULL,
        endereco           TEXT NOT NULL,
        numero             TEXT NOT NULL,
        bairro             TEXT NOT NULL,
        cidade             TEXT NOT NULL,
        estado             TEXT NOT NULL,
        estado_civil       TEXT NOT NULL,
        nome_contato       TEXT,
        whatsapp_contato   TEXT,
        verified           BOOLEAN NOT NULL DEFAULT FALSE,
        payment_method     TEXT,
        created_at         TIMESTAMP WITH TIME ZONE,
        sequence_number    INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS settings (
        id                     INTEGER PRIMARY KEY,
        is_registration_closed BOOLEAN NOT NULL DEFAULT FALSE
    )
    """,
]


def create_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        for stmt in SCHEMA_SQL:
            conn.execute(text(stmt))
    logger.info("Schema ready on %s", engine.url.render_as_string(hide_password=True))


@lru_cache(maxsize=1)
def get_engine(url: Optional[str] = None) -> Engine:
    config.validate_config()
    engine = create_engine(url or config.database_url(), pool_pre_ping=True)
    if config.DB_BOOTSTRAP_SCHEMA:
        create_schema(engine)
    return engine
