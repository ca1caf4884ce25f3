# services/settings_service.py
import logging

from sqlalchemy.engine import Engine

from domain.errors import PersistenceMismatchError
from domain.models import Settings
from utils import table_client

logger = logging.getLogger(__name__)

TABLE = "settings"
SETTINGS_ID = 1


def get_settings(engine: Engine) -> Settings:
    """Read the singleton; create it (registration open) if it is missing."""
    row = table_client.select_one(engine, TABLE, {"id": SETTINGS_ID})
    if row:
        return Settings.from_row(row)

    logger.info("Settings row missing; creating default")
    defaults = Settings(id=SETTINGS_ID, is_registration_closed=False)
    table_client.insert_row(engine, TABLE, {"id": defaults.id, "is_registration_closed": False})
    return defaults


def is_registration_closed(engine: Engine) -> bool:
    return get_settings(engine).is_registration_closed


def set_registration_closed(engine: Engine, closed: bool) -> Settings:
    closed = bool(closed)
    rows = table_client.update_rows(engine, TABLE, {"is_registration_closed": closed}, {"id": SETTINGS_ID})
    if not rows:
        table_client.insert_row(engine, TABLE, {"id": SETTINGS_ID, "is_registration_closed": closed})
        rows = [{"id": SETTINGS_ID, "is_registration_closed": closed}]

    stored = Settings.from_row(rows[0])
    if stored.is_registration_closed != closed:
        raise PersistenceMismatchError("A atualização não foi persistida no banco de dados")
    logger.info("Registration %s", "closed" if closed else "opened")
    return stored


def toggle_registration_closed(engine: Engine) -> Settings:
    return set_registration_closed(engine, not is_registration_closed(engine))
