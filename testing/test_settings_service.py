import pytest

from domain.errors import PersistenceMismatchError
from services import settings_service
from utils import table_client


def test_settings_created_on_first_read(engine):
    assert table_client.count_rows(engine, "settings") == 0
    settings = settings_service.get_settings(engine)
    assert settings.id == 1
    assert settings.is_registration_closed is False
    assert table_client.count_rows(engine, "settings") == 1

    # second read does not insert again
    settings_service.get_settings(engine)
    assert table_client.count_rows(engine, "settings") == 1


def test_toggle_flips_and_persists(engine):
    assert settings_service.toggle_registration_closed(engine).is_registration_closed is True
    assert settings_service.is_registration_closed(engine) is True
    assert settings_service.toggle_registration_closed(engine).is_registration_closed is False
    assert settings_service.is_registration_closed(engine) is False


def test_set_closed_without_row(engine):
    settings = settings_service.set_registration_closed(engine, True)
    assert settings.is_registration_closed is True
    assert table_client.count_rows(engine, "settings") == 1


def test_set_closed_mismatch(engine, monkeypatch):
    settings_service.get_settings(engine)
    monkeypatch.setattr(table_client, "update_rows",
                        lambda *a, **kw: [{"id": 1, "is_registration_closed": False}])
    with pytest.raises(PersistenceMismatchError):
        settings_service.set_registration_closed(engine, True)
