import pytest
from streamlit.testing.v1 import AppTest

import config
from conftest import cpf_from_base
from services import registration_service
from utils import db


@pytest.fixture
def app_engine(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setattr(config, "DB_BOOTSTRAP_SCHEMA", True)
    db.get_engine.cache_clear()
    yield db.get_engine()
    db.get_engine().dispose()
    db.get_engine.cache_clear()


def _login(at: AppTest) -> None:
    at.session_state["admin_auth"] = {"username": "admin", "name": "Admin"}


@pytest.mark.parametrize("marital, label", [
    ("Casado", "Nome do Marido"),
    ("Namorando", "Nome do Namorado"),
    ("Outros", "Nome do Contato mais Próximo"),
])
def test_edit_form_contact_label_follows_marital_status(app_engine, make_draft, marital, label):
    reg = registration_service.submit_registration(
        app_engine, make_draft(cpf=cpf_from_base("400000001"), estado_civil=marital))

    at = AppTest.from_file("../pages/2_Registration_Details.py", default_timeout=30)
    _login(at)
    at.session_state["registration_id"] = reg.id
    at.session_state["editing"] = reg.id
    at.run()

    assert not at.exception
    labels = [w.label for w in at.text_input]
    assert label in labels
    assert "Nome do Contato" not in labels


def test_home_ignores_id_query_param(app_engine):
    at = AppTest.from_file("../Home.py", default_timeout=30)
    at.query_params["id"] = "some-registration"
    at.run()

    assert not at.exception
    assert "Nome Completo *" in [w.label for w in at.text_input]
