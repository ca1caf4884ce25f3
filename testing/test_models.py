import datetime as dt

import pytest

import config
from domain.models import (
    FILTERS, Registration, RegistrationDraft, Settings, contact_label, filter_predicate,
)


def test_filter_predicates():
    assert filter_predicate("all") == {}
    assert filter_predicate("pending") == {"verified": False}
    assert filter_predicate("boleto-enviado") == {"payment_method": "Boleto Enviado"}
    with pytest.raises(ValueError):
        filter_predicate("unknown")


def test_filter_predicate_is_a_copy():
    filter_predicate("verified")["verified"] = False
    assert FILTERS["verified"][2] == {"verified": True}


def test_contact_labels():
    assert contact_label("Casado") == "Nome do Marido"
    assert contact_label("Namorando") == "Nome do Namorado"
    assert contact_label("Outros") == "Nome do Contato mais Próximo"
    assert contact_label("") == "Nome do Contato"


def test_registration_from_store_row():
    reg = Registration.from_row({
        "id": "abc", "nome_completo": "Maria", "cpf": "529.982.247-25", "cep": "01.310-100",
        "endereco": "Rua A", "numero": "1", "bairro": "B", "cidade": "C", "estado": "SP",
        "estado_civil": "Outros", "verified": 1, "sequence_number": "7",
        "created_at": "2025-03-10 15:30:00+00:00", "unrelated": "ignored",
    })
    assert reg.verified is True
    assert reg.sequence_number == 7
    assert reg.created_at == dt.datetime(2025, 3, 10, 15, 30, tzinfo=dt.timezone.utc)
    assert reg.payment_method is None

    draft = reg.to_draft()
    assert draft.cpf == "529.982.247-25"
    assert draft.nome_contato == ""


def test_draft_from_mapping_fills_blanks():
    draft = RegistrationDraft.from_mapping({"nome_completo": "Ana", "cpf": None})
    assert draft.nome_completo == "Ana"
    assert draft.cpf == ""
    assert RegistrationDraft.field_names()[0] == "nome_completo"


def test_settings_from_row():
    assert Settings.from_row({"id": 1, "is_registration_closed": 0}) == Settings()


def test_config_helpers(monkeypatch):
    monkeypatch.setenv("X_FLAG", " 'yes' ")
    monkeypatch.setenv("X_NUM", "abc")
    monkeypatch.setenv("X_EMPTY", "  ")
    assert config._maybe_bool("X_FLAG") is True
    assert config._maybe_int("X_NUM", 3) == 3
    assert config._clean(None, "d") == "d"
    assert config._clean("  ", "d") == "d"
    with pytest.raises(RuntimeError):
        config._must("X_EMPTY")
