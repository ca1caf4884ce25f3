import pytest

from utils.validation_utils import (
    MSG_CONTACT, MSG_INVALID_CPF, MSG_MARITAL_STATUS, MSG_REQUIRED,
    first_draft_error, missing_required, validate_cpf,
)


@pytest.mark.parametrize("cpf", ["529.982.247-25", "52998224725", "111.444.777-35", "123.456.789-09"])
def test_valid_cpfs(cpf):
    assert validate_cpf(cpf)


@pytest.mark.parametrize("cpf", [
    "529.982.247-24",   # wrong second digit
    "529.982.247-15",   # wrong first digit
    "111.111.111-11",   # repeated digits pass the arithmetic but are rejected
    "000.000.000-00",
    "529.982.247-2",    # 10 digits
    "529.982.247-255",  # 12 digits
    "",
    None,
])
def test_invalid_cpfs(cpf):
    assert not validate_cpf(cpf)


def test_clean_draft_has_no_error(make_draft):
    assert first_draft_error(make_draft()) is None


def test_marital_status_checked_first(make_draft):
    draft = make_draft(estado_civil="", nome_completo="", cpf="123")
    assert first_draft_error(draft) == MSG_MARITAL_STATUS


def test_unknown_marital_status_rejected(make_draft):
    assert first_draft_error(make_draft(estado_civil="Solteiro")) == MSG_MARITAL_STATUS


def test_half_filled_contact_rejected(make_draft):
    assert first_draft_error(make_draft(whatsapp_contato="")) == MSG_CONTACT
    assert first_draft_error(make_draft(nome_contato="  ")) == MSG_CONTACT


def test_contact_is_optional(make_draft):
    assert first_draft_error(make_draft(nome_contato="", whatsapp_contato="")) is None


def test_contact_checked_before_required(make_draft):
    draft = make_draft(nome_contato="", bairro="")
    assert first_draft_error(draft) == MSG_CONTACT


def test_required_fields(make_draft):
    draft = make_draft(bairro="", cidade="   ")
    assert missing_required(draft) == ["bairro", "cidade"]
    assert first_draft_error(draft) == MSG_REQUIRED


def test_required_checked_before_cpf(make_draft):
    draft = make_draft(cpf="111.111.111-11", numero="")
    assert first_draft_error(draft) == MSG_REQUIRED


def test_invalid_cpf_reported_last(make_draft):
    assert first_draft_error(make_draft(cpf="529.982.247-24")) == MSG_INVALID_CPF


def test_whatsapp_participante_not_required(make_draft):
    assert first_draft_error(make_draft(whats_participante="")) is None
