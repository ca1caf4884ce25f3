# utils/screens/registration_form.py
"""
Public registration form.
- Fields are re-formatted on every change (CPF, CEP, phones, house number).
- A complete CEP triggers the address lookup and fills street/neighborhood/city/state.
- Submission runs inside the button callback so the form can be reset before widgets render.
"""
import logging

import streamlit as st
from sqlalchemy.engine import Engine

from domain.errors import CepLookupError, DataServiceError, RegistrationError, ValidationError
from domain.models import MARITAL_STATUSES, RegistrationDraft, contact_label
from services import cep_service, registration_service, settings_service
from utils.format_utils import (
    CEP_MAX_LEN, CPF_MAX_LEN, PHONE_MAX_LEN,
    digits_only, format_cep, format_cpf, format_phone,
)
from utils.session_cache import clear_busy, flash, is_busy, mark_busy, show_flash

logger = logging.getLogger(__name__)

_SUBMIT = "registration_submit"

MSG_SUCCESS = "Cadastro realizado com sucesso! Agradecemos seu contato."
MSG_FAILURE = "Erro ao realizar cadastro. Por favor, tente novamente."
MSG_CLOSED = "As inscrições estão encerradas no momento. Agradecemos o interesse!"

# ---------- state helpers ----------
def _key(name: str) -> str:
    return f"reg_{name}"

def _draft_from_state() -> RegistrationDraft:
    return RegistrationDraft.from_mapping(
        {n: st.session_state.get(_key(n), "") for n in RegistrationDraft.field_names()}
    )

def _reset_form() -> None:
    for n in RegistrationDraft.field_names():
        st.session_state[_key(n)] = ""

# ---------- callbacks ----------
def _reformat(name: str, fn) -> None:
    st.session_state[_key(name)] = fn(st.session_state.get(_key(name), ""))

def _on_cep_change() -> None:
    _reformat("cep", format_cep)
    cep = st.session_state.get(_key("cep"), "")
    if len(digits_only(cep)) != 8:
        return
    try:
        address = cep_service.lookup_cep(cep)
    except CepLookupError as e:
        flash("warning", f"{e}. Preencha o endereço manualmente.")
        return
    if address is None:
        flash("warning", "CEP não encontrado. Preencha o endereço manualmente.")
        return
    st.session_state[_key("endereco")] = address.logradouro
    st.session_state[_key("bairro")] = address.bairro
    st.session_state[_key("cidade")] = address.localidade
    st.session_state[_key("estado")] = address.uf

def _on_submit(engine: Engine) -> None:
    if is_busy(_SUBMIT):
        return
    mark_busy(_SUBMIT)
    try:
        registration_service.submit_registration(engine, _draft_from_state())
    except ValidationError as e:
        flash("error", str(e))
    except RegistrationError:
        logger.exception("Registration submit failed")
        flash("error", MSG_FAILURE)
    else:
        _reset_form()
        flash("success", MSG_SUCCESS)
    finally:
        clear_busy(_SUBMIT)

# ---------- screen ----------
def render_registration_form(engine: Engine) -> None:
    try:
        closed = settings_service.is_registration_closed(engine)
    except DataServiceError:
        st.error("Não foi possível carregar o formulário. Tente novamente mais tarde.")
        st.stop()

    show_flash()

    if closed:
        st.info(MSG_CLOSED)
        return

    for n in RegistrationDraft.field_names():
        st.session_state.setdefault(_key(n), "")

    st.text_input("Nome Completo *", key=_key("nome_completo"))

    c1, c2 = st.columns(2)
    with c1:
        st.text_input("CPF *", key=_key("cpf"), max_chars=CPF_MAX_LEN,
                      on_change=_reformat, args=("cpf", format_cpf), placeholder="000.000.000-00")
    with c2:
        st.text_input("WhatsApp", key=_key("whats_participante"), max_chars=PHONE_MAX_LEN,
                      on_change=_reformat, args=("whats_participante", format_phone),
                      placeholder="(00) 00000-0000")

    c1, c2 = st.columns(2)
    with c1:
        st.text_input("CEP *", key=_key("cep"), max_chars=CEP_MAX_LEN,
                      on_change=_on_cep_change, placeholder="00.000-000",
                      help="O endereço é preenchido automaticamente a partir do CEP.")
    with c2:
        st.text_input("Número *", key=_key("numero"),
                      on_change=_reformat, args=("numero", digits_only))

    st.text_input("Endereço *", key=_key("endereco"))

    c1, c2, c3 = st.columns(3)
    with c1:
        st.text_input("Bairro *", key=_key("bairro"))
    with c2:
        st.text_input("Cidade *", key=_key("cidade"))
    with c3:
        st.text_input("Estado *", key=_key("estado"))

    st.selectbox(
        "Estado Civil *",
        [""] + MARITAL_STATUSES,
        key=_key("estado_civil"),
        format_func=lambda v: v or "Selecione o Estado Civil",
    )

    marital = st.session_state.get(_key("estado_civil"))
    if marital:
        c1, c2 = st.columns(2)
        with c1:
            st.text_input(contact_label(marital), key=_key("nome_contato"))
        with c2:
            st.text_input("WhatsApp de Contato", key=_key("whatsapp_contato"), max_chars=PHONE_MAX_LEN,
                          on_change=_reformat, args=("whatsapp_contato", format_phone),
                          placeholder="(00) 00000-0000")

    busy = is_busy(_SUBMIT)
    st.button(
        "Cadastrando..." if busy else "Cadastrar",
        type="primary",
        use_container_width=True,
        disabled=busy,
        on_click=_on_submit,
        args=(engine,),
    )
