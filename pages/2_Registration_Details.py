# pages/2_Registration_Details.py: one registration, with edit and admin actions
import streamlit as st

# ── Page config FIRST ─────────────────────────────────────────
st.set_page_config(page_title="Detalhes do Cadastro", page_icon="🌸", layout="centered")

from utils.styling import inject_global_styles, inject_sidebar_styles, brand_header
from utils.auth_sidebar import render_auth_in_sidebar, require_auth
from utils.db import get_engine
from utils.format_utils import CEP_MAX_LEN, CPF_MAX_LEN, PHONE_MAX_LEN, format_timestamp
from utils.session_cache import is_busy, mark_busy, clear_busy, flash, show_flash

from domain.errors import NotFoundError, PersistenceMismatchError, RegistrationError, ValidationError
from domain.models import MARITAL_STATUSES, PAYMENT_METHODS, Registration, RegistrationDraft, contact_label
from services import registration_service

inject_global_styles()
inject_sidebar_styles()
render_auth_in_sidebar()
require_auth()

engine = get_engine()

ADMIN_PAGE = "pages/1_Admin.py"


def _back_to_list():
    st.switch_page(ADMIN_PAGE)


def _run(action: str, fn, success: str) -> bool:
    """One outstanding call per control; errors become notifications."""
    if is_busy(action):
        return False
    mark_busy(action)
    try:
        fn()
    except PersistenceMismatchError as e:
        flash("error", f"Falha ao confirmar a atualização: {e}")
        return False
    except ValidationError as e:
        flash("error", str(e))
        return False
    except RegistrationError as e:
        flash("error", f"Erro ao atualizar o cadastro: {e}")
        return False
    finally:
        clear_busy(action)
    flash("success", success)
    return True


def _render_field(label: str, value) -> None:
    st.caption(label)
    st.code(str(value or "-"), language=None)   # st.code carries a copy button


def _render_read_only(reg: Registration) -> None:
    c1, c2 = st.columns(2)
    with c1:
        _render_field("Nº de inscrição", reg.sequence_number)
    with c2:
        _render_field("Cadastrado em", format_timestamp(reg.created_at))
    _render_field("Nome Completo", reg.nome_completo)
    _render_field("CPF", reg.cpf)
    _render_field("WhatsApp", reg.whats_participante)
    _render_field("CEP", reg.cep)
    _render_field("Endereço", reg.endereco)
    _render_field("Número", reg.numero)
    _render_field("Bairro", reg.bairro)
    _render_field("Cidade", reg.cidade)
    _render_field("Estado", reg.estado)
    _render_field("Estado Civil", reg.estado_civil)
    _render_field(contact_label(reg.estado_civil), reg.nome_contato)
    _render_field("WhatsApp do Contato", reg.whatsapp_contato)


def _render_edit_form(reg: Registration) -> None:
    draft = reg.to_draft()
    with st.form(f"edit_{reg.id}"):
        values = {"nome_completo": st.text_input("Nome Completo *", draft.nome_completo)}
        c1, c2 = st.columns(2)
        values["cpf"] = c1.text_input("CPF *", draft.cpf, max_chars=CPF_MAX_LEN)
        values["whats_participante"] = c2.text_input("WhatsApp", draft.whats_participante, max_chars=PHONE_MAX_LEN)
        c1, c2 = st.columns(2)
        values["cep"] = c1.text_input("CEP *", draft.cep, max_chars=CEP_MAX_LEN)
        values["numero"] = c2.text_input("Número *", draft.numero)
        values["endereco"] = st.text_input("Endereço *", draft.endereco)
        c1, c2, c3 = st.columns(3)
        values["bairro"] = c1.text_input("Bairro *", draft.bairro)
        values["cidade"] = c2.text_input("Cidade *", draft.cidade)
        values["estado"] = c3.text_input("Estado *", draft.estado)
        values["estado_civil"] = st.selectbox(
            "Estado Civil *", MARITAL_STATUSES,
            index=MARITAL_STATUSES.index(draft.estado_civil) if draft.estado_civil in MARITAL_STATUSES else 0,
        )
        c1, c2 = st.columns(2)
        values["nome_contato"] = c1.text_input(contact_label(draft.estado_civil), draft.nome_contato)
        values["whatsapp_contato"] = c2.text_input("WhatsApp do Contato", draft.whatsapp_contato, max_chars=PHONE_MAX_LEN)

        c1, c2 = st.columns(2)
        saved = c1.form_submit_button("💾 Salvar", type="primary", use_container_width=True)
        cancelled = c2.form_submit_button("Cancelar", use_container_width=True)

    if cancelled:
        st.session_state["editing"] = None
        st.rerun()
    if saved:
        ok = _run("edit", lambda: registration_service.update_registration(
            engine, reg.id, RegistrationDraft.from_mapping(values)), "Cadastro atualizado com sucesso!")
        if ok:
            st.session_state["editing"] = None
        st.rerun()


def _render_actions(reg: Registration) -> None:
    st.markdown("---")

    # Payment method: direct overwrite, any value to any value
    options = [None] + PAYMENT_METHODS
    current = reg.payment_method if reg.payment_method in PAYMENT_METHODS else None
    key = f"payment_{reg.id}"
    st.session_state.setdefault(key, current)

    def _on_payment_change():
        method = st.session_state[key]
        ok = _run("payment", lambda: registration_service.set_payment_method(engine, reg.id, method),
                  f"Forma de pagamento atualizada: {method or 'Não informado'}")
        if not ok:
            st.session_state[key] = current

    st.selectbox(
        "Forma de pagamento", options, key=key,
        format_func=lambda v: v or "Não informado",
        disabled=is_busy("payment"), on_change=_on_payment_change,
    )

    if reg.verified:
        st.success("✅ Cadastro já conferido")
        verify_label = "↩️ Marcar como Pendente"
    else:
        verify_label = "✔️ Marcar como Conferido"
    busy = is_busy("verify")
    if st.button("Conferindo..." if busy else verify_label, disabled=busy, use_container_width=True,
                 type="secondary" if reg.verified else "primary"):
        _run("verify", lambda: registration_service.toggle_verified(engine, reg.id),
             "Cadastro marcado como pendente!" if reg.verified else "Cadastro marcado como conferido!")
        st.rerun()

    c1, c2 = st.columns(2)
    if c1.button("✏️ Editar", use_container_width=True):
        st.session_state["editing"] = reg.id
        st.rerun()
    if c2.button("⬅️ Voltar para a lista", use_container_width=True):
        _back_to_list()

    with st.expander("🗑️ Excluir cadastro"):
        confirm = st.checkbox(f"Confirmo a exclusão de {reg.nome_completo}")
        if st.button("Excluir definitivamente", disabled=not confirm or is_busy("delete")):
            if _run("delete", lambda: registration_service.delete_registration(engine, reg.id),
                    "Cadastro excluído com sucesso!"):
                st.session_state.pop("registration_id", None)
                _back_to_list()
            st.rerun()


def render_registration_details(registration_id: str | None) -> None:
    brand_header("Detalhes do Cadastro")
    show_flash()

    if not registration_id:
        st.warning("Nenhum cadastro selecionado.")
        if st.button("Voltar para a lista"):
            _back_to_list()
        return

    try:
        reg = registration_service.get_registration(engine, registration_id)
    except NotFoundError:
        st.error("Cadastro não encontrado")
        if st.button("Voltar para a lista"):
            _back_to_list()
        return
    except RegistrationError:
        st.error("Erro ao carregar os detalhes do cadastro")
        return

    if st.session_state.get("editing") == reg.id:
        _render_edit_form(reg)
    else:
        _render_read_only(reg)
        _render_actions(reg)


registration_id = st.query_params.get("id") or st.session_state.get("registration_id")
if registration_id:
    st.session_state["registration_id"] = registration_id
    st.query_params["id"] = registration_id
render_registration_details(registration_id)
