# Admin.py: registrations list, filters and the open/closed toggle

import math

import pandas as pd
import streamlit as st

# ── Page config FIRST ─────────────────────────────────────────
st.set_page_config(page_title="Painel Administrativo", page_icon="🌸", layout="wide")

# ── Shared styling/auth/services ──────────────────────────────
from utils.styling import inject_global_styles, inject_sidebar_styles, brand_header
from utils.auth_sidebar import render_auth_in_sidebar, require_auth
from utils.db import get_engine
from utils.format_utils import digits_only, format_timestamp
from utils.session_cache import ViewPreferences, get_preferences, is_busy, mark_busy, clear_busy, flash, show_flash

from config import ADMIN_PAGE_SIZE
from domain.errors import RegistrationError
from domain.models import FILTERS, Registration
from services import registration_service, settings_service

inject_global_styles()
inject_sidebar_styles()
render_auth_in_sidebar()   # shows login/logout in sidebar
require_auth()             # blocks page if not logged in

engine = get_engine()

_TOGGLE = "settings_toggle"
COLS = ["#", "Nome Completo", "CPF", "WhatsApp", "Status", "Pagamento", "Cadastrado em"]


def _to_frame(registrations: list[Registration]) -> pd.DataFrame:
    data = [{
        "id": r.id,
        "#": r.sequence_number,
        "Nome Completo": r.nome_completo,
        "CPF": r.cpf,
        "WhatsApp": r.whats_participante or "-",
        "Status": "✅ Conferido" if r.verified else "🕒 Pendente",
        "Pagamento": r.payment_method or "-",
        "Cadastrado em": format_timestamp(r.created_at),
    } for r in registrations]
    return pd.DataFrame(data, columns=["id"] + COLS)


def _render_toggle(closed: bool | None) -> None:
    if closed is None:
        st.button("Status indisponível", disabled=True, use_container_width=True)
        return
    label = "🔴 Inscrições Encerradas" if closed else "🟢 Inscrições Abertas"
    if st.button(label, disabled=is_busy(_TOGGLE), use_container_width=True,
                 help="Clique para abrir/encerrar as inscrições"):
        mark_busy(_TOGGLE)
        try:
            new = settings_service.toggle_registration_closed(engine)
            flash("success", f"Inscrições {'encerradas' if new.is_registration_closed else 'abertas'} com sucesso!")
        except RegistrationError:
            flash("error", "Erro ao atualizar status das inscrições")
        finally:
            clear_busy(_TOGGLE)
        st.rerun()


def render_admin_panel(prefs: ViewPreferences) -> None:
    brand_header("Painel Administrativo")
    show_flash()

    try:
        closed = settings_service.is_registration_closed(engine)
    except RegistrationError:
        st.toast("Erro ao verificar status de inscrições", icon="❌")
        closed = None

    # ── Controls ─────────────────────────────────────────────
    total_col, toggle_col, filter_col = st.columns([2, 1.2, 1.2], vertical_alignment="center")
    with filter_col:
        keys = list(FILTERS)
        selected = st.selectbox(
            "Filtro", keys, index=keys.index(prefs.admin_filter),
            format_func=lambda k: FILTERS[k][0], label_visibility="collapsed",
        )
        if selected != prefs.admin_filter:
            prefs.admin_filter = selected
            prefs.admin_page = 1
    with toggle_col:
        _render_toggle(closed)

    try:
        total = registration_service.count_registrations(engine, prefs.admin_filter)
        registrations = registration_service.list_registrations(engine, prefs.admin_filter)
    except RegistrationError:
        st.error("Erro ao carregar os cadastros")
        st.stop()

    with total_col:
        st.metric(f"👥 {FILTERS[prefs.admin_filter][1]}", f"{total:,}".replace(",", "."))

    df = _to_frame(registrations)

    # --- Search --------------------------------------------------------------
    search_term = st.text_input("🔎 Buscar por nome ou CPF", prefs.admin_search,
                                placeholder="Digite um nome ou CPF…").strip()
    if search_term != prefs.admin_search:
        prefs.admin_search = search_term
        prefs.admin_page = 1
    if search_term and not df.empty:
        name_match = df["Nome Completo"].fillna("").str.lower().str.contains(search_term.lower(), regex=False)
        d = digits_only(search_term)
        cpf_match = df["CPF"].map(digits_only).str.contains(d, regex=False) if d else False
        df = df[name_match | cpf_match]

    if df.empty:
        st.info("Nenhum cadastro encontrado.")
        return

    # --- Pagination ----------------------------------------------------------
    total_rows = len(df)
    total_pages = max(1, math.ceil(total_rows / ADMIN_PAGE_SIZE))
    current_page = min(max(1, prefs.admin_page), total_pages)

    left, mid, right = st.columns([1, 2, 1], vertical_alignment="center")
    with mid:
        st.markdown(
            f"<div style='text-align:center; font-weight:600;'>Página {current_page} / {total_pages} &nbsp;•&nbsp; {total_rows} exibidos</div>",
            unsafe_allow_html=True,
        )
    with right:
        c1, c2 = st.columns(2)
        if c1.button("◀", disabled=(current_page <= 1), use_container_width=True):
            prefs.admin_page = current_page - 1; st.rerun()
        if c2.button("▶", disabled=(current_page >= total_pages), use_container_width=True):
            prefs.admin_page = current_page + 1; st.rerun()
    with left:
        st.download_button(
            "⬇️ Baixar CSV",
            data=df[COLS].to_csv(index=False).encode("utf-8"),
            file_name=f"cadastros_{prefs.admin_filter}.csv",
            mime="text/csv",
        )

    start = (current_page - 1) * ADMIN_PAGE_SIZE
    df_page = df.iloc[start:start + ADMIN_PAGE_SIZE].reset_index(drop=True)

    event = st.dataframe(
        df_page[COLS],
        hide_index=True,
        use_container_width=True,
        on_select="rerun",
        selection_mode="single-row",
        key=f"admin_grid_{prefs.admin_filter}_{current_page}",
    )

    rows = event.selection.rows if event is not None else []
    if rows:
        chosen = df_page.iloc[rows[0]]
        if st.button(f"👁️ Visualizar cadastro de {chosen['Nome Completo']}", type="primary"):
            st.session_state["registration_id"] = chosen["id"]
            st.switch_page("pages/2_Registration_Details.py")
    else:
        st.caption("Selecione uma linha para visualizar o cadastro.")


render_admin_panel(get_preferences())
