# utils/auth_sidebar.py
"""Single admin login in the sidebar; credentials come from ADMIN_* env vars."""
import os
import logging
import secrets
from typing import Dict, Optional

import streamlit as st

from config import _clean

__all__ = ["render_auth_in_sidebar", "require_auth", "is_authenticated"]

logger = logging.getLogger(__name__)

_AUTH_KEY = "admin_auth"   # {"username": ..., "name": ...} once logged in
_CRED_VARS = ("ADMIN_USERNAME", "ADMIN_NAME", "ADMIN_PASSWORD")


def _admin_credentials() -> Dict[str, str]:
    creds = {k: _clean(os.getenv(k), "") for k in _CRED_VARS}
    missing = [k for k, v in creds.items() if not v]
    if missing:
        with st.sidebar:
            st.error(f"❌ Variáveis ausentes no .env: {', '.join(missing)}")
        st.stop()
    return creds


def _authenticate(username: str, password: str) -> Optional[Dict[str, str]]:
    creds = _admin_credentials()
    u = (username or "").strip().lower()
    p = (password or "").strip()
    if not (u and p):
        return None
    # both comparisons always run
    user_ok = secrets.compare_digest(u.encode(), creds["ADMIN_USERNAME"].lower().encode())
    pass_ok = secrets.compare_digest(p.encode(), creds["ADMIN_PASSWORD"].encode())
    if user_ok and pass_ok:
        return {"username": u, "name": creds["ADMIN_NAME"]}
    return None


def is_authenticated() -> bool:
    return bool(st.session_state.get(_AUTH_KEY))


def render_auth_in_sidebar() -> None:
    with st.sidebar:
        st.subheader("Acesso administrativo")

        auth = st.session_state.get(_AUTH_KEY)
        if auth:
            st.success(f"✅ Conectada como {auth['name'] or auth['username']}")
            if st.button("🚪 Sair", use_container_width=True):
                logger.info("Admin %s logged out", auth["username"])
                st.session_state.pop(_AUTH_KEY, None)
                st.rerun()
            return

        with st.form("admin_login", clear_on_submit=False):
            user = st.text_input("Usuário")
            pwd = st.text_input("Senha", type="password")
            submitted = st.form_submit_button("Entrar", use_container_width=True)

        if submitted:
            auth = _authenticate(user, pwd)
            if auth:
                logger.info("Admin %s logged in", auth["username"])
                st.session_state[_AUTH_KEY] = auth
                st.rerun()
            logger.warning("Failed admin login for %r", (user or "").strip())
            st.error("❌ Usuário ou senha inválidos")


def require_auth() -> None:
    """Call near the top of a protected page."""
    if not is_authenticated():
        st.warning("Faça login na barra lateral para acessar esta página.")
        st.stop()
