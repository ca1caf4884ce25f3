from dataclasses import dataclass

import streamlit as st

from domain.models import FILTERS

_PREFS_KEY = "view_prefs"
_BUSY_KEY = "busy_actions"


@dataclass
class ViewPreferences:
    """Per-session view state handed to each screen."""
    admin_filter: str = "all"
    admin_page: int = 1
    admin_search: str = ""


def get_preferences() -> ViewPreferences:
    prefs = st.session_state.get(_PREFS_KEY)
    if not isinstance(prefs, ViewPreferences):
        prefs = ViewPreferences()
        st.session_state[_PREFS_KEY] = prefs
    if prefs.admin_filter not in FILTERS:
        prefs.admin_filter = "all"
    return prefs


def is_busy(action: str) -> bool:
    return bool((st.session_state.get(_BUSY_KEY) or {}).get(action))

def mark_busy(action: str):
    st.session_state.setdefault(_BUSY_KEY, {})[action] = True

def clear_busy(action: str):
    (st.session_state.get(_BUSY_KEY) or {}).pop(action, None)


# Messages that must survive a rerun (callbacks, st.rerun, page switches)
_FLASH_KEY = "_flash"

def flash(kind: str, msg: str):
    st.session_state.setdefault(_FLASH_KEY, []).append((kind, msg))

def show_flash():
    for kind, msg in st.session_state.pop(_FLASH_KEY, []):
        if kind == "success":
            st.toast(msg, icon="✅")
        elif kind == "warning":
            st.toast(msg, icon="⚠️")
        else:
            st.toast(msg, icon="❌")
            st.error(msg)
