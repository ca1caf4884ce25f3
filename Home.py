# Home.py: public registration form
from pathlib import Path
import streamlit as st
from dotenv import load_dotenv

# ── Page config FIRST ─────────────────────────────────────────
st.set_page_config(
    page_title="Virtuosas • Cadastro",
    page_icon="🌸",
    layout="centered",
)

# ── Env + styling ─────────────────────────────────────────────
env_path = Path(__file__).parent / ".env"
load_dotenv(dotenv_path=env_path)

from utils.styling import inject_global_styles, inject_sidebar_styles, brand_header
from utils.db import get_engine
from utils.screens.registration_form import render_registration_form

inject_global_styles()
inject_sidebar_styles()

brand_header("Cadastro")

try:
    engine = get_engine()
except RuntimeError as e:
    st.error(f"❌ {e}")
    st.stop()

render_registration_form(engine)
