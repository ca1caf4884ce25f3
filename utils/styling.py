import streamlit as st

from config import EVENT_NAME

def inject_global_styles():
    st.markdown("""
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Great+Vibes&family=Playfair+Display:wght@600&family=Inter:wght@400;600;700&display=swap');

    html, body, .stApp, [data-testid="stAppViewContainer"] {
      font-family: "Inter", -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Arial, sans-serif !important;
      font-size: 16px; line-height: 1.55;
    }
    .stApp { background-color: #FDF2F8; }
    .block-container { max-width: 1100px; padding-top: 2rem; }

    /* Brand header */
    .brand-title {
      font-family: "Great Vibes", cursive; font-size: 3.2rem; text-align: center; margin: 0;
      background: linear-gradient(90deg, #F472B6, #A855F7);
      -webkit-background-clip: text; background-clip: text; color: transparent;
    }
    .brand-subtitle { font-family: "Playfair Display", serif; font-size: 1.5rem; text-align: center; color: #DB2777; margin-bottom: 1.2rem; }

    .stButton > button { font-weight: 700 !important; border-radius: 12px !important; }
    </style>
    """, unsafe_allow_html=True)

def inject_sidebar_styles():
    st.markdown("""
    <style>
    section[data-testid="stSidebar"] {
      background-color: #FCE7F3 !important;
      border-right: 2px solid #F9A8D4;
    }
    section[data-testid="stSidebar"] .stButton > button {
      width: 100% !important;
      background: #DB2777 !important;
      color: #ffffff !important;
      border: 0 !important;
    }
    </style>
    """, unsafe_allow_html=True)

def brand_header(subtitle: str, title: str = EVENT_NAME):
    st.markdown(
        f"<h1 class='brand-title'>{title}</h1><div class='brand-subtitle'>{subtitle}</div>",
        unsafe_allow_html=True,
    )
