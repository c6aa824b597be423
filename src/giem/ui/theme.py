# giem/ui/theme.py
from __future__ import annotations
import streamlit as st

# ---- Theme tokens (edit here to restyle the whole app) -----------------------
THEME = {
    "font_family": "Inter, sans-serif",
    "bg": "#09090b",            # brand dark (zinc-950)
    "panel": "#18181b",         # brand surface (zinc-900)
    "border": "#27272a",        # brand border (zinc-800)
    "primary": "#f97316",       # brand primary (orange-500)
    "text": "#fafafa",
    "muted": "#71717a",
    "danger": "#ef4444",
    "radius": "16px",
}


def inject_theme_css() -> None:
    """Global CSS variables + primitives for the dark GieM look."""
    st.markdown(
        f"""
        <style>
          :root {{
            --giem-bg: {THEME['bg']};
            --giem-panel: {THEME['panel']};
            --giem-border: {THEME['border']};
            --giem-primary: {THEME['primary']};
            --giem-text: {THEME['text']};
            --giem-muted: {THEME['muted']};
            --giem-danger: {THEME['danger']};
            --giem-radius: {THEME['radius']};
            --giem-font: {THEME['font_family']};
          }}
          html, body, [data-testid="stAppViewContainer"] {{
            background: var(--giem-bg) !important;
            color: var(--giem-text);
            font-family: var(--giem-font);
          }}
          .stButton > button[kind="primary"] {{
            background: var(--giem-primary); color:#fff; border:0;
            border-radius: var(--giem-radius); font-weight:900;
          }}
          .giem-header h1 {{ font-size:2.2rem; font-weight:900; letter-spacing:-.02em; margin:0; }}
          .giem-header .tag {{
            color: var(--giem-muted); font-size:.65rem; font-weight:900;
            text-transform:uppercase; letter-spacing:.2em;
          }}
          .giem-card-header {{ font-weight: 900; margin: .15rem 0 .35rem; }}
          .giem-card-sub {{ color: var(--giem-muted); font-size:.85rem; margin-top:-.2rem; }}
          .giem-badge-pdf {{ color: var(--giem-danger); font-weight:900; }}
          .giem-badge-img {{ color: var(--giem-primary); font-weight:900; }}
          .giem-footer {{
            text-align:center; color:#3f3f46; font-size:.6rem; font-weight:900;
            text-transform:uppercase; letter-spacing:.2em; margin-top:2rem;
          }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def page_setup(page_title: str = "GieM") -> None:
    st.set_page_config(page_title=page_title, page_icon="📦", layout="centered")
    inject_theme_css()


def page_header(title: str, tag: str = "") -> None:
    """Uniform page header for all screens."""
    st.markdown(
        f'<div class="giem-header"><h1>{title}</h1><div class="tag">{tag}</div></div>',
        unsafe_allow_html=True,
    )


def footer(text: str = "Desenvolvido por Floxhub") -> None:
    st.markdown(f'<div class="giem-footer">{text}</div>', unsafe_allow_html=True)
