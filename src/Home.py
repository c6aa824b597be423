import streamlit as st

from giem.ui.menu import DEFAULT_TAB
from giem.ui.theme import page_setup
from giem.ui.ui import bottom_nav
from giem.utils.logging_utils import setup_logger
from giem.utils.supabase_utils import bootstrap_secrets, get_supabase_client
from giem.views.capture import capture_dialog, reset_capture
from giem.views.dashboard import render_dashboard
from giem.views.history import render_history
from giem.views.login import logout, render_login
from giem.views.profile import render_profile
from giem.views.search import render_search

# --- Page config: keep only here ---
page_setup("GieM · Gestão Inteligente de Entrega")
setup_logger()
bootstrap_secrets()

# ---------------------------------
# 1. Login gate
# ---------------------------------
user = st.session_state.get("user")
if user is None:
    render_login()
    st.stop()

# ---------------------------------
# 2. Supabase client (None → demo mode)
# ---------------------------------
supabase = get_supabase_client()
if supabase is None:
    st.sidebar.caption("⚠️ Banco de Dados não configurado. Modo de demonstração.")

# ---------------------------------
# 3. Active tab
# ---------------------------------
active = st.session_state.setdefault("active_tab", DEFAULT_TAB)

if active == "history":
    render_history(supabase)
elif active == "search":
    render_search(supabase)
elif active == "profile":
    render_profile(user, on_logout=logout)
else:
    render_dashboard(user, supabase)

# ---------------------------------
# 4. Bottom navigation (+ capture)
# ---------------------------------
clicked = bottom_nav(active)
if clicked == "scan":
    reset_capture()
    capture_dialog(supabase)
elif clicked and clicked != active:
    st.session_state["active_tab"] = clicked
    st.rerun()
