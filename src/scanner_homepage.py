import streamlit as st

from giem.ui.menu import PROTOTYPE_MENU
from giem.ui.theme import page_setup
from giem.utils.logging_utils import setup_logger
from giem.utils.receipts_repo import ReceiptStorageError, list_receipts
from giem.utils.supabase_utils import bootstrap_secrets, get_supabase_client
from giem.views.login import logout, render_login
from giem.views.profile import render_profile
from giem.views.receipt_table import render_receipt_table
from giem.views.scanner import render_scanner
from giem.views.sql_reference import render_sql_reference

page_setup("GieM Scanner")
setup_logger()
bootstrap_secrets()

user = st.session_state.get("user")
if user is None:
    render_login(footer_text="Desenvolvido por Floxhub © 2026")
    st.stop()

supabase = get_supabase_client()

# Sidebar menu
labels = [f"{item['icon']} {item['label']}" for item in PROTOTYPE_MENU]
choice = st.sidebar.selectbox("Menu", labels)
page = PROTOTYPE_MENU[labels.index(choice)]["label"]
st.sidebar.caption(f"Conectado como {user.name}")

if page == "Registros":
    st.title("🗂️ Registros de Carga")
    try:
        render_receipt_table(list_receipts(supabase))
    except ReceiptStorageError as e:
        st.error(f"❌ {e}")

elif page == "Configuração Supabase":
    render_sql_reference()

elif page == "Perfil":
    render_profile(user, on_logout=logout)

else:
    render_scanner(supabase)
