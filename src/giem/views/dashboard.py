import streamlit as st

from giem.ui.theme import page_header
from giem.ui.ui import card
from giem.utils.auth import UserProfile
from giem.utils.dates import format_br_time
from giem.utils.receipts_repo import ReceiptStorageError, delivery_stats, list_receipts

RECENT_LIMIT = 3


def render_dashboard(user: UserProfile, supabase) -> None:
    page_header("📦 GieM", "Gestão Inteligente de Entrega")

    st.subheader(f"Olá, {user.first_name}")
    st.caption("Seu resumo de carga para hoje.")

    try:
        stats = delivery_stats(supabase)
        recent = list_receipts(supabase, limit=RECENT_LIMIT)
    except ReceiptStorageError as e:
        st.warning(f"⚠️ {e}")
        stats, recent = {"today": "—", "month": "—"}, []

    col1, col2 = st.columns(2)
    col1.metric("✅ Entregas Hoje", stats["today"])
    col2.metric("🕒 Total Mês", stats["month"])

    head, more = st.columns([3, 1])
    head.markdown("#### Atividade Recente")
    if more.button("Ver Tudo", key="dash-see-all"):
        st.session_state["active_tab"] = "history"
        st.rerun()

    if not recent:
        st.info("Nenhuma entrega registrada ainda.")
    for r in recent:
        with card(f"NF #{r.nf_number}", r.receiver_name or "—"):
            st.caption(f"{format_br_time(r.delivery_date)} · Entregue")
