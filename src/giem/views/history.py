from typing import Optional

import streamlit as st

from giem.tools.receipt_schema import Receipt
from giem.ui.theme import page_header
from giem.ui.ui import receipt_list
from giem.utils.config import SIGNED_URL_TTL
from giem.utils.receipts_repo import ReceiptStorageError, list_receipts, receipt_image_url

LOAD_FAILED_MSG = "Falha ao carregar registros. Tente novamente."


# cached for half the signed-URL lifetime so served links are still valid
@st.cache_data(ttl=SIGNED_URL_TTL // 2, show_spinner=False)
def cached_image_url(_supabase, receipt: Receipt) -> Optional[str]:
    return receipt_image_url(_supabase, receipt)


def receipt_filters(prefix: str, placeholder: str):
    """Text + date filters; returns (search, date or None)."""
    search = st.text_input(
        "Buscar", key=f"{prefix}-q", placeholder=placeholder, label_visibility="collapsed"
    )
    day = st.date_input(
        "Data de entrega", key=f"{prefix}-date", value=None, format="DD/MM/YYYY"
    )
    return search.strip(), day


def render_history(supabase) -> None:
    page_header("Histórico", "Registros de entrega")

    last_nf = st.session_state.pop("last_receipt_nf", None)
    if last_nf:
        st.success(f"✅ NF #{last_nf} registrada com sucesso.")

    search, day = receipt_filters("history", "Buscar por NF, Recebedor ou Produto...")

    try:
        with st.spinner("Carregando..."):
            receipts = list_receipts(supabase, search=search, date_filter=day)
    except ReceiptStorageError:
        st.error(LOAD_FAILED_MSG)
        if st.button("Tentar Novamente", key="history-retry"):
            st.rerun()
        return

    st.caption(f"{len(receipts)} registro(s)")
    receipt_list(
        receipts,
        lambda r: cached_image_url(supabase, r),
        empty_title="Nenhum registro de carga encontrado.",
    )
