import streamlit as st

from giem.ui.theme import page_header
from giem.ui.ui import receipt_list
from giem.utils.receipts_repo import ReceiptStorageError, list_receipts
from giem.views.history import LOAD_FAILED_MSG, cached_image_url, receipt_filters


def render_search(supabase) -> None:
    page_header("Localizar Cargas", "Busca avançada no servidor GieM")

    search, day = receipt_filters("search", "NF, Cliente ou Produto...")
    if not search and not day:
        st.markdown("---")
        st.caption("📦 Aguardando termo para consulta")
        return

    try:
        receipts = list_receipts(supabase, search=search, date_filter=day)
    except ReceiptStorageError:
        st.error(LOAD_FAILED_MSG)
        return

    receipt_list(
        receipts,
        lambda r: cached_image_url(supabase, r),
        empty_title="Nenhuma carga encontrada para esta busca.",
    )
