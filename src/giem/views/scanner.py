"""Scanner prototype: pick a file, extract, then review and save."""
import streamlit as st

from giem.agents.receipt_extractor.agent import extract_receipt_values
from giem.ui.theme import page_header
from giem.utils.receipts_repo import ReceiptStorageError
from giem.views.review_form import render_form_fields, restore_form, seed_form, snapshot_form, submit_form

PREFIX = "scanner"
SCAN_FAILED_MSG = "Falha na análise. Verifique se a foto está legível."
SCAN_TYPES = ["jpg", "jpeg", "png", "pdf"]


def _reset() -> None:
    for key in ("scanner_doc", "scanner_form", "scanner_failed"):
        st.session_state.pop(key, None)
    st.session_state["scanner_nonce"] = st.session_state.get("scanner_nonce", 0) + 1


def _scan() -> dict | None:
    nonce = st.session_state.get("scanner_nonce", 0)
    upload = st.file_uploader(
        "Selecionar Arquivo (JPG, PNG ou PDF)", type=SCAN_TYPES, key=f"scanner-upload-{nonce}"
    )
    if upload is None:
        return None

    signature = (upload.name, upload.size)
    if st.session_state.get("scanner_failed") == signature:
        st.error(SCAN_FAILED_MSG)
        return None

    doc = {"bytes": upload.getvalue(), "name": upload.name, "type": upload.type}
    with st.spinner("Processando com IA..."):
        result = extract_receipt_values(
            file_bytes=doc["bytes"], filename=doc["name"], mime_type=doc["type"]
        )
    if result["error"]:
        st.session_state["scanner_failed"] = signature
        st.error(SCAN_FAILED_MSG)
        return None

    seed_form(PREFIX, result["form"])
    st.session_state["scanner_form"] = result["form"]
    st.session_state["scanner_doc"] = doc
    return doc


def render_scanner(supabase) -> None:
    page_header("📸 Scanner de Carga", "Extraia dados de notas fiscais e canhotos instantaneamente.")

    doc = st.session_state.get("scanner_doc") or _scan()
    if doc is None:
        st.caption("Real-time · OCR Engine · Vision")
        return

    restore_form(PREFIX, st.session_state.get("scanner_form") or {})
    with st.container(border=True):
        if doc["type"].startswith("image/"):
            st.image(doc["bytes"], width="stretch")
        else:
            st.markdown(f"📄 **{doc['name']}**")
        render_form_fields(PREFIX)
    st.session_state["scanner_form"] = snapshot_form(PREFIX)

    discard_col, save_col = st.columns(2)
    if discard_col.button("Descartar", width="stretch"):
        _reset()
        st.rerun()
    if save_col.button("Salvar Registro", type="primary", width="stretch"):
        try:
            receipt = submit_form(
                supabase, PREFIX,
                file_bytes=doc["bytes"], filename=doc["name"], mime_type=doc["type"],
            )
        except ReceiptStorageError as e:
            st.error(str(e))
            return
        if receipt is None:
            st.rerun()
        st.toast(f"NF #{receipt.nf_number} salva.")
        _reset()
        st.rerun()
