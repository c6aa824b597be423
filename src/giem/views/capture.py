import streamlit as st

from giem.agents.receipt_extractor.agent import extract_receipt_values
from giem.utils.config import UPLOAD_TYPES
from giem.utils.receipts_repo import ReceiptStorageError
from giem.views.review_form import render_form_fields, seed_form, submit_form

PREFIX = "capture"
UPLOAD_FAILED_MSG = "Erro ao enviar para a Nuvem. Verifique sua conexão e configurações do sistema."


def reset_capture() -> None:
    """Forget the chosen file and extraction; bumps the nonce so file widgets start empty."""
    for key in ("capture_doc", "capture_error"):
        st.session_state.pop(key, None)
    st.session_state["capture_nonce"] = st.session_state.get("capture_nonce", 0) + 1


def _choose_file():
    nonce = st.session_state.get("capture_nonce", 0)
    st.caption("Escolha como deseja registrar o comprovante:")
    photo_tab, file_tab = st.tabs(["📷 Nova Foto", "⬆️ Arquivo / Galeria"])
    with photo_tab:
        shot = st.camera_input("Câmera em tempo real", key=f"capture-camera-{nonce}")
    with file_tab:
        upload = st.file_uploader("Imagens ou PDF", type=UPLOAD_TYPES, key=f"capture-upload-{nonce}")
    return shot or upload


def _preview(doc: dict) -> None:
    if (doc.get("type") or "").startswith("image/"):
        st.image(doc["bytes"], caption="Preview", width="stretch")
    elif doc.get("type") == "application/pdf":
        st.markdown(f"📄 **{doc['name']}**  \nDocumento PDF")
    else:
        st.markdown(f"🗎 **{doc['name']}**")


@st.dialog("📷 Capturar Carga")
def capture_dialog(supabase) -> None:
    doc = st.session_state.get("capture_doc")

    if doc is None:
        chosen = _choose_file()
        if chosen is None:
            return
        doc = {"bytes": chosen.getvalue(), "name": chosen.name, "type": chosen.type}
        with st.spinner("Analisando com IA..."):
            result = extract_receipt_values(
                file_bytes=doc["bytes"], filename=doc["name"], mime_type=doc["type"]
            )
        st.session_state["capture_doc"] = doc
        st.session_state["capture_error"] = result["error"]
        seed_form(PREFIX, result["form"])

    _preview(doc)
    render_form_fields(PREFIX)

    if st.session_state.get("capture_error"):
        st.error(st.session_state["capture_error"])

    change_col, confirm_col = st.columns(2)
    if change_col.button("Mudar Arquivo", width="stretch"):
        reset_capture()
        st.rerun(scope="fragment")

    if confirm_col.button("✔ Confirmar Envio", type="primary", width="stretch"):
        if not doc.get("bytes"):
            st.session_state["capture_error"] = "Nenhum arquivo selecionado."
            st.rerun(scope="fragment")
        st.session_state["capture_error"] = None
        try:
            with st.spinner("Enviando para Nuvem..."):
                receipt = submit_form(
                    supabase, PREFIX,
                    file_bytes=doc["bytes"], filename=doc["name"], mime_type=doc["type"],
                )
        except ReceiptStorageError as e:
            st.session_state["capture_error"] = str(e) or UPLOAD_FAILED_MSG
            st.rerun(scope="fragment")

        if receipt is None:
            # missing NF: keep the dialog open with the field flagged
            st.rerun(scope="fragment")

        st.session_state["last_receipt_nf"] = receipt.nf_number
        st.session_state["active_tab"] = "history"
        reset_capture()
        st.rerun()
