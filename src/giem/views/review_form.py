"""Editable extraction result, shared by the capture dialog and the scanner prototype."""
from __future__ import annotations

from datetime import datetime

import streamlit as st

from giem.tools.receipt_schema import Receipt
from giem.utils.dates import local_input_to_iso, local_now_input
from giem.utils.receipts_repo import upload_receipt

NF_REQUIRED_MSG = "O número da NF é obrigatório"


def _k(prefix: str, name: str) -> str:
    return f"{prefix}-{name}"


def seed_form(prefix: str, form: dict) -> None:
    """Push extracted (or empty) values into the widget state."""
    st.session_state[_k(prefix, "nf")] = form.get("nf_number") or ""
    st.session_state[_k(prefix, "receiver")] = form.get("receiver_name") or ""
    st.session_state[_k(prefix, "products")] = form.get("product_description") or ""
    when = form.get("delivery_date") or local_now_input()
    st.session_state[_k(prefix, "date")] = when.date()
    st.session_state[_k(prefix, "time")] = when.time()
    st.session_state[_k(prefix, "nf_error")] = False


def snapshot_form(prefix: str) -> dict:
    """Current widget values, in the shape seed_form() takes."""
    day = st.session_state.get(_k(prefix, "date"))
    at = st.session_state.get(_k(prefix, "time"))
    return {
        "nf_number": st.session_state.get(_k(prefix, "nf"), ""),
        "receiver_name": st.session_state.get(_k(prefix, "receiver"), ""),
        "product_description": st.session_state.get(_k(prefix, "products"), ""),
        "delivery_date": datetime.combine(day, at) if day and at else None,
    }


def restore_form(prefix: str, form: dict) -> None:
    """Re-seed the widgets if Streamlit dropped their state while they were off screen."""
    if _k(prefix, "nf") not in st.session_state:
        seed_form(prefix, form)


def read_form(prefix: str) -> dict:
    values = snapshot_form(prefix)
    values["delivery_date"] = local_input_to_iso(values["delivery_date"])
    return values


def render_form_fields(prefix: str) -> None:
    nf_col, date_col = st.columns(2)
    with nf_col:
        st.text_input("Número da NF *", key=_k(prefix, "nf"), placeholder="Ex: 001245")
        if st.session_state.get(_k(prefix, "nf_error")):
            st.error(NF_REQUIRED_MSG)
    with date_col:
        st.date_input("Data Entrega", key=_k(prefix, "date"), format="DD/MM/YYYY")
        st.time_input("Hora", key=_k(prefix, "time"), step=60, label_visibility="collapsed")

    st.text_input("Nome do Recebedor", key=_k(prefix, "receiver"), placeholder="Quem recebeu a carga?")
    st.text_area(
        "Descrição dos Produtos",
        key=_k(prefix, "products"),
        placeholder="O que está sendo entregue?",
        height=80,
    )


def submit_form(
    supabase, prefix: str, *, file_bytes: bytes, filename: str | None, mime_type: str | None
) -> Receipt | None:
    """Validate the NF and upload; None when the NF is missing (error flag set)."""
    values = read_form(prefix)
    if not values["nf_number"].strip():
        st.session_state[_k(prefix, "nf_error")] = True
        return None
    st.session_state[_k(prefix, "nf_error")] = False
    return upload_receipt(
        supabase,
        file_bytes=file_bytes,
        filename=filename,
        mime_type=mime_type,
        **values,
    )
