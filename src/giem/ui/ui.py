# giem/ui/ui.py
from __future__ import annotations
import html
import streamlit as st
from contextlib import contextmanager
from typing import Callable, Iterable, Optional

from giem.tools.receipt_schema import Receipt
from giem.utils.dates import format_br_date, format_br_time
from .menu import TABS


@contextmanager
def card(title: str, subtitle: str | None = None, *, border: bool = True):
    """
    Consistent panel used across screens.
    Uses Streamlit's bordered container to avoid stray empty <div>s.
    """
    with st.container(border=border):
        st.markdown(f'<div class="giem-card-header">{html.escape(title)}</div>', unsafe_allow_html=True)
        if subtitle:
            st.markdown(f'<div class="giem-card-sub">{html.escape(subtitle)}</div>', unsafe_allow_html=True)
        yield


def bottom_nav(active: str, *, key: str = "nav") -> Optional[str]:
    """Render the tab bar; returns the clicked tab key (or "scan"), else None."""
    st.divider()
    clicked = None
    for col, tab in zip(st.columns(len(TABS)), TABS):
        label = f"{tab['icon']} {tab['label']}".strip()
        kind = "primary" if tab["key"] in (active, "scan") else "secondary"
        if col.button(label, key=f"{key}-{tab['key']}", type=kind, width="stretch"):
            clicked = tab["key"]
    return clicked


def receipt_item(receipt: Receipt, image_url: Optional[str] = None) -> None:
    """One delivery in the history / search lists."""
    badge = (
        '<span class="giem-badge-pdf">PDF</span>' if receipt.is_pdf
        else '<span class="giem-badge-img">IMG</span>'
    )
    with st.container(border=True):
        left, right = st.columns([3, 1])
        left.markdown(f"{badge} &nbsp; **NF #{html.escape(receipt.nf_number)}**", unsafe_allow_html=True)
        right.caption(format_br_time(receipt.delivery_date))
        st.write(receipt.receiver_name or "—")
        st.caption(f"{format_br_date(receipt.delivery_date)} · {receipt.product_description or 'Sem descrição'}")
        if image_url:
            st.link_button("Ver comprovante", image_url)


def receipt_list(
    receipts: Iterable[Receipt],
    image_url_for: Optional[Callable[[Receipt], Optional[str]]] = None,
    *,
    empty_title: str = "Nenhum registro encontrado",
) -> None:
    receipts = list(receipts)
    if not receipts:
        st.info(empty_title)
        return
    for r in receipts:
        receipt_item(r, image_url_for(r) if image_url_for else None)
