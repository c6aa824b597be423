from typing import Dict, Iterable, List

import streamlit as st

from giem.tools.receipt_schema import Receipt
from giem.utils.dates import format_br_date, format_br_time

COLUMNS = ["Referência NF", "Recebedor", "Manifesto", "Data / Hora", "Tipo"]


def receipts_to_rows(receipts: Iterable[Receipt]) -> List[Dict[str, str]]:
    return [
        {
            "Referência NF": f"#{r.nf_number}",
            "Recebedor": r.receiver_name or "—",
            "Manifesto": r.product_description or "Sem descrição",
            "Data / Hora": f"{format_br_date(r.delivery_date)} {format_br_time(r.delivery_date)}",
            "Tipo": "PDF" if r.is_pdf else "Imagem",
        }
        for r in receipts
    ]


def render_receipt_table(receipts: Iterable[Receipt]) -> None:
    rows = receipts_to_rows(receipts)
    if not rows:
        st.markdown("#### Pátio Vazio")
        st.caption("Nenhum registro de carga encontrado.")
        return
    st.dataframe(rows, column_order=COLUMNS, width="stretch", hide_index=True)
