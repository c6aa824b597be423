# giem/agents/receipt_extractor/agent.py

import os
import tempfile
import mimetypes
from pathlib import Path
from typing import TypedDict, Optional, Dict, Any

from langgraph.graph import StateGraph, END

from giem.tools.receipt_extraction import ProcessReceiptTool
from giem.utils.dates import to_local_input, local_now_input
from giem.utils.logging_utils import log

EXTRACTION_FAILED_MSG = "Não foi possível processar os dados automaticamente. Preencha manualmente."

FORM_TEXT_FIELDS = ("nf_number", "receiver_name", "product_description")


# ---- LangGraph state ----------------------------------------------------------
class ReceiptState(TypedDict, total=False):
    image_path: str
    extraction: Optional[dict]
    error: Optional[str]
    form: dict


receipt_tool = ProcessReceiptTool()


def extract_receipt(state: ReceiptState) -> Dict[str, Any]:
    """Step 1: OCR the document. A failure leaves the form for manual entry."""
    try:
        data = receipt_tool.run(state["image_path"])
    except Exception:
        log.exception("Erro no processamento: %s", state["image_path"])
        return {"extraction": None, "error": EXTRACTION_FAILED_MSG}
    return {"extraction": data, "error": None}


def prepare_form(state: ReceiptState) -> Dict[str, Any]:
    """Step 2: editable form values; delivery date falls back to now."""
    data = state.get("extraction") or {}
    form = {field: (data.get(field) or "") for field in FORM_TEXT_FIELDS}
    form["delivery_date"] = to_local_input(data.get("delivery_date")) or local_now_input()
    return {"form": form}


# ---- Build graph --------------------------------------------------------------
workflow = StateGraph(ReceiptState)
workflow.add_node("extract_receipt", extract_receipt)
workflow.add_node("prepare_form", prepare_form)
workflow.set_entry_point("extract_receipt")
workflow.add_edge("extract_receipt", "prepare_form")
workflow.add_edge("prepare_form", END)

app = workflow.compile()


# ---- Public entrypoint for Streamlit -----------------------------------------
def extract_receipt_values(
    file_bytes: Optional[bytes] = None,
    file_url: Optional[str] = None,
    filename: Optional[str] = None,
    mime_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Saves bytes to a temp file (if provided) and runs the graph:
        app.invoke({"image_path": <path or URL>})
    """
    temp_path = None
    try:
        if file_bytes:
            suffix = ""
            if filename and "." in filename:
                suffix = "." + filename.rsplit(".", 1)[-1].lower()
            elif mime_type:
                suffix = mimetypes.guess_extension(mime_type) or ""
            fd, temp_path = tempfile.mkstemp(prefix="receipt_", suffix=suffix)
            with os.fdopen(fd, "wb") as f:
                f.write(file_bytes)
            image_path = temp_path
        elif file_url:
            image_path = file_url
        else:
            raise ValueError("No file_bytes or file_url provided.")

        result = app.invoke({"image_path": image_path})

        return {
            "filename": filename,
            "mime_type": mime_type,
            "form": result.get("form"),
            "extraction": result.get("extraction"),
            "error": result.get("error"),
        }
    finally:
        if temp_path and Path(temp_path).exists():
            os.remove(temp_path)
