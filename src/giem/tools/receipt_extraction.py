import os
import json
import base64
import tempfile
import mimetypes

import requests
from langchain_core.tools import BaseTool
from mistralai import Mistral
from mistralai.extra import response_format_from_pydantic_model

from giem.tools.receipt_schema import ExtractionResult
from giem.utils.config import OCR_MODEL, DOWNLOAD_TIMEOUT, SUPPORTED_MIME_TYPES
from giem.utils.logging_utils import log
from giem.utils.supabase_utils import get_mistral_api_key


class ReceiptExtractionError(RuntimeError):
    """The OCR service could not turn the document into receipt fields."""


def encode_bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


def encode_image_to_base64(image_path):
    """Encodes an image file to a Base64 string."""
    with open(image_path, "rb") as image_file:
        return encode_bytes_to_base64(image_file.read())


def guess_mime_type(path: str) -> str:
    mime, _ = mimetypes.guess_type(path)
    return mime or "application/octet-stream"


def _document_payload(encoded: str, mime_type: str) -> dict:
    # Mistral OCR takes images as image_url and PDFs as document_url, both as data URIs
    if mime_type == "application/pdf":
        return {"type": "document_url", "document_url": f"data:application/pdf;base64,{encoded}"}
    if mime_type == "image/jpg":
        mime_type = "image/jpeg"
    return {"type": "image_url", "image_url": f"data:{mime_type};base64,{encoded}"}


def process_receipt(encoded_document: str, mime_type: str = "image/jpeg") -> dict:
    """
    One structured OCR request; the ExtractionResult schema (docstring and
    field descriptions) is the instruction. Returns the ExtractionResult fields.
    """
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise ReceiptExtractionError(f"Unsupported document type: {mime_type}")

    client = Mistral(api_key=get_mistral_api_key())
    try:
        ocr_response = client.ocr.process(
            model=OCR_MODEL,
            document=_document_payload(encoded_document, mime_type),
            document_annotation_format=response_format_from_pydantic_model(ExtractionResult),
        )
    except Exception as e:
        raise ReceiptExtractionError(f"OCR request failed: {e}") from e

    annotation = getattr(ocr_response, "document_annotation", None)
    if not annotation:
        raise ReceiptExtractionError("OCR response carried no document annotation")
    try:
        data = json.loads(annotation) if isinstance(annotation, str) else dict(annotation)
    except (TypeError, ValueError) as e:
        raise ReceiptExtractionError(f"OCR returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ReceiptExtractionError("OCR annotation is not a JSON object")

    for field in ExtractionResult.model_fields:
        data.setdefault(field, None)
    log.info("Extracted receipt fields: nf_number=%r", data.get("nf_number"))
    return data


class ProcessReceiptTool(BaseTool):
    name: str = "process_receipt"
    description: str = (
        "Takes a delivery receipt image/PDF file path OR http(s) URL, extracts "
        "the NF number, receiver and products and returns structured output."
    )

    def _run(self, image_path: str) -> dict:
        """
        `image_path` can be a local filesystem path OR an http(s) URL.
        URLs are downloaded to a temp file so both branches encode the same way.
        """
        if self._is_url(image_path):
            tmp_path = None
            try:
                tmp_path = self._download_url_to_temp(image_path)
                return self._process_file(tmp_path)
            finally:
                if tmp_path and os.path.exists(tmp_path):
                    os.remove(tmp_path)

        if not os.path.exists(image_path):
            raise ReceiptExtractionError(f"The file {image_path} was not found.")
        return self._process_file(image_path)

    async def _arun(self, image_path: str) -> dict:
        return self._run(image_path)

    # ----------------- helpers -----------------
    def _process_file(self, path: str) -> dict:
        return process_receipt(encode_image_to_base64(path), guess_mime_type(path))

    def _is_url(self, s: str) -> bool:
        return isinstance(s, str) and s.lower().startswith(("http://", "https://"))

    def _download_url_to_temp(self, url: str) -> str:
        """
        Downloads the URL to a temp file and returns the file path.
        Keeps the extension from Content-Type or the URL so the MIME guess works.
        """
        resp = requests.get(url, timeout=DOWNLOAD_TIMEOUT)
        resp.raise_for_status()

        ext_hint = None
        ctype = resp.headers.get("Content-Type")
        if ctype:
            ext_hint = mimetypes.guess_extension(ctype.split(";")[0].strip())
        if not ext_hint:
            ext_hint = mimetypes.guess_extension(mimetypes.guess_type(url.split("?")[0])[0] or "")
        if ext_hint in (".jpe",):
            ext_hint = ".jpg"

        fd, path = tempfile.mkstemp(prefix="receipt_", suffix=ext_hint or ".jpg")
        with os.fdopen(fd, "wb") as f:
            f.write(resp.content)
        return path
