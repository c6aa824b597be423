import base64
import json
import os

import pytest

from giem.tools import receipt_extraction as rx
from giem.tools.receipt_extraction import ProcessReceiptTool, ReceiptExtractionError
from giem.tools.receipt_schema import ExtractionResult


class FakeOCRResponse:
    def __init__(self, annotation):
        self.document_annotation = annotation


class FakeMistral:
    """Stands in for mistralai.Mistral; records the ocr.process kwargs."""
    calls = []
    annotation = None
    error = None

    def __init__(self, api_key=None):
        self.api_key = api_key
        self.ocr = self

    def process(self, **kwargs):
        FakeMistral.calls.append(kwargs)
        if FakeMistral.error:
            raise FakeMistral.error
        return FakeOCRResponse(FakeMistral.annotation)


@pytest.fixture
def fake_mistral(monkeypatch):
    FakeMistral.calls = []
    FakeMistral.error = None
    FakeMistral.annotation = json.dumps({
        "nf_number": "004110",
        "receiver_name": "Manoel Gomes",
        "product_description": "Kit Ferramentas",
    })
    monkeypatch.setattr(rx, "Mistral", FakeMistral)
    monkeypatch.setattr(rx, "get_mistral_api_key", lambda: "test-key")
    monkeypatch.setattr(rx, "response_format_from_pydantic_model", lambda model: {"schema": model.__name__})
    return FakeMistral


def test_process_receipt_sends_image_data_uri(fake_mistral):
    data = rx.process_receipt("QUJD", "image/png")

    call = fake_mistral.calls[0]
    assert call["model"] == "mistral-ocr-latest"
    assert call["document"] == {"type": "image_url", "image_url": "data:image/png;base64,QUJD"}
    assert call["document_annotation_format"] == {"schema": "ExtractionResult"}
    assert data["nf_number"] == "004110"
    assert data["delivery_date"] is None


def test_process_receipt_sends_pdf_as_document(fake_mistral):
    rx.process_receipt("JVBERi0=", "application/pdf")
    assert fake_mistral.calls[0]["document"] == {
        "type": "document_url",
        "document_url": "data:application/pdf;base64,JVBERi0=",
    }


def test_unsupported_type_is_rejected_before_calling(fake_mistral):
    with pytest.raises(ReceiptExtractionError, match="Unsupported"):
        rx.process_receipt("AAAA", "text/plain")
    assert fake_mistral.calls == []


def test_service_failure_is_wrapped(fake_mistral):
    fake_mistral.error = ConnectionError("503")
    with pytest.raises(ReceiptExtractionError, match="OCR request failed"):
        rx.process_receipt("AAAA", "image/jpeg")


@pytest.mark.parametrize("annotation", [None, "", "{not json", "[1, 2]"])
def test_bad_annotation_is_an_error(fake_mistral, annotation):
    fake_mistral.annotation = annotation
    with pytest.raises(ReceiptExtractionError):
        rx.process_receipt("AAAA", "image/jpeg")


def test_tool_reads_local_file(monkeypatch, tmp_path):
    seen = {}

    def fake_process(encoded, mime_type):
        seen.update(encoded=encoded, mime_type=mime_type)
        return {"nf_number": "1"}

    monkeypatch.setattr(rx, "process_receipt", fake_process)
    path = tmp_path / "canhoto.png"
    path.write_bytes(b"png-bytes")

    assert ProcessReceiptTool().run(str(path)) == {"nf_number": "1"}
    assert base64.b64decode(seen["encoded"]) == b"png-bytes"
    assert seen["mime_type"] == "image/png"


def test_tool_missing_file(tmp_path):
    with pytest.raises(ReceiptExtractionError, match="was not found"):
        ProcessReceiptTool().run(str(tmp_path / "nope.jpg"))


def test_tool_downloads_urls_to_a_temp_file(monkeypatch):
    seen = {}

    class FakeResp:
        headers = {"Content-Type": "application/pdf"}
        content = b"%PDF-1.4"

        def raise_for_status(self):
            pass

    def fake_process(encoded, mime_type):
        seen.update(encoded=encoded, mime_type=mime_type)
        return {"nf_number": "2"}

    monkeypatch.setattr(rx.requests, "get", lambda url, timeout: FakeResp())
    monkeypatch.setattr(rx, "process_receipt", fake_process)
    created = []
    real_encode = rx.encode_image_to_base64

    def tracking_encode(path):
        created.append(path)
        return real_encode(path)

    monkeypatch.setattr(rx, "encode_image_to_base64", tracking_encode)

    result = ProcessReceiptTool().run("https://example.com/nota?x=1")

    assert result == {"nf_number": "2"}
    assert seen["mime_type"] == "application/pdf"
    assert base64.b64decode(seen["encoded"]) == b"%PDF-1.4"
    assert created and not os.path.exists(created[0])


def test_schema_carries_the_extraction_instruction():
    schema = ExtractionResult.model_json_schema()
    assert "Nota Fiscal" in schema["description"]
    assert "receipt" in schema["description"]
    assert schema["properties"]["nf_number"]["description"]


def test_supported_types_cover_images_and_pdf():
    assert {"image/jpeg", "image/png", "application/pdf"} <= rx.SUPPORTED_MIME_TYPES
    assert isinstance(rx.SUPPORTED_MIME_TYPES, frozenset)
