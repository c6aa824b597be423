from datetime import date, timedelta

import pytest

from giem.tools.receipt_schema import Receipt
from giem.utils.dates import now_utc, parse_datetime
from giem.utils.receipts_repo import (
    ReceiptStorageError,
    build_storage_path,
    delivery_stats,
    list_receipts,
    receipt_image_url,
    upload_receipt,
)


def _upload(client, **overrides):
    kwargs = dict(
        file_bytes=b"\xff\xd8jpeg",
        filename="canhoto.jpg",
        mime_type="image/jpeg",
        nf_number="001245",
        receiver_name="Ricardo Silva",
        product_description="2x Monitor",
        delivery_date="2024-05-10T15:30:00+00:00",
    )
    kwargs.update(overrides)
    return upload_receipt(client, **kwargs)


# ---------- storage path ----------
def test_storage_path_uses_timestamp_nf_and_extension():
    assert build_storage_path("nota.JPG", "00 12  3", now_ms=1700) == "1700_00_12_3.JPG"


def test_storage_path_extension_falls_back_to_mime_then_bin():
    assert build_storage_path("scan", "1", "application/pdf", now_ms=1) == "1_1.pdf"
    assert build_storage_path(None, "1", None, now_ms=1) == "1_1.bin"


# ---------- upload ----------
def test_upload_demo_mode_returns_mock_receipt():
    receipt = _upload(None, delivery_date=None)

    assert receipt.image_path == "mock-path"
    assert receipt.user_id == "mock-user"
    assert len(receipt.id) == 9
    assert receipt.content_type == "image/jpeg"
    assert parse_datetime(receipt.delivery_date) is not None


def test_upload_rejects_blank_nf():
    with pytest.raises(ValueError):
        _upload(None, nf_number="   ")


def test_upload_stores_file_then_inserts_row(fake_supabase):
    receipt = _upload(fake_supabase)

    assert fake_supabase.events == ["upload", "insert"]
    upload = fake_supabase.uploads[0]
    assert upload["bucket"] == "receipt-images"
    assert upload["path"].endswith("_001245.jpg")
    assert upload["file"] == b"\xff\xd8jpeg"
    assert upload["options"]["content-type"] == "image/jpeg"
    assert upload["options"]["cache-control"] == "3600"
    assert upload["options"]["upsert"] == "false"

    insert = fake_supabase.queries[0]
    assert insert.table == "receipts"
    row = insert.call("insert")[1][0]
    assert row["image_path"] == upload["path"]
    assert row["delivery_date"] == "2024-05-10T15:30:00+00:00"

    assert isinstance(receipt, Receipt)
    assert receipt.nf_number == "001245"
    assert receipt.image_path == upload["path"]


def test_upload_defaults_delivery_date_to_now(fake_supabase):
    receipt = _upload(fake_supabase, delivery_date=None)
    delta = now_utc() - parse_datetime(receipt.delivery_date)
    assert abs(delta.total_seconds()) < 60


def test_upload_failure_skips_insert(fake_supabase):
    fake_supabase.upload_error = RuntimeError("bucket not found")

    with pytest.raises(ReceiptStorageError, match="Falha no envio do arquivo: bucket not found"):
        _upload(fake_supabase)
    assert "insert" not in fake_supabase.events


def test_insert_failure_is_reported(fake_supabase):
    fake_supabase.insert_error = RuntimeError("violates row-level security policy")

    with pytest.raises(ReceiptStorageError, match="Erro ao salvar dados no servidor"):
        _upload(fake_supabase)


# ---------- list ----------
def test_list_demo_mode_filters_mocks():
    assert len(list_receipts(None)) == 3
    assert [r.receiver_name for r in list_receipts(None, search="ANA")] == ["Ana Paula"]
    assert [r.nf_number for r in list_receipts(None, search="dell")] == ["003982"]
    assert list_receipts(None, search="nada") == []


def test_list_demo_mode_date_filter():
    today = now_utc().date()
    assert len(list_receipts(None, date_filter=today)) == 3
    assert list_receipts(None, date_filter=today - timedelta(days=1)) == []


def test_list_builds_query(fake_supabase, receipt_row):
    fake_supabase.rows = [receipt_row]

    receipts = list_receipts(fake_supabase, search="Silva", date_filter=date(2024, 5, 10), limit=5)

    q = fake_supabase.queries[0]
    assert q.call("select")[1] == ("*",)
    assert q.call("order")[1] == ("delivery_date",)
    assert q.call("order")[2] == {"desc": True}
    assert q.call("or_")[1][0] == (
        "nf_number.ilike.%Silva%,receiver_name.ilike.%Silva%,product_description.ilike.%Silva%"
    )
    assert q.call("gte")[1] == ("delivery_date", "2024-05-10T00:00:00.000Z")
    assert q.call("lte")[1] == ("delivery_date", "2024-05-10T23:59:59.999Z")
    assert q.call("limit")[1] == (5,)
    assert receipts[0].nf_number == "001245"


def test_list_without_filters_skips_or_and_range(fake_supabase):
    list_receipts(fake_supabase)
    q = fake_supabase.queries[0]
    assert q.call("or_") is None
    assert q.call("gte") is None


def test_list_strips_filter_delimiters(fake_supabase):
    list_receipts(fake_supabase, search="a,b(c)")
    or_filter = fake_supabase.queries[0].call("or_")[1][0]
    assert or_filter.startswith("nf_number.ilike.%a b c%,")
    assert "(" not in or_filter


def test_list_failure_raises(fake_supabase):
    fake_supabase.select_error = RuntimeError("timeout")
    with pytest.raises(ReceiptStorageError, match="Falha ao carregar registros"):
        list_receipts(fake_supabase)


# ---------- stats ----------
def test_stats_demo_mode_counts_mocks():
    assert delivery_stats(None) == {"today": 3, "month": 3}


def test_stats_use_exact_counts(fake_supabase):
    fake_supabase.count = 7
    assert delivery_stats(fake_supabase, today=date(2024, 2, 15)) == {"today": 7, "month": 7}

    day_q, month_q = fake_supabase.queries
    assert day_q.call("select")[2] == {"count": "exact"}
    assert day_q.call("gte")[1] == ("delivery_date", "2024-02-15T00:00:00.000Z")
    assert month_q.call("gte")[1] == ("delivery_date", "2024-02-01T00:00:00.000Z")
    assert month_q.call("lte")[1] == ("delivery_date", "2024-02-29T23:59:59.999Z")


# ---------- signed URLs ----------
def test_image_url_is_signed(fake_supabase, receipt_row):
    url = receipt_image_url(fake_supabase, Receipt(**receipt_row), expires=60)

    assert url.startswith("https://example.supabase.co/")
    assert fake_supabase.signed == [("receipt-images", receipt_row["image_path"], 60)]


def test_image_url_none_without_real_object(fake_supabase, receipt_row):
    assert receipt_image_url(None, Receipt(**receipt_row)) is None
    mock = Receipt(**{**receipt_row, "image_path": "mock-path"})
    assert receipt_image_url(fake_supabase, mock) is None


def test_image_url_none_when_signing_fails(fake_supabase, receipt_row):
    fake_supabase.sign_error = RuntimeError("not found")
    assert receipt_image_url(fake_supabase, Receipt(**receipt_row)) is None
