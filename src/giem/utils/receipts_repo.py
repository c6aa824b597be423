from __future__ import annotations

from typing import Any, Dict, Optional, List
from datetime import date, datetime, timezone
import mimetypes
import random
import re
import string

from giem.tools.receipt_schema import Receipt
from giem.utils.config import BUCKET_NAME, RECEIPTS_TABLE, SIGNED_URL_TTL, CACHE_CONTROL
from giem.utils.dates import now_utc, now_utc_iso, day_bounds, month_bounds
from giem.utils.logging_utils import log


class ReceiptStorageError(RuntimeError):
    """Upload, insert or select against Supabase failed."""


# ---------- helpers ----------
def _mock_id(n: int = 9) -> str:
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=n))


def _file_extension(filename: Optional[str], mime_type: Optional[str]) -> str:
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1].strip()
        if ext:
            return ext
    guessed = mimetypes.guess_extension(mime_type or "")
    return guessed.lstrip(".") if guessed else "bin"


def build_storage_path(
    filename: Optional[str],
    nf_number: str,
    mime_type: Optional[str] = None,
    now_ms: Optional[int] = None,
) -> str:
    """Unique object name: <epoch ms>_<nf with whitespace as _>.<ext>"""
    if now_ms is None:
        now_ms = int(now_utc().timestamp() * 1000)
    nf_clean = re.sub(r"\s+", "_", nf_number)
    return f"{now_ms}_{nf_clean}.{_file_extension(filename, mime_type)}"


def _search_term(search: str) -> str:
    # commas and parentheses delimit PostgREST or=() filters
    return re.sub(r"[,()]", " ", search).strip()


def _mock_receipts() -> List[Receipt]:
    now = now_utc_iso()
    rows = [
        ("1", "001245", "Ricardo Silva", '2x Monitor LG 27"', "image/jpeg"),
        ("2", "003982", "Ana Paula", "1x Notebook Dell", "application/pdf"),
        ("3", "004110", "Manoel Gomes", "Kit Ferramentas", "image/png"),
    ]
    return [
        Receipt(
            id=rid,
            nf_number=nf,
            receiver_name=receiver,
            product_description=desc,
            delivery_date=now,
            created_at=now,
            image_path="",
            content_type=ctype,
            user_id="1",
        )
        for rid, nf, receiver, desc, ctype in rows
    ]


def _filter_mock(receipts: List[Receipt], search: str, date_filter: Optional[date]) -> List[Receipt]:
    out = receipts
    if search:
        q = search.lower()
        out = [
            r for r in out
            if q in (r.nf_number or "").lower()
            or q in (r.receiver_name or "").lower()
            or q in (r.product_description or "").lower()
        ]
    if date_filter:
        start, end = day_bounds(date_filter)
        out = [r for r in out if r.delivery_date and _in_range(r.delivery_date, start, end)]
    return out


def _in_range(iso: str, start: str, end: str) -> bool:
    dt = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    lo = datetime.fromisoformat(start.replace("Z", "+00:00"))
    hi = datetime.fromisoformat(end.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return lo <= dt <= hi


# ---------- public repo ops ----------
def upload_receipt(
    supabase,
    *,
    file_bytes: bytes,
    filename: Optional[str],
    mime_type: Optional[str],
    nf_number: str,
    receiver_name: str = "",
    product_description: str = "",
    delivery_date: Optional[str] = None,
    bucket: str = BUCKET_NAME,
    table: str = RECEIPTS_TABLE,
) -> Receipt:
    """Upload the document to storage, then insert the receipt row."""
    nf_number = (nf_number or "").strip()
    if not nf_number:
        raise ValueError("O número da NF é obrigatório")

    final_delivery_date = delivery_date or now_utc_iso()

    if supabase is None:
        log.warning("Banco de Dados não configurado. Executando em modo de demonstração.")
        return Receipt(
            id=_mock_id(),
            created_at=now_utc_iso(),
            nf_number=nf_number,
            receiver_name=receiver_name,
            product_description=product_description,
            delivery_date=final_delivery_date,
            image_path="mock-path",
            content_type=mime_type,
            user_id="mock-user",
        )

    # 1. unique object name
    file_path = build_storage_path(filename, nf_number, mime_type)

    # 2. storage upload
    try:
        supabase.storage.from_(bucket).upload(
            path=file_path,
            file=file_bytes,
            file_options={
                "content-type": mime_type or "application/octet-stream",
                "cache-control": CACHE_CONTROL,
                "upsert": "false",
            },
        )
    except Exception as e:
        log.error("Erro de upload na nuvem: %s", e)
        raise ReceiptStorageError(f"Falha no envio do arquivo: {e}") from e

    # 3. row insert (returns the stored representation)
    row = {
        "nf_number": nf_number,
        "receiver_name": receiver_name,
        "product_description": product_description,
        "delivery_date": final_delivery_date,
        "image_path": file_path,
        "content_type": mime_type,
    }
    try:
        res = supabase.table(table).insert(row).execute()
    except Exception as e:
        log.error("Erro de registro no banco: %s", e)
        raise ReceiptStorageError(f"Erro ao salvar dados no servidor: {e}") from e

    data = getattr(res, "data", None)
    if not data:
        raise ReceiptStorageError("Erro ao salvar dados no servidor: resposta vazia")
    log.info("Receipt %s stored as %s", nf_number, file_path)
    return Receipt.model_validate(data[0])


def list_receipts(
    supabase,
    *,
    search: str = "",
    date_filter: Optional[date] = None,
    limit: Optional[int] = None,
    table: str = RECEIPTS_TABLE,
) -> List[Receipt]:
    """Newest deliveries first, optionally filtered by text and UTC day."""
    search = _search_term(search or "")

    if supabase is None:
        out = _filter_mock(_mock_receipts(), search, date_filter)
        return out[:limit] if limit else out

    query = (
        supabase.table(table)
        .select("*")
        .order("delivery_date", desc=True)
    )
    if search:
        query = query.or_(
            f"nf_number.ilike.%{search}%,"
            f"receiver_name.ilike.%{search}%,"
            f"product_description.ilike.%{search}%"
        )
    if date_filter:
        start, end = day_bounds(date_filter)
        query = query.gte("delivery_date", start).lte("delivery_date", end)
    if limit:
        query = query.limit(limit)

    try:
        res = query.execute()
    except Exception as e:
        log.error("Fetch error: %s", e)
        raise ReceiptStorageError(f"Falha ao carregar registros: {e}") from e
    return [Receipt.model_validate(r) for r in (getattr(res, "data", None) or [])]


def delivery_stats(supabase, today: Optional[date] = None, table: str = RECEIPTS_TABLE) -> Dict[str, int]:
    """Deliveries today and this month (UTC)."""
    today = today or now_utc().date()
    day = day_bounds(today)
    month = month_bounds(today)

    if supabase is None:
        mocks = _mock_receipts()
        return {
            "today": sum(1 for r in mocks if _in_range(r.delivery_date, *day)),
            "month": sum(1 for r in mocks if _in_range(r.delivery_date, *month)),
        }

    def count(bounds) -> int:
        res = (
            supabase.table(table)
            .select("id", count="exact")
            .gte("delivery_date", bounds[0])
            .lte("delivery_date", bounds[1])
            .execute()
        )
        return getattr(res, "count", None) or 0

    try:
        return {"today": count(day), "month": count(month)}
    except Exception as e:
        log.error("Stats error: %s", e)
        raise ReceiptStorageError(f"Falha ao carregar registros: {e}") from e


def receipt_image_url(supabase, receipt: Receipt, *, expires: int = SIGNED_URL_TTL,
                      bucket: str = BUCKET_NAME) -> Optional[str]:
    """Return a short-lived signed URL for the receipt document."""
    if supabase is None or not receipt.image_path or receipt.image_path == "mock-path":
        return None
    try:
        signed = supabase.storage.from_(bucket).create_signed_url(receipt.image_path, expires)
    except Exception as e:
        log.warning("Could not create signed URL for %s: %s", receipt.image_path, e)
        return None
    if isinstance(signed, dict):
        return signed.get("signedURL") or signed.get("signed_url") or signed.get("url")
    return (
        getattr(signed, "signedURL", None)
        or getattr(signed, "signed_url", None)
        or getattr(signed, "url", None)
    )


def receipt_to_row(receipt: Receipt) -> Dict[str, Any]:
    return receipt.model_dump()
