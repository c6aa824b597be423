# giem/api.py
# Run with: uvicorn giem.api:app --port 7000
from __future__ import annotations
from datetime import date, datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query

from giem.utils.receipts_repo import ReceiptStorageError, list_receipts, receipt_to_row
from giem.utils.logging_utils import setup_logger
from giem.utils.supabase_utils import (
    doppler_bootstrap,
    get_mistral_api_key,
    get_supabase_client,
    supabase_configured,
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logger()
    doppler_bootstrap()
    yield


app = FastAPI(title="GieM API", lifespan=lifespan)


def get_client():
    return get_supabase_client()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@app.get("/health")
def root_health():
    return {"ok": True, "service": "giem-api", "time": _now()}


@app.get("/checks/health")
def checks_health():
    return {
        "ok": True,
        "checks": {
            "db": "ok" if supabase_configured() else "demo",
            "extraction": "ok" if get_mistral_api_key(required=False) else "missing-key",
        },
        "time": _now(),
    }


@app.get("/receipts")
def receipts(
    q: str = Query("", max_length=200),
    day: Optional[date] = Query(None, alias="date"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    supabase=Depends(get_client),
):
    try:
        rows = list_receipts(supabase, search=q, date_filter=day, limit=limit)
    except ReceiptStorageError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"ok": True, "count": len(rows), "receipts": [receipt_to_row(r) for r in rows]}
