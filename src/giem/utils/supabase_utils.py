"""
Secrets helper + Supabase client creator.

Resolution order for secrets:
1) st.secrets (Streamlit Cloud / local .streamlit/secrets.toml)
2) Environment variables (.env, Doppler, Docker)

Aliases supported:
- SUPABASE_URL  or SUPABASE__URL  or VITE_SUPABASE_URL
- SUPABASE_ANON_KEY  or VITE_SUPABASE_ANON_KEY  or SUPABASE_SERVICE_KEY  or SUPABASE_KEY
- MISTRAL_API_KEY  or MISTRAL__API_KEY

Without Supabase credentials the app runs in demo mode: get_supabase_client()
returns None and the repo functions fall back to mock data.
"""

from __future__ import annotations

import os
import requests
import streamlit as st
from dotenv import load_dotenv
from supabase import create_client, Client

from giem.utils.config import DOPPLER_ALIASES
from giem.utils.logging_utils import log

load_dotenv()

SUPABASE_URL_NAMES = ("SUPABASE_URL", "SUPABASE__URL", "VITE_SUPABASE_URL")
SUPABASE_KEY_NAMES = (
    "SUPABASE_ANON_KEY",
    "VITE_SUPABASE_ANON_KEY",
    "SUPABASE_SERVICE_KEY",
    "SUPABASE__SUPABASE_SERVICE_KEY",
    "SUPABASE_KEY",
)
MISTRAL_KEY_NAMES = ("MISTRAL_API_KEY", "MISTRAL__API_KEY")


def sget(*names: str) -> str | None:
    """
    Return the first non-empty value among names,
    checking Streamlit secrets first, then environment.
    """
    for n in names:
        # Streamlit secrets (raises when no secrets.toml exists)
        try:
            if hasattr(st, "secrets") and n in st.secrets:
                v = st.secrets[n]
                if v:
                    return str(v)
        except Exception:
            pass
        v = os.getenv(n)
        if v:
            return v
    return None


def _missing_msg(missing: list[str]) -> str:
    return (
        "Missing required secrets: "
        + ", ".join(missing)
        + "\nAdd them in Streamlit Cloud → Settings → Secrets (TOML) or export as env vars.\n"
        "Aliases supported for Supabase: SUPABASE__URL, VITE_SUPABASE_URL, VITE_SUPABASE_ANON_KEY."
    )


def supabase_configured() -> bool:
    return bool(sget(*SUPABASE_URL_NAMES) and sget(*SUPABASE_KEY_NAMES))


@st.cache_resource(show_spinner=False)
def get_supabase_client(required: bool = False) -> Client | None:
    """Create a cached Supabase client; None (demo mode) when not configured."""
    url = sget(*SUPABASE_URL_NAMES)
    key = sget(*SUPABASE_KEY_NAMES)

    missing = []
    if not url:
        missing.append("SUPABASE_URL")
    if not key:
        missing.append("SUPABASE_ANON_KEY")
    if missing:
        if required:
            raise RuntimeError(_missing_msg(missing))
        log.warning("Banco de Dados não configurado. Executando em modo de demonstração.")
        return None

    return create_client(url, key)


# --- Extraction API key -------------------------------------------------------

def get_mistral_api_key(required: bool = True) -> str | None:
    """Returns Mistral key from secrets/env; raises if required and missing."""
    key = sget(*MISTRAL_KEY_NAMES)
    if required and not key:
        raise RuntimeError("Missing Mistral API key. Set MISTRAL_API_KEY in secrets or env.")
    return key


# --- Doppler ------------------------------------------------------------------

def doppler_bootstrap() -> int:
    """
    Pull secrets from Doppler into os.environ when DOPPLER_TOKEN/PROJECT/CONFIG
    are set. Existing env values win. Returns the number of exported names.
    """
    token = sget("DOPPLER_TOKEN")
    project = sget("DOPPLER_PROJECT")
    config = sget("DOPPLER_CONFIG")
    if not (token and project and config):
        return 0  # Safe no-op locally or if Doppler not configured

    r = requests.get(
        "https://api.doppler.com/v3/configs/config/secrets",
        params={"project": project, "config": config},
        headers={"Authorization": f"Bearer {token}"},
        timeout=10,
    )
    r.raise_for_status()
    secrets = r.json().get("secrets", {})

    exported = 0
    for k, v in secrets.items():
        val = v.get("computed") if isinstance(v, dict) else v
        if not val:
            continue
        target = DOPPLER_ALIASES.get(k, k)
        if not os.getenv(target):   # do NOT clobber existing env
            os.environ[target] = str(val)
            exported += 1
    log.info("Doppler: exported %d secrets", exported)
    return exported


@st.cache_resource(show_spinner=False)
def bootstrap_secrets() -> int:
    """Run doppler_bootstrap once per process; call before get_supabase_client()."""
    return doppler_bootstrap()
