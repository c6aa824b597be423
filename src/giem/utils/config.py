# giem/utils/config.py

import os
from dotenv import load_dotenv

load_dotenv()

# --- Storage ---
BUCKET_NAME = os.getenv("GIEM_BUCKET", "receipt-images")
RECEIPTS_TABLE = os.getenv("GIEM_TABLE", "receipts")
SIGNED_URL_TTL = int(os.getenv("GIEM_SIGNED_URL_TTL", 600))
CACHE_CONTROL = "3600"

# --- Extraction ---
OCR_MODEL = os.getenv("GIEM_OCR_MODEL", "mistral-ocr-latest")
DOWNLOAD_TIMEOUT = int(os.getenv("GIEM_DOWNLOAD_TIMEOUT", 30))

SUPPORTED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/gif",
    "application/pdf",
})

UPLOAD_TYPES = ["jpg", "jpeg", "png", "webp", "pdf"]

# --- Dates ---
TIMEZONE = os.getenv("GIEM_TIMEZONE", "America/Sao_Paulo")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")  # optional

# --- Doppler secret names -> names the app reads ---
DOPPLER_ALIASES = {
    # Extraction
    "MISTRAL__API__KEY": "MISTRAL_API_KEY",
    "MISTRAL__API_KEY":  "MISTRAL_API_KEY",
    "MISTRAL_API_KEY":   "MISTRAL_API_KEY",
    # Supabase
    "SUPABASE__URL":                  "SUPABASE_URL",
    "VITE_SUPABASE_URL":              "SUPABASE_URL",
    "SUPABASE_URL":                   "SUPABASE_URL",
    "VITE_SUPABASE_ANON_KEY":         "SUPABASE_ANON_KEY",
    "SUPABASE_ANON_KEY":              "SUPABASE_ANON_KEY",
    "SUPABASE__SUPABASE_SERVICE_KEY": "SUPABASE_SERVICE_KEY",
    "SUPABASE_SERVICE_ROLE_KEY":      "SUPABASE_SERVICE_KEY",
    "SUPABASE_SERVICE_KEY":           "SUPABASE_SERVICE_KEY",
    "SUPABASE_KEY":                   "SUPABASE_SERVICE_KEY",
}
