"""
Runtime settings for the analyzer service.

Values can be overridden in a .env file in the backend root, e.g.:

FETCH_TIMEOUT_SECONDS=10
MAX_RESPONSE_BYTES=5242880

The app loads environment variables automatically using python-dotenv.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, "").strip() or default)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, "").strip() or default)
    except ValueError:
        return default


FETCH_TIMEOUT_SECONDS = _env_float("FETCH_TIMEOUT_SECONDS", 10.0)
MAX_RESPONSE_BYTES = _env_int("MAX_RESPONSE_BYTES", 5 * 1024 * 1024)
FETCH_USER_AGENT = (
    os.getenv("FETCH_USER_AGENT", "").strip()
    or "Mozilla/5.0 (compatible; SEO-Analyzer/1.0)"
)
CORS_ALLOW_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
] or ["*"]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
HOST = os.getenv("HOST", "0.0.0.0").strip() or "0.0.0.0"
PORT = _env_int("PORT", 8000)
