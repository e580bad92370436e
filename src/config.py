"""
Environment-backed configuration for the transaction service.

Values are read on each call so a changed environment (or a .env file loaded
later) is picked up without re-importing.
"""

import os
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv, find_dotenv

load_dotenv(find_dotenv(usecwd=True), override=False)

DEFAULT_ACCOUNT_SERVICE_URL = "http://localhost:8080"
DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"


def get_account_service_url() -> str:
    """Base URL of the downstream account service, without a trailing slash."""
    url = os.getenv("ACCOUNT_SERVICE_URL", DEFAULT_ACCOUNT_SERVICE_URL).strip()
    parsed = urlparse(url)
    if not all([parsed.scheme, parsed.netloc]):
        raise ValueError(f"Invalid ACCOUNT_SERVICE_URL format: {url}")
    return url.rstrip("/")


def get_account_service_timeout() -> Optional[float]:
    """Timeout in seconds for downstream calls; None (the default) disables it."""
    raw = os.getenv("ACCOUNT_SERVICE_TIMEOUT")
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError("ACCOUNT_SERVICE_TIMEOUT environment variable must be a number.")


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_dir() -> Path:
    raw = os.getenv("LOG_DIR")
    return Path(raw) if raw else DEFAULT_LOG_DIR


def get_port() -> int:
    port_str = os.getenv("PORT", "8000")
    try:
        return int(port_str)
    except ValueError:
        raise ValueError("PORT environment variable must be an integer.")
