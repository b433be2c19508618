"""
Centralized FounderHQ configuration.
Loads environment variables (local .env) or st.secrets (Streamlit Cloud).
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (local runs only)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")


def _get_secret(key: str, default: str = None) -> str | None:
    """Look a key up in st.secrets (Cloud) or os.environ (local .env)."""
    try:
        import streamlit as st
        if hasattr(st, "secrets") and key in st.secrets:
            return st.secrets[key]
    except Exception:
        # st.secrets raises when no secrets.toml exists
        pass
    return os.getenv(key, default)


# ─── Workspace backend ───

API_URL = _get_secret("FOUNDERHQ_API_URL")
API_KEY = _get_secret("FOUNDERHQ_API_KEY")
ACCESS_TOKEN = _get_secret("FOUNDERHQ_ACCESS_TOKEN")
WORKSPACE_ID = _get_secret("FOUNDERHQ_WORKSPACE_ID")
BACKEND_ENABLED = bool(API_URL and API_KEY and WORKSPACE_ID)

MIN_REQUEST_INTERVAL = 0.1  # 100ms
MAX_RETRIES = 3
RETRY_BACKOFF = 1.0  # seconds
PAGE_SIZE = 500

# ─── Cache ───

CACHE_TTL = 300  # 5 minutes

# ─── Metrics ───

CURRENCY_SYMBOL = "$"
BURN_RATE_MONTHS = 3
GROWTH_WINDOW = 3
ACTIVE_CUSTOMER_DAYS = 30
ACQUISITION_CATEGORIES = ("Marketing",)
HIGH_PROBABILITY_THRESHOLD = 60
PIPELINE_CLOSE_WEIGHT = 0.5
PIPELINE_FORECAST_STAGES = ("proposal", "negotiation")
TOP_DEALS = 3
FORECAST_MONTHS = 6

# Stand-ins pending a real ledger balance and gross margin
ESTIMATED_BALANCE_MONTHS = 3
RULE_OF_40_MARGIN_PLACEHOLDER = 20.0

# ─── Health thresholds ───

RUNWAY_WARNING_MONTHS = 3
RUNWAY_HEALTHY_MONTHS = 12
LTV_CAC_TARGET = 3.0
CAC_PAYBACK_MAX_MONTHS = 12
GROWTH_STRONG_PERCENT = 20.0

# ─── Logging ───

LOG_LEVEL = _get_secret("FOUNDERHQ_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = None):
    """Configure root logging once for the dashboard process."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
