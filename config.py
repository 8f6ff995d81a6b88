"""
Configuration for Vaxbot
Reads environment variables (or a local .env) once at import time.
"""
import os

from dotenv import load_dotenv

from vaxbot.errors import ConfigError

load_dotenv()

# ============================================================================
# BOT CONFIGURATION
# ============================================================================
BOT_TOKEN = os.getenv("BOT_TOKEN")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Webhook mode is used only when WEBHOOK_URL is set, long polling otherwise
WEBHOOK_URL = os.getenv("WEBHOOK_URL")
PORT = int(os.getenv("PORT", "5000"))

# When false, a failed stats fetch leaves the loading message untouched
REPORT_FETCH_FAILURES = os.getenv("REPORT_FETCH_FAILURES", "true").lower() in ("1", "true", "yes")

# ============================================================================
# COMMANDS & MESSAGES
# ============================================================================
VACCED_PREFIX = "!vacced"
VERSION_PREFIX = "!version"

LOADING_MESSAGE = "Loading vaccination stats..."
FETCH_FAILED_MESSAGE = "Couldn't load vaccination stats right now. Try again shortly."

# ============================================================================
# DATA SOURCES
# ============================================================================
UK_API_URL = "https://api.coronavirus.data.gov.uk/v2/data"
CANADA_API_URL = "https://api.covid19tracker.ca/summary"

# Fixed population denominators, not fetched
UK_POPULATION = 66_800_000
CANADA_POPULATION = 37_590_000


def require_bot_token() -> str:
    """Return the chat token or raise ConfigError when it is missing."""
    token = os.getenv("BOT_TOKEN") or BOT_TOKEN
    if not token or not token.strip():
        raise ConfigError("BOT_TOKEN not set in environment variables!")
    return token.strip()


def get_final_webhook_url(token: str) -> str:
    """Return the full webhook url with the token appended unless already present."""
    base = (os.getenv("WEBHOOK_URL") or WEBHOOK_URL or "").rstrip("/")
    if not base:
        raise ConfigError("WEBHOOK_URL not set in environment variables!")
    if base.endswith(token):
        return base
    if base.endswith("/webhook"):
        return f"{base}/{token}"
    if "/" not in base.split("://", 1)[-1]:
        return f"{base}/webhook/{token}"
    return f"{base}/{token}"
