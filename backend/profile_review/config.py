"""
Application configuration - constants, environment variables and the Settings object
"""
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    try:
        return int(value) if value not in (None, "") else default
    except ValueError:
        print(f"WARNING: {name}={value!r} is not an integer, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    try:
        return float(value) if value not in (None, "") else default
    except ValueError:
        print(f"WARNING: {name}={value!r} is not a number, using {default}")
        return default


# ========================================
# API Keys & Secrets
# ========================================
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_ASSISTANT_ID = os.getenv("OPENAI_ASSISTANT_ID")
APIFY_API_TOKEN = os.getenv("APIFY_API_TOKEN")
FLASK_SECRET = os.getenv("FLASK_SECRET", "dev")
SENTRY_DSN = os.getenv("SENTRY_DSN")

# ========================================
# Firebase / Firestore
# ========================================
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")
GOOGLE_APPLICATION_CREDENTIALS = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
FIRESTORE_COOKIE_COLLECTION = os.getenv("FIRESTORE_COOKIE_COLLECTION", "linkedin_cookies")

# ========================================
# Apify (LinkedIn profile scraper actor)
# ========================================
APIFY_ACTOR_ENDPOINT = os.getenv(
    "APIFY_ACTOR_ENDPOINT",
    "https://api.apify.com/v2/acts/curious_coder~linkedin-profile-scraper/run-sync-get-dataset-items",
)
APIFY_TIMEOUT_SECONDS = _env_float("APIFY_TIMEOUT_SECONDS", 120.0)
APIFY_PROXY = {"useApifyProxy": True}

# ========================================
# OpenAI
# ========================================
OPENAI_CHAT_MODEL = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o")
OPENAI_TIMEOUT_SECONDS = _env_float("OPENAI_TIMEOUT_SECONDS", 30.0)

# ========================================
# Pipeline limits
# ========================================
MAX_FETCH_ATTEMPTS = _env_int("MAX_FETCH_ATTEMPTS", 3)
MAX_ANALYSIS_ATTEMPTS = _env_int("MAX_ANALYSIS_ATTEMPTS", 3)
ANALYSIS_BACKOFF_SECONDS = _env_float("ANALYSIS_BACKOFF_SECONDS", 2.0)
RUN_POLL_INTERVAL_SECONDS = _env_float("RUN_POLL_INTERVAL_SECONDS", 2.0)
RUN_MAX_POLLS = _env_int("RUN_MAX_POLLS", 30)
REQUEST_TIMEOUT_SECONDS = _env_float("REQUEST_TIMEOUT_SECONDS", 900.0)

# ========================================
# Report / HTTP
# ========================================
REPORT_LOCALE = os.getenv("REPORT_LOCALE", "Brazilian Portuguese")
SCRAPE_RATE_LIMIT = os.getenv("SCRAPE_RATE_LIMIT", "10 per minute")
DEFAULT_RATE_LIMITS = ["200 per day", "50 per hour"]
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")


@dataclass(frozen=True)
class Settings:
    """Explicit configuration handed to every pipeline component."""
    openai_api_key: Optional[str] = None
    openai_assistant_id: Optional[str] = None
    openai_chat_model: str = "gpt-4o"
    openai_timeout: float = 30.0
    apify_api_token: Optional[str] = None
    apify_endpoint: str = APIFY_ACTOR_ENDPOINT
    apify_timeout: float = 120.0
    apify_proxy: Dict[str, Any] = field(default_factory=lambda: dict(APIFY_PROXY))
    cookie_collection: str = "linkedin_cookies"
    max_fetch_attempts: int = 3
    max_analysis_attempts: int = 3
    analysis_backoff_seconds: float = 2.0
    poll_interval_seconds: float = 2.0
    max_polls: int = 30
    request_timeout_seconds: float = 900.0
    report_locale: str = "Brazilian Portuguese"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_api_key=OPENAI_API_KEY,
            openai_assistant_id=OPENAI_ASSISTANT_ID,
            openai_chat_model=OPENAI_CHAT_MODEL,
            openai_timeout=OPENAI_TIMEOUT_SECONDS,
            apify_api_token=APIFY_API_TOKEN,
            apify_endpoint=APIFY_ACTOR_ENDPOINT,
            apify_timeout=APIFY_TIMEOUT_SECONDS,
            cookie_collection=FIRESTORE_COOKIE_COLLECTION,
            max_fetch_attempts=MAX_FETCH_ATTEMPTS,
            max_analysis_attempts=MAX_ANALYSIS_ATTEMPTS,
            analysis_backoff_seconds=ANALYSIS_BACKOFF_SECONDS,
            poll_interval_seconds=RUN_POLL_INTERVAL_SECONDS,
            max_polls=RUN_MAX_POLLS,
            request_timeout_seconds=REQUEST_TIMEOUT_SECONDS,
            report_locale=REPORT_LOCALE,
        )


# ========================================
# Validation
# ========================================
if not OPENAI_API_KEY:
    print("WARNING: OPENAI_API_KEY not found in .env file")

if not OPENAI_ASSISTANT_ID:
    print("WARNING: OPENAI_ASSISTANT_ID not found in .env file - analyses will use the fallback report")

if not APIFY_API_TOKEN:
    print("WARNING: APIFY_API_TOKEN not found in .env file")
