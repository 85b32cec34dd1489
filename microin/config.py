# microin/config.py
import os
from dotenv import load_dotenv

load_dotenv()

def _as_bool(val: str | None, default=False) -> bool:
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}

def _as_list(val: str | None, default: list[str]) -> list[str]:
    items = [v.strip() for v in (val or "").split(",") if v.strip()]
    return items or default

class Config:
    # --- Core ---
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    APP_VERSION = os.getenv("APP_VERSION")
    API_PREFIX = os.getenv("API_PREFIX", "/api")
    PORT = int(os.getenv("PORT", "3001"))

    # --- Recommendations (Gemini) ---
    # API_KEY is what the original backend's .env used
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    # empty -> SDK default endpoint
    GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "")
    RECOMMENDER_TIMEOUT_SECONDS = float(os.getenv("RECOMMENDER_TIMEOUT_SECONDS", "20"))
    RECOMMENDATION_LIMIT = int(os.getenv("RECOMMENDATION_LIMIT", "3"))

    # --- Marketplace ---
    NFT_IMAGE_URL_TEMPLATE = os.getenv("NFT_IMAGE_URL_TEMPLATE", "https://picsum.photos/seed/{task_id}/500/500")
    SEED_DEMO_DATA = _as_bool(os.getenv("SEED_DEMO_DATA", "1"))

    # --- CORS ---
    CORS_ORIGINS = _as_list(os.getenv("CORS_ORIGINS"), ["*"])

    # --- Logging ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "logs")
    LOG_FILENAME = os.getenv("LOG_FILENAME", "microin.log")
    LOG_JSON = _as_bool(os.getenv("LOG_JSON", "0"))

    # --- Sentry ---
    SENTRY_DSN = os.getenv("SENTRY_DSN", "")
    SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))
