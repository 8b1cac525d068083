import os
import logging

try:
    import streamlit as st  # type: ignore
    _HAS_STREAMLIT = True
except Exception:
    _HAS_STREAMLIT = False

logger = logging.getLogger(__name__)


DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_TIMEOUT_SECONDS = 30.0


def get_secret(name: str, default: str | None = None) -> str | None:
    # Prefer Streamlit secrets if available
    if _HAS_STREAMLIT:
        try:
            if name in st.secrets:
                return str(st.secrets.get(name))
        except Exception:
            # secrets.toml is optional
            pass
    # Fallback to environment variables
    return os.environ.get(name, default)


class Settings:
    @property
    def prediction_api_url(self) -> str:
        url = get_secret("PREDICTION_API_URL", DEFAULT_API_URL) or DEFAULT_API_URL
        return url.rstrip("/")

    @property
    def prediction_timeout_seconds(self) -> float:
        raw = get_secret("PREDICTION_TIMEOUT_SECONDS")
        if not raw:
            return DEFAULT_TIMEOUT_SECONDS
        try:
            value = float(raw)
        except ValueError:
            logger.warning("Invalid PREDICTION_TIMEOUT_SECONDS %r; using %s", raw, DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        if value <= 0:
            logger.warning("PREDICTION_TIMEOUT_SECONDS must be positive; using %s", DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        return value

    @property
    def prediction_backend(self) -> str:
        return (get_secret("PREDICTION_BACKEND", "http") or "http").strip().lower()

    @property
    def log_level(self) -> str:
        return (get_secret("LOG_LEVEL", "INFO") or "INFO").upper()
