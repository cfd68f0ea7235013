"""Runtime settings read from Streamlit secrets or the process environment."""
import logging
import os
from typing import Optional

from symptom_assistant.domain.locales import resolve_language
from symptom_assistant.domain.models import Language

try:
    import streamlit as st  # type: ignore
    _HAS_STREAMLIT = True
except Exception:
    _HAS_STREAMLIT = False

logger = logging.getLogger(__name__)

DEFAULT_TEXT_MODEL = "mistral-large-latest"
DEFAULT_VISION_MODEL = "pixtral-large-latest"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _from_streamlit(name: str) -> Optional[str]:
    if not _HAS_STREAMLIT:
        return None
    try:
        value = st.secrets.get(name)
    except Exception:
        # Raised when no secrets.toml exists
        return None
    return None if value is None else str(value)


def read_setting(name: str, default: Optional[str] = None) -> Optional[str]:
    """Streamlit secrets win over environment variables; blank values count as unset."""
    for value in (_from_streamlit(name), os.environ.get(name)):
        if value is not None and value.strip():
            return value.strip()
    return default


def parse_language(code: Optional[str]) -> Language:
    language = resolve_language(code)
    if code and language.value != code.strip().lower():
        logger.warning("Unsupported DEFAULT_LANGUAGE %r; using %s", code, language.value)
    return language


def parse_log_level(value: Optional[str]) -> str:
    level = (value or "").strip().upper()
    if level not in LOG_LEVELS:
        if level:
            logger.warning("Unknown LOG_LEVEL %r; using INFO", value)
        return "INFO"
    return level


class Settings:
    @property
    def mistral_api_key(self) -> Optional[str]:
        return read_setting("MISTRAL_API_KEY")

    @property
    def mistral_model(self) -> str:
        return read_setting("MISTRAL_MODEL", DEFAULT_TEXT_MODEL)

    @property
    def mistral_vision_model(self) -> str:
        return read_setting("MISTRAL_VISION_MODEL", DEFAULT_VISION_MODEL)

    @property
    def google_places_api_key(self) -> Optional[str]:
        return read_setting("GOOGLE_PLACES_API_KEY")

    @property
    def default_language(self) -> Language:
        return parse_language(read_setting("DEFAULT_LANGUAGE"))

    @property
    def log_level(self) -> str:
        return parse_log_level(read_setting("LOG_LEVEL"))
