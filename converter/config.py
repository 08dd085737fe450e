# converter/config.py
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping

from converter.api.exchange_rates import LATEST_URL

logger = logging.getLogger(__name__)

KEYS = ("FETCH_ENABLED", "RATES_URL", "FETCH_TIMEOUT", "DEFAULT_SOURCE", "DEFAULT_TARGET", "LOG_LEVEL")


@dataclass(frozen=True)
class Settings:
    fetch_enabled: bool = True
    rates_url: str = LATEST_URL
    fetch_timeout: float = 10.0
    default_source: str = "USD"
    default_target: str = "PKR"
    log_level: str = "INFO"


def _timeout(raw: Any, default: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("FETCH_TIMEOUT=%r is not a number, using %s", raw, default)
        return default
    if value <= 0:
        logger.warning("FETCH_TIMEOUT=%r must be positive, using %s", raw, default)
        return default
    return value


def load_settings(source: Mapping[str, Any]) -> Settings:
    """Build Settings from any mapping (st.secrets, os.environ, a plain dict)."""
    d = Settings()
    return Settings(
        fetch_enabled=str(source.get("FETCH_ENABLED", "1")).strip() == "1",
        rates_url=str(source.get("RATES_URL") or d.rates_url),
        fetch_timeout=_timeout(source.get("FETCH_TIMEOUT", d.fetch_timeout), d.fetch_timeout),
        default_source=str(source.get("DEFAULT_SOURCE") or d.default_source).strip().upper(),
        default_target=str(source.get("DEFAULT_TARGET") or d.default_target).strip().upper(),
        log_level=str(source.get("LOG_LEVEL") or d.log_level).strip().upper(),
    )


def _secrets() -> dict:
    import streamlit as st
    from streamlit import errors as st_errors

    missing = (FileNotFoundError, getattr(st_errors, "StreamlitSecretNotFoundError", FileNotFoundError))
    try:
        return {k: st.secrets[k] for k in KEYS if k in st.secrets}
    except missing:
        # no .streamlit/secrets.toml
        logger.debug("No Streamlit secrets file, using environment and defaults")
        return {}


def get_settings() -> Settings:
    """
    Streamlit secrets first, then environment variables, then defaults.
    """
    merged = {k: os.environ[k] for k in KEYS if k in os.environ}
    merged.update(_secrets())
    return load_settings(merged)
