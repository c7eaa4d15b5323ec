"""
config.py — App Configuration
==============================
Settings are read from the environment once, at import time, and loaded
into Flask with `app.config.from_object(Config)`.

    SECRET_KEY          – Flask session key (random per process if unset)
    ALGOVISION_HOST     – bind address for `python main.py`
    PORT                – bind port
    LOG_LEVEL           – root logging level name
    FEEDBACK_RECIPIENT  – address feedback messages are addressed to
    DEFAULT_ARRAY_SIZE  – initial size of the sorting / searching arrays
"""

import os
import secrets


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class Config:
    SECRET_KEY         = os.environ.get("SECRET_KEY") or secrets.token_hex(32)
    HOST               = os.environ.get("ALGOVISION_HOST", "127.0.0.1")
    PORT               = _int_env("PORT", 5000)
    LOG_LEVEL          = os.environ.get("LOG_LEVEL", "INFO").upper()
    FEEDBACK_RECIPIENT = os.environ.get("FEEDBACK_RECIPIENT", "feedback@algovision.local")
    DEFAULT_ARRAY_SIZE = _int_env("DEFAULT_ARRAY_SIZE", 25)
    TESTING            = False
