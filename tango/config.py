import secrets
import dotenv
import os
dotenv.load_dotenv("settings.env")


def _env_int(name: str, default: int) -> int:
    """Reads an integer environment variable, falling back to the default on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


STORAGE_SECRET = os.getenv("STORAGE_SECRET")
if not STORAGE_SECRET:
    STORAGE_SECRET = secrets.token_hex(32)

# Local path or http(s) URL of the vocabulary CSV
DECK_SOURCE = os.getenv("DECK_SOURCE", "data.csv")
DECK_FETCH_TIMEOUT = _env_float("DECK_FETCH_TIMEOUT", 10.0)

PORT = _env_int("PORT", 8080)

DAILY_GOAL = _env_int("DAILY_GOAL", 10)
if DAILY_GOAL <= 0:
    DAILY_GOAL = 10

DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "ja")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
