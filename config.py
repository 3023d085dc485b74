# Environment (.env) and the JSON settings file behind the Settings tab.
import json
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")

SETTINGS_PATH = BASE_DIR / ".havyn_config.json"
DEFAULT_MODEL = "gpt-4.1-nano"


def get_server_api_key() -> str | None:
    return os.environ.get("OPENAI_API_KEY") or None


def get_model() -> str:
    return os.environ.get("HAVYN_MODEL") or DEFAULT_MODEL


def get_db_path() -> Path:
    raw = os.environ.get("HAVYN_DB_PATH")
    return Path(raw) if raw else BASE_DIR / "havyn.db"


def get_log_level() -> str:
    return (os.environ.get("HAVYN_LOG_LEVEL") or "INFO").upper()


def get_log_file() -> Path | None:
    raw = os.environ.get("HAVYN_LOG_FILE")
    return Path(raw) if raw else None


def _settings() -> dict:
    try:
        return json.loads(SETTINGS_PATH.read_text()) if SETTINGS_PATH.exists() else {}
    except (OSError, ValueError):
        return {}


def get_use_ai() -> bool:
    return bool(_settings().get("useAi", False))


def set_use_ai(value: bool) -> None:
    s = _settings()
    s["useAi"] = bool(value)
    SETTINGS_PATH.write_text(json.dumps(s, indent=2))
