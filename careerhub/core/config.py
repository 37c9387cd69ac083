"""
============================================================
 CareerHub • core/config.py
 ------------------------------------------------------------
 Global configuration for backend constants, environment
 variables, and directory paths.

 Version : 1.0.0
============================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from dotenv import load_dotenv


# ============================================================
# 🌍 Environment Setup
# ============================================================

_env_loaded = (
    load_dotenv(dotenv_path=Path(__file__).resolve().parents[2] / ".env")
    or load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")
    or load_dotenv()
)


def _clean_env(val: str | None, default: str = "") -> str:
    v = (val if val is not None else default)
    return str(v).strip().strip('"').strip("'")


def _getenv_clean(name: str, default: str = "") -> str:
    return _clean_env(os.getenv(name), default)


def _getenv_int(name: str, default: int) -> int:
    try:
        return int(_getenv_clean(name, str(default)))
    except ValueError:
        return default


def _getenv_float(name: str, default: float) -> float:
    try:
        return float(_getenv_clean(name, str(default)))
    except ValueError:
        return default


# ============================================================
# 📁 Directory Structure
# ============================================================

BASE_DIR = Path(__file__).resolve().parents[2]
if not (BASE_DIR / "careerhub").exists():
    BASE_DIR = Path.cwd()

FRONTEND_DIR = BASE_DIR / "frontend"
STATIC_DIR = FRONTEND_DIR / "static"
DATA_DIR = BASE_DIR / "data"


def _resolve_env_path(var_name: str, default_path: Path) -> Path:
    raw = _getenv_clean(var_name, "")
    if not raw:
        return default_path
    p = Path(os.path.expanduser(raw))
    if not p.is_absolute():
        p = BASE_DIR / p
    return p


LOGS_DIR = _resolve_env_path("CAREERHUB_LOG_DIR", DATA_DIR / "logs")
LOGS_DIR.mkdir(parents=True, exist_ok=True)

LOG_PATH = LOGS_DIR / "events.jsonl"
LOG_PATH.touch(exist_ok=True)


# ============================================================
# ⚙️ Core Settings
# ============================================================

APP_NAME = "CareerHub"
APP_VERSION = "1.0.0"
DEBUG_MODE = _getenv_clean("DEBUG", "true").lower() == "true"
VERBOSE = _getenv_clean("CAREERHUB_VERBOSE", "false").lower() in {"1", "true", "yes", "on"}

HOST = _getenv_clean("HOST", "0.0.0.0")
PORT = _getenv_int("PORT", 3001)


# ============================================================
# 🤖 Groq (OpenAI-compatible chat completions)
# ============================================================

GROQ_API_KEY = _getenv_clean("GROQ_API_KEY", "")
GROQ_API_URL = _getenv_clean("GROQ_API_URL", "https://api.groq.com/openai/v1/chat/completions")
GROQ_MODEL = _getenv_clean("GROQ_MODEL", "llama-3.1-8b-instant")
GROQ_TIMEOUT_SEC = _getenv_float("GROQ_TIMEOUT_SEC", 60.0)

# Token budgets per feature
DEFAULT_MAX_TOKENS = 400
FEEDBACK_MAX_TOKENS = 700
SUGGEST_MAX_TOKENS = 400
CAREER_MAX_TOKENS = 500

if DEBUG_MODE and not GROQ_API_KEY:
    print("[CareerHub] ⚠️ GROQ_API_KEY not found in environment.")


# ============================================================
# 📊 Diagnostics
# ============================================================

if __name__ == "__main__":
    print("=========== CAREERHUB CONFIG ===========")
    print(f"APP_NAME          : {APP_NAME}")
    print(f"VERSION           : {APP_VERSION}")
    print(f"BASE_DIR          : {BASE_DIR}")
    print(f"FRONTEND_DIR      : {FRONTEND_DIR}")
    print(f"LOG_PATH          : {LOG_PATH}")
    print(f"HOST:PORT         : {HOST}:{PORT}")
    print(f"GROQ_API_KEY_LEN  : {len(GROQ_API_KEY) if GROQ_API_KEY else 0}")
    print(f"GROQ_API_URL      : {GROQ_API_URL}")
    print(f"GROQ_MODEL        : {GROQ_MODEL}")
    print(f"GROQ_TIMEOUT_SEC  : {GROQ_TIMEOUT_SEC}")
    print(f"VERBOSE           : {VERBOSE}")
