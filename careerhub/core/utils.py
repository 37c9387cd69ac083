"""
CareerHub • core/utils.py
Logging and small text helpers shared across backend modules.
"""

from __future__ import annotations

import json
import time
from datetime import datetime, timezone
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from careerhub.core import config


# ============================================================
# 📜 TEXT HELPERS
# ============================================================
def preview(text: Optional[str], limit: int = 800) -> str:
    """Truncate a string for console output."""
    s = text or ""
    return (s[:limit] + "…") if len(s) > limit else s


# ============================================================
# 🧠 LOGGING & DIAGNOSTIC HELPERS
# ============================================================
def utc_now_iso() -> str:
    """Return current UTC timestamp in ISO-8601 format."""
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def _event_record(event: str, meta: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "timestamp": utc_now_iso(),
        "app": config.APP_NAME,
        "event": str(event),
        "meta": meta or {},
    }


def log_event(event: str, meta: Optional[Dict[str, Any]] = None) -> None:
    """
    Record one CareerHub event: a console line for the operator and a JSON
    line in config.LOG_PATH (events.jsonl). Values json can't encode are
    stored via str(). A failed file write is reported, never raised.
    """
    record = _event_record(event, meta)
    line = json.dumps(record, ensure_ascii=False, default=str)

    meta_json = json.dumps(record["meta"], ensure_ascii=False, default=str)
    print(f"[{config.APP_NAME}] {record['timestamp']} {record['event']} {preview(meta_json)}")

    try:
        config.LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with open(config.LOG_PATH, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError as e:
        print(f"[{config.APP_NAME}] ⚠️ events.jsonl not writable: {e}")


@contextmanager
def benchmark(name: str) -> Iterator[None]:
    """Log the wall time of the wrapped block as a `benchmark` event."""
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        log_event("benchmark", {"name": name, "duration_ms": round(elapsed_ms, 1)})
