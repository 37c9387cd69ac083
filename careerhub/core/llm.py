"""
============================================================
 CareerHub • core/llm.py
 ------------------------------------------------------------
 Model gateway: one prompt in, one completion string out.

  • Groq OpenAI-compatible /chat/completions over httpx
  • Missing choices/message/content degrade to "" (never raised)
  • Transport errors propagate; no retries, no caching

============================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from careerhub.core import config
from careerhub.core.utils import benchmark, log_event


def _headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {config.GROQ_API_KEY}",
    }


def _payload(prompt: str, max_tokens: int) -> Dict[str, Any]:
    return {
        "model": config.GROQ_MODEL,
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": int(max_tokens),
    }


def message_content(data: Any) -> str:
    """Pull choices[0].message.content out of a completion body, or ""."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not content:
        return ""
    return content if isinstance(content, str) else str(content)


async def generate(
    prompt: str,
    max_tokens: int = config.DEFAULT_MAX_TOKENS,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Send a single-turn prompt to the chat-completion API and return the
    first choice's text. A non-2xx status is logged but the body is still
    inspected, so an error payload yields "".
    """
    payload = _payload(prompt, max_tokens)

    with benchmark("groq_generate"):
        if client is None:
            async with httpx.AsyncClient(timeout=config.GROQ_TIMEOUT_SEC) as owned:
                r = await owned.post(config.GROQ_API_URL, headers=_headers(), json=payload)
        else:
            r = await client.post(config.GROQ_API_URL, headers=_headers(), json=payload)

    if r.status_code >= 400:
        log_event("groq_http_status", {"status": r.status_code, "model": config.GROQ_MODEL})

    text = message_content(r.json())
    log_event(
        "groq_call",
        {
            "model": config.GROQ_MODEL,
            "max_tokens": int(max_tokens),
            "prompt_chars": len(prompt or ""),
            "reply_chars": len(text),
        },
    )
    return text
