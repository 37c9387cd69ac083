"""
CareerHub • core/extractors.py
Best-effort recovery of structured values from free-form model text.

  • extract_question: one interview question (quoted → bare "?" → first line)
  • extract_json:     first {...} span after stripping markdown fences
  • parse_model_json: extract_json + pydantic schema validation
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

_QUOTED_QUESTION_RE = re.compile(r"[\"“](.+?\?)[\"”]")
_BARE_QUESTION_RE = re.compile(r"[^?]*\?")
_FENCE_RE = re.compile(r"```json|```")

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class AIJsonError(ValueError):
    """Model output did not contain a usable JSON object."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw or ""


# ============================================================
# ❓ Question extraction
# ============================================================

def extract_question(text: Optional[str]) -> str:
    """
    Pull a single interview question out of model output.
    Never raises; returns "" for empty input.
    """
    if not text:
        return ""

    quoted = _QUOTED_QUESTION_RE.search(text)
    if quoted:
        return quoted.group(1).strip()

    bare = _BARE_QUESTION_RE.search(text)
    if bare:
        return bare.group(0).strip()

    return text.split("\n")[0].strip()


# ============================================================
# 🧾 JSON extraction
# ============================================================

def strip_code_fences(text: Optional[str]) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def extract_json(text: Optional[str]) -> Dict[str, Any]:
    """
    Parse the first '{' .. last '}' span of fenced or chatty model output.
    Raises AIJsonError when no object can be recovered.
    """
    clean = strip_code_fences(text)
    start = clean.find("{")
    end = clean.rfind("}")
    if start < 0 or end < start:
        raise AIJsonError("No JSON object found in model output", raw=text)

    try:
        data = json.loads(clean[start:end + 1])
    except json.JSONDecodeError as e:
        raise AIJsonError(f"Malformed JSON in model output: {e}", raw=text) from e

    if not isinstance(data, dict):
        raise AIJsonError("Model output JSON is not an object", raw=text)
    return data


def parse_model_json(text: Optional[str], schema: Type[SchemaT]) -> SchemaT:
    """extract_json, then validate against `schema`."""
    data = extract_json(text)
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise AIJsonError(f"Model output does not match {schema.__name__}: {e}", raw=text) from e
