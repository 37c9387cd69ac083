"""
CareerHub • api/suggest.py
Resume content suggestions (skills, summary, experience description) for a role.
"""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, field_validator

from careerhub.core import config, llm
from careerhub.core.extractors import AIJsonError, parse_model_json
from careerhub.core.utils import log_event, preview

router = APIRouter(prefix="/suggest", tags=["suggest"])


class SuggestReq(BaseModel):
    role: Optional[str] = None


class SuggestResult(BaseModel):
    skills: List[str]
    summary: str
    description: str

    @field_validator("summary", "description", mode="before")
    @classmethod
    def _join_lines(cls, v: Any) -> Any:
        # "5-line summary" sometimes comes back as a list of lines
        if isinstance(v, list):
            return "\n".join(str(x) for x in v)
        return v


def build_suggest_prompt(role: str) -> str:
    return (
        "\n"
        "Return ONLY valid JSON.\n"
        "{\n"
        '  "skills": ["6 skills"],\n'
        '  "summary": "5-line summary",\n'
        '  "description": "4-line experience description"\n'
        "}\n"
        f"Role: {role}\n"
    )


@router.post("")
async def suggest_resume_content(req: SuggestReq):
    if not req.role:
        raise HTTPException(status_code=400, detail="Role required")

    raw = await llm.generate(build_suggest_prompt(req.role), config.SUGGEST_MAX_TOKENS)

    try:
        result = parse_model_json(raw, SuggestResult)
    except AIJsonError as e:
        log_event("❌ suggest_invalid_json", {"role": req.role, "error": str(e), "raw": preview(raw)})
        raise HTTPException(status_code=500, detail="Invalid AI JSON")

    log_event("suggest_ok", {"role": req.role, "skills": len(result.skills)})
    return result.model_dump()
