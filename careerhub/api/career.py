"""
============================================================
 CareerHub — api/career.py
 ------------------------------------------------------------
 Career recommendation API

  • type="skills-to-career": skills list → best-fit role
  • any other type:          role name  → role overview
  • Every failure (missing input, upstream, bad JSON) → 500

============================================================
"""

from __future__ import annotations

from typing import Any, List, Optional, Type

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from careerhub.core import config, llm
from careerhub.core.extractors import parse_model_json
from careerhub.core.utils import log_event, preview

router = APIRouter(prefix="/career-ai", tags=["career"])

SKILLS_TO_CAREER = "skills-to-career"


# ============================================================
# 🧠 Request / Result Models
# ============================================================

class CareerReq(BaseModel):
    type: Optional[str] = None
    input: Optional[str] = None
    skills: Optional[List[Any]] = None


class SkillsCareerResult(BaseModel):
    best_fit_role: str
    why: str = ""
    responsibilities: List[str] = []
    next_skills: List[str] = []
    growth_path: str = ""
    average_salary: str = ""
    industries: List[str] = []
    job_type: str = ""
    entry_experience: str = ""
    courses: List[str] = []
    top_companies: List[str] = []


class RoleOverviewResult(BaseModel):
    role: str
    overview: str = ""
    required_degree: str = ""
    required_skills: List[str] = []
    soft_skills: List[str] = []
    career_progression: str = ""
    average_salary: str = ""
    industries: List[str] = []
    certifications: List[str] = []
    top_companies: List[str] = []


# ============================================================
# 📝 Prompts
# ============================================================

_SKILLS_SCHEMA = """{
  "best_fit_role": "string",
  "why": "string",
  "responsibilities": ["string"],
  "next_skills": ["string"],
  "growth_path": "string",
  "average_salary": "string",
  "industries": ["string"],
  "job_type": "string",
  "entry_experience": "string",
  "courses": ["string"],
  "top_companies": ["string"]
}"""

_ROLE_SCHEMA = """{
  "role": "string",
  "overview": "string",
  "required_degree": "string",
  "required_skills": ["string"],
  "soft_skills": ["string"],
  "career_progression": "string",
  "average_salary": "string",
  "industries": ["string"],
  "certifications": ["string"],
  "top_companies": ["string"]
}"""


def build_career_prompt(req: CareerReq) -> tuple[str, Type[BaseModel]]:
    """Pick the prompt + result schema for the request type."""
    if req.type == SKILLS_TO_CAREER:
        if req.skills is None:
            raise ValueError("skills is required for skills-to-career")
        skills = ", ".join(str(s) for s in req.skills)
        return f"\nReturn ONLY valid JSON.\n{_SKILLS_SCHEMA}\nSkills: {skills}\n", SkillsCareerResult

    if not req.input:
        raise ValueError("input is required for role overview")
    return f"\nReturn ONLY valid JSON.\n{_ROLE_SCHEMA}\nRole: {req.input}\n", RoleOverviewResult


@router.post("")
async def career_ai(req: CareerReq):
    raw = ""
    try:
        prompt, schema = build_career_prompt(req)
        raw = await llm.generate(prompt, config.CAREER_MAX_TOKENS)
        result = parse_model_json(raw, schema)
    except Exception as e:
        log_event(
            "❌ career_ai_error",
            {"type": req.type, "error": f"{type(e).__name__}: {e}", "raw": preview(raw)},
        )
        raise HTTPException(status_code=500, detail="Invalid AI JSON")

    log_event("career_ai_ok", {"type": req.type or "role-overview"})
    return result.model_dump()
