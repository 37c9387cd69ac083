"""
CareerHub • core/stages.py
Fixed, forward-only interview stage sequence and its prompt templates.
The machine is stateless; the current stage lives on the session.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

STAGES = ("basic", "role", "technical", "resume", "behavioral", "salary")
FIRST_STAGE = STAGES[0]
FINAL_STAGE = STAGES[-1]
MAX_QUESTIONS = len(STAGES)

_QUESTION_PROMPTS: Dict[str, str] = {
    "basic": "Ask ONE HR interview question for {job_role}. Output ONLY the question.",
    "role": "Ask ONE role-specific interview question for {job_role}. Output ONLY the question.",
    "technical": "Ask ONE technical interview question for {job_role}. Output ONLY the question.",
    "resume": "Resume:\n{resume}\nAsk ONE interview question. Output ONLY the question.",
    "behavioral": "Ask ONE behavioral interview question. Output ONLY the question.",
    "salary": "Ask ONE professional salary or availability question. Output ONLY the question.",
}


def _check(stage: str) -> None:
    if stage not in _QUESTION_PROMPTS:
        raise ValueError(f"Unknown interview stage: {stage!r}")


def prompt_for(stage: str, job_role: str, resume: str) -> str:
    _check(stage)
    # str.format would choke on braces inside the resume text
    template = _QUESTION_PROMPTS[stage]
    return template.replace("{job_role}", job_role or "").replace("{resume}", resume or "")


def advance(stage: str) -> Optional[str]:
    """Next stage in the sequence, or None once `stage` is the last one."""
    _check(stage)
    idx = STAGES.index(stage)
    return STAGES[idx + 1] if idx < len(STAGES) - 1 else None


def is_final(stage: str) -> bool:
    return advance(stage) is None


# ============================================================
# 📝 Feedback / rephrase prompts
# ============================================================

def _transcript(history: List[Dict[str, Any]]) -> str:
    return json.dumps(history, ensure_ascii=False, indent=2)


def final_feedback_prompt(history: List[Dict[str, Any]]) -> str:
    return (
        "Provide professional interview feedback with:\n"
        "- Strengths\n"
        "- Weaknesses\n"
        "- Communication\n"
        "- Overall assessment\n"
        "\n"
        "Transcript:\n"
        f"{_transcript(history)}"
    )


def finish_feedback_prompt(history: List[Dict[str, Any]]) -> str:
    return (
        "Give detailed interview feedback with clear sections.\n"
        "Transcript:\n"
        f"{_transcript(history)}"
    )


def clarify_prompt(question: str) -> str:
    return f"Rephrase this interview question clearly. Output ONLY the question:\n{question}"
