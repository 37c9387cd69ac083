"""
============================================================
 CareerHub — api/interview.py
 ------------------------------------------------------------
 Mock interview API (six fixed stages)

  • /start    create a session and ask the first question
  • /answer   record an answer, ask the next question or
              return feedback after the last stage
  • /clarify  rephrase the current question
  • /finish   end early with feedback over the transcript

 Sessions live in app.state.sessions (see main.py lifespan).
============================================================
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from careerhub.core import config, llm
from careerhub.core.extractors import extract_question
from careerhub.core.sessions import InterviewSession, SessionStore
from careerhub.core.stages import (
    FIRST_STAGE,
    MAX_QUESTIONS,
    advance,
    clarify_prompt,
    final_feedback_prompt,
    finish_feedback_prompt,
    is_final,
    prompt_for,
)
from careerhub.core.utils import log_event

router = APIRouter(prefix="/interview", tags=["interview"])


# ============================================================
# 🧠 Request Models
# ============================================================

class _CamelReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class StartReq(_CamelReq):
    job_role: Optional[str] = Field(default=None, alias="jobRole")
    resume_text: Optional[str] = Field(default=None, alias="resumeText")


class AnswerReq(_CamelReq):
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    answer: Optional[str] = None


class SessionReq(_CamelReq):
    session_id: Optional[str] = Field(default=None, alias="sessionId")


def get_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def _still_live(store: SessionStore, session: InterviewSession) -> bool:
    return store.get(session.session_id) is session


# ============================================================
# 🚀 Start
# ============================================================
@router.post("/start")
async def start_interview(req: StartReq, store: SessionStore = Depends(get_store)):
    if not req.job_role or not req.resume_text:
        raise HTTPException(status_code=400, detail="Missing jobRole or resumeText")

    raw = await llm.generate(prompt_for(FIRST_STAGE, req.job_role, req.resume_text))
    question = extract_question(raw)

    session = store.create(req.job_role, req.resume_text, last_question=question, stage=FIRST_STAGE)
    log_event("interview_started", {"session_id": session.session_id, "job_role": req.job_role})

    return {
        "sessionId": session.session_id,
        "question": question,
        "stage": session.stage,
        "questionCount": 1,
        "maxQuestions": MAX_QUESTIONS,
    }


# ============================================================
# 🧩 Answer
# ============================================================
@router.post("/answer")
async def answer_question(req: AnswerReq, store: SessionStore = Depends(get_store)):
    session = store.get(req.session_id)
    if session is None or not req.answer:
        raise HTTPException(status_code=400, detail="Invalid session or answer")

    async with session.lock:
        # finished or completed while this request was waiting
        if not _still_live(store, session):
            raise HTTPException(status_code=400, detail="Invalid session or answer")

        # nothing is committed until the model call succeeds
        if is_final(session.stage):
            pending = session.transcript() + [{"question": session.last_question, "answer": req.answer}]
            feedback = await llm.generate(final_feedback_prompt(pending), config.FEEDBACK_MAX_TOKENS)
            session.record_answer(req.answer)
            store.delete(session.session_id)
            log_event(
                "interview_completed",
                {"session_id": session.session_id, "answers": len(session.history)},
            )
            return {"feedback": feedback}

        next_stage = advance(session.stage)
        raw = await llm.generate(prompt_for(next_stage, session.job_role, session.resume_text))
        session.record_answer(req.answer)
        session.stage = next_stage
        session.last_question = extract_question(raw)
        store.update(session)

        log_event(
            "interview_answer",
            {"session_id": session.session_id, "stage": session.stage, "answers": len(session.history)},
        )
        return {
            "question": session.last_question,
            "stage": session.stage,
            "questionCount": session.question_count,
        }


# ============================================================
# 🔁 Clarify
# ============================================================
@router.post("/clarify")
async def clarify_question(req: SessionReq, store: SessionStore = Depends(get_store)):
    session = store.get(req.session_id)
    if session is None or not session.last_question:
        raise HTTPException(status_code=400, detail="Invalid session")

    async with session.lock:
        if not _still_live(store, session) or not session.last_question:
            raise HTTPException(status_code=400, detail="Invalid session")

        raw = await llm.generate(clarify_prompt(session.last_question))
        session.last_question = extract_question(raw)
        store.update(session)

    log_event("interview_clarified", {"session_id": session.session_id, "stage": session.stage})
    return {"question": session.last_question}


# ============================================================
# 🏁 Finish
# ============================================================
@router.post("/finish")
async def finish_interview(req: SessionReq, store: SessionStore = Depends(get_store)):
    session = store.get(req.session_id)
    if session is None:
        raise HTTPException(status_code=400, detail="Invalid session")

    async with session.lock:
        if not _still_live(store, session):
            raise HTTPException(status_code=400, detail="Invalid session")

        feedback = await llm.generate(
            finish_feedback_prompt(session.transcript()), config.FEEDBACK_MAX_TOKENS
        )
        store.delete(session.session_id)

    log_event(
        "interview_finished",
        {"session_id": session.session_id, "stage": session.stage, "answers": len(session.history)},
    )
    return {"feedback": feedback}
