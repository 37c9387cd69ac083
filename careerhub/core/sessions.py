# ============================================================
#  CareerHub — core/sessions.py
#  ------------------------------------------------------------
#  In-memory store for mock-interview sessions.
#  • One entry per live interview, keyed by a fresh uuid4
#  • Map access guarded by a threading.Lock
#  • Each session carries an asyncio.Lock so handlers can
#    serialize answer/clarify/finish on the same id
#  • Nothing is persisted; a restart drops every session
# ============================================================

from __future__ import annotations

import asyncio
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from careerhub.core.stages import FIRST_STAGE
from careerhub.core.utils import utc_now_iso


class SessionNotFound(KeyError):
    pass


@dataclass
class QAEntry:
    question: str
    answer: str

    def to_dict(self) -> Dict[str, str]:
        return {"question": self.question, "answer": self.answer}


@dataclass
class InterviewSession:
    session_id: str
    job_role: str
    resume_text: str
    stage: str = FIRST_STAGE
    history: List[QAEntry] = field(default_factory=list)
    last_question: str = ""
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    @property
    def question_count(self) -> int:
        return len(self.history) + 1

    def record_answer(self, answer: str) -> QAEntry:
        entry = QAEntry(question=self.last_question, answer=answer)
        self.history.append(entry)
        return entry

    def transcript(self) -> List[Dict[str, str]]:
        return [e.to_dict() for e in self.history]


class SessionStore:
    """Process-local interview session map (create / get / update / delete)."""

    def __init__(self) -> None:
        self._sessions: Dict[str, InterviewSession] = {}
        self._lock = threading.Lock()

    def create(
        self,
        job_role: str,
        resume_text: str,
        last_question: str = "",
        stage: str = FIRST_STAGE,
    ) -> InterviewSession:
        with self._lock:
            sid = str(uuid.uuid4())
            while sid in self._sessions:
                sid = str(uuid.uuid4())
            session = InterviewSession(
                session_id=sid,
                job_role=job_role,
                resume_text=resume_text,
                stage=stage,
                last_question=last_question,
            )
            self._sessions[sid] = session
            return session

    def get(self, session_id: Optional[str]) -> Optional[InterviewSession]:
        if not session_id:
            return None
        with self._lock:
            return self._sessions.get(session_id)

    def update(self, session: InterviewSession) -> None:
        with self._lock:
            if session.session_id not in self._sessions:
                raise SessionNotFound(session.session_id)
            session.updated_at = utc_now_iso()
            self._sessions[session.session_id] = session

    def delete(self, session_id: Optional[str]) -> bool:
        if not session_id:
            return False
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
