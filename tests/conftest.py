from __future__ import annotations

import os
import pathlib
import sys
import tempfile
from typing import List, Tuple

import pytest

_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

# must be set before careerhub.core.config is imported
os.environ.setdefault("CAREERHUB_LOG_DIR", tempfile.mkdtemp(prefix="careerhub-logs-"))
os.environ.setdefault("GROQ_API_KEY", "test-key")


class FakeModel:
    """Stands in for llm.generate: replays queued replies and records prompts."""

    def __init__(self) -> None:
        self.replies: List[object] = []
        self.calls: List[Tuple[str, int]] = []

    def queue(self, *replies: object) -> "FakeModel":
        self.replies.extend(replies)
        return self

    async def __call__(self, prompt: str, max_tokens: int = 400, **_: object) -> str:
        self.calls.append((prompt, max_tokens))
        reply = self.replies.pop(0) if self.replies else "What else would you like to share?"
        if isinstance(reply, BaseException):
            raise reply
        return str(reply)


@pytest.fixture
def fake_model(monkeypatch: pytest.MonkeyPatch) -> FakeModel:
    from careerhub.core import llm

    fake = FakeModel()
    monkeypatch.setattr(llm, "generate", fake)
    return fake


@pytest.fixture
def client(fake_model: FakeModel):
    from fastapi.testclient import TestClient

    import main

    with TestClient(main.app) as c:
        yield c
