from __future__ import annotations

import json

import pytest

from careerhub.core import stages


def test_stage_order_is_fixed() -> None:
    assert stages.STAGES == ("basic", "role", "technical", "resume", "behavioral", "salary")
    assert stages.FIRST_STAGE == "basic"
    assert stages.MAX_QUESTIONS == 6


def test_advance_walks_the_sequence_then_terminates() -> None:
    for current, expected in zip(stages.STAGES, stages.STAGES[1:]):
        assert stages.advance(current) == expected
    assert stages.advance("salary") is None
    assert stages.is_final("salary")
    assert not stages.is_final("basic")


def test_unknown_stage_is_rejected() -> None:
    with pytest.raises(ValueError):
        stages.advance("coding")
    with pytest.raises(ValueError):
        stages.prompt_for("coding", "Engineer", "resume")


def test_only_resume_prompt_embeds_resume() -> None:
    resume = "10 years of {weird} braces and Python"
    for stage in stages.STAGES:
        prompt = stages.prompt_for(stage, "Data Engineer", resume)
        assert prompt.endswith("Output ONLY the question.")
        if stage == "resume":
            assert resume in prompt
            assert "Data Engineer" not in prompt
        else:
            assert resume not in prompt


def test_role_prompts_embed_job_role() -> None:
    for stage in ("basic", "role", "technical"):
        assert "Data Engineer" in stages.prompt_for(stage, "Data Engineer", "")
    for stage in ("behavioral", "salary"):
        assert "Data Engineer" not in stages.prompt_for(stage, "Data Engineer", "")


def test_feedback_prompts_embed_transcript() -> None:
    history = [{"question": "Why us?", "answer": "Great team"}]
    final = stages.final_feedback_prompt(history)
    assert "- Strengths" in final and "- Overall assessment" in final
    assert json.dumps(history, indent=2) in final

    finish = stages.finish_feedback_prompt(history)
    assert finish.startswith("Give detailed interview feedback with clear sections.")
    assert '"answer": "Great team"' in finish


def test_clarify_prompt() -> None:
    assert stages.clarify_prompt("Why?").endswith("Output ONLY the question:\nWhy?")
