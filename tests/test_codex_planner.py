from __future__ import annotations

import pytest

from conftest import RecordingAdapter
from janus_orchestrator.adapters.mock_adapter import MockAdapter
from janus_orchestrator.merge import merge_plans
from janus_orchestrator.planners.codex_planner import CODEX_RATIONALE, CodexPlanner
from janus_orchestrator.planners.types import Provider


def test_plan_uses_executor_persona_and_task_prompt() -> None:
    adapter = RecordingAdapter("SYSTEM PROMPT:\nShip it\n\nPLAN:\n1. go")
    result = CodexPlanner(adapter).plan("Add logging")

    assert result.provider is Provider.CODEX
    assert result.system_prompt == "SYSTEM PROMPT:\nShip it\n\nPLAN:\n1. go"
    assert result.rationale == CODEX_RATIONALE
    system, prompt = adapter.calls[0]
    assert "Codex-Flow" in system
    assert prompt.startswith("Task:\nAdd logging\n")


def test_unlabelled_reply_is_merged_from_its_first_lines() -> None:
    codex = CodexPlanner(MockAdapter(scenario="unlabelled")).plan("Add logging")
    output = merge_plans("Add logging", codex, None)

    assert output.merged_prompt == (
        "Task: Add logging\n"
        "Approach: Work on Add logging in small, reviewable steps. Keep the change focused."
    )


def test_empty_reply_fails_the_primary_planner() -> None:
    with pytest.raises(RuntimeError, match="empty content"):
        CodexPlanner(MockAdapter(scenario="empty")).plan("Add logging")
