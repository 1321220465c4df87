"""
Shared fixtures for janus tests.
"""

from __future__ import annotations

from typing import List, Tuple

import pytest

from janus_orchestrator.adapters.llm_base import LLMAdapter, LLMResponse

PROVIDER_ENV_KEYS = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "CLAUDE_FLOW_URL",
    "CLAUDE_FLOW_CMD",
    "JANUS_DB_PATH",
    "JANUS_HTTP_TIMEOUT",
    "JANUS_CLI_TIMEOUT",
)


class RecordingAdapter(LLMAdapter):
    """Returns a canned reply and remembers every (system, prompt) pair."""

    def __init__(self, reply: str = "") -> None:
        self.reply = reply
        self.calls: List[Tuple[str, str]] = []

    def complete(self, system: str, prompt: str) -> LLMResponse:
        self.calls.append((system, prompt))
        return LLMResponse(raw_text=self.reply)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no provider configuration."""
    for key in PROVIDER_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
