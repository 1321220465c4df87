from __future__ import annotations

from janus_orchestrator.adapters.llm_base import LLMAdapter
from janus_orchestrator.planners.prompts import load_prompt, render_task_prompt
from janus_orchestrator.planners.types import PlanResult, Provider

CODEX_RATIONALE = "Codex-style implementation plan via OpenAI."


class CodexPlanner:
    def __init__(self, adapter: LLMAdapter) -> None:
        self.adapter = adapter

    def plan(self, task: str) -> PlanResult:
        system = load_prompt("codex_planner")
        response = self.adapter.complete(system, render_task_prompt("codex_task", task))
        content = response.raw_text.strip()
        if not content:
            raise RuntimeError("Codex planner returned empty content.")
        return PlanResult(
            provider=Provider.CODEX,
            system_prompt=content,
            plan=content,
            rationale=CODEX_RATIONALE,
        )
