from __future__ import annotations

from dataclasses import dataclass

from .llm_base import LLMAdapter, LLMResponse


@dataclass
class MockAdapter(LLMAdapter):
    scenario: str = "default"

    def complete(self, system: str, prompt: str) -> LLMResponse:
        return LLMResponse(raw_text=self._build_text(system, prompt))

    def _build_text(self, system: str, prompt: str) -> str:
        task = _task_from_prompt(prompt)
        if self.scenario == "empty":
            return ""
        if self.scenario == "unlabelled":
            return f"Work on {task} in small, reviewable steps.\nKeep the change focused."
        if "Claude-Flow" in system:
            return "\n".join(
                [
                    "SYSTEM PROMPT:",
                    f"Consider failure modes before changing anything for: {task}",
                    "Ensure every step can be rolled back.",
                    "Avoid touching unrelated modules.",
                    "",
                    "PLAN:",
                    "1. Review the current behaviour and its tests.",
                    "2. List edge cases and risky inputs.",
                    "3. Gate the change behind a check that can be verified.",
                    "",
                    "RATIONALE:",
                    "Critique first keeps the executor from committing to a brittle design.",
                ]
            )
        return "\n".join(
            [
                "SYSTEM PROMPT:",
                f"You are an implementation agent. Deliver: {task}",
                "",
                "PLAN:",
                "1. Locate the modules involved.",
                "2. Implement the change with tests.",
                "3. Run the test suite and summarise the diff.",
                "",
                "RATIONALE:",
                "Small, tested increments are the fastest route to a working result.",
            ]
        )


def _task_from_prompt(prompt: str) -> str:
    lines = [line.strip() for line in prompt.splitlines() if line.strip()]
    if len(lines) >= 2 and lines[0].rstrip(":").lower() in {"task", "given the task"}:
        return lines[1]
    return lines[0] if lines else "the task"
