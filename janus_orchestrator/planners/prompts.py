from __future__ import annotations

from pathlib import Path

from janus_orchestrator.utils.io import read_text

PROMPTS_DIR = Path(__file__).resolve().parents[1] / "prompts"


def load_prompt(name: str) -> str:
    return read_text(PROMPTS_DIR / f"{name}.md").strip()


def render_task_prompt(name: str, task: str) -> str:
    return load_prompt(name).replace("{{TASK}}", task)
