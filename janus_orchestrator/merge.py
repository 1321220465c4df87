from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from janus_orchestrator.parsers.sections import extract_plan, extract_rationale, extract_system_prompt
from janus_orchestrator.planners.types import MergedOutput, PlanResult

DEFAULT_APPROACH = "Execute the task with precision and clarity."
PLAN_PLACEHOLDER = "(see rationale)"
CONSIDERATION_MARKERS = ("consider", "ensure", "avoid", "note")


@dataclass(frozen=True)
class Sections:
    system_prompt: str = ""
    plan: str = ""
    rationale: str = ""


def extract_sections(result: Optional[PlanResult]) -> Sections:
    if result is None:
        return Sections()
    raw = result.system_prompt
    return Sections(
        system_prompt=extract_system_prompt(raw),
        plan=extract_plan(raw) or result.plan,
        rationale=extract_rationale(raw) or result.rationale,
    )


def merge_system_prompts(task: str, codex_core: str, claude_core: str) -> str:
    parts: List[str] = [f"Task: {task}"]

    if codex_core:
        parts.append(f"\nApproach: {codex_core}")

    if claude_core and claude_core != codex_core:
        refinements = "; ".join(
            line
            for line in claude_core.split("\n")
            if any(marker in line.strip().lower() for marker in CONSIDERATION_MARKERS)
        )
        if refinements:
            parts.append(f"\nConsiderations: {refinements}")

    if len(parts) <= 1:
        return f"{task}\n\n{codex_core or DEFAULT_APPROACH}"
    return "".join(parts)


def _proposal_blocks(title: str, sections: Sections) -> List[Tuple[str, str]]:
    return [
        ("", f"# {title}"),
        ("## System Prompt", sections.system_prompt),
        ("## Plan", sections.plan or PLAN_PLACEHOLDER),
        ("## Rationale", sections.rationale),
    ]


def build_notes(codex: Sections, claude: Sections) -> str:
    blocks = (
        _proposal_blocks("Codex Proposal", codex)
        + [("", "---")]
        + _proposal_blocks("Claude Proposal", claude)
    )
    lines: List[str] = []
    for heading, content in blocks:
        if content == "":
            continue
        if heading:
            lines.append(heading)
        lines.append(content)
    return "\n".join(lines)


def merge_plans(
    task: str,
    codex: Optional[PlanResult],
    claude: Optional[PlanResult],
) -> MergedOutput:
    codex_sections = extract_sections(codex)
    claude_sections = extract_sections(claude)
    return MergedOutput(
        merged_prompt=merge_system_prompts(
            task, codex_sections.system_prompt, claude_sections.system_prompt
        ),
        merged_notes=build_notes(codex_sections, claude_sections),
        codex=codex,
        claude=claude,
    )
