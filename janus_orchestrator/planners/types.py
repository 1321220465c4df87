from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Provider(str, Enum):
    CODEX = "codex"
    CLAUDE = "claude"


@dataclass(frozen=True)
class PlanResult:
    provider: Provider
    system_prompt: str
    plan: str = ""
    rationale: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "provider": self.provider.value,
            "systemPrompt": self.system_prompt,
            "plan": self.plan,
            "rationale": self.rationale,
        }


@dataclass(frozen=True)
class MergedOutput:
    merged_prompt: str
    merged_notes: str
    codex: Optional[PlanResult] = None
    claude: Optional[PlanResult] = None

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {}
        if self.codex is not None:
            payload["codex"] = self.codex.to_dict()
        if self.claude is not None:
            payload["claude"] = self.claude.to_dict()
        payload["mergedPrompt"] = self.merged_prompt
        payload["mergedNotes"] = self.merged_notes
        return payload
