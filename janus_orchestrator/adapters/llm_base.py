from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Protocol


@dataclass
class LLMResponse:
    raw_text: str
    usage: Optional[Dict[str, Optional[int]]] = None


class LLMAdapter(Protocol):
    def complete(self, system: str, prompt: str) -> LLMResponse:
        raise NotImplementedError

    def generate(self, system: str, prompt: str) -> str:
        return self.complete(system, prompt).raw_text
