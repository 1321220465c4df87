from __future__ import annotations

import os
import sys
from typing import Optional

from anthropic import Anthropic

from .llm_base import LLMAdapter, LLMResponse


class AnthropicAdapter(LLMAdapter):
    def __init__(
        self,
        model: str = "claude-3-5-sonnet-20241022",
        max_tokens: int = 2048,
        api_key: Optional[str] = None,
        client: Optional[Anthropic] = None,
    ) -> None:
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise RuntimeError("ANTHROPIC_API_KEY is not set.")
        self.model = model
        self.max_tokens = max_tokens
        self.client = client or Anthropic(api_key=self.api_key)

    def complete(self, system: str, prompt: str) -> LLMResponse:
        message = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system,
            messages=[{"role": "user", "content": prompt}],
        )
        # Only text blocks carry the answer; tool and thinking blocks are ignored.
        text = "\n".join(
            block.text
            for block in (message.content or [])
            if getattr(block, "type", None) == "text" and isinstance(getattr(block, "text", None), str)
        )

        usage = getattr(message, "usage", None)
        usage_payload = None
        if usage:
            usage_payload = {
                "input_tokens": getattr(usage, "input_tokens", None),
                "output_tokens": getattr(usage, "output_tokens", None),
            }
            print(
                f"[anthropic] model={self.model} "
                f"input_tokens={usage_payload['input_tokens']} "
                f"output_tokens={usage_payload['output_tokens']}",
                file=sys.stderr,
            )
        return LLMResponse(raw_text=text, usage=usage_payload)
