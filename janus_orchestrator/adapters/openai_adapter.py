from __future__ import annotations

import os
import sys
from typing import Optional

from openai import OpenAI, RateLimitError

from .llm_base import LLMAdapter, LLMResponse


class OpenAIAdapter(LLMAdapter):
    def __init__(
        self,
        model: str = "gpt-4.1-mini",
        api_key: Optional[str] = None,
        client: Optional[OpenAI] = None,
    ) -> None:
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY is not set.")
        self.model = model
        self.client = client or OpenAI(api_key=self.api_key)

    def complete(self, system: str, prompt: str) -> LLMResponse:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
            )
        except RateLimitError as exc:
            error = getattr(exc, "error", None)
            code = getattr(error, "code", None)
            if code == "insufficient_quota":
                raise RuntimeError(
                    "OpenAI API quota exceeded. Please enable billing in your OpenAI account."
                ) from exc
            raise

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        usage = getattr(response, "usage", None)
        if usage:
            usage_payload = {
                "prompt_tokens": getattr(usage, "prompt_tokens", None),
                "completion_tokens": getattr(usage, "completion_tokens", None),
                "total_tokens": getattr(usage, "total_tokens", None),
            }
            print(
                f"[openai] model={self.model} "
                f"prompt_tokens={usage_payload['prompt_tokens']} "
                f"completion_tokens={usage_payload['completion_tokens']} "
                f"total_tokens={usage_payload['total_tokens']}",
                file=sys.stderr,
            )
        else:
            usage_payload = None
            print("[openai] usage not provided by SDK", file=sys.stderr)
        return LLMResponse(raw_text=content, usage=usage_payload)
