from __future__ import annotations

import json
import shlex
import subprocess
import sys
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, Sequence

import httpx

from janus_orchestrator.adapters.llm_base import LLMAdapter
from janus_orchestrator.adapters.openai_adapter import OpenAIAdapter
from janus_orchestrator.config import Settings
from janus_orchestrator.planners.prompts import load_prompt, render_task_prompt
from janus_orchestrator.planners.types import PlanResult, Provider

ANTHROPIC_RATIONALE = "Claude-style critique via Anthropic API."
HTTP_RATIONALE = "Claude-style critique via external HTTP service."
CLI_RATIONALE = "Claude-style critique via external CLI command."
FALLBACK_RATIONALE = "Claude-style critique synthesized via OpenAI (fallback mode)."

STUB_RESULT = PlanResult(
    provider=Provider.CLAUDE,
    system_prompt=(
        "Claude-Flow stub: no API keys configured. "
        "Set ANTHROPIC_API_KEY, CLAUDE_FLOW_URL, CLAUDE_FLOW_CMD, or OPENAI_API_KEY."
    ),
    plan="Treat this as a placeholder until real Claude integration is wired.",
    rationale="Stub response generated locally.",
)

EMPTY_FALLBACK_RESULT = PlanResult(
    provider=Provider.CLAUDE,
    system_prompt="Claude-Flow stub: the fallback model returned no content for this task.",
    plan="Treat this as a placeholder; rerun once a Claude transport answers.",
    rationale="Stub response generated locally after an empty fallback reply.",
)


@dataclass(frozen=True)
class Stage:
    name: str
    is_available: Callable[[], bool]
    invoke: Callable[[str], Optional[PlanResult]]


class ClaudePlanner:
    """Resolves a critique by walking transport stages in priority order.

    A stage whose configuration is missing is skipped without any I/O. A stage
    that raises, or answers with an empty system prompt, is logged and skipped.
    The terminal ``fallback`` always runs last and its errors propagate.
    """

    def __init__(
        self,
        stages: Sequence[Stage],
        fallback: Callable[[str], PlanResult],
    ) -> None:
        self.stages: List[Stage] = list(stages)
        self.fallback = fallback

    def plan(self, task: str) -> PlanResult:
        for stage in self.stages:
            if not stage.is_available():
                print(f"[claude] {stage.name} not configured, skipping", file=sys.stderr)
                continue
            try:
                result = stage.invoke(task)
            except ImportError as exc:
                print(f"[claude] {stage.name} unavailable ({exc}), skipping", file=sys.stderr)
                continue
            except Exception as exc:
                print(f"[claude] {stage.name} error (falling back): {exc}", file=sys.stderr)
                continue
            if result is None or not result.system_prompt.strip():
                print(f"[claude] {stage.name} returned no content, falling back", file=sys.stderr)
                continue
            print(f"[claude] resolved via {stage.name}", file=sys.stderr)
            return result

        print("[claude] using fallback", file=sys.stderr)
        return self.fallback(task)


def plan_with_anthropic(task: str, settings: Settings) -> Optional[PlanResult]:
    # Imported here so a missing anthropic package only disables this stage.
    from janus_orchestrator.adapters.anthropic_adapter import AnthropicAdapter

    adapter = AnthropicAdapter(
        model=settings.claude_model,
        max_tokens=settings.claude_max_tokens,
        api_key=settings.anthropic_api_key,
    )
    content = adapter.generate(load_prompt("claude_planner"), render_task_prompt("claude_task", task))
    return PlanResult(
        provider=Provider.CLAUDE,
        system_prompt=content,
        plan=content,
        rationale=ANTHROPIC_RATIONALE,
    )


def plan_with_http_service(
    task: str,
    url: str,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> Optional[PlanResult]:
    if client is not None:
        response = client.post(url, json={"task": task})
    else:
        with httpx.Client(timeout=timeout) as http:
            response = http.post(url, json={"task": task})
    return parse_http_body(response.text)


def parse_http_body(body: str) -> PlanResult:
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        payload = None

    if not isinstance(payload, dict):
        return PlanResult(
            provider=Provider.CLAUDE,
            system_prompt=body,
            plan=body,
            rationale=HTTP_RATIONALE,
        )

    content = _text(payload.get("content"))
    return PlanResult(
        provider=Provider.CLAUDE,
        system_prompt=_text(payload.get("systemPrompt")) or content or body,
        plan=_text(payload.get("plan")) or content or body,
        rationale=_text(payload.get("rationale")) or HTTP_RATIONALE,
    )


def plan_with_cli_command(
    task: str,
    command: str,
    timeout: Optional[float] = None,
) -> Optional[PlanResult]:
    completed = subprocess.run(
        f"{command} {shlex.quote(task)}",
        shell=True,
        check=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        timeout=timeout,
    )
    content = (completed.stdout or "").strip() or (completed.stderr or "").strip()
    if not content:
        return None
    return PlanResult(
        provider=Provider.CLAUDE,
        system_prompt=content,
        plan=content,
        rationale=CLI_RATIONALE,
    )


def plan_with_fallback_adapter(
    task: str,
    adapter: Optional[LLMAdapter],
    rationale: str = FALLBACK_RATIONALE,
) -> PlanResult:
    if adapter is None:
        return STUB_RESULT
    content = adapter.generate(load_prompt("claude_fallback"), render_task_prompt("claude_task", task))
    if not content.strip():
        print("[claude] fallback returned no content, using stub", file=sys.stderr)
        return EMPTY_FALLBACK_RESULT
    return PlanResult(
        provider=Provider.CLAUDE,
        system_prompt=content,
        plan=content,
        rationale=rationale,
    )


def default_stages(settings: Settings) -> List[Stage]:
    return [
        Stage(
            name="anthropic-api",
            is_available=lambda: bool(settings.anthropic_api_key),
            invoke=partial(plan_with_anthropic, settings=settings),
        ),
        Stage(
            name="http-service",
            is_available=lambda: bool(settings.claude_flow_url),
            invoke=lambda task: plan_with_http_service(
                task, settings.claude_flow_url or "", timeout=settings.http_timeout
            ),
        ),
        Stage(
            name="cli-command",
            is_available=lambda: bool(settings.claude_flow_cmd),
            invoke=lambda task: plan_with_cli_command(
                task, settings.claude_flow_cmd or "", timeout=settings.cli_timeout
            ),
        ),
    ]


def build_claude_planner(settings: Settings) -> ClaudePlanner:
    adapter: Optional[LLMAdapter] = None
    if settings.openai_api_key:
        adapter = OpenAIAdapter(model=settings.fallback_model, api_key=settings.openai_api_key)
    return ClaudePlanner(
        default_stages(settings),
        partial(plan_with_fallback_adapter, adapter=adapter),
    )


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""
