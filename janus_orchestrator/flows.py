"""Single-persona commands: ``codex-flow`` and ``claude-flow``.

Each sends one prompt to one provider under a fixed persona and prints the
reply, recording it to the event log unless ``--no-log`` is given.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, List, Optional

from janus_orchestrator.adapters.llm_base import LLMAdapter
from janus_orchestrator.adapters.openai_adapter import OpenAIAdapter
from janus_orchestrator.config import Settings
from janus_orchestrator.main import load_environment, open_event_log
from janus_orchestrator.planners.prompts import load_prompt

CODEX_DEFAULT_PROMPT = "Briefly describe your capabilities as Codex-Flow."
CLAUDE_DEFAULT_PROMPT = "Briefly describe your capabilities as Claude-Flow."


def codex_flow(prompt: str, adapter: LLMAdapter) -> str:
    return adapter.generate(load_prompt("codex_flow"), prompt)


def claude_flow(prompt: str, adapter: LLMAdapter) -> str:
    return adapter.generate(load_prompt("claude_flow"), prompt).strip()


def _codex_adapter(settings: Settings) -> LLMAdapter:
    return OpenAIAdapter(model=settings.codex_model, api_key=settings.openai_api_key)


def _claude_adapter(settings: Settings) -> LLMAdapter:
    from janus_orchestrator.adapters.anthropic_adapter import AnthropicAdapter

    return AnthropicAdapter(
        model=settings.flow_claude_model,
        max_tokens=settings.flow_max_tokens,
        api_key=settings.anthropic_api_key,
    )


def _build_parser(prog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog)
    parser.add_argument("prompt", nargs="*")
    parser.add_argument("--config", type=Path)
    parser.add_argument("--db")
    parser.add_argument("--no-log", action="store_true")
    return parser


def run_flow(
    prog: str,
    argv: Optional[List[str]],
    default_prompt: str,
    build_adapter: Callable[[Settings], LLMAdapter],
    flow: Callable[[str, LLMAdapter], str],
) -> int:
    args = _build_parser(prog).parse_args(argv)
    events = None
    try:
        settings = load_environment(args.config)
        prompt = " ".join(args.prompt) or default_prompt
        reply = flow(prompt, build_adapter(settings))
        print(reply)
        events = open_event_log(settings, args.db, args.no_log)
        if events is not None:
            events.record(prog, "reply", {"prompt": prompt, "reply": reply})
        return 0
    except Exception as exc:
        print(f"{prog} error: {exc}", file=sys.stderr)
        return 1
    finally:
        if events is not None:
            events.close()


def codex_main() -> None:
    sys.exit(run_flow("codex-flow", None, CODEX_DEFAULT_PROMPT, _codex_adapter, codex_flow))


def claude_main() -> None:
    sys.exit(run_flow("claude-flow", None, CLAUDE_DEFAULT_PROMPT, _claude_adapter, claude_flow))
