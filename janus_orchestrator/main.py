from __future__ import annotations

import argparse
import json
import sys
from functools import partial
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from jsonschema import validate

from janus_orchestrator.adapters.mock_adapter import MockAdapter
from janus_orchestrator.adapters.openai_adapter import OpenAIAdapter
from janus_orchestrator.config import Settings, load_settings
from janus_orchestrator.orchestrator import JanusOrchestrator
from janus_orchestrator.planners.claude_planner import (
    ClaudePlanner,
    build_claude_planner,
    plan_with_fallback_adapter,
)
from janus_orchestrator.planners.codex_planner import CodexPlanner
from janus_orchestrator.planners.types import MergedOutput
from janus_orchestrator.storage.events import EventLog
from janus_orchestrator.utils.io import load_json

DEFAULT_TASK = "Design a cooperative multi-AI workflow for a GitHub repository."
SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"
MOCK_RATIONALE = "Claude-style critique from the offline mock adapter."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="janus",
        description="Plan a task with Codex-Flow and Claude-Flow and merge their proposals.",
    )
    parser.add_argument("task", nargs="*", help="Task description (words are joined with spaces)")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--mode", choices=["live", "mock"], default="live")
    parser.add_argument("--config", type=Path, help="YAML file overriding environment settings")
    parser.add_argument("--db", help="Event database path (default: JANUS_DB_PATH or janus.db)")
    parser.add_argument("--no-log", action="store_true", help="Do not record events")
    parser.add_argument("--history", type=int, metavar="N", help="Print the N newest events and exit")
    return parser


def load_environment(config_path: Optional[Path]) -> Settings:
    load_dotenv(Path.cwd() / ".env")
    return load_settings(config_path)


def open_event_log(settings: Settings, db: Optional[str], no_log: bool) -> Optional[EventLog]:
    if no_log:
        return None
    return EventLog(db or settings.db_path)


def build_orchestrator(
    mode: str,
    settings: Settings,
    events: Optional[EventLog] = None,
) -> JanusOrchestrator:
    if mode == "mock":
        adapter = MockAdapter()
        claude = ClaudePlanner(
            [], partial(plan_with_fallback_adapter, adapter=adapter, rationale=MOCK_RATIONALE)
        )
        return JanusOrchestrator(CodexPlanner(adapter), claude, events)

    codex = CodexPlanner(OpenAIAdapter(model=settings.codex_model, api_key=settings.openai_api_key))
    return JanusOrchestrator(codex, build_claude_planner(settings), events)


def render_text(output: MergedOutput) -> str:
    return "\n".join(
        [
            "=== JANUS MERGED SYSTEM PROMPT ===",
            "",
            output.merged_prompt.strip(),
            "",
            "=== REFERENCE NOTES ===",
            "",
            output.merged_notes.strip(),
            "",
        ]
    )


def render_json(output: MergedOutput) -> str:
    payload = output.to_dict()
    validate(instance=payload, schema=load_json(SCHEMAS_DIR / "janus_output.schema.json"))
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_history(events: EventLog, limit: int) -> str:
    lines: List[str] = []
    for event in events.recent(limit):
        data = json.dumps(event.data, ensure_ascii=False)
        if len(data) > 120:
            data = data[:120] + "..."
        lines.append(f"{event.id}\t{event.created_at}\t{event.source}\t{event.type}\t{data}")
    return "\n".join(lines)


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    events: Optional[EventLog] = None
    try:
        settings = load_environment(args.config)
        if args.history is not None:
            events = EventLog(args.db or settings.db_path)
            print(render_history(events, args.history))
            return 0

        events = open_event_log(settings, args.db, args.no_log)
        task = " ".join(args.task) or DEFAULT_TASK
        output = build_orchestrator(args.mode, settings, events).run(task)

        print(render_json(output) if args.json else render_text(output))
        return 0
    except Exception as exc:
        print(f"janus error: {exc}", file=sys.stderr)
        return 1
    finally:
        if events is not None:
            events.close()


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
