from __future__ import annotations

import sys
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Optional, Protocol

from janus_orchestrator.merge import merge_plans
from janus_orchestrator.planners.types import MergedOutput, PlanResult
from janus_orchestrator.storage.events import EventLog

EVENT_SOURCE = "janus"


class Planner(Protocol):
    def plan(self, task: str) -> PlanResult:
        raise NotImplementedError


class JanusOrchestrator:
    def __init__(
        self,
        codex: Planner,
        claude: Planner,
        events: Optional[EventLog] = None,
    ) -> None:
        self.codex = codex
        self.claude = claude
        self.events = events

    def run(self, task: str) -> MergedOutput:
        print(f"[janus] planning task: {task}", file=sys.stderr)
        pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="janus-planner")
        try:
            codex_future = pool.submit(self.codex.plan, task)
            claude_future = pool.submit(self.claude.plan, task)
            done, _ = wait([codex_future, claude_future], return_when=FIRST_EXCEPTION)
            # result() re-raises the first planner failure; no partial merge.
            for future in done:
                future.result()
            codex = codex_future.result()
            claude = claude_future.result()
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        output = merge_plans(task, codex, claude)
        if self.events is not None:
            self.events.record(EVENT_SOURCE, "codex_plan", codex.to_dict())
            self.events.record(EVENT_SOURCE, "claude_plan", claude.to_dict())
            self.events.record(
                EVENT_SOURCE,
                "merged",
                {
                    "task": task,
                    "mergedPrompt": output.merged_prompt,
                    "mergedNotes": output.merged_notes,
                },
            )
        print("[janus] merge complete", file=sys.stderr)
        return output
