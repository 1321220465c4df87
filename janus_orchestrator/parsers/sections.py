from __future__ import annotations

import re
from typing import List

FIRST_LINE_LIMIT = 200
FALLBACK_LINE_COUNT = 3

_FLAGS = re.IGNORECASE | re.DOTALL

# A label starts the text or a line; the capture is non-greedy and stops at a
# blank line, at the next recognised label, or at the very end of the text.
_SYSTEM_PROMPT_RE = re.compile(
    r"(?:^|\n)(?:SYSTEM PROMPT|SYSTEM):\s*\n?(.+?)(?:\n\n|\n(?:PLAN|RATIONALE):|\Z)",
    _FLAGS,
)
_PLAN_RE = re.compile(
    r"(?:^|\n)(?:PLAN|IMPLEMENTATION PLAN):\s*\n?(.+?)(?:\n\n|\n(?:RATIONALE|SYSTEM):|\Z)",
    _FLAGS,
)
_RATIONALE_RE = re.compile(
    r"(?:^|\n)(?:RATIONALE|REASONING):\s*\n?(.+?)\Z",
    _FLAGS,
)


def _non_blank_lines(text: str) -> List[str]:
    return [line for line in text.split("\n") if line.strip()]


def extract_system_prompt(text: str) -> str:
    match = _SYSTEM_PROMPT_RE.search(text)
    if match:
        return match.group(1).strip()

    lines = _non_blank_lines(text)
    if lines:
        first = lines[0]
        if len(first) > FIRST_LINE_LIMIT:
            return first[:FIRST_LINE_LIMIT].strip() + "..."
        return " ".join(lines[:FALLBACK_LINE_COUNT]).strip()

    return text.strip()


def extract_plan(text: str) -> str:
    match = _PLAN_RE.search(text)
    if match:
        return match.group(1).strip()
    return ""


def extract_rationale(text: str) -> str:
    match = _RATIONALE_RE.search(text)
    if match:
        return match.group(1).strip()
    return ""
