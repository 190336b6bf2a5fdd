"""Tolerant readers for language-model output.

Models wrap JSON in prose, return the same field under different keys, or
answer with a bare string where an object was expected. These helpers
turn that into something the API can rely on. The first match always
wins: the first parseable JSON value, the first non-blank field.
"""

import json
import re
from typing import Any

_REPLY_FIELDS = ("reply", "text", "feedback", "message", "output_text", "content")
_AS_TEXT_FIELDS = ("reply", "text", "content", "feedback")
_FEEDBACK_RE = re.compile(r'"feedback"\s*:\s*"([^"]+)"')
_SCORE_RE = re.compile(r"(\d{1,3})(?:/100|\s*percent|\s*%)", re.IGNORECASE)
_INT_RE = re.compile(r"\d+")

DEFAULT_ODDS_ESTIMATE = 50


def extract_first_json(text: str) -> Any | None:
    """Return the first JSON object/array embedded in `text`, or None.

    Every '{' and '[' is a candidate start. From a start, depth counts only
    that bracket kind; when it returns to zero the slice is parsed. A slice
    that fails to parse abandons that start and moves to the next one.
    """
    starts = [i for i, ch in enumerate(text) if ch in "{["]
    for start in starts:
        opener = text[start]
        closer = "}" if opener == "{" else "]"
        depth = 0
        for i in range(start, len(text)):
            ch = text[i]
            if ch == opener:
                depth += 1
            elif ch == closer:
                depth -= 1
            if depth == 0:
                try:
                    return json.loads(text[start : i + 1])
                except json.JSONDecodeError:
                    break
    return None


def parse_json_reply(text: str) -> Any | None:
    """Strict parse first, then fall back to extract_first_json."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return extract_first_json(text)


def normalize_agent_reply(result: Any) -> str:
    """Reduce an agent result of unknown shape to plain reply text."""
    if not result:
        return ""
    if isinstance(result, str):
        return result.strip()

    if isinstance(result, dict):
        nested = result.get("feedback")
        candidates = [result.get(k) for k in _REPLY_FIELDS]
        candidates.append(nested.get("text") if isinstance(nested, dict) else None)
        for c in candidates:
            if isinstance(c, str) and c.strip():
                return c.strip()

        try:
            serialized = json.dumps(result, default=str)
        except (TypeError, ValueError):
            serialized = ""
        m = _FEEDBACK_RE.search(serialized)
        if m:
            return m.group(1).replace("\\n", "\n").strip()

    return str(result).strip()


def as_text(result: Any) -> str:
    """Looser sibling of normalize_agent_reply used before JSON parsing."""
    if isinstance(result, str):
        return result
    if isinstance(result, dict):
        for key in _AS_TEXT_FIELDS:
            if result.get(key) is not None:
                value = result[key]
                if isinstance(value, str):
                    return value
                break
    try:
        return json.dumps(result)
    except (TypeError, ValueError):
        return str(result)


def extract_authenticity_score(text: str) -> int | None:
    """Pull '87/100', '87 percent' or '87%' out of free text."""
    m = _SCORE_RE.search(text)
    return int(m.group(1)) if m else None


def parse_odds_estimate(text: str) -> int:
    """First integer in `text`, clamped to [1, 100]; 50 when there is none."""
    m = _INT_RE.search(text)
    if not m:
        return DEFAULT_ODDS_ESTIMATE
    return min(100, max(1, int(m.group(0))))
