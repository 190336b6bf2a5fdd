"""Normalize model-generated activities/honors to Common App limits."""

import math
from typing import Any

from pydantic import BaseModel

MAX_ACTIVITIES = 10
MAX_HONORS = 5
HONOR_LEVELS = ("School", "State", "Regional", "National", "International")
HONOR_GRADES = ("9", "10", "11", "12")


class ActivityItem(BaseModel):
    position_title: str
    organization: str
    description: str
    years: str
    hours_per_week: float
    weeks_per_year: float


class HonorItem(BaseModel):
    name: str
    level: str
    description: str
    grade_received: str


def clamp_str(value: Any, max_len: int) -> str:
    s = "" if value is None else str(value).strip()
    return s[:max_len]


def to_num(value: Any, fallback: float) -> float:
    """Finite float from a number or numeric string, else `fallback`."""
    if value is None:
        return fallback
    try:
        n = float(value)
    except (TypeError, ValueError):
        return fallback
    return n if math.isfinite(n) else fallback


def normalize_activities(parsed: Any) -> list[ActivityItem]:
    """Accept a bare list or {"activities": [...]}; keep at most 10."""
    items = parsed if isinstance(parsed, list) else _get(parsed, "activities")
    if not isinstance(items, list):
        return []
    out = []
    for a in items[:MAX_ACTIVITIES]:
        a = a if isinstance(a, dict) else {}
        out.append(
            ActivityItem(
                position_title=clamp_str(a.get("position_title"), 50),
                organization=clamp_str(a.get("organization"), 50),
                description=clamp_str(a.get("description"), 150),
                years=clamp_str(a.get("years"), 10),
                hours_per_week=to_num(a.get("hours_per_week"), 0),
                weeks_per_year=to_num(a.get("weeks_per_year"), 0),
            )
        )
    return out


def normalize_honors(parsed: Any) -> list[HonorItem]:
    """Read {"honors": [...]}; keep at most 5, unknown level/grade get defaults."""
    items = _get(parsed, "honors")
    if not isinstance(items, list):
        return []
    out = []
    for h in items[:MAX_HONORS]:
        h = h if isinstance(h, dict) else {}
        level = h.get("level")
        grade = str(h.get("grade_received"))
        out.append(
            HonorItem(
                name=clamp_str(h.get("name"), 100),
                level=level if level in HONOR_LEVELS else "School",
                description=clamp_str(h.get("description"), 150),
                grade_received=grade if grade in HONOR_GRADES else "12",
            )
        )
    return out


def _get(parsed: Any, key: str) -> Any:
    return parsed.get(key) if isinstance(parsed, dict) else None
