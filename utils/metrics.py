"""Derived numbers shown on budget cards, goal rings and badges.

Everything here is a pure function of its arguments. Functions that depend on
the current time take an optional ``now`` so callers (and tests) can pin it.
"""
import math
from datetime import datetime

from utils.constants import BUDGET_WARNING_PERCENT
from utils.date_helpers import to_datetime

_SECONDS_PER_DAY = 24 * 60 * 60


def budget_ratio(spent: float, limit: float) -> float:
    """Uncapped spend percentage; 0 when there is no limit."""
    if limit == 0:
        return 0.0
    return spent / limit * 100


def budget_health(spent: float, limit: float) -> float:
    """Spend percentage for display, capped at 100."""
    return min(budget_ratio(spent, limit), 100.0)


def budget_status(spent: float, limit: float) -> str:
    """Return 'over', 'warning' or 'good'."""
    percentage = budget_health(spent, limit)
    if percentage >= 100:
        return "over"
    if percentage >= BUDGET_WARNING_PERCENT:
        return "warning"
    return "good"


def goal_progress(current: float, target: float) -> float:
    if target == 0:
        return 0.0
    return min(current / target * 100, 100.0)


def is_overdue(deadline, now: datetime | None = None) -> bool:
    deadline_dt = to_datetime(deadline)
    if deadline_dt is None:
        return False
    return deadline_dt < (now or datetime.now())


def days_until_deadline(deadline, now: datetime | None = None) -> int:
    """Whole days left until the deadline, rounded up. Negative once overdue."""
    deadline_dt = to_datetime(deadline)
    if deadline_dt is None:
        raise ValueError(f"Invalid deadline: {deadline!r}")
    delta = deadline_dt - (now or datetime.now())
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def round_percent(percentage: float) -> int:
    """Round half up: 89.5 -> 90, 88.5 -> 89."""
    return math.floor(percentage + 0.5)


def format_percent(value: float, total: float) -> str:
    if total == 0:
        return "0%"
    return f"{round_percent(value / total * 100)}%"


def trend_direction(current: float, previous: float) -> str:
    if current > previous:
        return "up"
    if current < previous:
        return "down"
    return "flat"
