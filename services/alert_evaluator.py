"""Budget alert rules.

``evaluate`` only decides which alerts should exist; storing them is the
caller's job (see NotificationService.check_budget_alerts).
"""
import uuid
from datetime import datetime

from models.budget import Budget
from models.notification import Notification, NotificationSettings
from utils.constants import ALERT_WARNING_PERCENT
from utils.metrics import budget_health, budget_ratio, round_percent


def alert_severity(ratio: float) -> str:
    """Severity from the uncapped spend percentage."""
    if ratio >= 100:
        return "error"
    if ratio >= ALERT_WARNING_PERCENT:
        return "warning"
    return "info"


def effective_threshold(budget: Budget, settings: NotificationSettings) -> int:
    if budget.alert_threshold is not None:
        return budget.alert_threshold
    return settings.threshold


def _alert_key(budget_id: int, month: str, year: int) -> tuple[int, str, int]:
    return int(budget_id), str(month), int(year)


def _active_keys(alerts: list[Notification]) -> set[tuple[int, str, int]]:
    return {
        _alert_key(a.budget_id, a.month, a.year)
        for a in alerts
        if a.type == "budget_alert" and not a.dismissed
    }


def build_alert(budget: Budget, month: str, year: int, now: datetime) -> Notification:
    ratio = budget_ratio(budget.current_spent, budget.monthly_limit)
    shown = round_percent(ratio)
    return Notification(
        id=uuid.uuid4().hex,
        budget_id=budget.id,
        category=budget.category,
        message=f"{budget.category} spending at {shown}% of budget limit",
        description=(
            f"You've spent ${budget.current_spent:,.2f} of your "
            f"${budget.monthly_limit:,.2f} budget."
        ),
        severity=alert_severity(ratio),
        timestamp=now.isoformat(),
        month=month,
        year=year,
        data={
            "current_spent": budget.current_spent,
            "monthly_limit": budget.monthly_limit,
            "percentage": shown,
            "remaining": budget.monthly_limit - budget.current_spent,
        },
    )


def evaluate(
    budgets: list[Budget],
    settings: NotificationSettings,
    existing_alerts: list[Notification],
    month: str,
    year: int,
    now: datetime | None = None,
) -> list[Notification]:
    """Return the alerts that should be raised for this period's budgets.

    A budget already holding an active alert for (budget, month, year) is
    skipped, so running this repeatedly with the same inputs only ever
    produces each alert once.
    """
    if not settings.budget_alerts:
        return []

    now = now or datetime.now()
    seen = _active_keys(existing_alerts)
    new_alerts: list[Notification] = []

    for budget in budgets:
        if budget.month != month or int(budget.year) != int(year):
            continue
        if budget.monthly_limit <= 0:
            continue
        percentage = budget_health(budget.current_spent, budget.monthly_limit)
        if percentage < effective_threshold(budget, settings):
            continue
        key = _alert_key(budget.id, month, year)
        if key in seen:
            continue
        seen.add(key)
        new_alerts.append(build_alert(budget, month, year, now))

    return new_alerts
