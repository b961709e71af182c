from datetime import datetime

from models.budget import Budget
from models.notification import NotificationSettings
from services.alert_evaluator import alert_severity, evaluate

NOW = datetime(2024, 3, 15, 12, 0)


def make_budget(budget_id=1, category="Food", limit=500.0, spent=0.0, **kwargs):
    values = dict(month="03", year=2024)
    values.update(kwargs)
    return Budget(
        id=budget_id, category=category, monthly_limit=limit,
        current_spent=spent, **values,
    )


def run(budgets, settings=None, existing=None):
    return evaluate(
        budgets, settings or NotificationSettings(), existing or [], "03", 2024, now=NOW
    )


def test_warning_at_ninety_percent():
    alerts = run([make_budget(spent=450)])
    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.severity == "warning"
    assert "90%" in alert.message
    assert alert.message == "Food spending at 90% of budget limit"
    assert alert.description == "You've spent $450.00 of your $500.00 budget."
    assert alert.budget_id == 1
    assert (alert.month, alert.year) == ("03", 2024)
    assert alert.timestamp == NOW.isoformat()
    assert not alert.dismissed
    assert alert.data == {
        "current_spent": 450,
        "monthly_limit": 500,
        "percentage": 90,
        "remaining": 50,
    }


def test_overspent_budget_is_an_error_and_shows_real_percentage():
    (alert,) = run([make_budget(spent=520)])
    assert alert.severity == "error"
    assert "104%" in alert.message
    assert alert.data["remaining"] == -20


def test_between_threshold_and_warning_is_info():
    (alert,) = run([make_budget(spent=400)])
    assert alert.severity == "info"


def test_below_threshold_raises_nothing():
    assert run([make_budget(spent=399)]) == []


def test_repeated_evaluation_is_idempotent():
    budgets = [make_budget(spent=450)]
    first = run(budgets)
    assert run(budgets, existing=first) == []


def test_dismissed_alert_does_not_block_a_new_one():
    budgets = [make_budget(spent=450)]
    (first,) = run(budgets)
    first.dismissed = True
    assert len(run(budgets, existing=[first])) == 1


def test_duplicate_budgets_in_one_run_alert_once():
    assert len(run([make_budget(spent=450), make_budget(spent=460)])) == 1


def test_zero_limit_never_alerts():
    assert run([make_budget(limit=0, spent=100)]) == []


def test_alerts_disabled():
    settings = NotificationSettings(budget_alerts=False)
    assert run([make_budget(spent=600)], settings=settings) == []


def test_per_budget_threshold_overrides_global():
    strict = make_budget(budget_id=1, spent=450, alert_threshold=95)
    loose = make_budget(budget_id=2, category="Fun", limit=100, spent=60, alert_threshold=50)
    alerts = run([strict, loose])
    assert [a.budget_id for a in alerts] == [2]


def test_other_periods_are_ignored():
    assert run([make_budget(spent=450, month="02")]) == []
    assert run([make_budget(spent=450, year=2023)]) == []


def test_alert_severity_boundaries():
    assert alert_severity(89.99) == "info"
    assert alert_severity(90) == "warning"
    assert alert_severity(100) == "error"
