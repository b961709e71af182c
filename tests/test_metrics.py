from datetime import datetime

import pytest

from utils import metrics


def test_budget_health_is_capped_at_100():
    assert metrics.budget_health(450, 500) == 90
    assert metrics.budget_health(520, 500) == 100
    assert metrics.budget_ratio(520, 500) == pytest.approx(104)


def test_budget_health_with_zero_limit():
    assert metrics.budget_health(100, 0) == 0
    assert metrics.budget_ratio(100, 0) == 0


def test_budget_status_bands():
    assert metrics.budget_status(0, 500) == "good"
    assert metrics.budget_status(399, 500) == "good"
    assert metrics.budget_status(400, 500) == "warning"
    assert metrics.budget_status(500, 500) == "over"
    assert metrics.budget_status(900, 500) == "over"


def test_goal_progress():
    assert metrics.goal_progress(1000, 1000) == 100
    assert metrics.goal_progress(250, 1000) == 25
    assert metrics.goal_progress(1500, 1000) == 100
    assert metrics.goal_progress(10, 0) == 0


def test_is_overdue():
    now = datetime(2024, 3, 15, 12, 0)
    assert metrics.is_overdue("2024-03-14", now=now)
    assert not metrics.is_overdue("2024-03-16", now=now)
    assert not metrics.is_overdue("", now=now)


def test_days_until_deadline_rounds_up():
    now = datetime(2024, 3, 15, 12, 0)
    assert metrics.days_until_deadline("2024-03-16", now=now) == 1
    assert metrics.days_until_deadline("2024-03-25", now=now) == 10
    assert metrics.days_until_deadline("2024-03-10", now=now) == -5


def test_days_until_deadline_rejects_garbage():
    with pytest.raises(ValueError):
        metrics.days_until_deadline("not a date")


def test_round_percent_rounds_half_up():
    assert metrics.round_percent(89.5) == 90
    assert metrics.round_percent(88.5) == 89
    assert metrics.round_percent(89.4) == 89


def test_format_percent():
    assert metrics.format_percent(1, 3) == "33%"
    assert metrics.format_percent(2, 3) == "67%"
    assert metrics.format_percent(5, 0) == "0%"


def test_trend_direction():
    assert metrics.trend_direction(10, 5) == "up"
    assert metrics.trend_direction(5, 10) == "down"
    assert metrics.trend_direction(5, 5) == "flat"
