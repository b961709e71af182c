import pytest

from utils.errors import RecordNotFound


def test_create_and_fill_current_spent(budget_service, tx_service):
    budget_service.create("Food", 500, "03", 2024)
    budget_service.create("Utilities", 200, "03", 2024, alert_threshold=95)
    tx_service.create("expense", 120, "Food", "Groceries", "2024-03-03")
    tx_service.create("expense", 30, "Food", "Takeout", "2024-03-09")

    food, utilities = budget_service.get_current_budgets("03", 2024)
    assert (food.category, food.current_spent) == ("Food", 150)
    assert food.percentage == 30
    assert food.status == "good"
    assert food.remaining == 350
    assert utilities.current_spent == 0
    assert utilities.alert_threshold == 95


def test_duplicate_budget_for_same_period_is_rejected(budget_service):
    budget_service.create("Food", 500, "03", 2024)
    with pytest.raises(ValueError):
        budget_service.create("Food", 600, "03", 2024)
    budget_service.create("Food", 600, "04", 2024)


def test_update_cannot_collide_with_another_budget(budget_service):
    food = budget_service.create("Food", 500, "03", 2024)
    fun = budget_service.create("Fun", 100, "03", 2024)
    with pytest.raises(ValueError):
        budget_service.update(fun.id, "Food", 100, "03", 2024)
    updated = budget_service.update(food.id, "Food", 450, "03", 2024, alert_threshold=70)
    assert updated.monthly_limit == 450
    assert updated.alert_threshold == 70


@pytest.mark.parametrize("args", [
    ("", 100, "03", 2024, None),
    ("Food", -1, "03", 2024, None),
    ("Food", 100, "3", 2024, None),
    ("Food", 100, "13", 2024, None),
    ("Food", 100, "03", 2024, 101),
])
def test_create_validates(budget_service, args):
    with pytest.raises(ValueError):
        budget_service.create(*args)


def test_zero_limit_is_allowed(budget_service):
    budget = budget_service.create("Gifts", 0, "03", 2024)
    assert budget.monthly_limit == 0


def test_copy_from_previous_month(budget_service):
    budget_service.create("Food", 500, "12", 2023, alert_threshold=90)
    budget_service.create("Fun", 100, "12", 2023)
    budget_service.create("Fun", 150, "01", 2024)

    assert budget_service.copy_from_previous_month("01", 2024) == 1
    january = {b.category: b for b in budget_service.get_by_month("01", 2024)}
    assert january["Food"].monthly_limit == 500
    assert january["Food"].alert_threshold == 90
    assert january["Fun"].monthly_limit == 150


def test_delete(budget_service):
    budget = budget_service.create("Food", 500, "03", 2024)
    budget_service.delete(budget.id)
    with pytest.raises(RecordNotFound):
        budget_service.get_by_id(budget.id)
