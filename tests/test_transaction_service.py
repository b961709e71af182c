from datetime import date

import pytest

from services.transaction_service import TransactionFilter, filter_recurring, matches_search
from utils.errors import InvalidFrequency


@pytest.fixture
def ledger(tx_service):
    tx_service.create("expense", 4.50, "Food & Dining", "Morning coffee", "2024-03-01")
    tx_service.create("expense", 120.00, "Utilities", "Electric bill", "2024-03-05")
    tx_service.create("income", 2500.00, "Salary", "March pay", "2024-03-15")
    tx_service.create("expense", 45.00, "Food & Dining", "Groceries", "2024-02-20")
    return tx_service


def descriptions(transactions):
    return [t.description for t in transactions]


def test_amount_is_stored_as_magnitude(tx_service):
    tx = tx_service.create("expense", -30, "Shopping", "  Shoes  ", "2024-03-02")
    assert tx.amount == 30
    assert tx.signed_amount == -30
    assert tx.description == "Shoes"
    assert tx.is_recurring is False


def test_search_text_matches_description_category_and_amount(ledger):
    assert descriptions(ledger.search(TransactionFilter(search="coffee"))) == ["Morning coffee"]
    assert descriptions(ledger.search(TransactionFilter(search="utilities"))) == ["Electric bill"]
    assert descriptions(ledger.search(TransactionFilter(search="$4.50"))) == ["Morning coffee"]
    assert descriptions(ledger.search(TransactionFilter(search="2500"))) == ["March pay"]


def test_search_results_are_newest_first(ledger):
    results = ledger.search(TransactionFilter(categories=["Food & Dining"]))
    assert descriptions(results) == ["Morning coffee", "Groceries"]


def test_search_date_range_is_inclusive(ledger):
    results = ledger.search(TransactionFilter(start_date="2024-03-01", end_date="2024-03-05"))
    assert descriptions(results) == ["Electric bill", "Morning coffee"]


def test_search_amount_bounds_and_type(ledger):
    results = ledger.search(TransactionFilter(min_amount=40, max_amount=200))
    assert descriptions(results) == ["Electric bill", "Groceries"]
    assert descriptions(ledger.search(TransactionFilter(type="income"))) == ["March pay"]


def test_empty_filter_returns_everything(ledger):
    assert len(ledger.search(TransactionFilter())) == 4


def test_matches_search_blank():
    assert matches_search(object(), "   ")


def test_get_by_date_range_and_type(ledger):
    assert len(ledger.get_by_date_range("2024-03-01", "2024-03-31")) == 3
    assert descriptions(ledger.get_by_type("income")) == ["March pay"]
    assert descriptions(ledger.get_recent(2)) == ["March pay", "Electric bill"]


def test_spending_by_category(ledger):
    assert ledger.spending_by_category("03", 2024) == {"Food & Dining": 4.5, "Utilities": 120.0}


@pytest.mark.parametrize("args", [
    ("expense", 0, "Food", "Nothing", "2024-03-01"),
    ("transfer", 10, "Food", "Move", "2024-03-01"),
    ("expense", 10, "  ", "No category", "2024-03-01"),
    ("expense", 10, "Food", "Bad date", "03/01/2024"),
])
def test_create_validates(tx_service, args):
    with pytest.raises(ValueError):
        tx_service.create(*args)


def test_created_listeners_are_notified(tx_service):
    seen = []
    tx_service.add_created_listener(seen.append)
    tx = tx_service.create("expense", 10, "Food", "Snack", "2024-03-02")
    tx_service.remove_created_listener(seen.append)
    tx_service.create("expense", 10, "Food", "Snack", "2024-03-03")
    assert seen == [tx]


def test_failing_listener_does_not_break_create(tx_service):
    def boom(_tx):
        raise RuntimeError("listener failed")

    tx_service.add_created_listener(boom)
    tx = tx_service.create("expense", 10, "Food", "Snack", "2024-03-02")
    assert tx_service.get_by_id(tx.id) == tx


# ── Recurring ────────────────────────────────────────────────────────────────

def test_create_recurring_rejects_bad_schedules(tx_service):
    with pytest.raises(InvalidFrequency):
        tx_service.create_recurring("expense", 10, "Rent", "Rent", "2024-01-01", "hourly")
    with pytest.raises(ValueError):
        tx_service.create_recurring(
            "expense", 10, "Rent", "Rent", "2024-03-01", "monthly", end_date="2024-02-01"
        )


def test_templates_are_kept_out_of_posted_transactions(tx_service):
    template = tx_service.create_recurring("expense", 1200, "Housing", "Rent", "2024-01-31", "monthly")
    assert template.next_occurrence_date == "2024-01-31"
    assert tx_service.get_all() == []
    assert tx_service.get_all_recurring() == [template]
    assert tx_service.spending_by_category("01", 2024) == {}


def test_apply_due_recurring_posts_each_occurrence_once(tx_service):
    template = tx_service.create_recurring("expense", 1200, "Housing", "Rent", "2024-01-31", "monthly")

    posted = tx_service.apply_due_recurring(date(2024, 3, 15))
    assert [t.date for t in posted] == ["2024-01-31", "2024-02-29"]
    assert all(not t.is_recurring for t in posted)
    assert tx_service.get_by_id(template.id).next_occurrence_date == "2024-03-29"

    assert tx_service.apply_due_recurring(date(2024, 3, 15)) == []
    assert len(tx_service.get_all()) == 2


def test_apply_due_recurring_limits_catch_up(tx_service):
    tx_service.create_recurring("expense", 15, "Entertainment", "Streaming", "2023-06-01", "monthly")
    posted = tx_service.apply_due_recurring(date(2024, 3, 15))
    assert [t.date for t in posted] == ["2024-01-01", "2024-02-01", "2024-03-01"]


def test_apply_due_recurring_stops_at_end_date(tx_service):
    template = tx_service.create_recurring(
        "expense", 20, "Transportation", "Parking", "2024-03-01", "weekly", end_date="2024-03-10"
    )
    posted = tx_service.apply_due_recurring(date(2024, 3, 15))
    assert [t.date for t in posted] == ["2024-03-01", "2024-03-08"]
    assert tx_service.get_by_id(template.id).is_active is False


def test_inactive_templates_are_skipped(tx_service):
    template = tx_service.create_recurring("income", 2500, "Salary", "Pay", "2024-03-01", "monthly")
    tx_service.toggle_recurring_status(template.id, False)
    assert tx_service.apply_due_recurring(date(2024, 3, 15)) == []


def test_unknown_frequency_template_is_never_posted(tx_service, tx_dao):
    tx_dao.create(
        type="expense", amount=40, category="Utilities", description="Internet",
        date="2024-03-01", is_recurring=True, frequency="fortnightly",
        is_active=True, next_occurrence_date="2024-03-01",
    )
    assert tx_service.apply_due_recurring(date(2024, 3, 15)) == []
    assert tx_service.apply_due_recurring(date(2024, 3, 15)) == []
    assert tx_service.get_all() == []


def test_update_recurring_resets_schedule(tx_service):
    template = tx_service.create_recurring("expense", 50, "Utilities", "Water", "2024-01-10", "monthly")
    tx_service.apply_due_recurring(date(2024, 2, 15))
    updated = tx_service.update_recurring(
        template.id, "expense", 55, "Utilities", "Water", "2024-02-20", "monthly"
    )
    assert updated.amount == 55
    assert updated.next_occurrence_date == "2024-02-20"


def test_recurring_operations_reject_posted_transactions(tx_service):
    tx = tx_service.create("expense", 10, "Food", "Snack", "2024-03-02")
    with pytest.raises(ValueError):
        tx_service.toggle_recurring_status(tx.id, False)
    with pytest.raises(ValueError):
        tx_service.delete_recurring(tx.id)


def test_filter_recurring(tx_service):
    rent = tx_service.create_recurring("expense", 1200, "Housing", "Rent", "2024-01-01", "monthly")
    pay = tx_service.create_recurring("income", 2500, "Salary", "Pay", "2024-01-05", "monthly")
    gym = tx_service.create_recurring("expense", 30, "Healthcare", "Gym", "2024-01-07", "weekly")
    tx_service.toggle_recurring_status(gym.id, False)
    templates = tx_service.get_all_recurring()

    assert [t.id for t in filter_recurring(templates, frequency="weekly")] == [gym.id]
    assert [t.id for t in filter_recurring(templates, status="active")] == [rent.id, pay.id]
    assert [t.id for t in filter_recurring(templates, status="inactive")] == [gym.id]
    assert [t.id for t in filter_recurring(templates, type_="income")] == [pay.id]
    assert [t.id for t in filter_recurring(templates, search="ren")] == [rent.id]
