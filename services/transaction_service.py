import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable

from models.transaction import Transaction
from database.transaction_dao import TransactionDAO
from utils.constants import FREQUENCIES, RECURRING_CATCHUP_DAYS, TRANSACTION_TYPES
from utils.date_helpers import format_date, next_occurrence, parse_date, today
from utils.errors import InvalidFrequency

logger = logging.getLogger(__name__)


@dataclass
class TransactionFilter:
    """Criteria for TransactionService.search; unset fields match everything."""
    search: str = ""
    start_date: str | None = None      # inclusive, YYYY-MM-DD
    end_date: str | None = None        # inclusive, YYYY-MM-DD
    min_amount: float | None = None
    max_amount: float | None = None
    categories: list[str] = field(default_factory=list)
    type: str | None = None


def _amount_text(amount: float) -> str:
    """45.0 -> '45', 45.5 -> '45.5'."""
    return ("%f" % abs(amount)).rstrip("0").rstrip(".")


def matches_search(tx: Transaction, text: str) -> bool:
    """Free-text match on description, category or amount ('45.5' or '$45.50')."""
    needle = text.strip().lower()
    if not needle:
        return True
    return (
        needle in tx.description.lower()
        or needle in tx.category.lower()
        or needle in _amount_text(tx.amount)
        or needle in f"${abs(tx.amount):.2f}"
    )


def filter_transactions(transactions: list[Transaction], criteria: TransactionFilter) -> list[Transaction]:
    start = parse_date(criteria.start_date) if criteria.start_date else None
    end = parse_date(criteria.end_date) if criteria.end_date else None
    min_amount = criteria.min_amount if criteria.min_amount is not None else 0.0
    max_amount = criteria.max_amount if criteria.max_amount is not None else float("inf")

    result = []
    for tx in transactions:
        if criteria.search and not matches_search(tx, criteria.search):
            continue
        tx_date = parse_date(tx.date)
        if start and (tx_date is None or tx_date < start):
            continue
        if end and (tx_date is None or tx_date > end):
            continue
        if not min_amount <= abs(tx.amount) <= max_amount:
            continue
        if criteria.categories and tx.category not in criteria.categories:
            continue
        if criteria.type and tx.type != criteria.type:
            continue
        result.append(tx)
    return result


def filter_recurring(
    templates: list[Transaction],
    search: str = "",
    frequency: str | None = None,
    status: str | None = None,          # 'active' | 'inactive'
    type_: str | None = None,
) -> list[Transaction]:
    needle = search.strip().lower()
    result = []
    for tx in templates:
        if needle and needle not in tx.description.lower() and needle not in tx.category.lower():
            continue
        if frequency and tx.frequency != frequency:
            continue
        if status == "active" and not tx.is_active:
            continue
        if status == "inactive" and tx.is_active:
            continue
        if type_ and tx.type != type_:
            continue
        result.append(tx)
    return result


class TransactionService:
    def __init__(self, tx_dao: TransactionDAO):
        self._dao = tx_dao
        self._created_listeners: list[Callable[[Transaction], None]] = []

    def add_created_listener(self, callback: Callable[[Transaction], None]) -> None:
        self._created_listeners.append(callback)

    def remove_created_listener(self, callback: Callable[[Transaction], None]) -> None:
        if callback in self._created_listeners:
            self._created_listeners.remove(callback)

    # ── Posted transactions ──────────────────────────────────────────────────
    def get_all(self) -> list[Transaction]:
        """Posted transactions, oldest first. Recurring templates are excluded."""
        return self._dao.get_posted()

    def get_recent(self, limit: int = 6) -> list[Transaction]:
        return list(reversed(self._dao.get_posted()))[:limit]

    def get_by_id(self, tx_id: int) -> Transaction:
        return self._dao.get_by_id(tx_id)

    def get_by_date_range(self, start_date: str, end_date: str) -> list[Transaction]:
        return filter_transactions(
            self.get_all(), TransactionFilter(start_date=start_date, end_date=end_date)
        )

    def get_by_category(self, category: str) -> list[Transaction]:
        return [t for t in self.get_all() if t.category == category]

    def get_by_type(self, type_: str) -> list[Transaction]:
        return [t for t in self.get_all() if t.type == type_]

    def search(self, criteria: TransactionFilter) -> list[Transaction]:
        """Newest-first transactions matching every criterion."""
        matched = filter_transactions(self.get_all(), criteria)
        return sorted(matched, key=lambda t: t.date, reverse=True)

    def spending_by_category(self, month: str, year: int) -> dict[str, float]:
        return self._dao.get_spending_by_category(month, year)

    def create(
        self,
        type_: str,
        amount: float,
        category: str,
        description: str,
        date: str,
    ) -> Transaction:
        self._validate(type_, amount, category, date)
        tx = self._dao.create(
            type=type_, amount=abs(float(amount)), category=category,
            description=description.strip(), date=date,
            is_recurring=False, is_active=True,
        )
        logger.info("Created %s transaction %s (%s %.2f)", type_, tx.id, category, tx.amount)
        self._notify_created(tx)
        return tx

    def update(
        self,
        tx_id: int,
        type_: str,
        amount: float,
        category: str,
        description: str,
        date: str,
    ) -> Transaction:
        self._validate(type_, amount, category, date)
        return self._dao.update(
            tx_id, type=type_, amount=abs(float(amount)), category=category,
            description=description.strip(), date=date,
        )

    def delete(self, tx_id: int):
        self._dao.delete(tx_id)

    def _notify_created(self, tx: Transaction):
        for callback in list(self._created_listeners):
            try:
                callback(tx)
            except Exception:
                logger.exception("Transaction listener failed for %s", tx.id)

    # ── Recurring templates ──────────────────────────────────────────────────
    def get_all_recurring(self) -> list[Transaction]:
        return self._dao.get_recurring()

    def create_recurring(
        self,
        type_: str,
        amount: float,
        category: str,
        description: str,
        date: str,
        frequency: str,
        end_date: str | None = None,
    ) -> Transaction:
        """Create a template whose first occurrence falls on ``date``."""
        self._validate(type_, amount, category, date)
        self._validate_schedule(frequency, date, end_date)
        return self._dao.create(
            type=type_, amount=abs(float(amount)), category=category,
            description=description.strip(), date=date,
            is_recurring=True, frequency=frequency, is_active=True,
            next_occurrence_date=date, end_date=end_date or None,
        )

    def update_recurring(
        self,
        tx_id: int,
        type_: str,
        amount: float,
        category: str,
        description: str,
        date: str,
        frequency: str,
        end_date: str | None = None,
    ) -> Transaction:
        current = self._get_template(tx_id)
        self._validate(type_, amount, category, date)
        self._validate_schedule(frequency, date, end_date)
        values = dict(
            type=type_, amount=abs(float(amount)), category=category,
            description=description.strip(), date=date,
            frequency=frequency, end_date=end_date or None,
        )
        if date != current.date or frequency != current.frequency:
            values["next_occurrence_date"] = date
        return self._dao.update(tx_id, **values)

    def delete_recurring(self, tx_id: int):
        self._get_template(tx_id)
        self._dao.delete(tx_id)

    def toggle_recurring_status(self, tx_id: int, is_active: bool) -> Transaction:
        self._get_template(tx_id)
        return self._dao.update(tx_id, is_active=bool(is_active))

    def apply_due_recurring(self, reference_date: date | None = None) -> list[Transaction]:
        """
        Post every occurrence of active templates due on or before reference_date
        (default: today), looking back at most RECURRING_CATCHUP_DAYS.
        Returns the newly posted transactions.
        """
        ref = reference_date or today()
        cutoff = ref - timedelta(days=RECURRING_CATCHUP_DAYS)
        posted: list[Transaction] = []

        for template in self._dao.get_recurring():
            if not template.is_active:
                continue
            due = parse_date(template.next_occurrence_date or template.date)
            end = parse_date(template.end_date) if template.end_date else None
            if due is None:
                logger.warning("Recurring transaction %s has no valid date", template.id)
                continue
            if template.frequency not in FREQUENCIES:
                logger.warning(
                    "Skipping recurring transaction %s: invalid frequency %r",
                    template.id, template.frequency,
                )
                continue
            while due <= ref and (end is None or due <= end):
                if due >= cutoff:
                    posted.append(self._dao.create(
                        type=template.type, amount=template.amount,
                        category=template.category, description=template.description,
                        date=format_date(due), is_recurring=False, is_active=True,
                    ))
                due = next_occurrence(due, template.frequency)

            values = {"next_occurrence_date": format_date(due)}
            if end is not None and due > end:
                values["is_active"] = False
            self._dao.update(template.id, **values)

        if posted:
            logger.info("Posted %d recurring transaction(s)", len(posted))
        return posted

    def _get_template(self, tx_id: int) -> Transaction:
        tx = self._dao.get_by_id(tx_id)
        if not tx.is_recurring:
            raise ValueError(f"Transaction {tx_id} is not a recurring transaction.")
        return tx

    # ── Validation ───────────────────────────────────────────────────────────
    @staticmethod
    def _validate(type_, amount, category, date_str):
        if type_ not in TRANSACTION_TYPES:
            raise ValueError("Type must be income or expense.")
        if amount == 0:
            raise ValueError("Amount cannot be zero.")
        if not category or not category.strip():
            raise ValueError("Category cannot be empty.")
        if not parse_date(date_str):
            raise ValueError("Invalid date.")

    @staticmethod
    def _validate_schedule(frequency, date_str, end_date):
        if frequency not in FREQUENCIES:
            raise InvalidFrequency(frequency)
        if end_date:
            end = parse_date(end_date)
            if end is None:
                raise ValueError("Invalid end date.")
            if end < parse_date(date_str):
                raise ValueError("End date cannot be before the start date.")
