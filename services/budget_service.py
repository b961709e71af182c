import logging

from models.budget import Budget
from database.budget_dao import BudgetDAO
from database.transaction_dao import TransactionDAO
from utils.date_helpers import current_month_year, is_valid_month, prev_period

logger = logging.getLogger(__name__)


class BudgetService:
    def __init__(self, budget_dao: BudgetDAO, tx_dao: TransactionDAO):
        self._budget_dao = budget_dao
        self._tx_dao = tx_dao

    def get_all(self) -> list[Budget]:
        return self._budget_dao.get_all()

    def get_by_id(self, budget_id: int) -> Budget:
        return self._budget_dao.get_by_id(budget_id)

    def get_by_month(self, month: str, year: int) -> list[Budget]:
        return self._budget_dao.get_by_month(month, year)

    def get_by_category(self, category: str) -> list[Budget]:
        return self._budget_dao.get_by_category(category)

    def get_current_budgets(self, month: str | None = None, year: int | None = None) -> list[Budget]:
        """Budgets for the period with current_spent filled in from transactions."""
        if month is None or year is None:
            month, year = current_month_year()
        budgets = self._budget_dao.get_by_month(month, year)
        spending = self._tx_dao.get_spending_by_category(month, year)
        for b in budgets:
            b.current_spent = spending.get(b.category, 0.0)
        return budgets

    def create(
        self,
        category: str,
        monthly_limit: float,
        month: str,
        year: int,
        alert_threshold: int | None = None,
    ) -> Budget:
        self._validate(category, monthly_limit, month, year, alert_threshold)
        if self._budget_dao.get_by_category_month(category, month, year):
            raise ValueError(
                f"A budget for '{category}' already exists for {month}/{year}."
            )
        budget = self._budget_dao.create(
            category=category, monthly_limit=float(monthly_limit),
            current_spent=0.0, month=month, year=int(year),
            alert_threshold=alert_threshold,
        )
        logger.info("Created budget %s for %s %s/%s", budget.id, category, month, year)
        return budget

    def update(
        self,
        budget_id: int,
        category: str,
        monthly_limit: float,
        month: str,
        year: int,
        alert_threshold: int | None = None,
    ) -> Budget:
        self._validate(category, monthly_limit, month, year, alert_threshold)
        clash = self._budget_dao.get_by_category_month(category, month, year)
        if clash and clash.id != budget_id:
            raise ValueError(
                f"A budget for '{category}' already exists for {month}/{year}."
            )
        return self._budget_dao.update(
            budget_id, category=category, monthly_limit=float(monthly_limit),
            month=month, year=int(year), alert_threshold=alert_threshold,
        )

    def delete(self, budget_id: int):
        self._budget_dao.delete(budget_id)

    def copy_from_previous_month(self, month: str, year: int) -> int:
        """Copy last month's limits into (month, year), skipping categories already set."""
        from_month, from_year = prev_period(month, year)
        count = 0
        for b in self._budget_dao.get_by_month(from_month, from_year):
            if self._budget_dao.get_by_category_month(b.category, month, year):
                continue
            self._budget_dao.create(
                category=b.category, monthly_limit=b.monthly_limit,
                current_spent=0.0, month=month, year=int(year),
                alert_threshold=b.alert_threshold,
            )
            count += 1
        return count

    @staticmethod
    def _validate(category, monthly_limit, month, year, alert_threshold):
        if not category or not category.strip():
            raise ValueError("Category cannot be empty.")
        if monthly_limit < 0:
            raise ValueError("Budget limit must be non-negative.")
        if not is_valid_month(month):
            raise ValueError("Month must be a two-digit month, e.g. '03'.")
        if int(year) < 1900:
            raise ValueError("Invalid year.")
        if alert_threshold is not None and not 0 <= alert_threshold <= 100:
            raise ValueError("Alert threshold must be between 0 and 100.")
