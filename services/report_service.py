from datetime import date

from services.bank_account_service import BankAccountService
from services.budget_service import BudgetService
from services.goal_service import GoalService
from services.transaction_service import TransactionService
from utils.date_helpers import current_month_year, friendly_month, period_of, prev_period


class ReportService:
    def __init__(
        self,
        tx_service: TransactionService,
        budget_service: BudgetService,
        goal_service: GoalService,
        bank_account_service: BankAccountService | None = None,
    ):
        self._tx = tx_service
        self._budget = budget_service
        self._goal = goal_service
        self._accounts = bank_account_service

    def get_dashboard_stats(self, month: str | None = None, year: int | None = None) -> dict:
        """Headline numbers for the dashboard cards."""
        if month is None or year is None:
            month, year = current_month_year()
        transactions = self._tx.get_all()
        in_period = [t for t in transactions if period_of(t.date) == (month, year)]
        income = sum(abs(t.amount) for t in in_period if t.type == "income")
        expenses = sum(abs(t.amount) for t in in_period if t.type == "expense")
        return {
            "total_balance": sum(t.signed_amount for t in transactions),
            "monthly_income": income,
            "monthly_expenses": expenses,
            "savings": income - expenses,
            "active_budgets": len(self._budget.get_by_month(month, year)),
            "completed_goals": len(self._goal.get_completed()),
            "accounts_balance": self._accounts.total_balance() if self._accounts else 0.0,
        }

    def get_category_breakdown(self, month: str | None = None, year: int | None = None) -> list[dict]:
        """Return [{category, total}, ...] for the period, largest first."""
        if month is None or year is None:
            month, year = current_month_year()
        spending = self._tx.spending_by_category(month, year)
        rows = [{"category": c, "total": total} for c, total in spending.items()]
        return sorted(rows, key=lambda r: r["total"], reverse=True)

    def get_monthly_trend(self, months: int = 6, ref: date | None = None) -> list[dict]:
        """Return [{month, year, label, income, expense, net}] oldest first."""
        month, year = current_month_year(ref)
        periods = []
        for _ in range(months):
            periods.append((month, year))
            month, year = prev_period(month, year)
        periods.reverse()

        totals = {p: {"income": 0.0, "expense": 0.0} for p in periods}
        for tx in self._tx.get_all():
            period = period_of(tx.date)
            if period in totals:
                totals[period][tx.type] += abs(tx.amount)

        return [
            {
                "month": m,
                "year": y,
                "label": friendly_month(m, y),
                "income": totals[(m, y)]["income"],
                "expense": totals[(m, y)]["expense"],
                "net": totals[(m, y)]["income"] - totals[(m, y)]["expense"],
            }
            for m, y in periods
        ]
