from database.field_map import (
    Field, FieldMap, as_float, as_int, as_optional_int, as_str,
)
from database.record_dao import RecordDAO
from models.budget import Budget


class BudgetDAO(RecordDAO):
    table = "budget_c"
    field_map = FieldMap(Budget, [
        Field("name", "Name", as_str),
        Field("category", "category_c", as_str, str),
        Field("monthly_limit", "monthly_limit_c", as_float, float),
        Field("current_spent", "current_spent_c", as_float, float),
        Field("month", "month_c", as_str, str),
        Field("year", "year_c", as_int, int),
        Field("alert_threshold", "alert_threshold_c", as_optional_int, as_optional_int),
    ])

    def _display_name(self, values: dict) -> str | None:
        return f"Budget for {values.get('category', '')}"

    def get_by_month(self, month: str, year: int) -> list[Budget]:
        return self.find(month=month, year=int(year), order_by="category")

    def get_by_category(self, category: str) -> list[Budget]:
        return self.find(category=category, order_by="year")

    def get_by_category_month(self, category: str, month: str, year: int) -> Budget | None:
        matches = self.find(category=category, month=month, year=int(year))
        return matches[0] if matches else None
