from database.field_map import (
    Field, FieldMap, as_bool, as_float, as_optional_str, as_str, bool_to_int,
)
from database.record_dao import RecordDAO
from models.transaction import Transaction


class TransactionDAO(RecordDAO):
    table = "transaction_c"
    field_map = FieldMap(Transaction, [
        Field("type", "type_c", as_str, str),
        Field("amount", "amount_c", as_float, float),
        Field("category", "category_c", as_str, str),
        Field("description", "description_c", as_str, str),
        Field("date", "date_c", as_str, str),
        Field("is_recurring", "is_recurring_c", as_bool, bool_to_int),
        Field("frequency", "frequency_c", as_optional_str),
        Field("is_active", "is_active_c", as_bool, bool_to_int),
        Field("next_occurrence_date", "next_occurrence_date_c", as_optional_str),
        Field("end_date", "end_date_c", as_optional_str),
        Field("created_at", "CreatedOn", as_str),
    ])

    def _display_name(self, values: dict) -> str | None:
        return values.get("description") or values.get("category")

    def get_all(self, order_by: str | None = "date", descending: bool = False) -> list[Transaction]:
        return super().get_all(order_by=order_by, descending=descending)

    def get_posted(self) -> list[Transaction]:
        """Real transactions only; recurring templates are excluded."""
        return self.find(is_recurring=False, order_by="date")

    def get_recurring(self) -> list[Transaction]:
        return self.find(is_recurring=True, order_by="date")

    def get_spending_by_category(self, month: str, year: int) -> dict[str, float]:
        """Sum of expense magnitudes per category for one ("MM", year) period."""
        prefix = f"{int(year):04d}-{month}"
        spending: dict[str, float] = {}
        for tx in self.get_posted():
            if tx.type != "expense" or not tx.date.startswith(prefix):
                continue
            spending[tx.category] = spending.get(tx.category, 0.0) + abs(tx.amount)
        return spending
