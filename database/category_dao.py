from database.field_map import Field, FieldMap, as_bool, as_str, bool_to_int
from database.record_dao import RecordDAO
from models.category import Category


class CategoryDAO(RecordDAO):
    table = "category_c"
    field_map = FieldMap(Category, [
        Field("name", "name_c", as_str, str),
        Field("type", "type_c", as_str, str),
        Field("color", "color_c", as_str, str),
        Field("is_default", "is_default_c", as_bool, bool_to_int),
    ])

    def __init__(self, client):
        super().__init__(client)
        self._all_cache: list | None = None

    def _invalidate_cache(self):
        self._all_cache = None

    def _display_name(self, values: dict) -> str | None:
        return values.get("name", "")

    def get_all(self, order_by: str | None = "name", descending: bool = False) -> list[Category]:
        if order_by != "name" or descending:
            return super().get_all(order_by=order_by, descending=descending)
        if self._all_cache is None:
            self._all_cache = super().get_all(order_by="name")
        return list(self._all_cache)

    def get_by_type(self, type_: str) -> list[Category]:
        return [c for c in self.get_all() if c.type == type_]

    def create(self, **values) -> Category:
        self._invalidate_cache()
        return super().create(**values)

    def update(self, record_id: int, **values) -> Category:
        self._invalidate_cache()
        return super().update(record_id, **values)

    def delete(self, record_id: int) -> None:
        self._invalidate_cache()
        super().delete(record_id)
