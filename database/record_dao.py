from database.field_map import FieldMap
from database.record_client import RecordClient
from utils.errors import RecordNotFound


class RecordDAO:
    """CRUD over one table. Subclasses set ``table`` and ``field_map``."""

    table: str = ""
    field_map: FieldMap

    def __init__(self, client: RecordClient):
        self._client = client

    def _display_name(self, values: dict) -> str | None:
        """Value for the backend's ``Name`` column on create, if any."""
        return None

    def _to_models(self, records: list[dict]) -> list:
        return [self.field_map.to_model(r) for r in records]

    def get_all(self, order_by: str | None = None, descending: bool = False) -> list:
        column = self.field_map.column(order_by) if order_by else None
        return self._to_models(
            self._client.fetch_records(self.table, order_by=column, descending=descending)
        )

    def find(self, order_by: str | None = None, descending: bool = False, **where) -> list:
        """Records whose attributes equal every keyword given."""
        column = self.field_map.column(order_by) if order_by else None
        return self._to_models(
            self._client.fetch_records(
                self.table,
                where=self.field_map.to_where(where),
                order_by=column,
                descending=descending,
            )
        )

    def get_by_id(self, record_id: int):
        record = self._client.get_record_by_id(self.table, int(record_id))
        if record is None:
            raise RecordNotFound(self.table, record_id)
        return self.field_map.to_model(record)

    def create(self, **values):
        record = self.field_map.to_record(values)
        name = self._display_name(values)
        if name is not None and "Name" not in record:
            record["Name"] = name
        return self.field_map.to_model(self._client.create_record(self.table, record))

    def update(self, record_id: int, **values):
        record = self._client.update_record(
            self.table, int(record_id), self.field_map.to_record(values)
        )
        if record is None:
            raise RecordNotFound(self.table, record_id)
        return self.field_map.to_model(record)

    def delete(self, record_id: int) -> None:
        if not self._client.delete_record(self.table, int(record_id)):
            raise RecordNotFound(self.table, record_id)
