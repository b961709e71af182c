"""Translation between model attributes and backend ``_c`` columns."""
from dataclasses import dataclass
from typing import Any, Callable


def _identity(value):
    return value


def as_str(value) -> str:
    return "" if value is None else str(value)


def as_float(value) -> float:
    if value in (None, ""):
        return 0.0
    return float(value)


def as_int(value) -> int:
    return int(value)


def as_optional_int(value) -> int | None:
    if value in (None, ""):
        return None
    return int(value)


def as_optional_str(value) -> str | None:
    return value or None


def as_bool(value) -> bool:
    return bool(value)


def bool_to_int(value) -> int:
    return 1 if value else 0


@dataclass(frozen=True)
class Field:
    attr: str
    column: str
    to_model: Callable[[Any], Any] = _identity
    to_record: Callable[[Any], Any] = _identity


class FieldMap:
    """Maps one model class onto one table.

    ``to_model`` reads a full record; ``to_record`` converts only the
    attributes it is given, so partial updates stay partial.
    """

    def __init__(self, model_cls, fields: list[Field], id_column: str = "Id"):
        self.model_cls = model_cls
        self.id_column = id_column
        self._by_attr = {f.attr: f for f in fields}

    def column(self, attr: str) -> str:
        try:
            return self._by_attr[attr].column
        except KeyError:
            raise ValueError(
                f"{self.model_cls.__name__} has no field '{attr}'."
            ) from None

    def to_model(self, record: dict):
        values = {"id": record[self.id_column]}
        for f in self._by_attr.values():
            values[f.attr] = f.to_model(record.get(f.column))
        return self.model_cls(**values)

    def to_record(self, values: dict) -> dict:
        record = {}
        for attr, value in values.items():
            f = self._by_attr.get(attr)
            if f is None:
                raise ValueError(f"{self.model_cls.__name__} has no field '{attr}'.")
            record[f.column] = f.to_record(value)
        return record

    def to_where(self, values: dict) -> dict:
        """Like to_record, but None stays None so it can match NULL."""
        return {
            self.column(attr): (None if value is None else self._by_attr[attr].to_record(value))
            for attr, value in values.items()
        }
