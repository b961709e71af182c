class FinTrackError(Exception):
    """Base class for errors raised by the data and alerting layers."""


class StoreUnavailable(FinTrackError):
    """The record store could not be reached or failed a read/write."""


class RecordNotFound(FinTrackError, LookupError):
    def __init__(self, table: str, record_id):
        super().__init__(f"{table} record with Id {record_id} not found")
        self.table = table
        self.record_id = record_id


class InvalidFrequency(FinTrackError, ValueError):
    def __init__(self, frequency):
        super().__init__(
            f"Invalid frequency {frequency!r}. "
            f"Must be one of: daily, weekly, monthly, yearly."
        )
        self.frequency = frequency
