from datetime import date, datetime, timedelta
import calendar
from utils.constants import DATE_FORMAT, FREQUENCY_LABELS
from utils.errors import InvalidFrequency


def today() -> date:
    return date.today()


def today_str() -> str:
    return date.today().strftime(DATE_FORMAT)


def current_month_year(ref: date | None = None) -> tuple[str, int]:
    """Return the current period as ("MM", year)."""
    d = ref or today()
    return f"{d.month:02d}", d.year


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure.

    Full ISO timestamps ("2024-03-05T10:00:00Z") are accepted and truncated
    to their date part.
    """
    if not date_str:
        return None
    date_str = date_str.strip()[:10]
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def to_date(value) -> date | None:
    """Coerce a date, datetime or date string to a date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(str(value))


def to_datetime(value) -> datetime | None:
    """Coerce to a naive local datetime; a bare date means midnight of that day.

    Aware values are converted to local time before the offset is dropped.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.astimezone().replace(tzinfo=None) if value.tzinfo else value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        d = parse_date(text)
        return datetime(d.year, d.month, d.day) if d else None
    return parsed.astimezone().replace(tzinfo=None) if parsed.tzinfo else parsed


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def period_of(value) -> tuple[str, int] | None:
    """Return the ("MM", year) period a date falls in."""
    d = to_date(value)
    if d is None:
        return None
    return f"{d.month:02d}", d.year


def prev_period(month: str, year: int) -> tuple[str, int]:
    m = int(month)
    if m == 1:
        return "12", year - 1
    return f"{m - 1:02d}", year


def next_period(month: str, year: int) -> tuple[str, int]:
    m = int(month)
    if m == 12:
        return "01", year + 1
    return f"{m + 1:02d}", year


def is_valid_month(month: str) -> bool:
    return isinstance(month, str) and len(month) == 2 and month.isdigit() and 1 <= int(month) <= 12


def friendly_month(month: str, year: int) -> str:
    """Convert ("02", 2026) to e.g. 'February 2026'."""
    if not is_valid_month(month):
        return f"{month}/{year}"
    return f"{calendar.month_name[int(month)]} {year}"


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d: date, n: int) -> date:
    """Add n months to date d, clamping day to month end."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def next_occurrence(last_date, frequency: str) -> date:
    """Return the occurrence following last_date for the given frequency.

    Monthly and yearly steps keep the day of month and clamp to the end of
    shorter months, so 2024-01-31 monthly gives 2024-02-29.
    """
    d = to_date(last_date)
    if d is None:
        raise ValueError(f"Invalid date: {last_date!r}")
    if frequency == "daily":
        return d + timedelta(days=1)
    if frequency == "weekly":
        return d + timedelta(days=7)
    if frequency == "monthly":
        return add_months(d, 1)
    if frequency == "yearly":
        return add_months(d, 12)
    raise InvalidFrequency(frequency)


def frequency_label(frequency: str | None) -> str:
    """Display label for a frequency; 'Unknown' for anything unrecognised."""
    return FREQUENCY_LABELS.get(frequency or "", "Unknown")


def format_display_date(date_str: str) -> str:
    """Convert a YYYY-MM-DD storage string to e.g. 'Mar 05, 2024'."""
    if not date_str:
        return date_str
    d = parse_date(date_str)
    if d is None:
        return date_str
    return d.strftime("%b %d, %Y")
