from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any

_FALLBACK_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%y",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%b %d %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)


def _to_naive_utc(value: datetime) -> datetime | None:
    if value.tzinfo is None:
        return value
    try:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    except OverflowError:
        # offset pushes the instant outside datetime.min..datetime.max
        return None


def parse_loose_date(value: Any) -> datetime | None:
    """
    Назначение:
        Разбирает дату из строки/числа/date в naive datetime.

    Контракт:
        - Пустые и ложные значения (None, "", 0) -> None.
        - Числа трактуются как epoch-миллисекунды.
        - Строки: ISO 8601 (в т.ч. с 'Z'), затем набор распространённых форматов.
        - Даты с часовым поясом приводятся к UTC и теряют tzinfo,
          чтобы все результаты были сравнимы между собой.
        - Нераспознанное значение -> None, исключения не пробрасываются.
    """
    if not value:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _to_naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
        return _to_naive_utc(parsed)

    text = str(value).strip()
    if not text:
        return None
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        parsed = datetime.fromisoformat(iso_text)
    except ValueError:
        parsed = None
    if parsed is not None:
        return _to_naive_utc(parsed)
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_loose_day(value: Any) -> datetime | None:
    """Как parse_loose_date, но с обрезкой до полуночи."""
    parsed = parse_loose_date(value)
    if parsed is None:
        return None
    return datetime(parsed.year, parsed.month, parsed.day)


def add_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)


def to_iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()
