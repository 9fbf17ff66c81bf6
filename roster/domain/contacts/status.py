from __future__ import annotations

import re
from typing import Any, Mapping

from roster.common.fields import first_defined, first_truthy, to_text
from roster.domain import aliases

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"
STATUS_TERMINATED = "terminated"
STATUS_OTHER = "other"

_TERMINATED_WORDS = frozenset({"terminated", "term", "termed", "separated", "fired"})
_INACTIVE_WORDS = frozenset({"inactive", "on leave", "on_leave", "leave"})

# "0000-00-00", "00/00/0000 00:00:00" and similar placeholders
_ZERO_DATE_RE = re.compile(r"^0+[-/]0+[-/]0+(?:\s+0{2}:\s*0{2}:\s*0{2})?$")
_NULL_WORD_RE = re.compile(r"^(?:null|undefined)$", re.IGNORECASE)

_LEASED_KEYWORD_RE = re.compile(
    r"(leased|lease labor|lease-labor|contract(or)?|staffing|temp( |-|$)|agency|consultant)",
    re.IGNORECASE,
)
_LEASED_ID_PREFIXES = ("LL-", "AGY-", "TMP-")
_W2_RE = re.compile(r"\b(w[-\s]?2|fte|full[-\s]?time)\b", re.IGNORECASE)
_CONTRACT_RE = re.compile(r"\b(1099|contract)\b", re.IGNORECASE)
_HINT_SEPARATOR = " • "


def has_real_end_date(value: Any) -> bool:
    """Пустые, нулевые ("0000-00-00") и "null"-подобные даты окончания не считаются."""
    text = "" if value is None else to_text(value).strip()
    if not text:
        return False
    if _ZERO_DATE_RE.match(text):
        return False
    return not _NULL_WORD_RE.match(text)


def normalize_status(employee: Mapping[str, Any] | None) -> str:
    """
    Назначение:
        Нормализованный статус сотрудника: active / inactive / terminated / other.

    Порядок:
        1) Готовый status_norm от сервера (как есть, в нижнем регистре).
        2) Реальная дата окончания -> terminated.
        3) Словарь значений employeeStatus.
    """
    from_server = to_text(first_defined(employee, aliases.STATUS_NORM_KEYS)).strip().lower()
    if from_server:
        return from_server

    if has_real_end_date(first_truthy(employee, aliases.END_DATE_KEYS)):
        return STATUS_TERMINATED

    raw = to_text(first_defined(employee, aliases.STATUS_KEYS)).strip().lower()
    if raw in _TERMINATED_WORDS:
        return STATUS_TERMINATED
    if raw in _INACTIVE_WORDS:
        return STATUS_INACTIVE
    if raw == STATUS_ACTIVE:
        return STATUS_ACTIVE
    return STATUS_OTHER


def _explicit_leased(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    return str(value).strip().lower() == "true"


def _hint(employee: Mapping[str, Any], key: str) -> str:
    value = employee.get(key)
    return to_text(value or "").strip().lower()


def leased_score(employee: Mapping[str, Any]) -> int:
    hints = _HINT_SEPARATOR.join(_hint(employee, key) for key in aliases.LEASED_HINT_KEYS)
    cec_id = to_text(first_truthy(employee, aliases.CEC_ID_KEYS)).upper()

    score = 0
    if _LEASED_KEYWORD_RE.search(hints):
        score += 2
    if cec_id.startswith(_LEASED_ID_PREFIXES):
        score += 1
    if any(_hint(employee, key) for key in aliases.LEASED_VENDOR_KEYS):
        score += 2
    if _CONTRACT_RE.search(hints):
        score += 1
    if _W2_RE.search(hints):
        score -= 2
    return score


def is_leased(employee: Mapping[str, Any] | None) -> bool:
    """
    Назначение:
        Признак сотрудника лизингового/подрядного персонала.

    Порядок:
        1) Явный флаг (isLeased, leased, leased_flag, leasedLabor):
           true/"true"/1 -> True, любое другое заданное значение -> False.
        2) Эвристика leased_score: ключевые слова, вендор/агентство,
           префикс кода (LL-, AGY-, TMP-), минус W-2/FTE. Порог 2.
    """
    if not isinstance(employee, Mapping):
        return False
    explicit = first_defined(employee, aliases.LEASED_FLAG_KEYS)
    if explicit is not None:
        return _explicit_leased(explicit)
    return leased_score(employee) >= 2
