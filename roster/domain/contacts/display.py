from __future__ import annotations

import math
import re
from typing import Any, Mapping

from roster.common.fields import first_defined, first_filled, first_truthy, join_present, to_text
from roster.domain import aliases
from roster.domain.contacts.phone import format_phone
from roster.domain.contacts.status import is_leased, normalize_status
from roster.domain.models import PhoneChannel

_WS_RE = re.compile(r"\s+")


def get_cec_id(employee: Mapping[str, Any] | None) -> str:
    """Код сотрудника (CEC id) или пустая строка."""
    return to_text(first_truthy(employee, aliases.CEC_ID_KEYS))


def _title_case(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in _WS_RE.split(value) if word)


def _name_has_code(name: str, code: str) -> bool:
    if not name or not code:
        return False
    return _WS_RE.sub("", code).lower() in _WS_RE.sub("", name).lower()


def _last_first_from_full(raw: str) -> str:
    if "," in raw:
        last, _, first = raw.partition(",")
        return join_present((last.strip(), first.split(",")[0].strip()), ", ")
    parts = raw.split()
    if not parts:
        return ""
    last = parts.pop()
    return join_present((last, " ".join(parts)), ", ")


def display_name_last_first(employee: Mapping[str, Any] | None) -> str:
    """
    Назначение:
        Имя в формате "Last, First" для страниц сотрудника.

    Алгоритм:
        - Из firstName/lastName (и синонимов), иначе из полного имени:
          "Last, First" остаётся как есть, "First Middle Last" переставляется.
        - Результат в Title Case.
        - Если есть CEC id и его нет в имени, добавляется " — <id>".
    """
    first = to_text(first_truthy(employee, aliases.DISPLAY_FIRST_NAME_KEYS)).strip()
    last = to_text(first_truthy(employee, aliases.DISPLAY_LAST_NAME_KEYS)).strip()

    if first or last:
        last_first = join_present((last, first), ", ")
    else:
        raw = to_text(first_filled(employee, aliases.DISPLAY_FULL_NAME_KEYS)).strip()
        last_first = _last_first_from_full(raw)

    pretty = _title_case(last_first)
    code = get_cec_id(employee)
    if not code:
        return pretty
    if not pretty:
        return f"— {code}"
    if _name_has_code(pretty, code):
        return pretty
    return f"{pretty} — {code}"


def employee_phone(employee: Mapping[str, Any] | None) -> PhoneChannel:
    return format_phone(first_truthy(employee, aliases.PHONE_KEYS))


TRAVEL_LABEL: dict[int, str] = {
    0: "No preference recorded",
    1: "Air travel",
    2: "Drives company / personal vehicle",
}
SCOPE_PLACEHOLDER = "Group / Project not available"


def _finite_number(value: Any) -> int | float:
    if value is None:
        return 0
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return 0
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def get_travel_pref(employee: Mapping[str, Any] | None) -> int | float:
    """Код предпочтения по командировкам; нечисловое значение -> 0."""
    return _finite_number(first_defined(employee, aliases.TRAVEL_PREF_KEYS))


def travel_label(pref: Any) -> str | None:
    return TRAVEL_LABEL.get(pref)


def get_travel_notes(employee: Mapping[str, Any] | None) -> str:
    return to_text(first_defined(employee, aliases.TRAVEL_NOTES_KEYS))


def _assignment_code(code: Any) -> str:
    return to_text(code).strip().upper()


def index_current_assignments(rows: Any) -> dict[str, Mapping[str, Any]]:
    """
    Назначение:
        Справочник текущих назначений по CEC id (в верхнем регистре).

    Поведение:
        - Код ищется в самой строке, затем во вложенном объекте "assignment";
          данные назначения берутся из "assignment", если он есть.
        - Последняя строка с тем же кодом побеждает.
    """
    index: dict[str, Mapping[str, Any]] = {}
    if not isinstance(rows, (list, tuple)):
        return index
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        nested = row.get(aliases.ASSIGNMENT_ENVELOPE_KEY)
        nested = nested if isinstance(nested, Mapping) else None
        code = _assignment_code(get_cec_id(row)) or _assignment_code(get_cec_id(nested))
        if code:
            index[code] = nested if nested is not None else row
    return index


def get_assign_for(
    employee: Mapping[str, Any] | None,
    assign_map: Mapping[str, Mapping[str, Any]] | None,
) -> Mapping[str, Any] | None:
    if not assign_map:
        return None
    code = _assignment_code(get_cec_id(employee))
    if not code:
        return None
    return assign_map.get(code) or None


def compose_scope(assign: Mapping[str, Any] | None, employee: Mapping[str, Any] | None) -> str:
    """
    Назначение:
        Строка "рабочая группа - проект" для карточки сотрудника.

    Поведение:
        - Назначение приоритетнее записи сотрудника (и для группы, и для проекта).
        - Есть только одна часть -> она же; нет ничего -> SCOPE_PLACEHOLDER.
    """
    work_group = to_text(
        first_truthy(assign, (aliases.WORK_GROUP_KEY,)) or first_truthy(employee, (aliases.WORK_GROUP_KEY,))
    )
    project = to_text(
        first_truthy(assign, aliases.SCOPE_ASSIGNMENT_PROJECT_KEYS)
        or first_truthy(employee, aliases.SCOPE_EMPLOYEE_PROJECT_KEYS)
    )
    if work_group and project:
        return f"{work_group} - {project}"
    return work_group or project or SCOPE_PLACEHOLDER


def build_directory_entry(
    employee: Mapping[str, Any] | None,
    assign_map: Mapping[str, Mapping[str, Any]] | None = None,
) -> dict[str, Any]:
    """
    Назначение:
        Строка справочника сотрудников.

    Выходные данные:
        name, cecId, phone, status, leased, travel (pref/label/notes), scope.
    """
    pref = get_travel_pref(employee)
    return {
        "name": display_name_last_first(employee),
        "cecId": get_cec_id(employee) or None,
        "phone": employee_phone(employee).to_dict(),
        "status": normalize_status(employee),
        "leased": is_leased(employee),
        "travel": {
            "pref": pref,
            "label": travel_label(pref),
            "notes": get_travel_notes(employee),
        },
        "scope": compose_scope(get_assign_for(employee, assign_map), employee),
    }
