from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, Iterable, Mapping

from roster.common.dates import add_days, parse_loose_day
from roster.common.fields import join_present, lookup_ci, to_text
from roster.domain import aliases
from roster.domain.assignments.extractor import NAME_PLACEHOLDER
from roster.domain.models import TimelineSpan
from roster.domain.project_key import UNKNOWN_PROJECT

UNKNOWN_EMPLOYEE = "Unknown"
_DAY = timedelta(days=1)
# no exclusive end can be represented after this day
_LAST_DAY = datetime(datetime.max.year, datetime.max.month, datetime.max.day)


def employee_code_of(row: Mapping[str, Any]) -> str | None:
    value = lookup_ci(row, *aliases.TIMECARD_EMPLOYEE_CODE_KEYS)
    if value is None:
        return None
    return to_text(value).strip()


def _employee_id_of(employee: Mapping[str, Any] | None) -> str | None:
    value = lookup_ci(employee, *aliases.SPAN_EMPLOYEE_ID_KEYS)
    return None if value is None else to_text(value)


def _employee_name_of(employee: Mapping[str, Any] | None, row: Mapping[str, Any] | None = None) -> str:
    single = lookup_ci(employee, *aliases.SPAN_EMPLOYEE_SINGLE_NAME_KEYS)
    if single is None:
        single = lookup_ci(row, *aliases.SPAN_ROW_SINGLE_NAME_KEYS)
    if single is not None:
        return to_text(single)

    last = lookup_ci(employee, *aliases.SPAN_LAST_NAME_KEYS)
    if last is None:
        last = lookup_ci(row, *aliases.SPAN_LAST_NAME_KEYS)
    first = lookup_ci(employee, *aliases.SPAN_FIRST_NAME_KEYS)
    if first is None:
        first = lookup_ci(row, *aliases.SPAN_FIRST_NAME_KEYS)
    return join_present((last, first), ", ") or NAME_PLACEHOLDER


def span_project_of(row: Mapping[str, Any]) -> str:
    """
    Назначение:
        Проект строки табеля для таймлайна.

    Порядок:
        projectKey/project, затем код распределённой работы,
        затем allocation code, затем home allocation, иначе "Unknown".
        Описания работ и части home allocation в ключ не входят,
        они остаются в meta.
    """
    for candidates in (aliases.EXPLICIT_PROJECT_KEYS, *aliases.SPAN_PROJECT_FALLBACK_KEYS):
        value = lookup_ci(row, *candidates)
        if value is not None:
            return to_text(value)
    return UNKNOWN_PROJECT


def _span_meta(row: Mapping[str, Any]) -> dict[str, Any]:
    return {field: lookup_ci(row, *candidates) for field, candidates in aliases.SPAN_META_KEYS}


def _total_hours(row: Mapping[str, Any]) -> Any:
    for key in aliases.TOTAL_HOURS_KEYS:
        if row.get(key) is not None:
            return row[key]
    return None


def _as_number(value: Any) -> int | float:
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return 0
    # NaN
    if number != number:
        return 0
    return number


def _looks_like_spans(rows: list[Mapping[str, Any]]) -> bool:
    return any(key in row for row in rows for key in aliases.SPAN_MARKER_KEYS)


def merge_adjacent_spans(spans: Iterable[TimelineSpan]) -> list[TimelineSpan]:
    """
    Назначение:
        Склеивает касающиеся и пересекающиеся отрезки одного (сотрудник, проект).

    Поведение:
        - end исключающий: равенство end и start следующего отрезка = касание.
        - total_hours в meta суммируется, если задан хотя бы у одного отрезка;
          сумма целых остаётся целой.
    """
    groups: dict[tuple[str, str], list[TimelineSpan]] = {}
    for span in spans:
        key = (span.employee_code or span.employee, span.project or UNKNOWN_PROJECT)
        groups.setdefault(key, []).append(span)

    merged: list[TimelineSpan] = []
    for items in groups.values():
        items.sort(key=lambda span: span.start)
        current: TimelineSpan | None = None
        for span in items:
            if current is None:
                current = span
                continue
            if span.start <= current.end:
                meta = dict(current.meta)
                h1 = _as_number(current.meta.get("total_hours"))
                h2 = _as_number(span.meta.get("total_hours"))
                if h1 or h2:
                    meta["total_hours"] = h1 + h2
                current = replace(current, end=max(current.end, span.end), meta=meta)
            else:
                merged.append(current)
                current = span
        if current is not None:
            merged.append(current)
    return merged


def _spans_from_span_rows(
    rows: list[Mapping[str, Any]],
    employees_by_code: Mapping[str, Mapping[str, Any]],
) -> list[TimelineSpan]:
    spans: list[TimelineSpan] = []
    for row in rows:
        code = employee_code_of(row)
        if not code:
            continue
        start = parse_loose_day(lookup_ci(row, *aliases.SPAN_START_KEYS))
        if start is None or start >= _LAST_DAY:
            continue
        end = parse_loose_day(lookup_ci(row, *aliases.SPAN_END_KEYS))
        if end is None or end <= start:
            end = add_days(start, 1)

        employee = employees_by_code.get(code)
        meta = _span_meta(row)
        meta["total_hours"] = _total_hours(row)
        spans.append(
            TimelineSpan(
                employee=_employee_name_of(employee, row),
                employee_id=_employee_id_of(employee),
                employee_code=code,
                project=span_project_of(row),
                start=start,
                end=end,
                meta=meta,
            )
        )
    return merge_adjacent_spans(spans)


def _row_day(row: Mapping[str, Any]) -> datetime | None:
    for candidates in aliases.DAILY_DAY_KEYS:
        day = parse_loose_day(lookup_ci(row, *candidates))
        if day is not None and day < _LAST_DAY:
            return day
    return None


def _spans_from_daily_rows(
    rows: list[Mapping[str, Any]],
    employees_by_code: Mapping[str, Mapping[str, Any]],
) -> list[TimelineSpan]:
    buckets: dict[tuple[str, str], set[datetime]] = {}
    metas: dict[tuple[str, str], dict[str, Any]] = {}

    for row in rows:
        code = employee_code_of(row)
        if not code:
            continue
        day = _row_day(row)
        if day is None:
            continue
        key = (code, span_project_of(row))
        buckets.setdefault(key, set()).add(day)
        metas[key] = _span_meta(row)

    out: list[TimelineSpan] = []
    for (code, project), days in buckets.items():
        employee = employees_by_code.get(code)
        name = _employee_name_of(employee) if employee is not None else UNKNOWN_EMPLOYEE
        employee_id = _employee_id_of(employee)

        ordered = sorted(days)
        run_start = prev = ordered[0]
        for day in ordered[1:] + [None]:
            if day is not None and day - prev == _DAY:
                prev = day
                continue
            out.append(
                TimelineSpan(
                    employee=name,
                    employee_id=employee_id,
                    employee_code=code,
                    project=project,
                    start=run_start,
                    end=add_days(prev, 1),
                    meta=dict(metas.get((code, project), {})),
                )
            )
            if day is not None:
                run_start = prev = day
    return out


def build_spans_from_timecards(
    timecards: Any,
    employees_by_code: Mapping[str, Mapping[str, Any]] | None = None,
) -> list[TimelineSpan]:
    """
    Назначение:
        Строит отрезки таймлайна из строк табеля.

    Входные данные:
        timecards: список строк, либо готовые отрезки (start/end) или дневные строки (work_date/punch).
        employees_by_code: справочник сотрудников по коду (ee_code).

    Выходные данные:
        list[TimelineSpan] с исключающим end.

    Поведение:
        - Строки без кода сотрудника или без даты пропускаются.
        - Отрезки склеиваются по (код, проект); дневные строки собираются в
          непрерывные серии дней.
    """
    if not isinstance(timecards, (list, tuple)):
        return []
    rows = [row for row in timecards if isinstance(row, Mapping)]
    if not rows:
        return []
    index: Mapping[str, Mapping[str, Any]] = employees_by_code if isinstance(employees_by_code, Mapping) else {}

    if _looks_like_spans(rows):
        return _spans_from_span_rows(rows, index)
    return _spans_from_daily_rows(rows, index)


def index_employees_by_code(employees: Any) -> dict[str, Mapping[str, Any]]:
    """Справочник сотрудников по коду для build_spans_from_timecards."""
    index: dict[str, Mapping[str, Any]] = {}
    if not isinstance(employees, (list, tuple)):
        return index
    for employee in employees:
        if not isinstance(employee, Mapping):
            continue
        code = employee_code_of(employee)
        if code:
            index.setdefault(code, employee)
    return index
