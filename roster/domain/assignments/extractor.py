from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Sequence

from roster.common.dates import parse_loose_date
from roster.common.fields import first_defined, first_filled, first_truthy, join_present, to_text
from roster.domain import aliases
from roster.domain.models import Assignment

NAME_PLACEHOLDER = "—"


def resolve_employee_name(employee: Mapping[str, Any]) -> str:
    """
    Назначение:
        Отображаемое имя сотрудника.

    Алгоритм:
        - Первое непустое из employeename / employee_name / name.
        - Иначе "<first> <last>" из firstName/lastName (пустые части пропускаются).
        - Иначе плейсхолдер "—".
    """
    name = first_filled(employee, aliases.EMPLOYEE_NAME_KEYS)
    if name is not None:
        return to_text(name)
    first = first_filled(employee, aliases.FIRST_NAME_KEYS)
    last = first_filled(employee, aliases.LAST_NAME_KEYS)
    combo = join_present((first, last), " ")
    return combo or NAME_PLACEHOLDER


def resolve_employee_id(employee: Mapping[str, Any]) -> str | None:
    value = first_defined(employee, aliases.EMPLOYEE_ID_KEYS)
    if value is None:
        return None
    return to_text(value)


def _inline_assignment(employee: Mapping[str, Any], name: str, employee_id: str | None) -> Assignment | None:
    project = employee.get(aliases.INLINE_PROJECT_KEY)
    if not project:
        return None
    if not any(employee.get(key) for key in aliases.INLINE_START_KEYS):
        return None

    start = parse_loose_date(first_truthy(employee, aliases.INLINE_START_KEYS))
    if start is None:
        return None
    end = parse_loose_date(first_truthy(employee, aliases.INLINE_END_KEYS)) or start
    return Assignment(employee=name, employee_id=employee_id, start=start, end=end, project=to_text(project))


def _history_entries(employee: Mapping[str, Any]) -> Sequence[Any]:
    for key in aliases.HISTORY_KEYS:
        value = employee.get(key)
        if isinstance(value, (list, tuple)):
            return value
    return []


def _history_assignment(entry: Any, name: str, employee_id: str | None) -> Assignment | None:
    if not isinstance(entry, Mapping):
        return None
    start = parse_loose_date(first_defined(entry, aliases.HISTORY_START_KEYS))
    end = parse_loose_date(first_defined(entry, aliases.HISTORY_END_KEYS))
    project = first_defined(entry, aliases.HISTORY_PROJECT_KEYS)
    if start is None or end is None or project is None:
        return None
    project_text = to_text(project)
    if not project_text:
        return None
    return Assignment(employee=name, employee_id=employee_id, start=start, end=end, project=project_text)


def extract_assignments(employees: Iterable[Any] | None) -> list[Assignment]:
    """
    Назначение:
        Собирает плоский список назначений для Gantt из записей сотрудников.

    Входные данные:
        employees: список записей (dict). Не-список трактуется как пустой,
        не-dict элементы пропускаются.

    Выходные данные:
        list[Assignment] в порядке записей, затем в порядке истории внутри записи.

    Поведение:
        - Запись может дать и inline-назначение, и назначения из истории.
        - Некорректные элементы молча отбрасываются, исключения не бросаются.
    """
    if not isinstance(employees, (list, tuple)):
        return []

    out: list[Assignment] = []
    for employee in employees:
        if not isinstance(employee, Mapping):
            continue
        name = resolve_employee_name(employee)
        employee_id = resolve_employee_id(employee)

        inline = _inline_assignment(employee, name, employee_id)
        if inline is not None:
            out.append(inline)

        for entry in _history_entries(employee):
            assignment = _history_assignment(entry, name, employee_id)
            if assignment is not None:
                out.append(assignment)
    return out


def sort_by_start(assignments: Iterable[Assignment]) -> list[Assignment]:
    """Стабильная сортировка по дате начала (для потребителей таймлайна)."""
    return sorted(assignments, key=lambda item: item.start)
