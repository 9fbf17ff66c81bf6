from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from roster.domain.models import Overlap


def find_overlaps(assignments: Iterable[Any] | None) -> list[Overlap]:
    """
    Назначение:
        Находит пересекающиеся назначения одного сотрудника.

    Входные данные:
        assignments: объекты с полями employee/start/end (Assignment, TimelineSpan).

    Выходные данные:
        list[Overlap], пары (a, b) где a.start < b.end и b.start < a.end.

    Поведение:
        - Элементы без валидных start/end игнорируются.
        - Внутри сотрудника элементы упорядочены по start.
    """
    by_employee: dict[str, list[Any]] = {}
    for item in assignments or ():
        start = getattr(item, "start", None)
        end = getattr(item, "end", None)
        if not isinstance(start, datetime) or not isinstance(end, datetime):
            continue
        by_employee.setdefault(item.employee, []).append(item)

    overlaps: list[Overlap] = []
    for employee, items in by_employee.items():
        items.sort(key=lambda item: item.start)
        for i, a in enumerate(items):
            for b in items[i + 1:]:
                # sorted by start: nothing further can overlap a
                if a.end <= b.start:
                    break
                if a.start < b.end and b.start < a.end:
                    overlaps.append(Overlap(employee=employee, a=a, b=b))
    return overlaps
