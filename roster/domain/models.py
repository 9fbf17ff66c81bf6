from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from roster.common.dates import to_iso


@dataclass(frozen=True)
class Assignment:
    """
    Назначение:
        Отрезок работы сотрудника на проекте для отрисовки на таймлайне.

    Инварианты:
        - start и end всегда валидные datetime.
        - project непустая строка.
    """

    employee: str
    employee_id: str | None
    start: datetime
    end: datetime
    project: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee": self.employee,
            "employeeId": self.employee_id,
            "start": to_iso(self.start),
            "end": to_iso(self.end),
            "project": self.project,
        }


@dataclass(frozen=True)
class PhoneChannel:
    """
    Назначение:
        Отображаемый телефон и ссылка tel: для звонка (или None).
    """

    text: str
    href: str | None

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "href": self.href}


@dataclass(frozen=True)
class TimelineSpan:
    """
    Назначение:
        Отрезок таймлайна, собранный из строк табеля. end не включается.
    """

    employee: str
    employee_id: str | None
    employee_code: str
    project: str
    start: datetime
    end: datetime
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee": self.employee,
            "employeeId": self.employee_id,
            "employeeCode": self.employee_code,
            "project": self.project,
            "start": to_iso(self.start),
            "end": to_iso(self.end),
            "meta": dict(self.meta),
        }


@dataclass(frozen=True)
class Overlap:
    """
    Назначение:
        Пара пересекающихся назначений одного сотрудника.
    """

    employee: str
    a: Any
    b: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee": self.employee,
            "a": self.a.to_dict() if hasattr(self.a, "to_dict") else self.a,
            "b": self.b.to_dict() if hasattr(self.b, "to_dict") else self.b,
        }
