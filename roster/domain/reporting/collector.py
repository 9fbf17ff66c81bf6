from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from roster.timeUtils import getNowIso


@dataclass
class ReportMeta:
    """
    Назначение:
        Метаданные запуска команды.
    """

    run_id: str
    command: str
    started_at: str
    input: str | None = None
    finished_at: str | None = None
    duration_ms: int | None = None


@dataclass
class ReportError:
    category: str
    code: str
    message: str


class ReportCollector:
    """
    Назначение/ответственность:
        Сборщик отчёта о запуске: счётчики операций, контекст, ошибки границы.
    """

    def __init__(self, run_id: str, command: str, started_at: str | None = None) -> None:
        self.meta = ReportMeta(run_id=run_id, command=command, started_at=started_at or getNowIso())
        self.ops: dict[str, dict[str, int]] = {}
        self.context: dict[str, Any] = {}
        self.errors: list[ReportError] = []
        self.status: str | None = None

    def set_context(self, name: str, value: dict[str, Any]) -> None:
        self.context[name] = value

    def add_op(self, name: str, *, count_in: int = 0, count_out: int = 0) -> None:
        entry = self.ops.setdefault(name, {"in": 0, "out": 0})
        entry["in"] += count_in
        entry["out"] += count_out

    def add_error(self, category: str, code: str, message: str) -> None:
        self.errors.append(ReportError(category=category, code=code, message=message))

    def finish(self, finished_at: str | None = None, duration_ms: int | None = None) -> None:
        self.meta.finished_at = finished_at or getNowIso()
        self.meta.duration_ms = duration_ms
        if self.status is None:
            self.status = "FAILED" if self.errors else "SUCCESS"

    def build(self) -> dict[str, Any]:
        return {
            "status": self.status or ("FAILED" if self.errors else "SUCCESS"),
            "meta": asdict(self.meta),
            "ops": {name: dict(counts) for name, counts in self.ops.items()},
            "errors": [asdict(error) for error in self.errors],
            "context": self.context,
        }
