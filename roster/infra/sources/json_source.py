from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from roster.errors import CATEGORY_SOURCE, AppError

ENVELOPE_KEYS: tuple[str, ...] = ("content", "items", "data", "records")


class SourceFormatError(AppError):
    def __init__(self, message: str, path: str | None = None, code: str = "INVALID_SOURCE"):
        """
        Назначение:
            Ошибка чтения входного JSON-файла (нет файла, битый JSON).
        """
        super().__init__(
            category=CATEGORY_SOURCE,
            code=code,
            message=message,
            retryable=False,
            details={"path": path} if path else {},
        )
        self.path = path


def read_json_file(path: str) -> Any:
    """
    Назначение:
        Читает JSON-файл с выгрузкой сотрудников/табелей.

    Поведение:
        - Нет файла -> SourceFormatError(code=SOURCE_NOT_FOUND).
        - Некорректный JSON -> SourceFormatError(code=INVALID_JSON).
    """
    p = Path(path)
    if not p.exists() or not p.is_file():
        raise SourceFormatError(f"Input file not found: {path}", path=path, code="SOURCE_NOT_FOUND")
    try:
        with p.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise SourceFormatError(
            f"Invalid JSON in {path}: line {exc.lineno} col {exc.colno}",
            path=path,
            code="INVALID_JSON",
        ) from exc


def as_record_list(payload: Any) -> list[Mapping[str, Any]]:
    """
    Назначение:
        Приводит ответ API/файла к списку записей.

    Контракт:
        - list -> только элементы-словари.
        - dict с конвертом (content/items/data/records) -> содержимое конверта.
        - Иначе -> [].
    """
    if isinstance(payload, Mapping):
        for key in ENVELOPE_KEYS:
            inner = payload.get(key)
            if isinstance(inner, list):
                payload = inner
                break
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, Mapping)]


def as_record(payload: Any) -> Mapping[str, Any]:
    """Одна запись (строка табеля); не-словарь превращается в пустую запись."""
    if isinstance(payload, Mapping):
        return payload
    return {}
