from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

_KEY_NOISE_RE = re.compile(r"[\s_\-]")


def is_blank(value: Any) -> bool:
    """
    Назначение:
        Проверяет, что значение отсутствует или состоит только из пробелов.
    """
    if value is None:
        return True
    return str(value).strip() == ""


def first_defined(record: Mapping[str, Any] | None, keys: Iterable[str]) -> Any:
    """
    Назначение:
        Возвращает значение первого ключа, который присутствует и не равен None.

    Контракт:
        - Falsy-значения (0, "", False) считаются присутствующими.
        - Если ни один ключ не найден, возвращает None.
    """
    if not record:
        return None
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def first_truthy(record: Mapping[str, Any] | None, keys: Iterable[str]) -> Any:
    """
    Назначение:
        Возвращает первое истинное значение среди ключей-синонимов.
    """
    if not record:
        return None
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def first_filled(record: Mapping[str, Any] | None, keys: Iterable[str]) -> Any:
    """
    Назначение:
        Возвращает первое непустое значение (не None и не строка из пробелов).
    """
    if not record:
        return None
    for key in keys:
        value = record.get(key)
        if not is_blank(value):
            return value
    return None


def normalize_key(key: Any) -> str:
    return _KEY_NOISE_RE.sub("", str(key)).lower()


def lookup_ci(record: Mapping[str, Any] | None, *candidates: str) -> Any:
    """
    Назначение:
        Регистронезависимый поиск значения по списку ключей-кандидатов.

    Алгоритм:
        - Сначала прямой доступ по каждому кандидату.
        - Затем поиск по нормализованным ключам: без пробелов, '_' и '-',
          в нижнем регистре ("First name" == "first_name" == "firstName").
        - Пустые значения пропускаются.
    """
    if not record:
        return None
    for candidate in candidates:
        value = record.get(candidate)
        if not is_blank(value):
            return value

    index: dict[str, str] = {}
    for key in record.keys():
        index.setdefault(normalize_key(key), key)

    for candidate in candidates:
        original = index.get(normalize_key(candidate))
        if original is None:
            continue
        value = record.get(original)
        if not is_blank(value):
            return value
    return None


def to_text(value: Any) -> str:
    """
    Назначение:
        Приводит скалярное значение к строке для отображения.

    Контракт:
        - None -> "".
        - bool -> "true"/"false".
        - Целочисленный float (3.0) -> "3".
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def join_present(parts: Iterable[Any], separator: str) -> str:
    """Склеивает непустые части через separator."""
    return separator.join(to_text(part) for part in parts if part)
