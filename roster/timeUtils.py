from __future__ import annotations

from datetime import datetime


def getNowIso() -> str:
    """
    Назначение:
        Текущее локальное время в ISO 8601 с timezone (для отчётов).
    """
    return datetime.now().astimezone().isoformat()


def getDurationMs(startMonotonic: float, endMonotonic: float) -> int:
    """Длительность в миллисекундах по monotonic timestamps."""
    return int((endMonotonic - startMonotonic) * 1000)
