from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

# Where a run failed; also the "category" field of report errors.
CATEGORY_INPUT = "input"
CATEGORY_SOURCE = "source"
CATEGORY_API = "api"


@dataclass
class AppError(Exception):
    """
    Назначение:
        Ошибка на границе получения данных: CLI-ввод, JSON-файл, HTTP API.

    Контракт:
        - Ядро нормализации (extractor, project key, phone) AppError не бросает:
          плохие записи пропускаются или получают плейсхолдер.
        - CLI превращает AppError в код выхода 1 и запись в отчёте
          (category/code/message).
    """

    category: str
    code: str
    message: str
    retryable: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details or {},
        }


__all__ = ["AppError", "CATEGORY_API", "CATEGORY_INPUT", "CATEGORY_SOURCE"]
