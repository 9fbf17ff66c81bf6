from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from roster.common.fields import first_truthy, join_present, to_text
from roster.domain import aliases

UNKNOWN_PROJECT = "Unknown"
PART_SEPARATOR = " • "
SIDE_SEPARATOR = " – "
HOME_PART_SEPARATOR = " / "

ProjectKeyBuilder = Callable[[Mapping[str, Any]], "str | None"]


@dataclass(frozen=True)
class ProjectKeyTier:
    """
    Назначение:
        Один уровень политики выбора ключа проекта.

    Контракт:
        - build(row) -> str, если уровень сработал, иначе None.
    """

    name: str
    build: ProjectKeyBuilder


def _distributed_job(row: Mapping[str, Any]) -> str | None:
    job = first_truthy(row, aliases.DIST_JOB_KEYS)
    activity = first_truthy(row, aliases.DIST_ACTIVITY_KEYS)
    if not (job or activity):
        return None
    # 220145 • Structural – 0310 • Rebar
    left = join_present((job, first_truthy(row, aliases.DIST_JOB_DESC_KEYS)), PART_SEPARATOR)
    right = join_present((activity, first_truthy(row, aliases.DIST_ACTIVITY_DESC_KEYS)), PART_SEPARATOR)
    return join_present((left, right), SIDE_SEPARATOR)


def _provided_home_allocation(row: Mapping[str, Any]) -> str | None:
    value = first_truthy(row, aliases.HOME_ALLOCATION_KEYS)
    if not value:
        return None
    return to_text(value)


def _synthesized_home_allocation(row: Mapping[str, Any]) -> str | None:
    parts = [first_truthy(row, keys) for keys in aliases.HOME_ALLOCATION_PART_KEYS]
    if not any(parts):
        return None
    return join_present(parts, HOME_PART_SEPARATOR)


def _allocation_code(row: Mapping[str, Any]) -> str | None:
    value = first_truthy(row, aliases.ALLOCATION_CODE_KEYS)
    if not value:
        return None
    return to_text(value)


PROJECT_KEY_TIERS: tuple[ProjectKeyTier, ...] = (
    ProjectKeyTier("distributed", _distributed_job),
    ProjectKeyTier("home_allocation", _provided_home_allocation),
    ProjectKeyTier("home_parts", _synthesized_home_allocation),
    ProjectKeyTier("allocation_code", _allocation_code),
)


def explain_project_key(row: Mapping[str, Any] | None = None) -> tuple[str, str]:
    """
    Назначение:
        Вычисляет ключ проекта и имя сработавшего уровня.

    Выходные данные:
        (tier_name, key); при отсутствии данных ("fallback", "Unknown").
    """
    values: Mapping[str, Any] = row if isinstance(row, Mapping) else {}
    for tier in PROJECT_KEY_TIERS:
        key = tier.build(values)
        if key is not None:
            return tier.name, key
    return "fallback", UNKNOWN_PROJECT


def resolve_project_key(row: Mapping[str, Any] | None = None) -> str:
    """
    Назначение:
        Канонический читаемый ключ проекта для строки табеля.

    Алгоритм (первый сработавший уровень побеждает):
        1) Distributed job/activity: "<job> • <desc> – <activity> • <desc>".
        2) Готовая home allocation строкой.
        3) Home allocation из частей dept/job/section/activity/access/sub-dept через " / ".
        4) Allocation code.
        5) "Unknown".
    """
    return explain_project_key(row)[1]
