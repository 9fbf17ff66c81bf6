from __future__ import annotations

import uuid
from datetime import datetime, timezone


def generate_run_id(now: datetime | None = None) -> str:
    """
    Назначение:
        run_id запуска команды: UTC-метка времени и короткий случайный суффикс,
        например "20240131T101500Z-3f2a9c1b".

    Контракт:
        - run_id входит в имена лог-файла и отчёта, поэтому состоит только
          из [0-9A-Za-z-] и сортируется по времени запуска.
    """
    stamp = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return f"{stamp:%Y%m%dT%H%M%SZ}-{uuid.uuid4().hex[:8]}"
