from __future__ import annotations

import uuid
from datetime import datetime, timezone


def generate_run_id(now: datetime | None = None) -> str:
    """
    Назначение:
        run_id вида 20261019T120000Z-1a2b3c4d: лог-файлы cat_<run_id>.log
        сортируются по времени запуска.
    """
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return f"{moment:%Y%m%dT%H%M%SZ}-{uuid.uuid4().hex[:8]}"
