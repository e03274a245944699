from __future__ import annotations

from datetime import datetime, timezone


def getUtcNowIso() -> str:
    """
    Назначение:
        Возвращает текущее время в UTC ISO 8601.

    Выходные данные:
        str
            Например: 2026-01-11T17:22:10+00:00
    """
    return datetime.now(timezone.utc).isoformat()


def getDurationMs(startMonotonic: float, endMonotonic: float) -> int:
    """
    Назначение:
        Считает длительность в миллисекундах по monotonic timestamps.
    """
    return int((endMonotonic - startMonotonic) * 1000)
