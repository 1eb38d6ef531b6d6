# src/utils/clock.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

# Сколько живут заявки в друзья и сообщения (как TTL-индекс в исходной Mongo-схеме)
RECORD_TTL = timedelta(seconds=86400)


def utc_now() -> datetime:
    """Текущее время в UTC без tzinfo — так время лежит в колонках DateTime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def ttl_cutoff(now: datetime | None = None) -> datetime:
    """Всё, что создано раньше этой отметки (возраст больше TTL), считается протухшим."""
    return (now or utc_now()) - RECORD_TTL
