# src/jobs/expire_records.py
# ОЧИСТКА ПРОТУХШИХ ЗАЯВОК В ДРУЗЬЯ И СООБЩЕНИЙ
# -----------------------------------------------------------------------------
# Заявки и сообщения живут сутки (RECORD_TTL) от своего created_at.
# Чтения и так не видят протухшие строки (фильтр по created_at), этот модуль
# физически удаляет их из БД.
#
# Как запускать:
#   Одноразово:
#       >>> from src.jobs.expire_records import purge_expired_once
#       >>> purge_expired_once()
#
#   Фоном (на startup FastAPI, см. src/main.py):
#       >>> from src.jobs.expire_records import start_expiry_loop
#       Интервал — EXPIRY_SWEEP_INTERVAL_SECONDS (по умолчанию 300).

from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from src.db import SessionLocal  # создаёт новую сессию БД
from src.models.connection_request import ConnectionRequest
from src.models.message import Message
from src.utils.clock import ttl_cutoff

log = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 300


def _purge(db: Session, cutoff: datetime) -> dict:
    requests_deleted = db.execute(
        delete(ConnectionRequest).where(ConnectionRequest.created_at < cutoff)
    ).rowcount
    messages_deleted = db.execute(
        delete(Message).where(Message.created_at < cutoff)
    ).rowcount
    db.commit()
    return {
        "requests_deleted": requests_deleted or 0,
        "messages_deleted": messages_deleted or 0,
    }


def purge_expired_once(db: Optional[Session] = None, now: Optional[datetime] = None) -> dict:
    """
    Один прогон: удаляет заявки и сообщения старше суток, возвращает сводку.
    Если сессия не передана — открывает свою.
    """
    cutoff = ttl_cutoff(now)
    if db is not None:
        summary = _purge(db, cutoff)
    else:
        with SessionLocal() as own:
            summary = _purge(own, cutoff)

    log.info("expiry sweep summary: %s", summary)
    return summary


def _interval_seconds() -> int:
    raw = os.getenv("EXPIRY_SWEEP_INTERVAL_SECONDS")
    try:
        value = int(raw) if raw else DEFAULT_INTERVAL_SECONDS
    except ValueError:
        log.warning("bad EXPIRY_SWEEP_INTERVAL_SECONDS=%r, using %s", raw, DEFAULT_INTERVAL_SECONDS)
        return DEFAULT_INTERVAL_SECONDS
    return max(value, 1)


async def _loop_forever(interval: int) -> None:
    """
    Бесконечный цикл: ждём interval секунд, чистим, при ошибке — логируем и продолжаем.
    """
    while True:
        try:
            await asyncio.sleep(interval)
            purge_expired_once()
        except Exception:
            log.exception("expiry sweep iteration failed")


def start_expiry_loop() -> Optional[asyncio.Task]:
    """
    Запускает фоновую очистку в текущем asyncio-цикле.
    Вызывается из FastAPI @app.on_event('startup').
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        # Нет активного event loop (например, скрипт) — ничего не делаем
        return None
    return loop.create_task(_loop_forever(_interval_seconds()))
