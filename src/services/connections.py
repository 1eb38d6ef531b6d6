# src/services/connections.py
# Жизненный цикл заявки в друзья: none -> pending -> {accepted, rejected, expired}.
# Роутер проверяет, КТО действует; здесь — что действие допустимо и что меняется в БД.

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.connection import Connection
from src.models.connection_request import ConnectionRequest
from src.utils.clock import ttl_cutoff, utc_now

log = logging.getLogger(__name__)


class SelfConnection(ValueError):
    def __init__(self):
        super().__init__("Cannot connect to yourself")


class DuplicateRequest(ValueError):
    def __init__(self):
        super().__init__("Request already sent")


class AlreadyConnected(ValueError):
    def __init__(self):
        super().__init__("Already connected")


def _pair_min_max(a: str, b: str) -> tuple[str, str]:
    return (a, b) if a < b else (b, a)


def _pending(db: Session, from_uid: str, to_uid: str, now: Optional[datetime] = None) -> Optional[ConnectionRequest]:
    """Живая (не протухшая) заявка ровно для пары (from_uid, to_uid)."""
    return (
        db.query(ConnectionRequest)
        .filter(
            ConnectionRequest.from_uid == from_uid,
            ConnectionRequest.to_uid == to_uid,
            ConnectionRequest.created_at >= ttl_cutoff(now),
        )
        .first()
    )


def are_connected(db: Session, a: str, b: str) -> bool:
    """Есть ли связь между a и b (в любом порядке)."""
    umin, umax = _pair_min_max(a, b)
    return (
        db.query(Connection.id)
        .filter(Connection.user_min == umin, Connection.user_max == umax)
        .first()
        is not None
    )


def list_connections_of(db: Session, uid: str) -> List[Connection]:
    """Все связи, где uid стоит на любой из позиций. Порядок не гарантируется."""
    return (
        db.query(Connection)
        .filter(or_(Connection.from_uid == uid, Connection.to_uid == uid))
        .all()
    )


def list_incoming_requests(db: Session, uid: str, now: Optional[datetime] = None) -> List[ConnectionRequest]:
    """Живые заявки, адресованные uid (старые первыми)."""
    return (
        db.query(ConnectionRequest)
        .filter(ConnectionRequest.to_uid == uid, ConnectionRequest.created_at >= ttl_cutoff(now))
        .order_by(ConnectionRequest.created_at.asc(), ConnectionRequest.id.asc())
        .all()
    )


def request_connection(db: Session, from_uid: str, to_uid: str, now: Optional[datetime] = None) -> ConnectionRequest:
    """
    Создать заявку from_uid -> to_uid.
      • Живая заявка на ту же упорядоченную пару -> DuplicateRequest.
      • Пара уже связана (в любом порядке) -> AlreadyConnected.
    Встречная заявка (to_uid -> from_uid) — независимая пара и не мешает.
    Уникальный индекс (from_uid, to_uid) страхует от гонки двух одинаковых запросов.
    """
    if from_uid == to_uid:
        raise SelfConnection()

    now = now or utc_now()
    if _pending(db, from_uid, to_uid, now):
        raise DuplicateRequest()
    if are_connected(db, from_uid, to_uid):
        raise AlreadyConnected()

    # Протухшая, но ещё не вычищенная строка на эту пару занимает уникальный индекс
    db.query(ConnectionRequest).filter(
        ConnectionRequest.from_uid == from_uid,
        ConnectionRequest.to_uid == to_uid,
        ConnectionRequest.created_at < ttl_cutoff(now),
    ).delete(synchronize_session=False)

    req = ConnectionRequest(from_uid=from_uid, to_uid=to_uid, created_at=now)
    db.add(req)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateRequest()
    db.refresh(req)
    log.info("connection request %s -> %s created", from_uid, to_uid)
    return req


def accept_connection(db: Session, from_uid: str, to_uid: str, now: Optional[datetime] = None) -> bool:
    """
    Принять заявку from_uid -> to_uid: создать связь и удалить заявку одной транзакцией.
    Если живой заявки нет (отклонена, принята, протухла) — ничего не делаем, связь НЕ создаём.
    Если пара уже связана — заявку просто удаляем, дубль связи не пишем.
    Возвращает True, если связь создана именно сейчас.
    """
    now = now or utc_now()
    req = _pending(db, from_uid, to_uid, now)
    if not req:
        log.info("accept %s -> %s: no pending request, nothing to do", from_uid, to_uid)
        return False

    created_now = False
    if not are_connected(db, from_uid, to_uid):
        umin, umax = _pair_min_max(from_uid, to_uid)
        db.add(Connection(
            from_uid=from_uid, to_uid=to_uid,
            user_min=umin, user_max=umax,
            created_at=now, updated_at=now,
        ))
        created_now = True
    db.delete(req)

    try:
        db.commit()
    except IntegrityError:
        # Конкурентный accept уже создал связь для этой пары — просто уберём заявку
        db.rollback()
        db.query(ConnectionRequest).filter(
            and_(ConnectionRequest.from_uid == from_uid, ConnectionRequest.to_uid == to_uid)
        ).delete(synchronize_session=False)
        db.commit()
        created_now = False

    if created_now:
        log.info("connection %s <-> %s created", from_uid, to_uid)
    return created_now


def reject_connection(db: Session, from_uid: str, to_uid: str) -> bool:
    """Удалить заявку from_uid -> to_uid. Возвращает True, если что-то было удалено."""
    deleted = (
        db.query(ConnectionRequest)
        .filter(ConnectionRequest.from_uid == from_uid, ConnectionRequest.to_uid == to_uid)
        .delete(synchronize_session=False)
    )
    db.commit()
    return bool(deleted)
