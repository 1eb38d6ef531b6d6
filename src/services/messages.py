# src/services/messages.py
from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from src.models.message import Message
from src.utils.clock import ttl_cutoff, utc_now


class EmptyMessage(ValueError):
    def __init__(self):
        super().__init__("Message text is empty")


def send_message(db: Session, from_uid: str, to_uid: str, text: str, now: Optional[datetime] = None) -> Message:
    """
    Записать сообщение from_uid -> to_uid.
    Наличие связи между пользователями НЕ проверяется: писать можно любому.
    """
    if not text or not text.strip():
        raise EmptyMessage()
    msg = Message(from_uid=from_uid, to_uid=to_uid, text=text, created_at=now or utc_now())
    db.add(msg)
    db.commit()
    db.refresh(msg)
    return msg


def list_conversation(db: Session, uid_a: str, uid_b: str, now: Optional[datetime] = None) -> List[Message]:
    """Переписка пары в обе стороны, по возрастанию времени; протухшие сообщения не попадают."""
    return (
        db.query(Message)
        .filter(
            or_(
                and_(Message.from_uid == uid_a, Message.to_uid == uid_b),
                and_(Message.from_uid == uid_b, Message.to_uid == uid_a),
            ),
            Message.created_at >= ttl_cutoff(now),
        )
        .order_by(Message.created_at.asc(), Message.id.asc())
        .all()
    )
