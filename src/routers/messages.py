# src/routers/messages.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from src.db import get_db
from src.schemas.message import MessageIn, MessageOut
from src.services.messages import EmptyMessage, list_conversation, send_message
from src.utils.access import ensure_subject
from src.utils.firebase_auth import get_current_uid

router = APIRouter()


@router.post("/send", response_model=MessageOut)
def send(
    body: MessageIn,
    db: Session = Depends(get_db),
    current_uid: str = Depends(get_current_uid),
):
    if not body.from_uid or not body.to_uid or not body.text:
        raise HTTPException(400, detail="Missing from, to, or text")
    ensure_subject(current_uid, body.from_uid)
    try:
        return send_message(db, body.from_uid, body.to_uid, body.text)
    except EmptyMessage as e:
        raise HTTPException(400, detail=str(e))


@router.get("/{uid1}/{uid2}", response_model=List[MessageOut])
def get_conversation(
    uid1: str,
    uid2: str,
    db: Session = Depends(get_db),
    current_uid: str = Depends(get_current_uid),
):
    """
    Переписка двух пользователей. Читать может только участник пары.
    """
    ensure_subject(current_uid, uid1, uid2)
    return list_conversation(db, uid1, uid2)
