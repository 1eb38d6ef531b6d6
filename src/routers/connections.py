# src/routers/connections.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from src.db import get_db
from src.schemas.connection import ConnectionOut, ConnectionPair, ConnectionRequestOut
from src.services.connections import (
    AlreadyConnected,
    DuplicateRequest,
    SelfConnection,
    accept_connection,
    list_connections_of,
    list_incoming_requests,
    reject_connection,
    request_connection,
)
from src.utils.access import ensure_subject
from src.utils.firebase_auth import get_current_uid

router = APIRouter()


def _require_pair(body: ConnectionPair) -> None:
    if not body.from_uid or not body.to_uid:
        raise HTTPException(400, detail="Missing from or to")


@router.post("/request", response_model=ConnectionRequestOut)
def send_request(
    body: ConnectionPair,
    db: Session = Depends(get_db),
    current_uid: str = Depends(get_current_uid),
):
    """Отправить заявку. Отправлять можно только от своего имени."""
    _require_pair(body)
    ensure_subject(current_uid, body.from_uid)
    try:
        return request_connection(db, body.from_uid, body.to_uid)
    except (DuplicateRequest, AlreadyConnected) as e:
        raise HTTPException(409, detail=str(e))
    except SelfConnection as e:
        raise HTTPException(400, detail=str(e))


@router.post("/accept", response_model=dict)
def accept_request(
    body: ConnectionPair,
    db: Session = Depends(get_db),
    current_uid: str = Depends(get_current_uid),
):
    """
    Принять заявку. Принимает только адресат (to).
    Если заявки уже нет — успех без изменений (created=false).
    """
    _require_pair(body)
    ensure_subject(current_uid, body.to_uid)
    created = accept_connection(db, body.from_uid, body.to_uid)
    return {"success": True, "created": created}


@router.post("/reject", response_model=dict)
def reject_request(
    body: ConnectionPair,
    db: Session = Depends(get_db),
    current_uid: str = Depends(get_current_uid),
):
    """Отклонить заявку. Отклоняет только адресат (to)."""
    _require_pair(body)
    ensure_subject(current_uid, body.to_uid)
    reject_connection(db, body.from_uid, body.to_uid)
    return {"success": True}


@router.get("/requests/{uid}", response_model=List[ConnectionRequestOut])
def get_incoming_requests(
    uid: str,
    db: Session = Depends(get_db),
    current_uid: str = Depends(get_current_uid),
):
    """Входящие живые заявки (только свои)."""
    ensure_subject(current_uid, uid)
    return list_incoming_requests(db, uid)


@router.get("/{uid}", response_model=List[ConnectionOut])
def get_connections(
    uid: str,
    db: Session = Depends(get_db),
    current_uid: str = Depends(get_current_uid),
):
    """Все связи пользователя (только свои). uid может быть и fromUid, и toUid."""
    ensure_subject(current_uid, uid)
    return list_connections_of(db, uid)
