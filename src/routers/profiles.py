# src/routers/profiles.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session

from src.db import get_db
from src.schemas.user import UserOut
from src.services.profiles import ProfileTooLarge, get_profile, upsert_profile
from src.utils.access import ensure_subject
from src.utils.firebase_auth import get_current_uid

router = APIRouter()


@router.get("/{uid}", response_model=UserOut)
def get_own_profile(
    uid: str,
    db: Session = Depends(get_db),
    current_uid: str = Depends(get_current_uid),
):
    """Свой профиль целиком (чужой — 403)."""
    ensure_subject(current_uid, uid)
    user = get_profile(db, uid)
    if not user:
        raise HTTPException(404, detail="User not found")
    return user


@router.get("/{uid}/public", response_model=UserOut)
def get_public_profile(
    uid: str,
    db: Session = Depends(get_db),
    _current_uid: str = Depends(get_current_uid),
):
    """
    Профиль любого пользователя только на чтение.
    Нужна авторизация, но проверки владельца нет.
    """
    user = get_profile(db, uid)
    if not user:
        raise HTTPException(404, detail="User not found")
    return user


@router.post("/{uid}", response_model=UserOut)
def save_profile(
    uid: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_uid: str = Depends(get_current_uid),
):
    """Создать или обновить свой профиль (частичное обновление, лимит 100KB)."""
    ensure_subject(current_uid, uid)
    try:
        return upsert_profile(db, uid, payload)
    except ProfileTooLarge as e:
        raise HTTPException(400, detail=str(e))
    except ValidationError as e:
        raise HTTPException(400, detail=f"Invalid profile data: {e.errors()[0]['msg']}")
