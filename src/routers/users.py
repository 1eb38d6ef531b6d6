# src/routers/users.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from src.db import get_db
from src.schemas.user import UserCreate, UserOut, UserSummaryOut
from src.services.profiles import ProfileTooLarge, ensure_user, list_user_summaries
from src.utils.access import ensure_subject
from src.utils.firebase_auth import get_current_uid

router = APIRouter()


@router.post("/user", response_model=UserOut)
def create_user(
    body: UserCreate,
    db: Session = Depends(get_db),
    current_uid: str = Depends(get_current_uid),
):
    """
    Вызывается фронтом при каждом входе: создаёт пользователя, если его ещё нет.
    Создать можно только себя (uid в теле == uid из токена).
    """
    ensure_subject(current_uid, body.uid)
    try:
        return ensure_user(db, body.uid, name=body.name, email=body.email, photo_url=body.photo_url)
    except ProfileTooLarge as e:
        raise HTTPException(400, detail=str(e))


@router.get("/users", response_model=List[UserSummaryOut])
def get_all_users(db: Session = Depends(get_db)):
    """
    Публичный список пользователей (без авторизации), только короткие карточки.
    """
    return list_user_summaries(db)
