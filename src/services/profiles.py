# src/services/profiles.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from src.models.user import User
from src.schemas.user import ProfileUpdate
from src.utils.clock import utc_now

log = logging.getLogger(__name__)

# Лимит размера профиля в сериализованном виде (байты UTF-8)
PROFILE_SIZE_LIMIT = 100 * 1024
PROFILE_TOO_LARGE = "Profile data exceeds 100KB limit."


class ProfileTooLarge(ValueError):
    """Профиль (или присланный payload) больше PROFILE_SIZE_LIMIT."""

    def __init__(self, size: int):
        super().__init__(PROFILE_TOO_LARGE)
        self.size = size


def payload_size(data: Any) -> int:
    """Размер компактного JSON в байтах UTF-8 (как JSON.stringify на фронте)."""
    return len(json.dumps(data, default=str, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))


def ensure_within_limit(data: Any) -> None:
    size = payload_size(data)
    if size > PROFILE_SIZE_LIMIT:
        raise ProfileTooLarge(size)


# Служебные поля ставит сервер — в лимит профиля они не входят
_SERVER_FIELDS = {"uid", "created_at", "updated_at"}


def _as_document(user: User) -> Dict[str, Any]:
    """
    Содержимое профиля в том виде, в каком его прислал бы фронт: camelCase-ключи,
    без служебных полей и без пустых значений (None, [], False).
    Именно это и проверяем на лимит перед сохранением.
    """
    doc = {}
    for c in User.__table__.columns:
        if c.name in _SERVER_FIELDS:
            continue
        value = getattr(user, c.name)
        if value is None or value is False or value == []:
            continue
        doc[to_camel(c.name)] = value
    return doc


def get_profile(db: Session, uid: str) -> Optional[User]:
    return db.get(User, uid)


def ensure_user(
    db: Session,
    uid: str,
    *,
    name: Optional[str] = None,
    email: Optional[str] = None,
    photo_url: Optional[str] = None,
) -> User:
    """
    Находит пользователя по uid, а если его нет — создаёт (первый вход через Firebase).
    Существующую запись не трогает.
    """
    user = db.get(User, uid)
    if user:
        return user

    now = utc_now()
    user = User(
        uid=uid,
        name=name,
        email=email,
        photo_url=photo_url,
        skills=[], interests=[],
        resume_files=[], project_files=[], certification_files=[],
        completed_profile=False,
        created_at=now, updated_at=now,
    )
    ensure_within_limit(_as_document(user))
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("user %s created on first login", uid)
    return user


def upsert_profile(db: Session, uid: str, payload: Dict[str, Any]) -> User:
    """
    Создать или обновить профиль uid.
      • Payload больше 100KB отклоняется целиком (ProfileTooLarge).
      • _id/uid из payload игнорируются: ключ записи всегда uid из пути.
      • Применяются только переданные поля; остальное остаётся как было.
    Размер итоговой записи проверяется ещё раз перед commit.
    Ошибки валидации pydantic (неверные типы полей) пробрасываются наверх.
    """
    ensure_within_limit(payload)

    clean = {k: v for k, v in payload.items() if k not in ("_id", "uid")}
    changes = ProfileUpdate.model_validate(clean).model_dump(exclude_unset=True)

    user = db.get(User, uid)
    now = utc_now()
    if not user:
        user = User(
            uid=uid,
            skills=[], interests=[],
            resume_files=[], project_files=[], certification_files=[],
            completed_profile=False,
            created_at=now,
        )
        db.add(user)

    for field, value in changes.items():
        if value is None and field in ("skills", "interests", "resume_files", "project_files", "certification_files"):
            value = []
        if value is None and field == "completed_profile":
            value = False
        setattr(user, field, value)
    user.uid = uid
    user.updated_at = now

    try:
        ensure_within_limit(_as_document(user))
    except ProfileTooLarge:
        db.rollback()
        raise

    db.commit()
    db.refresh(user)
    return user


def list_user_summaries(db: Session) -> List[User]:
    """Все пользователи для общего списка (проекцию делает схема UserSummaryOut)."""
    return db.query(User).order_by(User.created_at.asc(), User.uid.asc()).all()
