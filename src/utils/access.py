# src/utils/access.py
import logging

from fastapi import HTTPException

log = logging.getLogger(__name__)


def ensure_subject(current_uid: str, *allowed: str) -> None:
    """
    Пускаем, только если uid из токена совпадает с одним из разрешённых
    (владелец профиля, отправитель, получатель заявки и т.п.). Иначе — 403.
    """
    if current_uid not in allowed:
        log.warning("access denied: subject %s, allowed %s", current_uid, allowed)
        raise HTTPException(status_code=403, detail="Unauthorized access")
