# src/utils/firebase_auth.py
"""
Авторизация через Firebase ID token.
- verify_firebase_token: проверка токена через firebase-admin, возвращает uid
- get_token_verifier: FastAPI-зависимость, отдаёт функцию проверки (подменяется в тестах)
- get_current_uid: FastAPI-зависимость для защищённых ручек (Authorization: Bearer <token>)
"""

import base64
import json
import logging
import os
import threading
from typing import Callable, Optional

import firebase_admin
from dotenv import load_dotenv
from fastapi import Depends, Header, HTTPException
from firebase_admin import auth, credentials

load_dotenv()
log = logging.getLogger(__name__)

_init_lock = threading.Lock()


class InvalidToken(Exception):
    """Токен не прошёл проверку у провайдера (подпись, срок, отзыв)."""


def load_service_account(encoded: Optional[str] = None) -> dict:
    """
    Сервисный аккаунт Firebase хранится в env как base64 от JSON-файла.
    """
    raw = encoded if encoded is not None else os.environ.get("FIREBASE_SERVICE_ACCOUNT_BASE64")
    if not raw:
        raise RuntimeError("FIREBASE_SERVICE_ACCOUNT_BASE64 is not set")
    return json.loads(base64.b64decode(raw).decode("utf-8"))


def _firebase_app() -> firebase_admin.App:
    """Инициализируем приложение Firebase один раз, при первой проверке токена."""
    with _init_lock:
        try:
            return firebase_admin.get_app()
        except ValueError:
            cred = credentials.Certificate(load_service_account())
            return firebase_admin.initialize_app(cred)


def verify_firebase_token(token: str) -> str:
    """Проверяет ID token и возвращает uid пользователя."""
    try:
        decoded = auth.verify_id_token(token, app=_firebase_app())
    except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError,
            auth.RevokedIdTokenError, auth.CertificateFetchError) as e:
        raise InvalidToken(str(e)) from e
    uid = decoded.get("uid")
    if not uid:
        raise InvalidToken("Token has no uid")
    return uid


def get_token_verifier() -> Callable[[str], str]:
    return verify_firebase_token


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Достаём токен из 'Authorization: Bearer <token>'."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_uid(
    authorization: Optional[str] = Header(None),
    verify: Callable[[str], str] = Depends(get_token_verifier),
) -> str:
    """
    Зависимость для защищённых ручек:
    - достаёт bearer-токен
    - проверяет его у Firebase
    - возвращает uid (проверка «чей это ресурс» — уже в роутере)
    Синхронная: FastAPI выполняет её в threadpool, проверка подписи не блокирует event loop.
    """
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="No token provided")

    try:
        return verify(token)
    except InvalidToken as e:
        log.info("token rejected: %s", e)
        raise HTTPException(status_code=401, detail="Invalid or expired token")
