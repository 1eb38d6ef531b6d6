# src/main.py
# Главная точка входа FastAPI для StudLyf.
#  • Роутеры: /api/user(s), /api/profile, /api/connections, /api/messages
#  • Служебные ручки: /api, /api/root, /api/health
#  • Ошибки отдаются как {"error": "..."} с нужным HTTP-статусом
#  • Фоновая очистка протухших заявок/сообщений (ENV: EXPIRY_SWEEP_ENABLED=0 — выключить)

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from dotenv import load_dotenv
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

from src.db import engine  # noqa: E402,F401  инициализация БД/пула соединений

from src.routers.users import router as users_router  # noqa: E402
from src.routers.profiles import router as profiles_router  # noqa: E402
from src.routers.connections import router as connections_router  # noqa: E402
from src.routers.messages import router as messages_router  # noqa: E402

from src.jobs.expire_records import start_expiry_loop  # noqa: E402

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:8080",
    "https://studlyf.in",
    "https://www.studlyf.in",
]


def _allowed_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOWED_ORIGINS")
    if not raw:
        return list(DEFAULT_ALLOWED_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


ALLOWED_ORIGINS = _allowed_origins()

app = FastAPI(
    title="StudLyf Backend",
    description="Backend для StudLyf: профили студентов, связи (заявки в друзья) и личные сообщения. Авторизация через Firebase.",
)

# --- CORS: только явный список доменов, с credentials ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)


# --- Единый формат ошибок: {"error": "..."} ---
@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(SQLAlchemyError)
async def _storage_error(request: Request, exc: SQLAlchemyError):
    log.exception("storage error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# --- Подключение роутеров ---
app.include_router(users_router,       prefix="/api",             tags=["Пользователи"])
app.include_router(profiles_router,    prefix="/api/profile",     tags=["Профили"])
app.include_router(connections_router, prefix="/api/connections", tags=["Связи"])
app.include_router(messages_router,    prefix="/api/messages",    tags=["Сообщения"])


@app.get("/api", response_class=PlainTextResponse)
def root():
    """Простой healthcheck."""
    return "StudLyf Backend API is running!"


@app.get("/api/root", response_class=PlainTextResponse)
def root_alias():
    return "StudLyf Backend API is running! (root endpoint)"


@app.get("/api/health")
def health():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "cors": {"allowedOrigins": ALLOWED_ORIGINS},
    }


@app.on_event("startup")
def _startup_jobs():
    if os.getenv("EXPIRY_SWEEP_ENABLED", "1") != "0":
        start_expiry_loop()
    log.info("CORS enabled for origins: %s", ", ".join(ALLOWED_ORIGINS))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("src.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3000")), reload=False)
