# server.py
import os
from contextlib import asynccontextmanager
from typing import Optional

import logging
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tortoise import Tortoise

from exceptions import EnhanceGameError, InvariantViolationError
from routes import admin, attendance, auth, battles, currency, profiles, weapons
from service.attendance.attendance_service import AttendanceService
from service.auth_service import AuthService
from service.battle.battle_service import BattleService
from service.event.event_bus import EventBus
from service.item.enhancement_service import EnhancementService
from service.notification.broadcast_service import BroadcastService
from service.random_source import RandomSource, SystemRandomSource

# 로그 기본 설정
logging.basicConfig(
    level=logging.INFO,  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite://enhance.db"


async def init_db(database_url: str):
    await Tortoise.init(
        db_url=database_url,
        modules={"models": ["models"]}
    )
    await Tortoise.generate_schemas()


def create_app(
    database_url: Optional[str] = None,
    jwt_secret: Optional[str] = None,
    random_source: Optional[RandomSource] = None,
    init_db_on_startup: bool = True,
) -> FastAPI:
    """
    API 서버 생성

    Args:
        database_url: Tortoise DB URL (기본값: DATABASE_URL 환경변수)
        jwt_secret: 토큰 서명 키 (기본값: JWT_SECRET 환경변수)
        random_source: 강화/대결 난수 공급자 (기본값: SystemRandomSource)
        init_db_on_startup: 시작 시 DB 연결 여부 (테스트에서 직접 연결할 때 False)
    """
    database_url = database_url or os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
    jwt_secret = jwt_secret or os.getenv("JWT_SECRET")
    if not jwt_secret:
        raise RuntimeError("환경변수 JWT_SECRET을 .env에 설정해주세요")

    expire_hours = int(os.getenv("JWT_EXPIRE_HOURS") or 24)
    random_source = random_source or SystemRandomSource()

    event_bus = EventBus()
    broadcast = BroadcastService(os.getenv("BROADCAST_WEBHOOK_URL"))
    broadcast.register(event_bus)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_db_on_startup:
            logger.info("데이터 베이스 연결 시작")
            await init_db(database_url)
            logger.info("데이터 베이스 연결")
        yield
        await event_bus.drain()
        if init_db_on_startup:
            await Tortoise.close_connections()

    app = FastAPI(title="Weapon Enhancement Server", lifespan=lifespan)

    origins = [o.strip() for o in (os.getenv("CORS_ORIGINS") or "*").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.event_bus = event_bus
    app.state.auth_service = AuthService(jwt_secret, expire_hours)
    app.state.enhancement_service = EnhancementService(random_source, event_bus)
    app.state.battle_service = BattleService(random_source, event_bus)
    app.state.attendance_service = AttendanceService()

    @app.exception_handler(EnhanceGameError)
    async def handle_game_error(request: Request, exc: EnhanceGameError):
        if isinstance(exc, InvariantViolationError):
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    for module in (auth, weapons, currency, battles, attendance, profiles, admin):
        app.include_router(module.router)

    return app


def main():
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT") or 8000)
    uvicorn.run("server:create_app", factory=True, host=host, port=port)


if __name__ == "__main__":
    main()
