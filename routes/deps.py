"""
라우터 공용 의존성

서비스 객체는 create_app()에서 app.state에 등록하고, 요청마다 꺼내 씁니다.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from exceptions import AuthenticationError
from service.attendance.attendance_service import AttendanceService
from service.auth_service import AuthService, Principal
from service.battle.battle_service import BattleService
from service.item.enhancement_service import EnhancementService

http_bearer = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_enhancement_service(request: Request) -> EnhancementService:
    return request.app.state.enhancement_service


def get_battle_service(request: Request) -> BattleService:
    return request.app.state.battle_service


def get_attendance_service(request: Request) -> AttendanceService:
    return request.app.state.attendance_service


async def get_current_principal(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
    auth_service: AuthService = Depends(get_auth_service),
) -> Principal:
    """Authorization: Bearer 토큰으로 요청 주체 확인"""
    if creds is None or not creds.credentials:
        raise AuthenticationError()
    return await auth_service.decode_token(creds.credentials)
