from fastapi import APIRouter, Depends

from routes.deps import get_auth_service
from routes.schemas import LoginRequest, LoginResponse
from service.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    user, token = await auth_service.login(body.username, body.code)
    return LoginResponse(id=user.id, username=user.username, role=user.role.value, token=token)
