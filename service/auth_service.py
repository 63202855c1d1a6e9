"""
AuthService

접속 코드 로그인과 JWT 토큰 발급/검증을 담당합니다.
처음 로그인하는 이름은 접속 코드의 역할로 계정이 생성됩니다.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from tortoise.exceptions import IntegrityError

from config import ACCESS_CODES, AUTH, ECONOMY
from exceptions import AuthenticationError, ValidationError
from models import User, UserRole
from models.repos.users_repo import find_user_by_id, find_user_by_username

logger = logging.getLogger(__name__)


def hash_code(code: str, rounds: int = AUTH.BCRYPT_ROUNDS) -> str:
    """접속 코드를 솔트와 함께 bcrypt로 해시"""
    return bcrypt.hashpw(code.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_code(code: str, hashed: str) -> bool:
    return bcrypt.checkpw(code.encode(), hashed.encode())


@dataclass(frozen=True)
class Principal:
    """인증된 요청 주체"""
    id: int
    username: str
    role: UserRole


class AuthService:
    """인증 서비스"""

    def __init__(self, secret: str, expire_hours: int = AUTH.TOKEN_EXPIRE_HOURS):
        self.secret = secret
        self.expire_hours = expire_hours

    async def login(self, username: str, code: str) -> tuple[User, str]:
        """
        접속 코드 로그인

        Args:
            username: 플레이어 이름
            code: 사전 발급된 접속 코드

        Returns:
            (계정, 토큰)

        Raises:
            ValidationError: 이름 길이 오류
            AuthenticationError: 잘못된 접속 코드
        """
        username = (username or "").strip()
        if not AUTH.MIN_USERNAME_LENGTH <= len(username) <= AUTH.MAX_USERNAME_LENGTH:
            raise ValidationError(
                f"이름은 {AUTH.MIN_USERNAME_LENGTH}~{AUTH.MAX_USERNAME_LENGTH}자여야 합니다."
            )

        role_name = ACCESS_CODES.get(code)
        if role_name is None:
            raise AuthenticationError("잘못된 접속 코드입니다.")

        user = await find_user_by_username(username)
        if user is None:
            user = await self._register(username, code, UserRole(role_name))
        elif not verify_code(code, user.access_code_hash):
            raise AuthenticationError("잘못된 접속 코드입니다.")

        logger.info(f"User {user.id} '{username}' logged in ({user.role.value})")
        return user, self.issue_token(user)

    @staticmethod
    async def _register(username: str, code: str, role: UserRole) -> User:
        starting_gold = ECONOMY.GM_STARTING_GOLD if role == UserRole.GM else ECONOMY.STARTING_GOLD
        try:
            user = await User.create(
                username=username,
                access_code_hash=hash_code(code),
                role=role,
                gold=starting_gold,
            )
        except IntegrityError:
            # 동시에 같은 이름으로 가입한 경우
            user = await find_user_by_username(username)
            if user is None or not verify_code(code, user.access_code_hash):
                raise AuthenticationError("잘못된 접속 코드입니다.")
            return user

        logger.info(f"Registered user {user.id} '{username}' as {role.value}")
        return user

    def issue_token(self, user: User) -> str:
        payload = {
            "sub": str(user.id),
            "role": user.role.value,
            "exp": datetime.now(timezone.utc) + timedelta(hours=self.expire_hours),
        }
        return jwt.encode(payload, self.secret, algorithm=AUTH.TOKEN_ALGORITHM)

    async def decode_token(self, token: str) -> Principal:
        """
        토큰 검증 후 요청 주체 반환

        역할은 토큰이 아니라 DB 기준으로 확인합니다.

        Raises:
            AuthenticationError: 만료/위조 토큰 또는 삭제된 계정
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[AUTH.TOKEN_ALGORITHM])
            user_id = int(payload["sub"])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("로그인이 만료되었습니다. 다시 로그인해주세요.")
        except (jwt.InvalidTokenError, KeyError, ValueError):
            raise AuthenticationError("유효하지 않은 토큰입니다.")

        user: Optional[User] = await find_user_by_id(user_id)
        if user is None:
            raise AuthenticationError("존재하지 않는 계정입니다.")
        return Principal(id=user.id, username=user.username, role=user.role)
