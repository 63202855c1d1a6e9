"""로그인/토큰 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthConfig:
    """인증 설정"""

    TOKEN_ALGORITHM: str = "HS256"
    """JWT 서명 알고리즘"""

    TOKEN_EXPIRE_HOURS: int = 24
    """토큰 유효 시간"""

    BCRYPT_ROUNDS: int = 12
    """접속 코드 해시 비용"""

    MIN_USERNAME_LENGTH: int = 2
    MAX_USERNAME_LENGTH: int = 50

    MIN_SEARCH_LENGTH: int = 2
    """이름 검색어 최소 길이"""


AUTH = AuthConfig()


# 사전 발급된 접속 코드 → 역할
ACCESS_CODES: dict[str, str] = {
    # GM
    "yj123234": "gm",
    # 베타 테스터
    "ecfir125": "beta_tester",
    "dhsec394": "beta_tester",
    # 일반 플레이어
    "jg283913": "player",
    "sj283710": "player",
    "jtet0928": "player",
    "sk228391": "player",
}
