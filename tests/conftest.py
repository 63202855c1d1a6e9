"""
pytest 설정 및 공통 픽스처 정의
"""
import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest

# 프로젝트 루트를 Python 경로에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# pytest 설정
# =============================================================================


def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


# =============================================================================
# 데이터베이스 픽스처
# =============================================================================


@pytest.fixture(scope="function")
async def test_db() -> AsyncGenerator[None, None]:
    """
    테스트용 인메모리 SQLite 데이터베이스
    각 테스트 함수마다 새로운 DB 생성
    """
    from tortoise import Tortoise

    await Tortoise.init(
        db_url="sqlite://:memory:",
        modules={"models": ["models"]}
    )
    await Tortoise.generate_schemas()

    yield

    await Tortoise.close_connections()


# =============================================================================
# 게임 엔티티 팩토리 픽스처
# =============================================================================


@pytest.fixture
def user_factory(test_db):
    """테스트용 User 생성 팩토리 (DB 저장)"""
    from models import User, UserRole
    from service.auth_service import hash_code

    counter = {"n": 0}

    async def _create_user(
        username: str | None = None,
        gold: int = 10_000,
        choco: int = 0,
        money: int = 0,
        role: UserRole = UserRole.PLAYER,
        code: str = "jg283913",
    ) -> User:
        counter["n"] += 1
        return await User.create(
            username=username or f"player{counter['n']}",
            access_code_hash=hash_code(code, rounds=4),
            role=role,
            gold=gold,
            choco=choco,
            money=money,
        )

    return _create_user


@pytest.fixture
def weapon_factory(test_db):
    """테스트용 Weapon 생성 팩토리 (DB 저장)"""
    from models import Weapon

    async def _create_weapon(
        owner,
        name: str = "목검",
        level: int = 0,
        is_hidden: bool = False,
        base_name: str | None = None,
    ) -> Weapon:
        return await Weapon.create(
            owner=owner,
            name=name,
            base_name=base_name or name,
            level=level,
            is_hidden=is_hidden,
        )

    return _create_weapon


# =============================================================================
# 유틸리티 함수
# =============================================================================


def assert_approx_equal(actual: float, expected: float, tolerance: float = 0.1):
    """근사값 비교 (확률 테스트용)"""
    assert abs(actual - expected) <= tolerance, (
        f"Expected {expected} ± {tolerance}, got {actual}"
    )
