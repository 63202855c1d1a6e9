from typing import Iterable, List, Optional, Tuple

from tortoise.backends.base.client import BaseDBAsyncClient

from exceptions import AccountNotFoundError
from models import User


async def find_user_by_id(user_id: int, conn: Optional[BaseDBAsyncClient] = None) -> Optional[User]:
    return await User.filter(id=user_id).using_db(conn).first()


async def find_user_by_username(username: str) -> Optional[User]:
    return await User.get_or_none(username=username)


async def exists_user_by_username(username: str) -> bool:
    return await User.exists(username=username)


async def lock_user(user_id: int, conn: BaseDBAsyncClient) -> User:
    """트랜잭션 안에서 계정 행을 잠그고 조회 (없으면 AccountNotFoundError)"""
    user = await User.filter(id=user_id).select_for_update().using_db(conn).first()
    if user is None:
        raise AccountNotFoundError(user_id)
    return user


async def lock_users(user_ids: Iterable[int], conn: BaseDBAsyncClient) -> List[User]:
    """
    여러 계정을 ID 오름차순으로 잠금

    두 계정이 얽힌 작업(대결 등)끼리 교착되지 않도록 항상 같은 순서로 잠급니다.
    입력 순서와 관계없이 ID 오름차순 리스트를 반환합니다.
    """
    return [await lock_user(user_id, conn) for user_id in sorted(set(user_ids))]


async def get_top_users_by_rating(limit: int, offset: int = 0) -> List[User]:
    return await User.all().order_by("-battle_rating", "-wins", "id").offset(offset).limit(limit)


async def count_users() -> int:
    return await User.all().count()


async def search_users_by_username(query: str, limit: int, offset: int = 0) -> Tuple[List[User], int]:
    """이름에 query가 포함된 계정 (레이팅순)과 전체 일치 수"""
    queryset = User.filter(username__icontains=query)
    users = await queryset.order_by("-battle_rating", "id").offset(offset).limit(limit)
    return users, await queryset.count()
