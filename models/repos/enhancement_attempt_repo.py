from typing import List, Optional

from tortoise.backends.base.client import BaseDBAsyncClient

from models import EnhancementAttempt, EnhancementOutcome


async def count_destroys(user_id: int, conn: Optional[BaseDBAsyncClient] = None) -> int:
    """계정의 누적 파괴 횟수"""
    return await EnhancementAttempt.filter(
        user_id=user_id, result=EnhancementOutcome.DESTROY
    ).using_db(conn).count()


async def find_attempts_by_weapon(weapon_id: int, limit: int) -> List[EnhancementAttempt]:
    return await EnhancementAttempt.filter(weapon_id=weapon_id).order_by("-created_at", "-id").limit(limit)


async def find_top_successes(limit: int) -> List[EnhancementAttempt]:
    return await (
        EnhancementAttempt.filter(result=EnhancementOutcome.SUCCESS)
        .order_by("-level_after", "created_at")
        .limit(limit)
        .prefetch_related("user")
    )
