"""
RankingService

강화 기록, 누적 파괴 횟수, 대결 랭킹, 공개 프로필과 이름 검색을 제공합니다.
모든 통계는 강화/대결 기록에서 계산합니다.
"""
import logging
import math
from typing import Dict, List

from config import AUTH, BATTLE
from exceptions import AccountNotFoundError, ValidationError
from models.repos.enhancement_attempt_repo import count_destroys, find_attempts_by_weapon, find_top_successes
from models.repos.users_repo import (
    count_users, find_user_by_id, get_top_users_by_rating, search_users_by_username,
)
from models.repos.weapon_repo import find_weapons_by_owner, get_owned_weapon
from service.battle.battle_service import BattleService

logger = logging.getLogger(__name__)


class RankingService:
    """랭킹 서비스"""

    @staticmethod
    async def weapon_history(user_id: int, weapon_id: int, limit: int = 10) -> List[Dict]:
        """
        무기 강화 기록 (최신순)

        Raises:
            WeaponNotFoundError: 무기 없음 또는 타인 소유
        """
        await get_owned_weapon(user_id, weapon_id)
        attempts = await find_attempts_by_weapon(weapon_id, limit)
        return [
            {
                "result": attempt.result.value,
                "level_before": attempt.level_before,
                "level_after": attempt.level_after,
                "gold_spent": attempt.gold_spent,
                "created_at": attempt.created_at.isoformat(),
            }
            for attempt in attempts
        ]

    @staticmethod
    async def destroy_count(user_id: int) -> int:
        return await count_destroys(user_id)

    @staticmethod
    async def top_enhancements(limit: int = 10) -> List[Dict]:
        """
        최고 강화 성공 기록

        Returns:
            [
                {
                    "rank": 1,
                    "username": "플레이어명",
                    "weapon_name": "목검",
                    "level": 15,
                    "created_at": "2024-01-01T00:00:00",
                },
                ...
            ]
        """
        attempts = await find_top_successes(limit)
        return [
            {
                "rank": idx + 1,
                "username": attempt.user.username,
                "weapon_name": attempt.weapon_name,
                "level": attempt.level_after,
                "created_at": attempt.created_at.isoformat(),
            }
            for idx, attempt in enumerate(attempts)
        ]

    @staticmethod
    async def battle_rankings(page: int = 1, limit: int = BATTLE.HISTORY_PAGE_SIZE) -> Dict:
        """
        대결 레이팅 랭킹 (page는 1부터)

        Returns:
            {"total": 전체 계정 수, "page": 1, "total_pages": 3, "rankings": [...]}
        """
        page = max(page, 1)
        offset = (page - 1) * limit
        users = await get_top_users_by_rating(limit, offset)
        total = await count_users()
        return {
            "total": total,
            "page": page,
            "total_pages": math.ceil(total / limit),
            "rankings": [
                {
                    "rank": offset + idx + 1,
                    "id": user.id,
                    "username": user.username,
                    "battle_rating": user.battle_rating,
                    "wins": user.wins,
                    "losses": user.losses,
                    "max_win_streak": user.max_win_streak,
                }
                for idx, user in enumerate(users)
            ],
        }

    @staticmethod
    async def search_users(query: str, page: int = 1, limit: int = BATTLE.HISTORY_PAGE_SIZE) -> Dict:
        """
        이름으로 계정 검색

        Raises:
            ValidationError: 검색어가 2글자 미만
        """
        query = (query or "").strip()
        if len(query) < AUTH.MIN_SEARCH_LENGTH:
            raise ValidationError(f"검색어는 {AUTH.MIN_SEARCH_LENGTH}글자 이상이어야 합니다.")

        page = max(page, 1)
        users, total = await search_users_by_username(query, limit, (page - 1) * limit)
        return {
            "total": total,
            "page": page,
            "total_pages": math.ceil(total / limit),
            "users": [
                {"id": user.id, "username": user.username, "battle_rating": user.battle_rating}
                for user in users
            ],
        }

    @staticmethod
    async def public_profile(user_id: int) -> Dict:
        """
        다른 플레이어에게 공개되는 프로필

        재화 잔액은 포함하지 않습니다.

        Raises:
            AccountNotFoundError: 계정 없음
        """
        user = await find_user_by_id(user_id)
        if user is None:
            raise AccountNotFoundError(user_id)

        weapons = await find_weapons_by_owner(user_id)
        best = weapons[0] if weapons else None
        return {
            "id": user.id,
            "username": user.username,
            "role": user.role.value,
            "battle_rating": user.battle_rating,
            "wins": user.wins,
            "losses": user.losses,
            "total_battles": user.total_battles,
            "win_streak": user.win_streak,
            "max_win_streak": user.max_win_streak,
            "destroy_count": await count_destroys(user_id),
            "best_weapon": (
                {"id": best.id, "name": best.name, "level": best.level, "is_hidden": best.is_hidden}
                if best else None
            ),
            "recent_battles": await BattleService.history(user_id, limit=BATTLE.PROFILE_RECENT_BATTLES),
            "created_at": user.created_at.isoformat(),
        }
