"""
GM 도구

GM 계정만 사용할 수 있는 재화 조정과 히든 무기 지급을 담당합니다.
모든 재화 변경은 LedgerService를 거칩니다.
"""
import logging
from typing import List

from config import Denomination
from exceptions import PermissionDeniedError
from models import LedgerReason, User, UserRole, Weapon
from service.economy.ledger_service import Balances, CurrencyAdjustment, LedgerService, validate_amount
from service.item.weapon_service import WeaponService
from service.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def _require_gm(actor_role: UserRole, action: str) -> None:
    if actor_role != UserRole.GM:
        raise PermissionDeniedError(action)


class GMService:
    """GM 관리 서비스"""

    @staticmethod
    async def list_accounts(actor_role: UserRole) -> List[dict]:
        """전체 계정 목록"""
        _require_gm(actor_role, "계정 조회")
        users = await User.all().order_by("id")
        return [
            {
                "id": user.id,
                "username": user.username,
                "role": user.role.value,
                "gold": user.gold,
                "choco": user.choco,
                "money": user.money,
                "battle_rating": user.battle_rating,
            }
            for user in users
        ]

    @staticmethod
    async def adjust_currency(actor_id: int, actor_role: UserRole, target_id: int, adjustment: CurrencyAdjustment) -> Balances:
        """
        재화 증감

        Raises:
            PermissionDeniedError: GM이 아님
            ValidationError: 조정 값 오류
            InsufficientFundsError: 차감 후 잔액이 음수가 됨
        """
        _require_gm(actor_role, "재화 조정")
        balances = await LedgerService.adjust(target_id, adjustment, LedgerReason.GM_ADJUST)
        logger.info(f"GM {actor_id} adjusted currency of user {target_id}: {adjustment.entries()}")
        return balances

    @staticmethod
    async def set_currency(actor_id: int, actor_role: UserRole, target_id: int, targets: CurrencyAdjustment) -> Balances:
        """재화를 지정한 잔액으로 설정"""
        _require_gm(actor_role, "재화 설정")
        balances = await LedgerService.set_balances(target_id, targets, LedgerReason.GM_ADJUST)
        logger.info(f"GM {actor_id} set currency of user {target_id}: {targets.entries()}")
        return balances

    @staticmethod
    async def give_all(actor_id: int, actor_role: UserRole, denomination: Denomination, amount: int) -> int:
        """
        전체 계정에 재화 지급

        Returns:
            지급한 계정 수
        """
        _require_gm(actor_role, "전체 지급")
        validate_amount(amount)

        async with unit_of_work("give_all") as conn:
            user_ids = await User.all().using_db(conn).order_by("id").values_list("id", flat=True)
            for user_id in user_ids:
                await LedgerService.credit(user_id, denomination, amount, LedgerReason.GM_ADJUST, conn)

        logger.info(f"GM {actor_id} gave {amount:,} {denomination.value} to {len(user_ids)} users")
        return len(user_ids)

    @staticmethod
    async def grant_hidden_weapon(actor_id: int, actor_role: UserRole, target_id: int, slug: str) -> Weapon:
        _require_gm(actor_role, "히든 무기 지급")
        weapon = await WeaponService.grant_hidden_weapon(target_id, slug)
        logger.info(f"GM {actor_id} granted hidden weapon '{slug}' to user {target_id}")
        return weapon
