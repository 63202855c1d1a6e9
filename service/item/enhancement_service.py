"""
EnhancementService

무기 강화 트랜잭션을 담당합니다.
비용 차감, 판정, 레벨 변경, 기록 저장을 하나의 작업 단위로 처리합니다.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from config import ENHANCEMENT, NOTIFICATION, Denomination, get_rate
from exceptions import InsufficientFundsError
from models import EnhancementAttempt, EnhancementOutcome, LedgerReason
from models.repos.weapon_repo import get_owned_weapon
from service.economy.ledger_service import LedgerService
from service.event.event_bus import EventBus, GameEvent, GameEventType
from service.item.enhancement_engine import require_rate, roll_outcome
from service.item.weapon_service import WeaponService
from service.random_source import RandomSource, SystemRandomSource
from service.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnhancementResult:
    """강화 시도 결과"""
    result: EnhancementOutcome
    previous_level: int
    new_level: int
    gold_spent: int
    gold_remaining: int
    weapon: dict = field(default_factory=dict)
    attempt_id: Optional[int] = None


class EnhancementService:
    """무기 강화 서비스"""

    def __init__(
        self,
        random_source: Optional[RandomSource] = None,
        event_bus: Optional[EventBus] = None
    ):
        self.random_source = random_source or SystemRandomSource()
        self.event_bus = event_bus

    async def get_enhancement_info(self, user_id: int, weapon_id: int) -> dict:
        """
        강화 가능 여부 및 정보 조회 (상태 변경 없음)

        Raises:
            WeaponNotFoundError: 무기 없음 또는 타인 소유
        """
        weapon = await get_owned_weapon(user_id, weapon_id)
        balances = await LedgerService.get_balances(user_id)

        rate = get_rate(weapon.level)
        if rate is None:
            return {
                "can_enhance": False,
                "current_level": weapon.level,
                "current_gold": balances.gold,
                "weapon": weapon.snapshot(),
                "reason": f"최대 강화 레벨입니다 (+{ENHANCEMENT.MAX_LEVEL})",
            }

        can_enhance = balances.gold >= rate.cost
        reason = None
        if not can_enhance:
            reason = f"골드가 부족합니다 ({balances.gold:,}G / {rate.cost:,}G)"

        return {
            "can_enhance": can_enhance,
            "current_level": weapon.level,
            "success_rate": rate.success,
            "maintain_rate": rate.maintain,
            "destroy_rate": rate.destroy,
            "cost": rate.cost,
            "current_gold": balances.gold,
            "sell_price": WeaponService.liquidation_payout(weapon.level, weapon.is_hidden),
            "weapon": weapon.snapshot(),
            "reason": reason,
        }

    async def enhance(self, user_id: int, weapon_id: int) -> EnhancementResult:
        """
        강화 시도

        Args:
            user_id: 계정 ID
            weapon_id: 무기 ID

        Returns:
            강화 시도 결과

        Raises:
            WeaponNotFoundError: 무기 없음 또는 타인 소유
            MaxLevelReachedError: 최대 강화 레벨
            InsufficientFundsError: 골드 부족
            InvariantViolationError: 처리 중 예상치 못한 오류 (전체 롤백)
        """
        async with unit_of_work("enhance") as conn:
            # 1. 잠금 (계정 → 무기 순서)
            user = await LedgerService.lock_account(user_id, conn)
            weapon = await get_owned_weapon(user_id, weapon_id, conn, for_update=True)

            # 2. 확률/비용 확인
            rate = require_rate(weapon.level)
            if user.gold < rate.cost:
                raise InsufficientFundsError(Denomination.GOLD.value, rate.cost, user.gold)

            # 3. 비용 차감
            gold_remaining = await LedgerService.debit(
                user_id, Denomination.GOLD, rate.cost, LedgerReason.ENHANCE, conn
            )

            # 4. 판정 및 반영
            outcome = roll_outcome(weapon.level, self.random_source)
            await WeaponService.set_level(weapon, outcome.new_level, conn)

            attempt = await EnhancementAttempt.create(
                user_id=user_id,
                weapon_id=weapon.id,
                weapon_name=weapon.name,
                level_before=outcome.previous_level,
                level_after=outcome.new_level,
                gold_spent=rate.cost,
                result=outcome.result,
                roll=outcome.roll,
                using_db=conn
            )

        logger.info(
            f"User {user_id} enhanced weapon {weapon.id} '{weapon.name}': "
            f"+{outcome.previous_level} → +{outcome.new_level} ({outcome.result.value}), "
            f"cost {rate.cost:,}G, remaining {gold_remaining:,}G"
        )

        result = EnhancementResult(
            result=outcome.result,
            previous_level=outcome.previous_level,
            new_level=outcome.new_level,
            gold_spent=rate.cost,
            gold_remaining=gold_remaining,
            weapon=weapon.snapshot(),
            attempt_id=attempt.id,
        )
        self._publish(user_id, result)
        return result

    def _publish(self, user_id: int, result: EnhancementResult) -> None:
        """커밋 이후 이벤트 발행"""
        if self.event_bus is None:
            return

        if result.result == EnhancementOutcome.SUCCESS and result.new_level >= NOTIFICATION.BROADCAST_MIN_LEVEL:
            event_type = GameEventType.ENHANCEMENT_MILESTONE
        elif result.result == EnhancementOutcome.DESTROY:
            event_type = GameEventType.WEAPON_DESTROYED
        else:
            return

        self.event_bus.publish_nowait(GameEvent(
            type=event_type,
            user_id=user_id,
            data={
                "weapon_name": result.weapon.get("name"),
                "previous_level": result.previous_level,
                "new_level": result.new_level,
            }
        ))
