"""
WeaponService

무기 생성, 조회, 판매와 히든 무기 지급을 담당합니다.
무기 레벨은 강화 트랜잭션(EnhancementService)에서만 변경합니다.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from tortoise.backends.base.client import BaseDBAsyncClient
from tortoise.exceptions import IntegrityError

from config import ECONOMY, ENHANCEMENT, WEAPON_SELL_PRICES, Denomination, get_hidden_weapon
from exceptions import (
    ConfirmationRequiredError,
    DuplicateWeaponError,
    HiddenWeaponLockedError,
    InvariantViolationError,
    ValidationError,
)
from models import LedgerReason, Weapon
from models.repos.enhancement_attempt_repo import count_destroys
from models.repos.weapon_repo import exists_weapon_by_base_name, find_weapons_by_owner, get_owned_weapon
from service.economy.ledger_service import LedgerService
from service.unit_of_work import join_or_begin, unit_of_work

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SellResult:
    """판매 결과"""
    gold_earned: int
    gold_remaining: int


class WeaponService:
    """무기 관리 비즈니스 로직"""

    @staticmethod
    def sell_price(level: int, is_hidden: bool) -> int:
        """
        무기 판매가

        Args:
            level: 강화 레벨 (0..20)
            is_hidden: 히든 무기 여부 (판매가 4배)

        Returns:
            판매가 (골드)
        """
        if not 0 <= level <= ENHANCEMENT.MAX_LEVEL:
            raise InvariantViolationError(f"weapon level out of range: {level}")
        price = WEAPON_SELL_PRICES[level]
        if is_hidden:
            price *= ECONOMY.HIDDEN_PRICE_MULTIPLIER
        return price

    @staticmethod
    def liquidation_payout(level: int, is_hidden: bool) -> int:
        """실제 판매 지급액 (+0 무기는 판매가의 30%만 지급)"""
        price = WeaponService.sell_price(level, is_hidden)
        if level == 0:
            return price * ECONOMY.SALVAGE_PERCENT // 100
        return price

    @staticmethod
    async def create_weapon(
        user_id: int,
        name: str,
        base_name: Optional[str] = None,
        is_hidden: bool = False,
        conn: Optional[BaseDBAsyncClient] = None
    ) -> Weapon:
        """
        무기 생성 (+0)

        Raises:
            ValidationError: 이름이 비어 있음
            DuplicateWeaponError: 같은 종류의 무기를 이미 보유
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("무기 이름을 입력해주세요.")
        base_name = (base_name or "").strip() or name

        async with join_or_begin(conn, "create_weapon") as tx:
            await LedgerService.lock_account(user_id, tx)
            if await exists_weapon_by_base_name(user_id, base_name, tx):
                raise DuplicateWeaponError(base_name)
            try:
                weapon = await Weapon.create(
                    owner_id=user_id,
                    name=name,
                    base_name=base_name,
                    is_hidden=is_hidden,
                    using_db=tx
                )
            except IntegrityError:
                raise DuplicateWeaponError(base_name)

        logger.info(f"User {user_id} created weapon {weapon.id} '{name}' (hidden={is_hidden})")
        return weapon

    @staticmethod
    async def list_weapons(user_id: int) -> List[Weapon]:
        return await find_weapons_by_owner(user_id)

    @staticmethod
    async def get_owned(user_id: int, weapon_id: int) -> Weapon:
        return await get_owned_weapon(user_id, weapon_id)

    @staticmethod
    async def set_level(weapon: Weapon, level: int, conn: BaseDBAsyncClient) -> None:
        """
        무기 레벨 변경 (강화 트랜잭션 전용)

        Raises:
            InvariantViolationError: 0..20 범위 밖
        """
        if not 0 <= level <= ENHANCEMENT.MAX_LEVEL:
            raise InvariantViolationError(f"weapon level out of range: {level}")
        weapon.level = level
        await weapon.save(using_db=conn, update_fields=["level"])

    @staticmethod
    async def sell_weapon(user_id: int, weapon_id: int, confirm: bool) -> SellResult:
        """
        무기 판매

        지급액이 0이면 지급 없이 무기만 삭제합니다.

        Raises:
            ConfirmationRequiredError: 확인하지 않음
            WeaponNotFoundError: 무기 없음 또는 타인 소유
        """
        if confirm is not True:
            raise ConfirmationRequiredError("판매")

        async with unit_of_work("sell") as conn:
            user = await LedgerService.lock_account(user_id, conn)
            weapon = await get_owned_weapon(user_id, weapon_id, conn, for_update=True)

            payout = WeaponService.liquidation_payout(weapon.level, weapon.is_hidden)
            gold_remaining = user.gold
            if payout > 0:
                gold_remaining = await LedgerService.credit(
                    user_id, Denomination.GOLD, payout, LedgerReason.SELL, conn
                )
            await weapon.delete(using_db=conn)

        logger.info(
            f"User {user_id} sold weapon {weapon_id} {weapon.full_name} for {payout:,}G "
            f"(remaining {gold_remaining:,}G)"
        )
        return SellResult(gold_earned=payout, gold_remaining=gold_remaining)

    @staticmethod
    async def claim_hidden_weapon(user_id: int, slug: str) -> Weapon:
        """
        해금 조건을 달성한 히든 무기 수령

        Raises:
            ValidationError: 알 수 없는 히든 무기
            HiddenWeaponLockedError: 조건 미달성 (이벤트 전용 무기 포함)
            DuplicateWeaponError: 이미 보유
        """
        definition = get_hidden_weapon(slug)
        if definition is None:
            raise ValidationError(f"알 수 없는 히든 무기입니다: {slug}")

        async with unit_of_work("claim_hidden_weapon") as conn:
            await LedgerService.lock_account(user_id, conn)
            if definition.required_destroys is None:
                raise HiddenWeaponLockedError(slug, definition.condition)
            destroys = await count_destroys(user_id, conn)
            if destroys < definition.required_destroys:
                raise HiddenWeaponLockedError(slug, definition.condition)
            weapon = await WeaponService.create_weapon(
                user_id, definition.name, base_name=slug, is_hidden=True, conn=conn
            )

        return weapon

    @staticmethod
    async def grant_hidden_weapon(user_id: int, slug: str) -> Weapon:
        """
        히든 무기 지급 (조건 확인 없음, GM 도구에서 사용)

        Raises:
            ValidationError: 알 수 없는 히든 무기
            DuplicateWeaponError: 이미 보유
        """
        definition = get_hidden_weapon(slug)
        if definition is None:
            raise ValidationError(f"알 수 없는 히든 무기입니다: {slug}")
        return await WeaponService.create_weapon(
            user_id, definition.name, base_name=slug, is_hidden=True
        )
