"""
LedgerService

계정 재화(gold/choco/money)의 지급, 차감, 환전을 담당합니다.
모든 잔액 변경은 이 모듈을 거치며, 변경마다 CurrencyTransaction을 같은 트랜잭션에 기록합니다.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from tortoise.backends.base.client import BaseDBAsyncClient
from tortoise.expressions import F

from config import CONVERSION_RATES, Denomination
from exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    InvariantViolationError,
    MinimumConversionNotMetError,
    UnsupportedConversionError,
    ValidationError,
)
from models import CurrencyTransaction, LedgerReason, User
from models.repos.users_repo import find_user_by_id, lock_user
from service.unit_of_work import join_or_begin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Balances:
    """잔액 스냅샷"""
    gold: int
    choco: int
    money: int

    def get(self, denomination: Denomination) -> int:
        return getattr(self, denomination.value)


@dataclass(frozen=True)
class CurrencyAdjustment:
    """
    재화 조정 요청

    gold/choco/money만 허용하며 각각 생략 가능합니다.
    값의 의미(증감량/목표 잔액)는 호출하는 쪽이 정합니다.
    """
    gold: Optional[int] = None
    choco: Optional[int] = None
    money: Optional[int] = None

    def entries(self) -> List[Tuple[Denomination, int]]:
        """지정된 항목만 (재화, 값) 목록으로 반환"""
        return [
            (denomination, getattr(self, denomination.value))
            for denomination in Denomination
            if getattr(self, denomination.value) is not None
        ]

    def validate(self, allow_negative: bool = True) -> None:
        """
        조정 값 검증 (변경 전에 호출)

        Raises:
            ValidationError: 지정 항목이 없거나 정수가 아닌 값이 있음
            InvalidAmountError: allow_negative=False인데 음수가 있음
        """
        entries = self.entries()
        if not entries:
            raise ValidationError("조정할 재화를 하나 이상 지정해야 합니다.")
        for denomination, value in entries:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{denomination.value} 값은 정수여야 합니다: {value!r}")
            if not allow_negative and value < 0:
                raise InvalidAmountError(value)


def validate_amount(amount) -> int:
    """
    수량 검증

    Raises:
        InvalidAmountError: 양의 정수가 아님
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(amount)
    return amount


def _to_balances(user: User) -> Balances:
    return Balances(gold=user.gold, choco=user.choco, money=user.money)


class LedgerService:
    """재화 원장 비즈니스 로직"""

    @staticmethod
    async def get_balances(user_id: int, conn: Optional[BaseDBAsyncClient] = None) -> Balances:
        """
        잔액 조회

        Raises:
            AccountNotFoundError: 계정 없음
        """
        user = await find_user_by_id(user_id, conn)
        if user is None:
            raise AccountNotFoundError(user_id)
        return _to_balances(user)

    @staticmethod
    async def lock_account(user_id: int, conn: BaseDBAsyncClient) -> User:
        """트랜잭션 안에서 계정 잠금"""
        return await lock_user(user_id, conn)

    @staticmethod
    async def _record(
        conn: BaseDBAsyncClient,
        user_id: int,
        denomination: Denomination,
        delta: int,
        reason: LedgerReason
    ) -> int:
        balance = (await LedgerService.get_balances(user_id, conn)).get(denomination)
        if balance < 0:
            raise InvariantViolationError(
                f"negative {denomination.value} balance for user {user_id}: {balance}"
            )
        await CurrencyTransaction.create(
            user_id=user_id,
            denomination=denomination,
            delta=delta,
            balance_after=balance,
            reason=reason,
            using_db=conn
        )
        return balance

    @staticmethod
    async def credit(
        user_id: int,
        denomination: Denomination,
        amount: int,
        reason: LedgerReason,
        conn: Optional[BaseDBAsyncClient] = None
    ) -> int:
        """
        재화 지급

        Args:
            user_id: 대상 계정
            denomination: 재화 종류
            amount: 지급량 (양의 정수)
            reason: 변동 사유
            conn: 상위 작업 단위 커넥션 (없으면 단독 트랜잭션)

        Returns:
            지급 후 잔액

        Raises:
            InvalidAmountError: 수량이 양의 정수가 아님
            AccountNotFoundError: 계정 없음
        """
        validate_amount(amount)
        field = denomination.value

        async with join_or_begin(conn, "credit") as tx:
            updated = await User.filter(id=user_id).using_db(tx).update(
                **{field: F(field) + amount}
            )
            if not updated:
                raise AccountNotFoundError(user_id)
            balance = await LedgerService._record(tx, user_id, denomination, amount, reason)

        logger.debug(f"User {user_id} credit {amount} {field} ({reason.value}) → {balance}")
        return balance

    @staticmethod
    async def debit(
        user_id: int,
        denomination: Denomination,
        amount: int,
        reason: LedgerReason,
        conn: Optional[BaseDBAsyncClient] = None
    ) -> int:
        """
        재화 차감

        잔액 조건부 UPDATE로 차감하므로 동시 요청이 같은 잔액을 두 번 쓰지 못합니다.
        잔액이 부족하면 아무것도 차감하지 않습니다.

        Returns:
            차감 후 잔액

        Raises:
            InvalidAmountError: 수량이 양의 정수가 아님
            AccountNotFoundError: 계정 없음
            InsufficientFundsError: 잔액 부족
        """
        validate_amount(amount)
        field = denomination.value

        async with join_or_begin(conn, "debit") as tx:
            updated = await User.filter(id=user_id, **{f"{field}__gte": amount}).using_db(tx).update(
                **{field: F(field) - amount}
            )
            if not updated:
                current = (await LedgerService.get_balances(user_id, tx)).get(denomination)
                raise InsufficientFundsError(field, amount, current)
            balance = await LedgerService._record(tx, user_id, denomination, -amount, reason)

        logger.debug(f"User {user_id} debit {amount} {field} ({reason.value}) → {balance}")
        return balance

    @staticmethod
    async def convert(
        user_id: int,
        from_denomination: Denomination,
        to_denomination: Denomination,
        amount: int,
        conn: Optional[BaseDBAsyncClient] = None
    ) -> Balances:
        """
        환전 (gold → choco, choco → money)

        amount는 원본 재화 기준 수량입니다. 환전 단위로 나눈 몫만큼만 환전하고
        나머지는 원본 재화로 남습니다.

        Returns:
            환전 후 잔액

        Raises:
            InvalidAmountError: 수량이 양의 정수가 아님
            UnsupportedConversionError: 지원하지 않는 환전 경로
            MinimumConversionNotMetError: 최소 환전 단위 미달
            InsufficientFundsError: 원본 재화 부족
        """
        validate_amount(amount)
        rate = CONVERSION_RATES.get((from_denomination, to_denomination))
        if rate is None:
            raise UnsupportedConversionError(from_denomination.value, to_denomination.value)

        units = amount // rate
        if units < 1:
            raise MinimumConversionNotMetError(
                from_denomination.value, to_denomination.value, rate, amount
            )
        spent = units * rate

        async with join_or_begin(conn, "convert") as tx:
            await LedgerService.debit(user_id, from_denomination, spent, LedgerReason.CONVERT, tx)
            await LedgerService.credit(user_id, to_denomination, units, LedgerReason.CONVERT, tx)
            balances = await LedgerService.get_balances(user_id, tx)

        logger.info(
            f"User {user_id} converted {spent} {from_denomination.value} "
            f"→ {units} {to_denomination.value}"
        )
        return balances

    @staticmethod
    async def adjust(
        user_id: int,
        adjustment: CurrencyAdjustment,
        reason: LedgerReason,
        conn: Optional[BaseDBAsyncClient] = None
    ) -> Balances:
        """
        증감량 일괄 적용 (양수는 지급, 음수는 차감, 0은 무시)

        하나라도 실패하면 전체가 롤백됩니다.
        """
        adjustment.validate()

        async with join_or_begin(conn, "adjust") as tx:
            await LedgerService.lock_account(user_id, tx)
            # 차감을 먼저 적용해 잔액 부족을 지급 전에 확인
            for denomination, delta in sorted(adjustment.entries(), key=lambda e: e[1]):
                if delta < 0:
                    await LedgerService.debit(user_id, denomination, -delta, reason, tx)
                elif delta > 0:
                    await LedgerService.credit(user_id, denomination, delta, reason, tx)
            balances = await LedgerService.get_balances(user_id, tx)

        return balances

    @staticmethod
    async def set_balances(
        user_id: int,
        targets: CurrencyAdjustment,
        reason: LedgerReason,
        conn: Optional[BaseDBAsyncClient] = None
    ) -> Balances:
        """
        목표 잔액으로 맞추기

        현재 잔액과의 차이를 credit/debit으로 적용하므로 잔액을 직접 덮어쓰지 않습니다.

        Raises:
            InvalidAmountError: 목표 잔액이 음수
        """
        targets.validate(allow_negative=False)

        async with join_or_begin(conn, "set_balances") as tx:
            user = await LedgerService.lock_account(user_id, tx)
            current = _to_balances(user)
            deltas = CurrencyAdjustment(**{
                denomination.value: target - current.get(denomination)
                for denomination, target in targets.entries()
            })
            balances = await LedgerService.adjust(user_id, deltas, reason, tx)

        return balances
