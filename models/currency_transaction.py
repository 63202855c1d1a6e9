"""재화 변동 기록 모델"""
from enum import Enum

from tortoise import fields
from tortoise.models import Model

from config import Denomination


class LedgerReason(str, Enum):
    """재화 변동 사유"""
    ENHANCE = "enhance"
    SELL = "sell"
    CONVERT = "convert"
    BATTLE = "battle"
    CHECK_IN = "check_in"
    GM_ADJUST = "gm_adjust"


class CurrencyTransaction(Model):
    """
    재화 변동 기록 (추가 전용)

    잔액 변경과 같은 트랜잭션에서 기록됩니다.
    """

    id = fields.BigIntField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="currency_transactions")

    denomination = fields.CharEnumField(Denomination, max_length=10)
    delta = fields.BigIntField()
    """변동량 (지급 +, 차감 -)"""

    balance_after = fields.BigIntField()
    reason = fields.CharEnumField(LedgerReason, max_length=20)

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "currency_transactions"
        indexes = [("user_id", "created_at")]
