"""강화 시도 기록 모델"""
from enum import Enum

from tortoise import fields
from tortoise.models import Model


class EnhancementOutcome(str, Enum):
    """강화 결과"""
    SUCCESS = "success"      # 성공 (+1)
    MAINTAIN = "maintain"    # 실패 (유지)
    DESTROY = "destroy"      # 파괴 (+0 초기화)


class EnhancementAttempt(Model):
    """
    강화 시도 기록 (추가 전용)

    생성 후 수정하지 않습니다. 통계, 최고 기록, 히든 무기 해금(누적 파괴 횟수) 조회에 사용됩니다.
    무기를 판매해도 기록은 남습니다 (weapon은 NULL로 변경).
    """

    id = fields.BigIntField(pk=True)

    user = fields.ForeignKeyField("models.User", related_name="enhancement_attempts")
    weapon = fields.ForeignKeyField(
        "models.Weapon",
        related_name="enhancement_attempts",
        null=True,
        on_delete=fields.SET_NULL
    )

    weapon_name = fields.CharField(max_length=100)
    """시도 당시 무기 이름 (무기 판매 후 조회용 비정규화)"""

    level_before = fields.IntField()
    level_after = fields.IntField()
    """파괴 시 0"""

    gold_spent = fields.BigIntField()
    result = fields.CharEnumField(EnhancementOutcome, max_length=10)

    roll = fields.FloatField()
    """판정에 사용된 난수 [0, 100)"""

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "enhancement_attempts"
        indexes = [
            ("user_id", "result"),  # 누적 파괴 횟수 조회
            ("weapon_id", "created_at"),  # 무기별 강화 기록
        ]

    def __str__(self):
        return f"EnhancementAttempt(+{self.level_before} → +{self.level_after}, {self.result.value})"
