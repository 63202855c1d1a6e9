"""
Weapon 모델 정의

플레이어가 강화하는 무기입니다.
"""
from tortoise import models, fields
from tortoise.validators import MaxValueValidator, MinValueValidator

from config import ENHANCEMENT


class Weapon(models.Model):
    """
    무기 모델

    - 계정당 같은 base_name의 무기는 하나만 보유 가능
    - level은 강화 트랜잭션에서만 변경 (파괴 시 0으로 초기화, 레코드는 유지)
    - 판매 시에만 레코드 삭제
    """

    id = fields.BigIntField(pk=True)
    owner = fields.ForeignKeyField(
        "models.User",
        related_name="weapons",
        on_delete=fields.CASCADE
    )
    name = fields.CharField(max_length=100)
    """표시 이름"""

    base_name = fields.CharField(max_length=100)
    """강화 수치와 무관한 무기 식별 이름"""

    level = fields.IntField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(ENHANCEMENT.MAX_LEVEL)]
    )
    is_hidden = fields.BooleanField(default=False)

    created_at = fields.DatetimeField(auto_now_add=True)

    @property
    def full_name(self) -> str:
        return f"{self.name} +{self.level}"

    def snapshot(self) -> dict:
        """응답/이벤트용 무기 정보"""
        return {
            "id": self.id,
            "name": self.name,
            "base_name": self.base_name,
            "level": self.level,
            "is_hidden": self.is_hidden,
        }

    class Meta:
        table = "weapons"
        unique_together = [("owner", "base_name")]

    def __str__(self):
        return self.full_name
