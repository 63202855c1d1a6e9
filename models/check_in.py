"""출석 기록 모델"""
from tortoise import fields
from tortoise.models import Model


class CheckIn(Model):
    """
    일일 출석 기록 (추가 전용)

    계정당 하루에 한 행만 존재합니다. 월간 출석 달력에 사용됩니다.
    """

    id = fields.BigIntField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="check_ins")

    check_in_date = fields.DateField()
    streak = fields.IntField()
    reward = fields.BigIntField()

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "check_ins"
        unique_together = (("user", "check_in_date"),)
