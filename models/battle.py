"""대결 기록 모델"""
from tortoise import fields
from tortoise.models import Model


class Battle(Model):
    """
    플레이어 간 대결 결과 (생성 후 변경 불가)

    무기는 이후 판매될 수 있으므로 ID와 전투력만 기록합니다.
    """

    id = fields.BigIntField(pk=True)

    attacker = fields.ForeignKeyField("models.User", related_name="battles_as_attacker")
    defender = fields.ForeignKeyField("models.User", related_name="battles_as_defender")
    winner = fields.ForeignKeyField("models.User", related_name="battles_won")
    loser = fields.ForeignKeyField("models.User", related_name="battles_lost")

    attacker_weapon_id = fields.BigIntField()
    defender_weapon_id = fields.BigIntField()

    attacker_power = fields.IntField()
    defender_power = fields.IntField()

    roll = fields.FloatField()
    """승패 판정 난수 [0, 공격자 전투력 + 방어자 전투력)"""

    gold_exchanged = fields.BigIntField()
    """패자 → 승자 이동 골드"""

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "battles"
        indexes = [
            ("attacker_id", "created_at"),
            ("defender_id", "created_at"),
        ]
