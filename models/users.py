from enum import Enum

from tortoise import models, fields

from config import BATTLE, ECONOMY


class UserRole(str, Enum):
    PLAYER = "player"
    BETA_TESTER = "beta_tester"
    GM = "gm"


class User(models.Model):
    """
    플레이어 계정 모델

    - 재화(gold/choco/money)는 LedgerService를 통해서만 변경합니다.
    - 모든 잔액은 0 이상이어야 합니다.
    """

    id = fields.IntField(pk=True)
    username = fields.CharField(max_length=50, unique=True)
    access_code_hash = fields.CharField(max_length=128)
    role = fields.CharEnumField(UserRole, max_length=20, default=UserRole.PLAYER)

    # 재화
    gold = fields.BigIntField(default=ECONOMY.STARTING_GOLD)
    choco = fields.IntField(default=0)
    money = fields.IntField(default=0)

    # 대결 통계
    battle_rating = fields.IntField(default=BATTLE.DEFAULT_RATING)
    wins = fields.IntField(default=0)
    losses = fields.IntField(default=0)
    total_battles = fields.IntField(default=0)
    win_streak = fields.IntField(default=0)
    max_win_streak = fields.IntField(default=0)

    # 출석
    check_in_streak = fields.IntField(default=0)
    last_check_in_date = fields.DateField(null=True)

    created_at = fields.DatetimeField(auto_now_add=True)

    def get_name(self):
        return self.username

    @property
    def is_gm(self) -> bool:
        return self.role == UserRole.GM

    class Meta:
        table = "users"
