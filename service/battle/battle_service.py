"""
BattleService

플레이어 간 무기 대결을 담당합니다.
전투력 비례 확률로 승자를 정하고, 패자의 골드 일부를 승자에게 옮깁니다.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from tortoise.expressions import Q

from config import BATTLE, Denomination
from exceptions import BattleNotFoundError, InsufficientFundsError, InvariantViolationError, SelfBattleError
from models import Battle, LedgerReason, User
from models.repos.users_repo import lock_users
from models.repos.weapon_repo import get_owned_weapon, get_weapon
from service.economy.ledger_service import LedgerService
from service.event.event_bus import EventBus, GameEvent, GameEventType
from service.random_source import RandomSource, SystemRandomSource
from service.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def combat_power(level: int, is_hidden: bool) -> int:
    """무기 전투력 = (10 + 2 × 레벨) × (히든이면 1.5), 소수점 버림"""
    power = BATTLE.BASE_POWER + BATTLE.POWER_PER_LEVEL * level
    if is_hidden:
        return math.floor(power * BATTLE.HIDDEN_POWER_MULTIPLIER)
    return power


def pick_winner(power_1: int, power_2: int, random_source: RandomSource) -> Tuple[int, float]:
    """
    전투력 비례 승자 결정

    Args:
        power_1: 첫 번째 참가자 전투력
        power_2: 두 번째 참가자 전투력
        random_source: 난수 공급자

    Returns:
        (승자 번호 1 또는 2, 판정 난수)
    """
    total = power_1 + power_2
    if power_1 < 0 or power_2 < 0 or total <= 0:
        raise InvariantViolationError(f"invalid combat power: {power_1}, {power_2}")
    roll = random_source.uniform(total)
    return (1 if roll < power_1 else 2), roll


def exchange_amount(loser_gold: int) -> int:
    """패자 골드의 5%를 1,000 ~ 1,000,000 범위로 보정한 약탈 골드"""
    amount = loser_gold * BATTLE.EXCHANGE_PERCENT // 100
    return max(BATTLE.MIN_EXCHANGE, min(BATTLE.MAX_EXCHANGE, amount))


@dataclass(frozen=True)
class BattleResult:
    """대결 결과"""
    battle_id: int
    winner: dict
    loser: dict
    gold_exchanged: int
    attacker_power: int
    defender_power: int
    roll: float


def _record_win(user: User) -> None:
    user.wins += 1
    user.total_battles += 1
    user.win_streak += 1
    user.max_win_streak = max(user.max_win_streak, user.win_streak)
    user.battle_rating += BATTLE.WIN_RATING


def _record_loss(user: User) -> None:
    user.losses += 1
    user.total_battles += 1
    user.win_streak = 0
    user.battle_rating = max(0, user.battle_rating - BATTLE.LOSS_RATING)


_STAT_FIELDS = ["wins", "losses", "total_battles", "win_streak", "max_win_streak", "battle_rating"]


class BattleService:
    """대결 서비스"""

    def __init__(
        self,
        random_source: Optional[RandomSource] = None,
        event_bus: Optional[EventBus] = None
    ):
        self.random_source = random_source or SystemRandomSource()
        self.event_bus = event_bus

    async def battle(
        self,
        attacker_id: int,
        attacker_weapon_id: int,
        defender_weapon_id: int
    ) -> BattleResult:
        """
        대결 진행

        Raises:
            WeaponNotFoundError: 공격 무기가 본인 소유가 아니거나 방어 무기 없음
            SelfBattleError: 자기 자신의 무기와 대결
            InsufficientFundsError: 어느 한쪽이 패배 시 약탈 골드를 낼 수 없음
        """
        async with unit_of_work("battle") as conn:
            defender_weapon = await get_weapon(defender_weapon_id, conn)
            defender_id = defender_weapon.owner_id
            if defender_id == attacker_id:
                raise SelfBattleError()

            # 계정은 ID 오름차순, 그 다음 무기
            users = {user.id: user for user in await lock_users([attacker_id, defender_id], conn)}
            attacker, defender = users[attacker_id], users[defender_id]
            attacker_weapon = await get_owned_weapon(attacker_id, attacker_weapon_id, conn, for_update=True)
            defender_weapon = await get_owned_weapon(defender_id, defender_weapon_id, conn, for_update=True)

            # 패배 시 약탈 골드를 낼 수 없는 참가자가 있으면 판정 전에 거절
            for participant in (attacker, defender):
                stake = exchange_amount(participant.gold)
                if participant.gold < stake:
                    raise InsufficientFundsError(Denomination.GOLD.value, stake, participant.gold)

            attacker_power = combat_power(attacker_weapon.level, attacker_weapon.is_hidden)
            defender_power = combat_power(defender_weapon.level, defender_weapon.is_hidden)
            side, roll = pick_winner(attacker_power, defender_power, self.random_source)
            winner, loser = (attacker, defender) if side == 1 else (defender, attacker)

            gold_exchanged = exchange_amount(loser.gold)
            await LedgerService.debit(loser.id, Denomination.GOLD, gold_exchanged, LedgerReason.BATTLE, conn)
            await LedgerService.credit(winner.id, Denomination.GOLD, gold_exchanged, LedgerReason.BATTLE, conn)

            _record_win(winner)
            _record_loss(loser)
            await winner.save(using_db=conn, update_fields=_STAT_FIELDS)
            await loser.save(using_db=conn, update_fields=_STAT_FIELDS)

            battle = await Battle.create(
                attacker_id=attacker_id,
                defender_id=defender_id,
                winner_id=winner.id,
                loser_id=loser.id,
                attacker_weapon_id=attacker_weapon.id,
                defender_weapon_id=defender_weapon.id,
                attacker_power=attacker_power,
                defender_power=defender_power,
                roll=roll,
                gold_exchanged=gold_exchanged,
                using_db=conn
            )

        logger.info(
            f"Battle {battle.id}: {attacker.username}({attacker_power}) vs "
            f"{defender.username}({defender_power}) → winner {winner.username}, {gold_exchanged:,}G"
        )

        if self.event_bus is not None:
            self.event_bus.publish_nowait(GameEvent(
                type=GameEventType.BATTLE_FINISHED,
                user_id=winner.id,
                data={
                    "battle_id": battle.id,
                    "loser_id": loser.id,
                    "gold_exchanged": gold_exchanged,
                    "win_streak": winner.win_streak,
                }
            ))

        return BattleResult(
            battle_id=battle.id,
            winner={"id": winner.id, "username": winner.username},
            loser={"id": loser.id, "username": loser.username},
            gold_exchanged=gold_exchanged,
            attacker_power=attacker_power,
            defender_power=defender_power,
            roll=roll,
        )

    @staticmethod
    async def history(user_id: int, limit: int = BATTLE.HISTORY_PAGE_SIZE, offset: int = 0) -> List[dict]:
        """계정이 참여한 대결 기록 (최신순)"""
        battles = await (
            Battle.filter(Q(attacker_id=user_id) | Q(defender_id=user_id))
            .order_by("-created_at", "-id")
            .offset(offset)
            .limit(limit)
            .prefetch_related("attacker", "defender")
        )
        return [
            {
                "battle_id": battle.id,
                "attacker": battle.attacker.username,
                "defender": battle.defender.username,
                "attacker_power": battle.attacker_power,
                "defender_power": battle.defender_power,
                "won": battle.winner_id == user_id,
                "gold_exchanged": battle.gold_exchanged,
                "created_at": battle.created_at.isoformat(),
            }
            for battle in battles
        ]

    @staticmethod
    async def get_battle(battle_id: int) -> dict:
        """
        대결 상세 조회

        Raises:
            BattleNotFoundError: 대결 기록 없음
        """
        battle = await Battle.get_or_none(id=battle_id).prefetch_related("attacker", "defender", "winner")
        if battle is None:
            raise BattleNotFoundError(battle_id)
        return {
            "battle_id": battle.id,
            "attacker": {"id": battle.attacker.id, "username": battle.attacker.username},
            "defender": {"id": battle.defender.id, "username": battle.defender.username},
            "winner": {"id": battle.winner.id, "username": battle.winner.username},
            "attacker_weapon_id": battle.attacker_weapon_id,
            "defender_weapon_id": battle.defender_weapon_id,
            "attacker_power": battle.attacker_power,
            "defender_power": battle.defender_power,
            "roll": battle.roll,
            "gold_exchanged": battle.gold_exchanged,
            "created_at": battle.created_at.isoformat(),
        }
