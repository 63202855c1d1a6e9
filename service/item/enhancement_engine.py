"""
강화 판정 엔진

현재 레벨과 난수 하나로 강화 결과(성공/유지/파괴)를 결정합니다.
DB나 재화는 다루지 않으며, 같은 입력에는 항상 같은 결과를 냅니다.
"""
from dataclasses import dataclass

from config import ENHANCEMENT, ENHANCEMENT_RATES, EnhancementRate, find_rate_table_errors, get_rate
from exceptions import InvariantViolationError, MaxLevelReachedError
from models import EnhancementOutcome
from service.random_source import RandomSource

_table_errors = find_rate_table_errors(ENHANCEMENT_RATES)
if _table_errors:
    raise InvariantViolationError("enhancement rate table: " + "; ".join(_table_errors))


@dataclass(frozen=True)
class RollOutcome:
    """강화 판정 결과"""
    result: EnhancementOutcome
    previous_level: int
    new_level: int
    roll: float


def require_rate(level: int) -> EnhancementRate:
    """
    강화 가능한 레벨의 확률/비용 조회

    Raises:
        MaxLevelReachedError: 최대 강화 레벨
        InvariantViolationError: 음수 레벨
    """
    if level < 0:
        raise InvariantViolationError(f"negative weapon level: {level}")
    rate = get_rate(level)
    if rate is None:
        raise MaxLevelReachedError(level)
    return rate


def classify(current_level: int, roll: float) -> RollOutcome:
    """
    난수로 강화 결과 분류

    [0, success) 성공, [success, success + maintain) 유지, 나머지는 파괴입니다.

    Args:
        current_level: 현재 강화 레벨
        roll: [0, 100) 구간 난수

    Returns:
        RollOutcome

    Raises:
        MaxLevelReachedError: 최대 강화 레벨
        InvariantViolationError: roll이 [0, 100) 밖
    """
    rate = require_rate(current_level)
    if not 0 <= roll < ENHANCEMENT.ROLL_SCALE:
        raise InvariantViolationError(f"roll out of range: {roll}")

    if roll < rate.success:
        result, new_level = EnhancementOutcome.SUCCESS, current_level + 1
    elif roll < rate.success + rate.maintain:
        result, new_level = EnhancementOutcome.MAINTAIN, current_level
    else:
        result, new_level = EnhancementOutcome.DESTROY, ENHANCEMENT.DESTROY_RESET_LEVEL

    return RollOutcome(result=result, previous_level=current_level, new_level=new_level, roll=roll)


def roll_outcome(current_level: int, random_source: RandomSource) -> RollOutcome:
    """난수를 한 번 뽑아 강화 결과 결정"""
    require_rate(current_level)
    return classify(current_level, random_source.uniform(ENHANCEMENT.ROLL_SCALE))
