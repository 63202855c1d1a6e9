"""강화 시스템 설정"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EnhancementConfig:
    """강화 설정"""

    MAX_LEVEL: int = 20
    """최대 강화 레벨 (더 이상 강화 불가)"""

    ROLL_SCALE: int = 100
    """강화 판정 난수 범위 [0, 100)"""

    DESTROY_RESET_LEVEL: int = 0
    """파괴 시 돌아가는 레벨"""


ENHANCEMENT = EnhancementConfig()


@dataclass(frozen=True)
class EnhancementRate:
    """레벨별 강화 확률(%)과 비용(골드)"""
    success: int
    maintain: int
    destroy: int
    cost: int


# 레벨 → 강화 확률/비용 (밸런스 패치 이후 테이블)
ENHANCEMENT_RATES: dict[int, EnhancementRate] = {
    0: EnhancementRate(100, 0, 0, 1_000),
    1: EnhancementRate(95, 3, 2, 2_000),
    2: EnhancementRate(90, 7, 3, 5_000),
    3: EnhancementRate(85, 10, 5, 10_000),
    4: EnhancementRate(80, 10, 10, 50_000),
    5: EnhancementRate(65, 22, 13, 150_000),
    6: EnhancementRate(60, 24, 16, 500_000),
    7: EnhancementRate(55, 26, 19, 1_000_000),
    8: EnhancementRate(50, 28, 22, 2_000_000),
    9: EnhancementRate(45, 30, 25, 3_000_000),
    10: EnhancementRate(40, 30, 30, 5_000_000),
    11: EnhancementRate(35, 30, 35, 7_500_000),
    12: EnhancementRate(30, 30, 40, 10_000_000),
    13: EnhancementRate(25, 30, 45, 15_000_000),
    14: EnhancementRate(20, 30, 50, 20_000_000),
    15: EnhancementRate(15, 30, 55, 30_000_000),
    16: EnhancementRate(10, 30, 60, 40_000_000),
    17: EnhancementRate(8, 30, 62, 50_000_000),
    18: EnhancementRate(5, 30, 65, 75_000_000),
    19: EnhancementRate(2, 30, 68, 100_000_000),
}


def get_rate(level: int) -> Optional[EnhancementRate]:
    """
    강화 확률/비용 조회

    Args:
        level: 현재 강화 레벨

    Returns:
        해당 레벨의 EnhancementRate (최대 레벨 이상이면 None)
    """
    return ENHANCEMENT_RATES.get(level)


def find_rate_table_errors(rates: dict[int, EnhancementRate]) -> list[str]:
    """
    확률 테이블 검증

    Returns:
        발견된 문제 목록 (비어 있으면 정상)
    """
    errors = []
    expected_levels = list(range(ENHANCEMENT.MAX_LEVEL))
    if sorted(rates) != expected_levels:
        errors.append(f"levels must be exactly 0..{ENHANCEMENT.MAX_LEVEL - 1}")

    previous_cost = 0
    for level in sorted(rates):
        rate = rates[level]
        if min(rate.success, rate.maintain, rate.destroy) < 0:
            errors.append(f"level {level}: negative probability")
        if rate.success + rate.maintain + rate.destroy != ENHANCEMENT.ROLL_SCALE:
            errors.append(f"level {level}: probabilities must sum to {ENHANCEMENT.ROLL_SCALE}")
        if rate.cost <= previous_cost:
            errors.append(f"level {level}: cost must increase with level")
        previous_cost = rate.cost
    return errors
