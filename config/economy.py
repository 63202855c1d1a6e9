"""재화 및 무기 가격 설정"""
from dataclasses import dataclass
from enum import Enum


class Denomination(str, Enum):
    """재화 단위 (골드 → 초코 → 머니 순으로 환전)"""
    GOLD = "gold"
    CHOCO = "choco"
    MONEY = "money"


@dataclass(frozen=True)
class EconomyConfig:
    """재화 설정"""

    STARTING_GOLD: int = 10_000
    """신규 플레이어 시작 골드"""

    GM_STARTING_GOLD: int = 1_000_000
    """GM 계정 시작 골드"""

    GOLD_PER_CHOCO: int = 120_000
    """1 초코 환전에 필요한 골드"""

    CHOCO_PER_MONEY: int = 120
    """1 머니 환전에 필요한 초코"""

    HIDDEN_PRICE_MULTIPLIER: int = 4
    """히든 무기 판매가 배율"""

    SALVAGE_PERCENT: int = 30
    """+0 무기 판매 시 지급 비율 (%)"""


ECONOMY = EconomyConfig()


# 환전 경로 → 상위 재화 1단위에 필요한 하위 재화 수
CONVERSION_RATES: dict[tuple[Denomination, Denomination], int] = {
    (Denomination.GOLD, Denomination.CHOCO): ECONOMY.GOLD_PER_CHOCO,
    (Denomination.CHOCO, Denomination.MONEY): ECONOMY.CHOCO_PER_MONEY,
}


# 레벨별 일반 무기 기본 판매가 (인덱스 = 강화 레벨, +0은 0G)
WEAPON_SELL_PRICES: tuple[int, ...] = (
    0,
    10, 30, 90, 250, 1_000,
    2_500, 10_000, 25_000, 37_500, 85_500,
    100_000, 300_000, 500_500, 1_600_500, 2_750_000,
    4_050_500, 6_500_500, 10_973_000, 50_082_000, 1_000_000_000,
)
