"""대결 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class BattleConfig:
    """플레이어 간 대결 설정"""

    # 전투력 = (BASE_POWER + POWER_PER_LEVEL * 레벨) * (히든이면 HIDDEN_POWER_MULTIPLIER)
    BASE_POWER: int = 10
    """기본 전투력"""

    POWER_PER_LEVEL: int = 2
    """강화 레벨당 전투력"""

    HIDDEN_POWER_MULTIPLIER: float = 1.5
    """히든 무기 전투력 배율"""

    # 골드 약탈
    EXCHANGE_PERCENT: int = 5
    """패자 보유 골드 중 승자에게 넘어가는 비율 (%)"""

    MIN_EXCHANGE: int = 1_000
    """최소 약탈 골드"""

    MAX_EXCHANGE: int = 1_000_000
    """최대 약탈 골드"""

    # 레이팅
    DEFAULT_RATING: int = 1000
    """초기 대결 레이팅"""

    WIN_RATING: int = 20
    """승리 시 레이팅 증가"""

    LOSS_RATING: int = 10
    """패배 시 레이팅 감소 (0 미만으로 내려가지 않음)"""

    HISTORY_PAGE_SIZE: int = 10
    """대결 기록 기본 조회 수"""

    PROFILE_RECENT_BATTLES: int = 5
    """공개 프로필에 표시되는 최근 대결 수"""


BATTLE = BattleConfig()
