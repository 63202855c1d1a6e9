"""출석 체크 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceConfig:
    """출석 보상 설정"""

    REWARD_GOLD_PER_DAY: int = 60_000
    """연속 출석 1일당 골드 보상"""

    MAX_STREAK: int = 30
    """연속 출석 최대 일수 (보상 상한)"""


ATTENDANCE = AttendanceConfig()
