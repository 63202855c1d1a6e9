"""
전체 알림 설정
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class NotificationConfig:
    """전체 공지 설정"""

    BROADCAST_MIN_LEVEL: int = 10
    """전체 공지되는 강화 성공 최소 레벨"""

    WIN_STREAK_BROADCAST_EVERY: int = 5
    """N연승마다 전체 공지"""

    WEBHOOK_USERNAME: str = "강화 알리미"
    """웹훅 메시지 발신자 이름"""

    WEBHOOK_TIMEOUT_SECONDS: int = 5
    """웹훅 전송 타임아웃 (초)"""


# 싱글톤 설정 객체
NOTIFICATION = NotificationConfig()
