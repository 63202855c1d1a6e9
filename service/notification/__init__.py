"""
알림 시스템

강화/대결 소식 브로드캐스트 (Discord 웹훅)
"""

from service.notification.broadcast_service import (
    BroadcastService,
    format_destroy_message,
    format_milestone_message,
    format_win_streak_message,
)

__all__ = [
    "BroadcastService",
    "format_destroy_message",
    "format_milestone_message",
    "format_win_streak_message",
]
