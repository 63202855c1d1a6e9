"""
고강화 브로드캐스트

강화와 대결의 주요 소식을 Discord 웹훅으로 전송합니다.
전송 실패는 경고 로그만 남기고 게임 처리에는 영향을 주지 않습니다.
"""
import asyncio
import logging
from typing import Optional

import aiohttp
import discord

from config import NOTIFICATION
from models.repos.users_repo import find_user_by_id
from service.event.event_bus import EventBus, GameEvent, GameEventType

logger = logging.getLogger(__name__)


def format_milestone_message(username: str, weapon_name: str, level: int) -> str:
    return f"🎉 **{username}**님이 **{weapon_name} +{level}** 강화에 성공했습니다!"


def format_destroy_message(username: str, weapon_name: str, level: int) -> str:
    return f"💥 **{username}**님의 **{weapon_name} +{level}**이(가) 강화 도중 파괴되었습니다..."


def format_win_streak_message(username: str, streak: int) -> str:
    return f"🔥 **{username}**님이 대결 **{streak}연승**을 달성했습니다!"


class BroadcastService:
    """
    웹훅 브로드캐스트 구독자

    - +10 이상 강화 성공
    - +10 이상 무기 파괴
    - N연승 달성 (NOTIFICATION.WIN_STREAK_BROADCAST_EVERY 배수)

    webhook_url이 없으면 전송하지 않습니다.
    """

    def __init__(self, webhook_url: Optional[str]):
        self.webhook_url = webhook_url

    def register(self, event_bus: EventBus) -> None:
        event_bus.subscribe(GameEventType.ENHANCEMENT_MILESTONE, self.on_enhancement_milestone)
        event_bus.subscribe(GameEventType.WEAPON_DESTROYED, self.on_weapon_destroyed)
        event_bus.subscribe(GameEventType.BATTLE_FINISHED, self.on_battle_finished)

    async def on_enhancement_milestone(self, event: GameEvent) -> None:
        await self.send(format_milestone_message(
            await self._username(event.user_id),
            event.data.get("weapon_name", "?"),
            event.data.get("new_level", 0),
        ))

    async def on_weapon_destroyed(self, event: GameEvent) -> None:
        level = event.data.get("previous_level", 0)
        if level < NOTIFICATION.BROADCAST_MIN_LEVEL:
            return
        await self.send(format_destroy_message(
            await self._username(event.user_id), event.data.get("weapon_name", "?"), level
        ))

    async def on_battle_finished(self, event: GameEvent) -> None:
        streak = event.data.get("win_streak", 0)
        if streak <= 0 or streak % NOTIFICATION.WIN_STREAK_BROADCAST_EVERY:
            return
        await self.send(format_win_streak_message(await self._username(event.user_id), streak))

    @staticmethod
    async def _username(user_id: int) -> str:
        user = await find_user_by_id(user_id)
        return user.get_name() if user else f"#{user_id}"

    async def send(self, content: str) -> bool:
        """
        웹훅 메시지 전송

        Returns:
            전송 성공 여부
        """
        if not self.webhook_url:
            logger.debug("Broadcast webhook not configured, skipping")
            return False

        timeout = aiohttp.ClientTimeout(total=NOTIFICATION.WEBHOOK_TIMEOUT_SECONDS)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                webhook = discord.Webhook.from_url(self.webhook_url, session=session)
                await webhook.send(content, username=NOTIFICATION.WEBHOOK_USERNAME)
        except (discord.HTTPException, aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"Failed to send broadcast: {e}")
            return False

        logger.info(f"Broadcast sent: {content}")
        return True
