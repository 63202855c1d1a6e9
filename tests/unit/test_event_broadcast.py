"""
EventBus 및 BroadcastService 테스트
"""
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import discord
import pytest

from service.event.event_bus import EventBus, GameEvent, GameEventType
from service.notification.broadcast_service import (
    BroadcastService,
    format_destroy_message,
    format_milestone_message,
    format_win_streak_message,
)


def _milestone(user_id: int = 1) -> GameEvent:
    return GameEvent(
        type=GameEventType.ENHANCEMENT_MILESTONE,
        user_id=user_id,
        data={"weapon_name": "목검", "new_level": 10},
    )


class TestEventBus:
    def test_buses_are_independent(self):
        first, second = EventBus(), EventBus()

        async def handler(event):
            pass

        first.subscribe(GameEventType.BATTLE_FINISHED, handler)
        assert first.get_subscriber_count(GameEventType.BATTLE_FINISHED) == 1
        assert second.get_subscriber_count(GameEventType.BATTLE_FINISHED) == 0

    def test_subscribe_is_idempotent(self):
        bus = EventBus()

        async def handler(event):
            pass

        bus.subscribe(GameEventType.BATTLE_FINISHED, handler)
        bus.subscribe(GameEventType.BATTLE_FINISHED, handler)
        assert bus.get_subscriber_count(GameEventType.BATTLE_FINISHED) == 1
        bus.unsubscribe(GameEventType.BATTLE_FINISHED, handler)
        assert bus.get_subscriber_count(GameEventType.BATTLE_FINISHED) == 0

    @pytest.mark.asyncio
    async def test_failing_subscriber_isolated(self):
        bus = EventBus()
        received = []

        async def broken(event):
            raise RuntimeError("boom")

        async def working(event):
            received.append(event)

        bus.subscribe(GameEventType.ENHANCEMENT_MILESTONE, broken)
        bus.subscribe(GameEventType.ENHANCEMENT_MILESTONE, working)
        await bus.publish(_milestone())

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_publish_nowait(self):
        bus = EventBus()
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(GameEventType.ENHANCEMENT_MILESTONE, handler)
        bus.publish_nowait(_milestone())
        assert received == []

        await bus.drain()
        assert len(received) == 1


class TestBroadcastService:
    def test_message_format(self):
        message = format_milestone_message("철수", "목검", 12)
        assert "철수" in message
        assert "목검 +12" in message

    @pytest.mark.asyncio
    async def test_without_webhook_url(self):
        assert await BroadcastService(None).send("hello") is False

    @pytest.mark.asyncio
    async def test_sends_through_webhook(self, monkeypatch):
        webhook = MagicMock()
        webhook.send = AsyncMock()
        from_url = MagicMock(return_value=webhook)
        monkeypatch.setattr(discord.Webhook, "from_url", from_url)

        sent = await BroadcastService("https://discord.com/api/webhooks/1/abc").send("hello")

        assert sent is True
        webhook.send.assert_awaited_once()
        assert webhook.send.await_args.args[0] == "hello"

    @pytest.mark.asyncio
    async def test_delivery_failure_is_swallowed(self, monkeypatch):
        webhook = MagicMock()
        webhook.send = AsyncMock(side_effect=aiohttp.ClientError("unreachable"))
        monkeypatch.setattr(discord.Webhook, "from_url", MagicMock(return_value=webhook))

        sent = await BroadcastService("https://discord.com/api/webhooks/1/abc").send("hello")

        assert sent is False

    @pytest.mark.asyncio
    async def test_registered_on_milestone(self, user_factory, monkeypatch):
        user = await user_factory(username="철수")
        service = BroadcastService("https://discord.com/api/webhooks/1/abc")
        send = AsyncMock(return_value=True)
        monkeypatch.setattr(service, "send", send)
        bus = EventBus()
        service.register(bus)

        await bus.publish(_milestone(user.id))

        send.assert_awaited_once()
        assert "철수" in send.await_args.args[0]


class TestBroadcastSubscriptions:
    def test_registers_all_published_events(self):
        bus = EventBus()
        BroadcastService(None).register(bus)
        for event_type in GameEventType:
            assert bus.get_subscriber_count(event_type) == 1, event_type

    @pytest.mark.asyncio
    @pytest.mark.parametrize("previous_level,expected", [(9, 0), (10, 1), (15, 1)])
    async def test_destroy_broadcast_threshold(self, user_factory, monkeypatch, previous_level, expected):
        user = await user_factory(username="철수")
        service = BroadcastService("https://discord.com/api/webhooks/1/abc")
        send = AsyncMock(return_value=True)
        monkeypatch.setattr(service, "send", send)
        bus = EventBus()
        service.register(bus)

        await bus.publish(GameEvent(
            type=GameEventType.WEAPON_DESTROYED,
            user_id=user.id,
            data={"weapon_name": "목검", "previous_level": previous_level, "new_level": 0},
        ))

        assert send.await_count == expected
        if expected:
            assert f"목검 +{previous_level}" in send.await_args.args[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("streak,expected", [(1, 0), (4, 0), (5, 1), (10, 1), (11, 0)])
    async def test_win_streak_broadcast(self, user_factory, monkeypatch, streak, expected):
        user = await user_factory(username="철수")
        service = BroadcastService("https://discord.com/api/webhooks/1/abc")
        send = AsyncMock(return_value=True)
        monkeypatch.setattr(service, "send", send)
        bus = EventBus()
        service.register(bus)

        await bus.publish(GameEvent(
            type=GameEventType.BATTLE_FINISHED,
            user_id=user.id,
            data={"battle_id": 1, "loser_id": 2, "gold_exchanged": 1_000, "win_streak": streak},
        ))

        assert send.await_count == expected

    def test_message_formats(self):
        assert "목검 +12" in format_destroy_message("철수", "목검", 12)
        assert "5연승" in format_win_streak_message("철수", 5)
