"""
이벤트 버스 (Event Bus)

옵저버 패턴을 사용하여 게임 내 이벤트를 발행하고 구독합니다.
트랜잭션이 커밋된 뒤에만 발행하며, 구독자 오류는 발행자에게 전달되지 않습니다.
"""

import asyncio
import logging
from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Set

logger = logging.getLogger(__name__)


class GameEventType(Enum):
    """게임 이벤트 타입"""

    # 강화 이벤트
    ENHANCEMENT_MILESTONE = "enhancement_milestone"   # 고강화 성공 (+10 이상)
    WEAPON_DESTROYED = "weapon_destroyed"             # 강화 파괴

    # 대결 이벤트
    BATTLE_FINISHED = "battle_finished"               # 대결 종료 (연승 공지)


@dataclass
class GameEvent:
    """게임 이벤트"""

    type: GameEventType
    user_id: int
    data: Dict[str, Any]
    timestamp: datetime = field(default_factory=datetime.now)

    def __repr__(self) -> str:
        return f"GameEvent(type={self.type.value}, user_id={self.user_id}, data={self.data})"


class EventBus:
    """
    이벤트 버스

    앱마다 하나씩 생성해 서비스에 주입합니다.
    발행자(Publisher)는 이벤트를 발행하고, 구독자(Subscriber)는 이벤트를 수신합니다.

    Example:
        >>> event_bus = EventBus()
        >>>
        >>> async def on_milestone(event: GameEvent):
        ...     print(f"+{event.data['new_level']} 달성")
        >>>
        >>> event_bus.subscribe(GameEventType.ENHANCEMENT_MILESTONE, on_milestone)
        >>> await event_bus.publish(GameEvent(
        ...     type=GameEventType.ENHANCEMENT_MILESTONE,
        ...     user_id=1,
        ...     data={"weapon_name": "목검", "new_level": 10}
        ... ))
    """

    def __init__(self):
        self._subscribers: Dict[GameEventType, List[Callable]] = {}
        self._pending: Set[asyncio.Task] = set()

    def subscribe(self, event_type: GameEventType, callback: Callable) -> None:
        """
        이벤트 구독

        Args:
            event_type: 구독할 이벤트 타입
            callback: 이벤트 발생 시 호출할 콜백 함수 (async function)
        """
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []

        if callback not in self._subscribers[event_type]:
            self._subscribers[event_type].append(callback)
            logger.debug(f"Subscribed to {event_type.value}: {callback.__name__}")

    def unsubscribe(self, event_type: GameEventType, callback: Callable) -> None:
        """구독 취소"""
        if event_type in self._subscribers and callback in self._subscribers[event_type]:
            self._subscribers[event_type].remove(callback)
            logger.debug(f"Unsubscribed from {event_type.value}: {callback.__name__}")

    async def publish(self, event: GameEvent) -> None:
        """
        이벤트 발행

        각 구독자의 콜백이 순차적으로 호출되며, 에러가 발생해도 다른 구독자에게 영향을 주지 않습니다.

        Args:
            event: 발행할 이벤트
        """
        if event.type not in self._subscribers:
            logger.debug(f"No subscribers for event: {event.type.value}")
            return

        logger.debug(f"Publishing event: {event}")

        for callback in list(self._subscribers[event.type]):
            try:
                await callback(event)
            except Exception as e:
                logger.error(
                    f"Error in event callback {callback.__name__} for {event.type.value}: {e}",
                    exc_info=True
                )

    def publish_nowait(self, event: GameEvent) -> None:
        """
        응답을 기다리지 않고 백그라운드로 발행

        요청 처리 흐름을 막지 않아야 하는 알림(브로드캐스트 등)에 사용합니다.
        """
        if not self._subscribers.get(event.type):
            return
        task = asyncio.get_running_loop().create_task(self.publish(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """대기 중인 백그라운드 발행 완료 대기 (종료 시/테스트용)"""
        if self._pending:
            await asyncio.gather(*list(self._pending))

    def get_subscriber_count(self, event_type: GameEventType) -> int:
        """특정 이벤트 타입의 구독자 수 반환"""
        return len(self._subscribers.get(event_type, []))

    def clear_all_subscribers(self) -> None:
        """모든 구독자 제거"""
        self._subscribers.clear()
        logger.info("All subscribers cleared")
