"""
실시간 이벤트 발행/구독 시스템

랭킹 결과가 바뀌면 구독자(웹소켓 브로드캐스터 등)에게 알리기 위한 메시지 채널
랭킹 엔진은 이 모듈을 모른다 - HTTP 계층이 결과 값을 받아 발행한다
"""

from typing import Dict, Any, List, Callable, Optional
from datetime import datetime
from enum import Enum
from dataclasses import dataclass, field
from loguru import logger
import json
import asyncio
from collections import defaultdict


class EventType(str, Enum):
    """이벤트 유형"""
    NEW_PR = "NEW_PR"                            # 개인 최고 기록
    RANK_CHANGE = "RANK_CHANGE"                  # 순위 변동
    LEADERBOARD_UPDATED = "LEADERBOARD_UPDATED"  # 리더보드 갱신


@dataclass
class RealtimeEvent:
    """실시간 이벤트"""
    event_type: EventType
    event: str                          # 종목명 (100m, LJ ...)
    payload: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    source: str = "rankings"

    @property
    def room(self) -> Optional[str]:
        """종목별 구독 채널 (순위 변동만)"""
        if self.event_type == EventType.RANK_CHANGE:
            return f"event:{self.event}"
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.event_type.value,
            "event": self.event,
            "room": self.room,
            "payload": self.payload,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


class EventPublisher:
    """이벤트 발행자"""

    def __init__(self, max_log_size: int = 1000):
        self.local_subscribers: Dict[EventType, List[Callable]] = defaultdict(list)
        self._event_log: List[RealtimeEvent] = []
        self._max_log_size = max_log_size

    def _append_log(self, event: RealtimeEvent) -> None:
        self._event_log.append(event)
        if len(self._event_log) > self._max_log_size:
            self._event_log = self._event_log[-self._max_log_size:]

    def publish(self, event: RealtimeEvent) -> None:
        """이벤트 발행"""
        logger.info(f"📢 Event published: {event.event_type.value} - {event.event}")
        self._append_log(event)

        # 구독자 하나가 실패해도 나머지는 계속 호출
        for subscriber in list(self.local_subscribers.get(event.event_type, [])):
            try:
                subscriber(event)
            except Exception as e:
                logger.error(f"구독자 호출 실패: {e}")

    async def publish_async(self, event: RealtimeEvent) -> None:
        """비동기 이벤트 발행"""
        logger.info(f"📢 Event published (async): {event.event_type.value} - {event.event}")
        self._append_log(event)

        tasks = []
        for subscriber in list(self.local_subscribers.get(event.event_type, [])):
            if asyncio.iscoroutinefunction(subscriber):
                tasks.append(subscriber(event))
            else:
                try:
                    subscriber(event)
                except Exception as e:
                    logger.error(f"구독자 호출 실패: {e}")

        if tasks:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"비동기 구독자 호출 실패: {result}")

    def subscribe(self, event_type: EventType, callback: Callable) -> None:
        """이벤트 구독"""
        self.local_subscribers[event_type].append(callback)
        logger.debug(f"✅ Subscribed to {event_type.value}")

    def unsubscribe(self, event_type: EventType, callback: Callable) -> None:
        """이벤트 구독 해제"""
        if callback in self.local_subscribers[event_type]:
            self.local_subscribers[event_type].remove(callback)
            logger.debug(f"❌ Unsubscribed from {event_type.value}")

    def get_recent_events(self, limit: int = 100) -> List[RealtimeEvent]:
        """최근 이벤트 조회"""
        if limit <= 0:
            return []
        return self._event_log[-limit:]

    # 편의 메서드들
    def publish_new_pr(
        self,
        athlete_id: str,
        athlete_name: str,
        event: str,
        time: str,
        tier: str
    ) -> RealtimeEvent:
        realtime_event = RealtimeEvent(
            event_type=EventType.NEW_PR,
            event=event,
            payload={
                "athlete_id": athlete_id,
                "athlete_name": athlete_name,
                "time": time,
                "tier": tier,
            }
        )
        self.publish(realtime_event)
        return realtime_event

    def publish_rank_change(
        self,
        athlete_id: str,
        athlete_name: str,
        event: str,
        old_rank: int,
        new_rank: int
    ) -> RealtimeEvent:
        realtime_event = RealtimeEvent(
            event_type=EventType.RANK_CHANGE,
            event=event,
            payload={
                "athlete_id": athlete_id,
                "athlete_name": athlete_name,
                "old_rank": old_rank,
                "new_rank": new_rank,
            }
        )
        self.publish(realtime_event)
        return realtime_event

    def publish_leaderboard_updated(self, event: str, total: int) -> RealtimeEvent:
        realtime_event = RealtimeEvent(
            event_type=EventType.LEADERBOARD_UPDATED,
            event=event,
            payload={"total": total}
        )
        self.publish(realtime_event)
        return realtime_event
