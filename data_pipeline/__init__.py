"""
데이터 파이프라인 패키지

- 입력 기록 스키마 및 검증
- 실시간 이벤트 발행 (순위 변동, 개인 최고 기록, 리더보드 갱신)
"""

from .schemas import (
    PerformanceRecordSchema,
    ValidationResult,
    ValidationError,
    ValidationSeverity,
)
from .validators import PerformanceValidator
from .events import EventPublisher, EventType, RealtimeEvent

__all__ = [
    # Schemas
    "PerformanceRecordSchema",
    "ValidationResult",
    "ValidationError",
    "ValidationSeverity",
    # Validators
    "PerformanceValidator",
    # Events
    "EventPublisher",
    "EventType",
    "RealtimeEvent",
]
