"""
티어 & 포인트 계산 모듈

- 기록 → 티어 분류 (기준 기록 이상이면 해당 티어, 동일 기록은 상위 티어)
- 기록 → 포인트 (종목 내 비교용, 티어 경계에서 최소 포인트와 일치)

포인트 공식 (구간 선형 보간):
    JV ~ WORLD_CLASS: 현재 티어 기준 기록 → 다음 티어 기준 기록 사이를
                      현재 티어 최소 포인트 → 다음 티어 최소 포인트로 보간
    GODSPEED 이상:    995 → 1000 (점근)
    ROOKIE 구간:      100 → 0 (JV 기준 기록에서 멀어질수록 감소, 음수 없음)

단조성은 float 해상도 안에서 성립한다 (GODSPEED 초과분이 약 1e15 이상이면
포인트가 더 이상 변하지 않음 - 실제 기록 범위에서는 발생하지 않음)
"""
import math
from dataclasses import dataclass
from numbers import Real
from typing import Optional

from .tiers import (
    MAX_POINTS,
    TIER_MIN_POINTS,
    TIER_ORDER,
    ThresholdLookup,
    Tier,
    thresholds_for,
)


# =====================================================
# 예외
# =====================================================

class InvalidPerformance(ValueError):
    """유효하지 않은 기록 (음수, NaN, 무한대, 숫자 아님)"""

    def __init__(self, value, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"유효하지 않은 기록 {value!r}: {reason}")


def validate_performance(value) -> Real:
    """기록 값 검증 후 그대로 반환"""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidPerformance(value, "숫자가 아닙니다")
    if not math.isfinite(value):
        raise InvalidPerformance(value, "유한한 값이 아닙니다")
    if value < 0:
        raise InvalidPerformance(value, "음수 기록입니다")
    return value


# =====================================================
# 분류 / 포인트
# =====================================================

def _meets(performance: float, threshold: float, is_field: bool) -> bool:
    if is_field:
        return performance >= threshold
    return performance <= threshold


def _tier_for(lookup: ThresholdLookup, performance: float) -> Tier:
    for tier, threshold in reversed(lookup.thresholds):
        if tier == Tier.ROOKIE:
            break
        if _meets(performance, threshold, lookup.is_field_event):
            return tier
    return Tier.ROOKIE


def _points_for(lookup: ThresholdLookup, performance: float, tier: Tier) -> float:
    # 방향 통일: 클수록 좋은 값으로 변환
    sign = 1 if lookup.is_field_event else -1
    score = sign * performance

    def boundary(t: Tier) -> float:
        return sign * lookup.threshold_of(t)

    if tier == Tier.ROOKIE:
        deficit = boundary(Tier.JV) - score
        scale = boundary(Tier.VARSITY) - boundary(Tier.JV)
        return TIER_MIN_POINTS[Tier.JV] * scale / (scale + deficit)

    if tier == Tier.GODSPEED:
        surplus = score - boundary(Tier.GODSPEED)
        scale = boundary(Tier.GODSPEED) - boundary(Tier.WORLD_CLASS)
        headroom = MAX_POINTS - TIER_MIN_POINTS[Tier.GODSPEED]
        return TIER_MIN_POINTS[Tier.GODSPEED] + headroom * surplus / (surplus + scale)

    next_tier = TIER_ORDER[tier.level + 1]
    low, high = boundary(tier), boundary(next_tier)
    progress = (score - low) / (high - low)
    span = TIER_MIN_POINTS[next_tier] - TIER_MIN_POINTS[tier]
    return TIER_MIN_POINTS[tier] + span * progress


@dataclass(frozen=True)
class PerformanceEvaluation:
    """단일 기록 평가 결과"""
    event: str
    performance: float
    is_field_event: bool
    tier: Tier
    points: float
    used_fallback: bool = False


def evaluate_performance(
    event: str,
    performance,
    is_field_event: Optional[bool] = None
) -> PerformanceEvaluation:
    """
    기록 평가 (티어 + 포인트)

    Args:
        event: 종목명 (100m, LJ, Long Jump ...)
        performance: 기록 (트랙: ms, 필드: cm)
        is_field_event: 필드 종목 여부 (None이면 기준표에서 결정)

    Raises:
        InvalidPerformance: 음수/NaN/무한대/숫자가 아닌 기록
    """
    validate_performance(performance)
    lookup = thresholds_for(event, is_field_event)
    tier = _tier_for(lookup, performance)
    return PerformanceEvaluation(
        event=lookup.event,
        performance=performance,
        is_field_event=lookup.is_field_event,
        tier=tier,
        points=float(_points_for(lookup, performance, tier)),
        used_fallback=lookup.used_fallback,
    )


def classify(event: str, performance, is_field_event: Optional[bool] = None) -> Tier:
    """기록으로 티어 분류"""
    return evaluate_performance(event, performance, is_field_event).tier


def calculate_points(event: str, performance, is_field_event: Optional[bool] = None) -> float:
    """기록으로 포인트 계산 (0 ~ 1000, 종목 내에서만 비교 가능)"""
    return evaluate_performance(event, performance, is_field_event).points
