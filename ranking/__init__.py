"""
TrackVerse 랭킹 엔진

육상 기록 → 티어 / 포인트 / 리더보드
"""
from .tiers import (
    Tier,
    TierInfo,
    EventDefinition,
    ThresholdLookup,
    TIER_ORDER,
    TIER_MIN_POINTS,
    TIER_STYLES,
    TIER_THRESHOLDS,
    DEFAULT_TIMED_EVENT,
    DEFAULT_FIELD_EVENT,
    metadata_for,
    thresholds_for,
    resolve_event,
    is_field_event,
    list_events,
)
from .calculator import (
    InvalidPerformance,
    PerformanceEvaluation,
    validate_performance,
    evaluate_performance,
    classify,
    calculate_points,
)
from .formatting import (
    format_time,
    format_distance,
    format_distance_imperial,
    format_performance,
    parse_time,
    parse_distance,
    parse_performance,
)
from .leaderboard import (
    AthletePerformanceRecord,
    LeaderboardEntry,
    LeaderboardResult,
    RankChange,
    RejectedRecord,
    build_leaderboard,
    calculate_rank_change,
    rank_changes_between,
)

__all__ = [
    # Tiers
    "Tier",
    "TierInfo",
    "EventDefinition",
    "ThresholdLookup",
    "TIER_ORDER",
    "TIER_MIN_POINTS",
    "TIER_STYLES",
    "TIER_THRESHOLDS",
    "DEFAULT_TIMED_EVENT",
    "DEFAULT_FIELD_EVENT",
    "metadata_for",
    "thresholds_for",
    "resolve_event",
    "is_field_event",
    "list_events",
    # Calculator
    "InvalidPerformance",
    "PerformanceEvaluation",
    "validate_performance",
    "evaluate_performance",
    "classify",
    "calculate_points",
    # Formatting
    "format_time",
    "format_distance",
    "format_distance_imperial",
    "format_performance",
    "parse_time",
    "parse_distance",
    "parse_performance",
    # Leaderboard
    "AthletePerformanceRecord",
    "LeaderboardEntry",
    "LeaderboardResult",
    "RankChange",
    "RejectedRecord",
    "build_leaderboard",
    "calculate_rank_change",
    "rank_changes_between",
]
