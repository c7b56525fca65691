"""
리더보드 생성 모듈

선수 기록 목록 → 정렬 + 순위 + 티어 + 순위 변동이 붙은 리더보드
- 정렬: 트랙은 오름차순, 필드는 내림차순
- 동일 기록: 입력 순서 유지 (안정 정렬)
- 순위: 1부터 연속 부여 (동일 기록도 서로 다른 순위, 1,1,3 방식 아님)
- 유효하지 않은 기록: 순위에서 제외하고 rejected 목록으로 보고
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from loguru import logger

from .calculator import InvalidPerformance, evaluate_performance, validate_performance
from .formatting import format_performance
from .tiers import Tier, thresholds_for


# =====================================================
# 데이터 클래스
# =====================================================

@dataclass(frozen=True)
class AthletePerformanceRecord:
    """선수 기록 (입력)"""
    id: str
    name: str
    school: str
    performance: Any
    previous_rank: Optional[int] = None


@dataclass(frozen=True)
class RankChange:
    """순위 변동"""
    direction: str  # up / down / same / new
    change: int
    display: str

    def to_dict(self) -> Dict[str, Any]:
        return {"direction": self.direction, "change": self.change, "display": self.display}


@dataclass(frozen=True)
class LeaderboardEntry:
    """리더보드 항목 (출력)"""
    rank: int
    athlete_id: str
    athlete_name: str
    school: str
    performance: Any
    formatted_performance: str
    tier: Tier
    points: float
    previous_rank: Optional[int]
    rank_change: RankChange

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "athlete_id": self.athlete_id,
            "athlete_name": self.athlete_name,
            "school": self.school,
            "performance": self.performance,
            "formatted_performance": self.formatted_performance,
            "tier": self.tier.value,
            "points": round(self.points, 2),
            "previous_rank": self.previous_rank,
            "rank_change": self.rank_change.to_dict(),
        }


@dataclass(frozen=True)
class RejectedRecord:
    """순위에서 제외된 기록"""
    athlete_id: str
    athlete_name: str
    performance: Any
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "athlete_id": self.athlete_id,
            "athlete_name": self.athlete_name,
            "performance": self.performance,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class LeaderboardResult:
    """리더보드 생성 결과"""
    event: str
    is_field_event: bool
    entries: Tuple[LeaderboardEntry, ...]
    rejected: Tuple[RejectedRecord, ...] = field(default_factory=tuple)
    used_fallback: bool = False

    @property
    def is_partial(self) -> bool:
        """일부 기록이 제외되었는지"""
        return len(self.rejected) > 0

    def entry_for(self, athlete_id: str) -> Optional[LeaderboardEntry]:
        for entry in self.entries:
            if entry.athlete_id == athlete_id:
                return entry
        return None

    def __iter__(self) -> Iterator[LeaderboardEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index):
        return self.entries[index]


# =====================================================
# 순위 변동
# =====================================================

def calculate_rank_change(current_rank: int, previous_rank: Optional[int]) -> RankChange:
    """이전 순위 대비 변동 계산"""
    if previous_rank is None:
        return RankChange(direction="new", change=0, display="NEW")

    change = previous_rank - current_rank
    if change > 0:
        return RankChange(direction="up", change=change, display=f"+{change}")
    if change < 0:
        return RankChange(direction="down", change=-change, display=f"-{-change}")
    return RankChange(direction="same", change=0, display="-")


def rank_changes_between(
    previous: Iterable[LeaderboardEntry],
    current: Iterable[LeaderboardEntry]
) -> List[Tuple[LeaderboardEntry, int]]:
    """
    두 리더보드 비교

    Returns:
        [(현재 항목, 이전 순위)] - 이전에도 있었고 순위가 바뀐 선수만
    """
    old_ranks = {entry.athlete_id: entry.rank for entry in previous}
    return [
        (entry, old_ranks[entry.athlete_id])
        for entry in current
        if entry.athlete_id in old_ranks and old_ranks[entry.athlete_id] != entry.rank
    ]


# =====================================================
# 리더보드 생성
# =====================================================

def build_leaderboard(
    event: str,
    records: Iterable[AthletePerformanceRecord],
    is_field_event: Optional[bool] = None
) -> LeaderboardResult:
    """
    리더보드 생성

    Args:
        event: 종목명
        records: 선수 기록 목록
        is_field_event: 필드 종목 여부 (None이면 기준표에서 결정)

    Returns:
        LeaderboardResult (entries + rejected)
    """
    lookup = thresholds_for(event, is_field_event)
    is_field = lookup.is_field_event

    valid: List[AthletePerformanceRecord] = []
    rejected: List[RejectedRecord] = []

    for record in records:
        try:
            validate_performance(record.performance)
        except InvalidPerformance as e:
            logger.warning(f"[{lookup.event}] 기록 제외: {record.name} ({record.id}) - {e.reason}")
            rejected.append(RejectedRecord(
                athlete_id=record.id,
                athlete_name=record.name,
                performance=record.performance,
                reason=e.reason
            ))
            continue
        valid.append(record)

    # sorted()는 안정 정렬 → 동일 기록은 입력 순서 유지
    if is_field:
        ordered = sorted(valid, key=lambda r: -r.performance)
    else:
        ordered = sorted(valid, key=lambda r: r.performance)

    entries = []
    for rank, record in enumerate(ordered, 1):
        evaluation = evaluate_performance(lookup.event, record.performance, is_field)
        entries.append(LeaderboardEntry(
            rank=rank,
            athlete_id=record.id,
            athlete_name=record.name,
            school=record.school,
            performance=record.performance,
            formatted_performance=format_performance(record.performance, is_field),
            tier=evaluation.tier,
            points=evaluation.points,
            previous_rank=record.previous_rank,
            rank_change=calculate_rank_change(rank, record.previous_rank)
        ))

    logger.debug(f"[{lookup.event}] 리더보드 생성: {len(entries)}명 (제외 {len(rejected)}명)")

    return LeaderboardResult(
        event=lookup.event,
        is_field_event=is_field,
        entries=tuple(entries),
        rejected=tuple(rejected),
        used_fallback=lookup.used_fallback
    )
