"""
API Models - Pydantic 모델 정의
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ranking.leaderboard import LeaderboardEntry, RejectedRecord


# =============================================
# Request Models
# =============================================

class ClassifyRequest(BaseModel):
    """단일 기록 티어/포인트 계산 요청"""
    event: str = Field(..., min_length=1, description="종목명 (100m, LJ ...)")
    performance: float = Field(..., description="기록 (트랙: ms, 필드: cm)")
    is_field_event: Optional[bool] = Field(None, description="필드 종목 여부 (생략 시 기준표)")


class ResultSubmission(BaseModel):
    """경기 결과 등록 요청"""
    event: str = Field(..., min_length=1)
    athlete_id: str = Field(..., min_length=1)
    athlete_name: str = Field(..., min_length=1, max_length=100)
    school: str = Field(default="", max_length=200)
    performance: float
    previous_rank: Optional[int] = Field(None, ge=1)
    is_field_event: Optional[bool] = None


class RealtimeRequest(BaseModel):
    """실시간 이벤트 발행 요청"""
    type: str
    payload: Dict[str, Any] = Field(default_factory=dict)


# =============================================
# Response Models
# =============================================

class RankChangeModel(BaseModel):
    direction: str
    change: int
    display: str


class LeaderboardEntryModel(BaseModel):
    """리더보드 항목"""
    rank: int
    athlete_id: str
    athlete_name: str
    school: str
    performance: float
    formatted_performance: str
    tier: str
    points: float
    previous_rank: Optional[int] = None
    rank_change: RankChangeModel

    @classmethod
    def from_entry(cls, entry: LeaderboardEntry) -> "LeaderboardEntryModel":
        return cls(**entry.to_dict())


class RejectedRecordModel(BaseModel):
    """순위에서 제외된 기록"""
    athlete_id: str
    athlete_name: str
    performance: Optional[str] = None
    reason: str

    @classmethod
    def from_rejected(cls, rejected: RejectedRecord) -> "RejectedRecordModel":
        data = rejected.to_dict()
        data["performance"] = str(rejected.performance)
        return cls(**data)


class LeaderboardResponse(BaseModel):
    """리더보드 응답"""
    event: str
    scope: str
    total: int
    leaderboard: List[LeaderboardEntryModel]
    rejected: List[RejectedRecordModel] = []
    used_fallback: bool = False
    last_updated: datetime = Field(..., alias="lastUpdated")

    class Config:
        populate_by_name = True


class ClassifyResponse(BaseModel):
    """단일 기록 계산 응답"""
    event: str
    performance: float
    formatted_performance: str
    tier: str
    points: float
    used_fallback: bool = False


class ResultResponse(BaseModel):
    """경기 결과 등록 응답"""
    event: str
    personal_record: bool
    entry: LeaderboardEntryModel
    rank_changes: List[Dict[str, Any]] = []
    warnings: List[str] = []
