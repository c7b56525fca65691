"""
데이터 파이프라인 스키마 정의

Pydantic 모델을 사용하여 입력 기록 검증 및 타입 강제
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Any
from datetime import datetime
from enum import Enum

from ranking.leaderboard import AthletePerformanceRecord


class ValidationSeverity(str, Enum):
    """검증 오류 심각도"""
    CRITICAL = "critical"   # 순위 반영 불가
    HIGH = "high"           # 순위 반영 불가, 수동 검토 필요
    MEDIUM = "medium"       # 반영 가능, 경고 표시
    LOW = "low"             # 반영 가능, 로그만
    INFO = "info"           # 정보성


class ValidationError(BaseModel):
    """검증 오류"""
    error_type: str = Field(..., description="오류 유형")
    severity: ValidationSeverity = Field(..., description="심각도")
    message: str = Field(..., description="오류 메시지")
    field: Optional[str] = Field(None, description="관련 필드")
    value: Optional[Any] = Field(None, description="문제가 된 값")
    suggestion: Optional[str] = Field(None, description="해결 제안")


class ValidationResult(BaseModel):
    """검증 결과"""
    is_valid: bool = Field(default=True, description="최종 유효성")
    errors: List[ValidationError] = Field(default_factory=list)
    warnings: List[ValidationError] = Field(default_factory=list)
    pass_rate: float = Field(default=1.0, description="통과율 (0-1)")
    validated_at: datetime = Field(default_factory=datetime.now)

    @property
    def has_critical_errors(self) -> bool:
        return any(e.severity in [ValidationSeverity.CRITICAL, ValidationSeverity.HIGH] for e in self.errors)

    @property
    def can_rank(self) -> bool:
        """순위 반영 가능 여부"""
        return not self.has_critical_errors


class PerformanceRecordSchema(BaseModel):
    """선수 기록 입력 스키마"""
    id: str = Field(..., min_length=1, description="선수 ID")
    name: str = Field(..., min_length=1, max_length=100, description="선수명")
    school: str = Field(default="", max_length=200, description="소속 학교")
    performance: float = Field(..., description="기록 (트랙: ms, 필드: cm)")
    previous_rank: Optional[int] = Field(None, ge=1, description="이전 순위")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        # 숫자 ID도 문자열로 통일
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("name", "school")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    def to_record(self) -> AthletePerformanceRecord:
        return AthletePerformanceRecord(
            id=self.id,
            name=self.name,
            school=self.school,
            performance=self.performance,
            previous_rank=self.previous_rank,
        )
