"""
기록 검증 시스템

- 기술적 검증: 필드 존재 여부, 데이터 타입 (Pydantic 스키마)
- 기록 검증: 음수 / NaN / 무한대 기록은 순위 반영 불가
- 비즈니스 검증: 비정상적으로 뛰어난 기록, 알 수 없는 종목은 경고
"""

from typing import List, Dict, Any, Optional, Tuple
from pydantic import ValidationError as PydanticValidationError
from datetime import datetime
from loguru import logger

from ranking.calculator import InvalidPerformance, validate_performance
from ranking.leaderboard import AthletePerformanceRecord
from ranking.tiers import Tier, resolve_event, thresholds_for

from .schemas import (
    PerformanceRecordSchema,
    ValidationResult,
    ValidationError,
    ValidationSeverity,
)

# GODSPEED 기준 대비 이 비율을 넘어서면 입력 오류 의심
# 트랙: 기준 기록의 85% 미만 (너무 빠름), 필드: 기준 기록의 130% 초과 (너무 멂)
TIMED_SUSPICIOUS_RATIO = 0.85
FIELD_SUSPICIOUS_RATIO = 1.30


class PerformanceValidator:
    """선수 기록 검증기"""

    def validate_record(
        self,
        data: Dict[str, Any],
        event: str,
        is_field_event: Optional[bool] = None
    ) -> ValidationResult:
        """단일 기록 검증"""
        errors = []
        warnings = []
        parsed = None

        try:
            parsed = PerformanceRecordSchema(**data)
        except PydanticValidationError as e:
            for error in e.errors():
                errors.append(ValidationError(
                    error_type="SCHEMA_VALIDATION_FAILED",
                    severity=ValidationSeverity.CRITICAL,
                    message=error["msg"],
                    field=".".join(str(loc) for loc in error["loc"]),
                    value=error.get("input"),
                    suggestion="데이터 형식을 확인하세요"
                ))

        performance = parsed.performance if parsed else None
        performance_ok = False
        if parsed is not None:
            try:
                validate_performance(performance)
                performance_ok = True
            except InvalidPerformance as e:
                errors.append(ValidationError(
                    error_type="INVALID_PERFORMANCE",
                    severity=ValidationSeverity.CRITICAL,
                    message=e.reason,
                    field="performance",
                    value=str(performance),
                    suggestion="0 이상의 유한한 기록을 입력하세요 (트랙: ms, 필드: cm)"
                ))

        if resolve_event(event) is None:
            warnings.append(ValidationError(
                error_type="UNKNOWN_EVENT",
                severity=ValidationSeverity.MEDIUM,
                message=f"알 수 없는 종목: {event}",
                field="event",
                value=event,
                suggestion="기본 종목 기준표가 적용됩니다"
            ))

        if performance_ok:
            lookup = thresholds_for(event, is_field_event)
            top = lookup.threshold_of(Tier.GODSPEED)
            if lookup.is_field_event:
                suspicious = performance > top * FIELD_SUSPICIOUS_RATIO
            else:
                suspicious = performance < top * TIMED_SUSPICIOUS_RATIO
            if suspicious:
                warnings.append(ValidationError(
                    error_type="UNUSUAL_PERFORMANCE",
                    severity=ValidationSeverity.MEDIUM,
                    message=f"{lookup.event} 기록이 일반적인 범위를 벗어났습니다: {performance}",
                    field="performance",
                    value=performance,
                    suggestion="단위(ms/cm)를 확인하세요"
                ))

        if data.get("previous_rank") is None:
            warnings.append(ValidationError(
                error_type="NO_PREVIOUS_RANK",
                severity=ValidationSeverity.INFO,
                message="이전 순위 없음 - 신규 진입으로 표시됩니다",
                field="previous_rank"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            pass_rate=1.0 if not errors else 0.0,
            validated_at=datetime.now()
        )

    def validate_batch(
        self,
        event: str,
        rows: List[Dict[str, Any]],
        is_field_event: Optional[bool] = None
    ) -> Tuple[List[AthletePerformanceRecord], ValidationResult]:
        """
        배치 검증

        Returns:
            (통과한 기록 목록, 전체 검증 결과)
        """
        records = []
        all_errors = []
        all_warnings = []

        for i, row in enumerate(rows):
            result = self.validate_record(row, event, is_field_event)
            if result.is_valid:
                records.append(PerformanceRecordSchema(**row).to_record())
            else:
                for error in result.errors:
                    error.message = f"[Record {i}] {error.message}"
                    all_errors.append(error)
            all_warnings.extend(result.warnings)

        if all_errors:
            logger.warning(f"[{event}] 기록 검증 실패 {len(rows) - len(records)}건 / 전체 {len(rows)}건")

        return records, ValidationResult(
            is_valid=len(records) == len(rows),
            errors=all_errors,
            warnings=all_warnings,
            pass_rate=len(records) / len(rows) if rows else 0.0,
            validated_at=datetime.now()
        )
