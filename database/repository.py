"""
선수 기록 저장소

HTTP 핸들러는 이 인터페이스만 사용한다 (list / save)
현재 구현은 메모리 저장소 - 영구 저장소로 교체 시 같은 인터페이스를 구현
"""
from threading import Lock
from typing import Dict, List, Optional, Protocol

from loguru import logger

from data_pipeline.validators import PerformanceValidator
from ranking.leaderboard import AthletePerformanceRecord
from ranking.tiers import resolve_event

from .mock_data import MOCK_PERFORMANCES


class PerformanceRepository(Protocol):
    """기록 저장소 인터페이스"""

    def list(self, event: str) -> List[AthletePerformanceRecord]:
        ...

    def save(self, event: str, record: AthletePerformanceRecord) -> AthletePerformanceRecord:
        ...

    def get(self, event: str, athlete_id: str) -> Optional[AthletePerformanceRecord]:
        ...

    def events(self) -> List[str]:
        ...


def _event_key(event: str) -> str:
    return resolve_event(event) or event.strip()


class InMemoryPerformanceRepository:
    """메모리 기록 저장소 (스레드 안전)"""

    def __init__(self):
        self._records: Dict[str, List[AthletePerformanceRecord]] = {}
        self._lock = Lock()

    def list(self, event: str) -> List[AthletePerformanceRecord]:
        """종목 기록 목록 (스냅샷 복사본)"""
        with self._lock:
            return list(self._records.get(_event_key(event), []))

    def get(self, event: str, athlete_id: str) -> Optional[AthletePerformanceRecord]:
        with self._lock:
            for record in self._records.get(_event_key(event), []):
                if record.id == athlete_id:
                    return record
        return None

    def save(self, event: str, record: AthletePerformanceRecord) -> AthletePerformanceRecord:
        """기록 저장 (같은 선수가 있으면 교체, 입력 순서 유지)"""
        key = _event_key(event)
        with self._lock:
            records = self._records.setdefault(key, [])
            for i, existing in enumerate(records):
                if existing.id == record.id:
                    records[i] = record
                    break
            else:
                records.append(record)
        logger.debug(f"[{key}] 기록 저장: {record.name} ({record.id}) = {record.performance}")
        return record

    def events(self) -> List[str]:
        with self._lock:
            return list(self._records.keys())

    def count(self) -> int:
        with self._lock:
            return sum(len(records) for records in self._records.values())

    def load_rows(self, event: str, rows: List[dict]) -> int:
        """원본 행 목록 검증 후 적재, 적재된 건수 반환"""
        records, result = PerformanceValidator().validate_batch(event, rows)
        for error in result.errors:
            logger.warning(f"[{_event_key(event)}] 적재 제외: {error.message}")
        for record in records:
            self.save(event, record)
        return len(records)


def create_seeded_repository() -> InMemoryPerformanceRepository:
    """목 데이터가 채워진 저장소 생성"""
    repository = InMemoryPerformanceRepository()
    for event, rows in MOCK_PERFORMANCES.items():
        repository.load_rows(event, rows)
    logger.info(f"목 데이터 적재 완료: {repository.count()}개 기록")
    return repository
