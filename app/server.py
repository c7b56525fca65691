"""
TrackVerse Rankings - FastAPI 웹 서버
종목별 리더보드 + 티어/포인트 계산 + 실시간 이벤트 발행

데이터 소스: 기록 저장소 (현재 메모리 + 목 데이터)
"""
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Query, HTTPException, Depends
from loguru import logger
from dotenv import load_dotenv

from app.config import get_settings
from app.models import (
    ClassifyRequest,
    ClassifyResponse,
    LeaderboardEntryModel,
    LeaderboardResponse,
    RealtimeRequest,
    RejectedRecordModel,
    ResultResponse,
    ResultSubmission,
)
from data_pipeline import EventPublisher, EventType, PerformanceValidator
from database import InMemoryPerformanceRepository, PerformanceRepository, create_seeded_repository
from ranking import (
    AthletePerformanceRecord,
    InvalidPerformance,
    TIER_ORDER,
    build_leaderboard,
    evaluate_performance,
    format_performance,
    list_events,
    metadata_for,
    rank_changes_between,
    resolve_event,
    thresholds_for,
    validate_performance,
)

# 환경변수 로드
load_dotenv()

# FastAPI 앱
app = FastAPI(
    title="TrackVerse Rankings",
    description="육상 기록 기반 티어/랭킹 API",
    version="1.0.0"
)

# 저장소 / 이벤트 발행자 (지연 초기화)
_repository: Optional[PerformanceRepository] = None
_publisher: Optional[EventPublisher] = None
_validator = PerformanceValidator()

# 실시간 이벤트 유형별 필수 필드
REALTIME_REQUIRED_FIELDS = {
    EventType.NEW_PR: ["athlete_id", "athlete_name", "event", "time", "tier"],
    EventType.RANK_CHANGE: ["athlete_id", "athlete_name", "event", "old_rank", "new_rank"],
    EventType.LEADERBOARD_UPDATED: ["event", "total"],
}


# ==================== Dependencies ====================

def get_repository() -> PerformanceRepository:
    """기록 저장소"""
    global _repository
    if _repository is None:
        if get_settings().SEED_MOCK_DATA:
            _repository = create_seeded_repository()
        else:
            _repository = InMemoryPerformanceRepository()
    return _repository


def get_publisher() -> EventPublisher:
    """실시간 이벤트 발행자"""
    global _publisher
    if _publisher is None:
        _publisher = EventPublisher(max_log_size=get_settings().REALTIME_LOG_SIZE)
    return _publisher


def _is_improvement(new: float, old, is_field_event: bool) -> bool:
    """새 기록이 기존 기록보다 좋은지 (기존 기록이 유효하지 않으면 항상 True)"""
    try:
        validate_performance(old)
    except InvalidPerformance:
        return True
    if is_field_event:
        return new > old
    return new < old


# ==================== Lifecycle ====================

@app.on_event("startup")
async def startup_event():
    """서버 시작 시 저장소 초기화"""
    repository = get_repository()
    get_publisher()
    logger.info(f"✅ 서버 시작 완료 - 종목 {len(repository.events())}개 로드됨")


@app.on_event("shutdown")
async def shutdown_event():
    """서버 종료"""
    logger.info("서버 종료됨")


# ==================== API ====================

@app.get("/api/status")
async def api_status(repository: PerformanceRepository = Depends(get_repository)):
    """서버 상태"""
    events = repository.events()
    return {
        "status": "ok",
        "events": {event: len(repository.list(event)) for event in events},
        "total_records": sum(len(repository.list(event)) for event in events),
    }


@app.get("/api/rankings", response_model=LeaderboardResponse)
async def api_rankings(
    event: Optional[str] = Query(None, description="종목 (100m, 200m, LJ ...)"),
    scope: Optional[str] = Query(None, description="범위 (state, national ...)"),
    limit: Optional[int] = Query(None, ge=1, description="최대 항목 수"),
    is_field_event: Optional[bool] = Query(None, description="필드 종목 여부"),
    repository: PerformanceRepository = Depends(get_repository)
):
    """
    리더보드 조회 API

    - 알 수 없는 종목은 기본 종목(100m) 리더보드로 대체 (used_fallback=true)
    - 유효하지 않은 기록은 rejected 목록으로 분리 (부분 성공)
    """
    settings = get_settings()
    event = event or settings.DEFAULT_EVENT
    scope = scope or settings.DEFAULT_SCOPE
    limit = min(limit or settings.LEADERBOARD_DEFAULT_LIMIT, settings.LEADERBOARD_MAX_LIMIT)

    lookup = thresholds_for(event, is_field_event)
    result = build_leaderboard(lookup.event, repository.list(lookup.event), lookup.is_field_event)

    if result.is_partial:
        logger.warning(f"[{result.event}] 부분 리더보드: {len(result.rejected)}건 제외")

    return LeaderboardResponse(
        event=result.event,
        scope=scope,
        total=len(result),
        leaderboard=[LeaderboardEntryModel.from_entry(e) for e in result.entries[:limit]],
        rejected=[RejectedRecordModel.from_rejected(r) for r in result.rejected],
        used_fallback=lookup.used_fallback,
        last_updated=datetime.now()
    )


@app.post("/api/rankings", response_model=ClassifyResponse)
async def api_classify(request: ClassifyRequest):
    """단일 기록 티어/포인트 계산 API"""
    try:
        evaluation = evaluate_performance(request.event, request.performance, request.is_field_event)
    except InvalidPerformance as e:
        logger.warning(f"티어 계산 거부: {request.event} {e.reason}")
        raise HTTPException(status_code=400, detail=f"유효하지 않은 기록: {e.reason}")

    return ClassifyResponse(
        event=evaluation.event,
        performance=request.performance,
        formatted_performance=format_performance(request.performance, evaluation.is_field_event),
        tier=evaluation.tier.value,
        points=round(evaluation.points, 2),
        used_fallback=evaluation.used_fallback
    )


@app.get("/api/rankings/events")
async def api_ranking_events():
    """종목 목록 API"""
    return {"events": [definition.to_dict() for definition in list_events()]}


@app.get("/api/rankings/tiers")
async def api_ranking_tiers():
    """티어 정보 API (낮은 티어 → 높은 티어)"""
    return {"tiers": [metadata_for(tier).to_dict() for tier in TIER_ORDER]}


@app.post("/api/rankings/results", response_model=ResultResponse)
async def api_submit_result(
    submission: ResultSubmission,
    repository: PerformanceRepository = Depends(get_repository),
    publisher: EventPublisher = Depends(get_publisher)
):
    """
    경기 결과 등록 API

    - 개인 최고 기록이면 저장 후 NEW_PR / RANK_CHANGE / LEADERBOARD_UPDATED 발행
    - 기존 기록보다 나쁘면 저장하지 않고 현재 순위만 반환
    """
    event = resolve_event(submission.event)
    if event is None:
        raise HTTPException(status_code=400, detail=f"알 수 없는 종목: {submission.event}")

    row = {
        "id": submission.athlete_id,
        "name": submission.athlete_name,
        "school": submission.school,
        "performance": submission.performance,
        "previous_rank": submission.previous_rank,
    }
    validation = _validator.validate_record(row, event, submission.is_field_event)
    if not validation.is_valid:
        raise HTTPException(
            status_code=400,
            detail=[error.message for error in validation.errors]
        )

    lookup = thresholds_for(event, submission.is_field_event)
    is_field = lookup.is_field_event

    before = build_leaderboard(event, repository.list(event), is_field)
    existing = repository.get(event, submission.athlete_id)
    personal_record = existing is None or _is_improvement(submission.performance, existing.performance, is_field)

    if personal_record:
        previous_rank = submission.previous_rank
        if previous_rank is None and existing is not None:
            previous_rank = existing.previous_rank
        repository.save(event, AthletePerformanceRecord(
            id=submission.athlete_id,
            name=submission.athlete_name,
            school=submission.school,
            performance=submission.performance,
            previous_rank=previous_rank
        ))

    after = build_leaderboard(event, repository.list(event), is_field)
    entry = after.entry_for(submission.athlete_id)

    rank_changes = []
    if personal_record:
        publisher.publish_new_pr(
            athlete_id=entry.athlete_id,
            athlete_name=entry.athlete_name,
            event=event,
            time=entry.formatted_performance,
            tier=entry.tier.value
        )
        for changed, old_rank in rank_changes_between(before, after):
            publisher.publish_rank_change(
                athlete_id=changed.athlete_id,
                athlete_name=changed.athlete_name,
                event=event,
                old_rank=old_rank,
                new_rank=changed.rank
            )
            rank_changes.append({
                "athlete_id": changed.athlete_id,
                "old_rank": old_rank,
                "new_rank": changed.rank,
            })
        publisher.publish_leaderboard_updated(event, len(after))

    return ResultResponse(
        event=event,
        personal_record=personal_record,
        entry=LeaderboardEntryModel.from_entry(entry),
        rank_changes=rank_changes,
        warnings=[w.message for w in validation.warnings]
    )


@app.post("/api/realtime")
async def api_realtime(
    request: RealtimeRequest,
    publisher: EventPublisher = Depends(get_publisher)
):
    """
    실시간 이벤트 발행 API

    웹훅, 백그라운드 작업, 관리자 작업에서 이벤트를 발행할 때 사용
    """
    try:
        event_type = EventType(request.type)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"알 수 없는 이벤트 유형: {request.type}")

    missing = [f for f in REALTIME_REQUIRED_FIELDS[event_type] if f not in request.payload]
    if missing:
        raise HTTPException(status_code=400, detail=f"필수 필드 누락: {', '.join(missing)}")

    payload = request.payload
    if event_type == EventType.NEW_PR:
        publisher.publish_new_pr(
            payload["athlete_id"], payload["athlete_name"], payload["event"],
            payload["time"], payload["tier"]
        )
    elif event_type == EventType.RANK_CHANGE:
        publisher.publish_rank_change(
            payload["athlete_id"], payload["athlete_name"], payload["event"],
            payload["old_rank"], payload["new_rank"]
        )
    else:
        publisher.publish_leaderboard_updated(payload["event"], payload["total"])

    return {"success": True, "type": event_type.value}


@app.get("/api/realtime/events")
async def api_realtime_events(
    limit: int = Query(50, ge=1, le=1000),
    publisher: EventPublisher = Depends(get_publisher)
):
    """최근 실시간 이벤트 조회"""
    return {"events": [event.to_dict() for event in publisher.get_recent_events(limit)]}
