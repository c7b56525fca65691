"""
Pytest configuration and fixtures for TrackVerse ranking tests
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ranking.leaderboard import AthletePerformanceRecord
from database.repository import create_seeded_repository
from data_pipeline.events import EventPublisher


@pytest.fixture(scope="function")
def sprint_records():
    """100m 시나리오 기록 (A, B, C)"""
    return [
        AthletePerformanceRecord(id="A", name="Athlete A", school="Lincoln HS", performance=10150, previous_rank=1),
        AthletePerformanceRecord(id="B", name="Athlete B", school="Roosevelt HS", performance=10480, previous_rank=3),
        AthletePerformanceRecord(id="C", name="Athlete C", school="Jefferson HS", performance=10620, previous_rank=2),
    ]


@pytest.fixture(scope="function")
def long_jump_records():
    """멀리뛰기 기록 (cm)"""
    return [
        AthletePerformanceRecord(id="D", name="Athlete D", school="Adams HS", performance=742),
        AthletePerformanceRecord(id="E", name="Athlete E", school="Madison HS", performance=765, previous_rank=2),
        AthletePerformanceRecord(id="F", name="Athlete F", school="Monroe HS", performance=598, previous_rank=1),
    ]


@pytest.fixture(scope="function")
def repository():
    """목 데이터가 채워진 새 저장소"""
    return create_seeded_repository()


@pytest.fixture(scope="function")
def publisher():
    """새 이벤트 발행자"""
    return EventPublisher(max_log_size=100)


@pytest.fixture(scope="function")
def client(repository, publisher):
    """의존성이 교체된 API 테스트 클라이언트"""
    from fastapi.testclient import TestClient
    from app.server import app, get_repository, get_publisher

    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_publisher] = lambda: publisher
    yield TestClient(app)
    app.dependency_overrides.clear()
