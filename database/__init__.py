"""
기록 저장소 패키지
"""
from .repository import (
    PerformanceRepository,
    InMemoryPerformanceRepository,
    create_seeded_repository,
)
from .mock_data import MOCK_PERFORMANCES

__all__ = [
    "PerformanceRepository",
    "InMemoryPerformanceRepository",
    "create_seeded_repository",
    "MOCK_PERFORMANCES",
]
