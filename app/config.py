"""
App Config - 서버 및 랭킹 설정
"""
import os
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """서버 설정"""

    # 서버
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # 리더보드
    DEFAULT_EVENT: str = "100m"
    DEFAULT_SCOPE: str = "state"
    LEADERBOARD_DEFAULT_LIMIT: int = 50
    LEADERBOARD_MAX_LIMIT: int = 200

    # 실시간 이벤트
    REALTIME_LOG_SIZE: int = 1000

    # 목 데이터 적재 여부 (개발/데모)
    SEED_MOCK_DATA: bool = True

    # 로깅
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
