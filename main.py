"""
TrackVerse 랭킹 서버 메인
"""
import argparse
import sys
from pathlib import Path

import uvicorn
from loguru import logger

from app.config import get_settings


def setup_logging(level: str, log_dir: str):
    """로깅 설정"""
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level
    )
    logger.add(
        f"{log_dir}/rankings_{{time:YYYY-MM-DD}}.log",
        rotation="1 day",
        retention="30 days",
        level="DEBUG"
    )


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="TrackVerse 랭킹 서버")
    parser.add_argument("--host", type=str, default=settings.HOST, help="바인딩 호스트")
    parser.add_argument("--port", type=int, default=settings.PORT, help="포트")
    parser.add_argument("--reload", action="store_true", help="코드 변경 시 자동 재시작")
    parser.add_argument("--log-level", type=str, default=settings.LOG_LEVEL, help="로그 레벨")

    args = parser.parse_args()

    setup_logging(args.log_level.upper(), settings.LOG_DIR)
    logger.info(f"서버 시작: http://{args.host}:{args.port}")

    uvicorn.run(
        "app.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower()
    )


if __name__ == "__main__":
    main()
