"""애플리케이션 환경 설정 모듈.

Application configuration module using pydantic-settings.
All settings can be overridden via environment variables or a .env file.
"""

from pathlib import Path

from pydantic_settings import BaseSettings

# .env 파일 절대 경로 — CWD와 무관하게 항상 프로젝트 루트의 .env를 참조
# Absolute path to .env file — ensures correct loading regardless of CWD
_ENV_FILE: Path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    """레포지토리 계층 전역 설정 — 환경 변수 기반 구성.

    Global settings for the repository layer loaded from environment variables.
    Uses pydantic-settings for automatic env var parsing and .env file support.

    Attributes:
        DATABASE_URL: SQLAlchemy 동기 연결 문자열 (Synchronous SQLAlchemy connection string)
        DEBUG: 디버그 모드 플래그 (Debug mode flag, enables SQL echo)
        LOG_LEVEL: 루트 로거 레벨 (Root logger level)
        DEFAULT_PAGE_SIZE: 기본 페이지 크기 (Page size used when none is given)
    """

    # 데이터베이스 — SQLAlchemy 연결 URL (SQLite 기본값, 운영 환경에서 교체)
    DATABASE_URL: str = "sqlite:///./generic_repository.db"
    DEBUG: bool = False  # True이면 SQLAlchemy SQL 로그 출력 (Enables SQL echo when True)

    # 로깅 설정 — Logging settings
    LOG_LEVEL: str = "INFO"

    # 페이지네이션 — Pagination defaults
    DEFAULT_PAGE_SIZE: int = 20

    model_config = {"env_file": _ENV_FILE, "env_file_encoding": "utf-8"}


# 전역 설정 싱글턴 인스턴스 — Global settings singleton instance
settings: Settings = Settings()
