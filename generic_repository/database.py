"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Sets up the synchronous SQLAlchemy engine, session factory, and ORM base class
shared by every entity handled through the generic repository.
"""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from generic_repository.config import settings

# 데이터베이스 엔진 — Database engine
# pool_pre_ping=True: 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인 (Validates connections before use)
engine: Engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

# 세션 팩토리 — Session factory
# expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit without refresh)
session_factory: sessionmaker[Session] = sessionmaker(
    engine,
    class_=Session,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    All models inherit from this class to register with the metadata.
    """

    pass


def get_db() -> Generator[Session, None, None]:
    """데이터베이스 세션을 생성하고 사용이 끝나면 닫습니다.

    Yield a session from the shared factory and close it once the caller
    is done, so no connection is leaked.

    Yields:
        Session: SQLAlchemy 세션 인스턴스 (Session instance)
    """
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
