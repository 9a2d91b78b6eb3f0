"""테스트 인프라 — 모의 컨텍스트, 메모리 내 엔티티 집합, SQLite 세션 픽스처.

Test infrastructure — Mock context, in-memory entity set, and SQLite session fixtures.
Repository tests run against a Mock context whose entity set is a FakeEntitySet,
so no database is touched. Context tests use an in-memory SQLite engine;
the schema is created once per session and data is deleted after each test.
"""

from collections.abc import Generator
from datetime import datetime
from unittest.mock import Mock

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from generic_repository.context import SqlAlchemyEntitiesContext
from generic_repository.database import Base
from generic_repository.repositories import EntityRepository
from tests.fakes import FakeEntitySet
from tests.models import Person


# ---------------------------------------------------------------------------
# 테스트 데이터 헬퍼 — Test data helpers
# ---------------------------------------------------------------------------
def make_people(count: int) -> list[Person]:
    """id 1..count 인 사람 레코드를 생성합니다 (DB에 저장하지 않음)."""
    return [
        Person(
            id=i,
            name=f"Name{i}",
            surname=f"Surname{i}",
            age=5 * i,
            created_on=datetime(2016, 10, 20, 18, 48),
        )
        for i in range(1, count + 1)
    ]


def add_people(entity_set: FakeEntitySet[Person], count: int) -> list[Person]:
    """메모리 내 엔티티 집합에 사람 레코드를 채웁니다."""
    people = make_people(count)
    for person in people:
        entity_set.add(person)
    return people


# ---------------------------------------------------------------------------
# Function-scoped: 모의 컨텍스트와 레포지토리
# ---------------------------------------------------------------------------
@pytest.fixture
def people_set() -> FakeEntitySet[Person]:
    """비어 있는 메모리 내 Person 집합."""
    return FakeEntitySet()


@pytest.fixture
def context(people_set: FakeEntitySet[Person]) -> Mock:
    """people_set을 돌려주는 모의 퍼시스턴스 컨텍스트."""
    mock_context = Mock(spec=SqlAlchemyEntitiesContext)
    mock_context.set.return_value = people_set
    # 삭제 표시는 메모리 집합에서 바로 제거 — Deleting removes from the fake set
    mock_context.set_as_deleted.side_effect = people_set.remove
    return mock_context


@pytest.fixture
def repository(context: Mock) -> EntityRepository[Person, int]:
    """모의 컨텍스트 위의 Person 레포지토리."""
    return EntityRepository(context, Person)


# ---------------------------------------------------------------------------
# SQLite: 엔진, 세션, 실제 컨텍스트
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    """메모리 내 SQLite 엔진. 스키마를 한 번 생성합니다."""
    eng = create_engine("sqlite://")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_maker(engine: Engine) -> Generator[sessionmaker[Session], None, None]:
    """테스트용 세션 팩토리. 테스트 후 모든 데이터를 정리합니다."""
    factory = sessionmaker(engine, expire_on_commit=False, autoflush=False)
    yield factory

    with factory() as cleanup:
        for table in reversed(Base.metadata.sorted_tables):
            cleanup.execute(table.delete())
        cleanup.commit()


@pytest.fixture
def db_context(
    session_maker: sessionmaker[Session],
) -> Generator[SqlAlchemyEntitiesContext, None, None]:
    """SQLite 세션 위의 실제 퍼시스턴스 컨텍스트."""
    with SqlAlchemyEntitiesContext(session_maker()) as ctx:
        yield ctx
