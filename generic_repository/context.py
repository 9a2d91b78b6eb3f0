"""퍼시스턴스 컨텍스트 — 레포지토리가 의존하는 작업 단위(Unit of Work) 인터페이스.

Persistence context module.
Defines the capability interface the generic repository depends on
(per-type entity sets plus create/update/delete markers and commit)
and its SQLAlchemy ``Session`` backed implementation.

Includes:
    - EntitySet / EntitiesContext: 구조적 인터페이스 (Structural interfaces)
    - SqlAlchemyEntitySet: 세션 기반 엔티티 집합 (Session-backed entity set)
    - SqlAlchemyEntitiesContext: 세션 기반 컨텍스트 + 커밋 시 필드 검증
                                 (Session-backed context with field validation on commit)
"""

import logging
from typing import Any, Generic, Protocol, TypeVar

from sqlalchemy import Column, String, event, inspect
from sqlalchemy.orm import Query, Session

from generic_repository.database import session_factory
from generic_repository.utils.exceptions import (
    EntityValidationError,
    ValidationErrorDetail,
)

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType")


class EntitySet(Protocol[ModelType]):
    """엔티티 타입별 변경 가능한 순서 있는 컬렉션.

    Mutable ordered collection of one entity type, handed out by the context.
    ``query()`` returns a lazy queryable with the SQLAlchemy ``Query`` surface
    (filter, order_by, options, offset, limit, count, first, all, iteration).
    """

    def add(self, entity: ModelType) -> ModelType: ...

    def remove(self, entity: ModelType) -> ModelType: ...

    def query(self) -> "Query[ModelType]": ...


class EntitiesContext(Protocol):
    """레포지토리가 의존하는 퍼시스턴스 컨텍스트 인터페이스.

    Capability interface of the persistence context. The repository holds a
    reference to it but never owns its lifetime.
    """

    def set(self, model: type[ModelType]) -> EntitySet[ModelType]: ...

    def set_as_created(self, entity: Any) -> None: ...

    def set_as_updated(self, entity: Any) -> None: ...

    def set_as_deleted(self, entity: Any) -> None: ...

    def save_changes(self) -> int: ...

    def close(self) -> None: ...


class SqlAlchemyEntitySet(Generic[ModelType]):
    """SQLAlchemy 세션 위의 엔티티 집합 — Entity set backed by a SQLAlchemy session."""

    def __init__(self, session: Session, model: type[ModelType]) -> None:
        self._session: Session = session
        self._model: type[ModelType] = model

    def add(self, entity: ModelType) -> ModelType:
        # 엔티티와 cascade 대상 관계 객체까지 세션에 등록 — Registers entity and its cascaded graph
        self._session.add(entity)
        return entity

    def remove(self, entity: ModelType) -> ModelType:
        self._session.delete(entity)
        return entity

    def query(self) -> "Query[ModelType]":
        return self._session.query(self._model)


def validate_entity(entity: Any) -> list[ValidationErrorDetail]:
    """매핑된 컬럼 제약 조건으로 엔티티를 검증합니다.

    Check an entity against the constraints declared on its mapped columns:
    non-nullable columns must be set (a column default only covers a row
    that has not been inserted yet), and ``String(length)``
    values must fit their length.

    Args:
        entity: 검증할 매핑 엔티티 (Mapped entity to validate)

    Returns:
        list[ValidationErrorDetail]: 검증 실패 목록, 비어 있으면 통과
                                     (Validation failures; empty when valid)
    """
    errors: list[ValidationErrorDetail] = []
    state = inspect(entity)
    # 컬럼 기본값은 INSERT 시에만 적용됨 — Column defaults only apply on INSERT
    is_new = state.key is None
    for prop in state.mapper.column_attrs:
        column = prop.columns[0]
        if not isinstance(column, Column):
            continue

        value = getattr(entity, prop.key)
        if value is None:
            # 기본키/외래키는 flush 중에 채워짐 — PK and FK values are populated during flush
            if (
                column.nullable
                or column.primary_key
                or column.foreign_keys
                or (is_new and (column.default is not None or column.server_default is not None))
            ):
                continue
            errors.append(
                ValidationErrorDetail(entity, prop.key, f"The {prop.key} field is required.")
            )
        elif (
            isinstance(column.type, String)
            and column.type.length is not None
            and isinstance(value, str)
            and len(value) > column.type.length
        ):
            errors.append(
                ValidationErrorDetail(
                    entity,
                    prop.key,
                    f"The field {prop.key} must be a string with a maximum length of {column.type.length}.",
                )
            )
    return errors


class SqlAlchemyEntitiesContext:
    """SQLAlchemy 세션 기반 퍼시스턴스 컨텍스트.

    Persistence context backed by a SQLAlchemy ``Session``.
    Pending creates, updates and deletes stay in the session until
    ``save_changes()``, which validates them, flushes, commits, and returns
    the number of affected entities.

    When no session is given the context opens one from ``session_factory``
    with autoflush disabled, so queries do not write pending changes ahead
    of ``save_changes()``.

    Usage:
        with SqlAlchemyEntitiesContext() as context:
            repository = EntityRepository(context, Person)
            repository.add(Person(name="Ada"))
            repository.save()
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session = session if session is not None else session_factory(autoflush=False)
        self._flushed_count: int = 0

        # 모든 flush(자동 flush 포함)에 검증과 변경 건수 집계 적용
        # Validate and count changes on every flush, autoflush included
        event.listen(self._session, "before_flush", self._validate_pending)
        event.listen(self._session, "after_flush", self._count_flushed)
        event.listen(self._session, "after_soft_rollback", self._reset_count)

    @property
    def session(self) -> Session:
        return self._session

    def set(self, model: type[ModelType]) -> SqlAlchemyEntitySet[ModelType]:
        return SqlAlchemyEntitySet(self._session, model)

    def set_as_created(self, entity: Any) -> None:
        self._session.add(entity)

    def set_as_updated(self, entity: Any) -> None:
        # 세션이 추적 중인 객체는 변경 사항이 자동 감지됨 — Tracked instances are already change-tracked
        if entity not in self._session:
            self._session.merge(entity)

    def set_as_deleted(self, entity: Any) -> None:
        # 아직 flush되지 않은 신규 객체는 등록만 취소 — Pending instances are simply expunged
        if entity in self._session.new:
            self._session.expunge(entity)
            return
        if entity not in self._session:
            entity = self._session.merge(entity)
        self._session.delete(entity)

    def save_changes(self) -> int:
        """대기 중인 변경 사항을 커밋하고 영향받은 엔티티 수를 반환합니다.

        Commit pending creates, updates and deletes.

        Returns:
            int: 생성/수정/삭제된 엔티티 수 (Number of affected entities)

        Raises:
            EntityValidationError: 필드 제약 조건 위반 시 (When field constraints fail)
        """
        self._session.flush()
        affected: int = self._flushed_count
        self._session.commit()
        self._flushed_count = 0
        logger.info("Committed %d change(s)", affected)
        return affected

    def close(self) -> None:
        event.remove(self._session, "before_flush", self._validate_pending)
        event.remove(self._session, "after_flush", self._count_flushed)
        event.remove(self._session, "after_soft_rollback", self._reset_count)
        self._session.close()

    def __enter__(self) -> "SqlAlchemyEntitiesContext":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # 세션 이벤트 핸들러 — Session event handlers
    # ------------------------------------------------------------------
    def _changed(self, session: Session) -> list[Any]:
        # 컬렉션 변경만 있는 부모는 제외 — Parents with only collection changes are not rows
        return list(session.new) + [
            obj for obj in session.dirty if session.is_modified(obj, include_collections=False)
        ]

    def _validate_pending(
        self,
        session: Session,
        flush_context: Any,
        instances: Any,
    ) -> None:
        errors: list[ValidationErrorDetail] = []
        for entity in self._changed(session):
            errors.extend(validate_entity(entity))
        if errors:
            logger.warning("Validation failed for %d field(s)", len(errors))
            raise EntityValidationError(errors)

    def _count_flushed(self, session: Session, flush_context: Any) -> None:
        # after_flush 시점에는 new/dirty/deleted가 flush 이전 상태 유지
        # new/dirty/deleted still hold their pre-flush state here
        self._flushed_count += len(self._changed(session)) + len(session.deleted)

    def _reset_count(self, session: Session, previous_transaction: Any) -> None:
        self._flushed_count = 0
