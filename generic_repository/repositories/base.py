"""기본 엔티티 레포지토리 — 모든 레포지토리의 부모 클래스.

Generic entity repository — Parent class for all domain repositories.
Provides Create, Read, Update, Delete and pagination operations over any
mapped entity type by forwarding to an injected persistence context.

Usage:
    class PersonRepository(EntityRepository[Person, int]):
        def __init__(self, context: EntitiesContext) -> None:
            super().__init__(context, Person)
"""

import logging
from enum import Enum
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement
from sqlalchemy.orm import InstrumentedAttribute, Query, selectinload

from generic_repository.context import EntitiesContext
from generic_repository.models.entity import Entity
from generic_repository.utils.exceptions import (
    EntityValidationError,
    NullInputError,
    ValidationFailureError,
)
from generic_repository.utils.pagination import PaginatedList, to_paginated_list

logger = logging.getLogger(__name__)

# 제네릭 타입 변수 — 엔티티 모델과 식별자 타입
# Generic type variables for the entity model and its identifier
ModelType = TypeVar("ModelType", bound=Entity)
IdType = TypeVar("IdType")


class OrderByType(Enum):
    """페이지네이션 정렬 방향 — Ordering direction for pagination."""

    ASCENDING = "asc"
    DESCENDING = "desc"


class EntityRepository(Generic[ModelType, IdType]):
    """제네릭 엔티티 레포지토리.

    Generic repository over one entity type.
    Every operation obtains the entity set from the context once and forwards
    to its query and change-tracking primitives. The repository holds a
    reference to the context but does not own it.

    Attributes:
        model: 레포지토리가 관리하는 모델 클래스 (The model class this repository manages)
        id_attribute: 식별자 속성 이름 (Name of the identifier attribute)
    """

    def __init__(
        self,
        context: EntitiesContext,
        model: type[ModelType],
        id_attribute: str = "id",
    ) -> None:
        """레포지토리를 초기화합니다.

        Initialize the repository with a persistence context and model class.

        Args:
            context: 퍼시스턴스 컨텍스트 (Persistence context to forward to)
            model: 이 레포지토리가 관리할 모델 클래스
                   (Model class this repository manages)
            id_attribute: 식별자 속성 이름 (Identifier attribute name, default: "id")

        Raises:
            ValueError: context가 None일 때 (When context is None)
        """
        if context is None:
            raise ValueError("context is required")

        self._context: EntitiesContext = context
        self.model: type[ModelType] = model
        self.id_attribute: str = id_attribute

    # ------------------------------------------------------------------
    # 생성 — Create
    # ------------------------------------------------------------------
    def add(self, entity: ModelType | None) -> ModelType:
        """엔티티를 신규로 등록합니다.

        Add an entity to the backing set and mark it as created.

        Args:
            entity: 추가할 엔티티 (Entity to add)

        Returns:
            ModelType: 추가된 엔티티 (The added entity)

        Raises:
            NullInputError: entity가 None일 때 (When entity is None)
        """
        if entity is None:
            raise NullInputError("Attempt to add a null record")

        added: ModelType = self._context.set(self.model).add(entity)
        self._context.set_as_created(entity)
        logger.debug("Added %s", self.model.__name__)
        return added

    def add_graph(self, entity: ModelType) -> ModelType:
        """엔티티와 연관 객체 그래프를 마킹 없이 추가합니다.

        Add an entity together with its related objects; the ORM cascades
        the graph, so no explicit created marker is set.
        """
        return self._context.set(self.model).add(entity)

    # ------------------------------------------------------------------
    # 조회 — Read
    # ------------------------------------------------------------------
    def get_all(self) -> "Query[ModelType]":
        """모든 엔티티에 대한 지연 쿼리를 반환합니다. 정렬은 보장하지 않습니다.

        Return a lazy query over all entities of the type. No ordering guarantee.
        """
        return self._context.set(self.model).query()

    def get_all_including(self, *include_properties: InstrumentedAttribute) -> "Query[ModelType]":
        """관계 속성을 즉시 로딩하는 전체 조회 쿼리.

        ``get_all()`` with each relationship attribute eager-loaded via ``selectinload``.

        Args:
            *include_properties: 즉시 로딩할 관계 속성 (Relationship attributes to eager-load)
        """
        query = self.get_all()
        for include_property in include_properties:
            query = query.options(selectinload(include_property))
        return query

    def get_single(self, id: IdType) -> ModelType | None:
        """식별자로 단일 엔티티를 조회합니다.

        Retrieve the first entity whose identifier equals ``id``.

        Args:
            id: 조회할 식별자 (Identifier to look up)

        Returns:
            ModelType | None: 조회된 엔티티 또는 None (Found entity or None)
        """
        return self._filter(self.get_all(), self.id_attribute, id).first()

    def get_single_including(
        self,
        id: IdType,
        *include_properties: InstrumentedAttribute,
    ) -> ModelType | None:
        """관계 속성을 즉시 로딩하며 식별자로 단일 엔티티를 조회합니다.

        ``get_single`` with relationship attributes eager-loaded.
        """
        query = self.get_all_including(*include_properties)
        return self._filter(query, self.id_attribute, id).first()

    def find_by(self, predicate: ColumnElement[bool]) -> "Query[ModelType]":
        """조건식에 맞는 엔티티의 지연 쿼리를 반환합니다.

        Return a lazy query of entities matching a SQLAlchemy criterion.

        Args:
            predicate: 필터 조건식 (Filter criterion, e.g. ``Person.age > 30``)
        """
        return self.get_all().filter(predicate)

    def get_count(self) -> int:
        """엔티티 개수 — Number of entities of the type in the backing set."""
        return self.get_all().count()

    # ------------------------------------------------------------------
    # 수정 — Update
    # ------------------------------------------------------------------
    def update(self, entity: ModelType | None) -> ModelType:
        """엔티티를 수정 상태로 표시합니다.

        Mark an entity as updated.

        Args:
            entity: 수정할 엔티티 (Entity to update)

        Returns:
            ModelType: 수정 표시된 엔티티 (The entity marked as updated)

        Raises:
            NullInputError: entity가 None일 때 (When entity is None)
        """
        if entity is None:
            raise NullInputError("Attempt to update a null record")

        self._context.set_as_updated(entity)
        logger.debug("Marked %s as updated", self.model.__name__)
        return entity

    # ------------------------------------------------------------------
    # 삭제 — Delete
    # ------------------------------------------------------------------
    def delete(self, entity: ModelType) -> None:
        """엔티티를 삭제 상태로 표시합니다 — Mark an entity as deleted."""
        self._context.set_as_deleted(entity)
        logger.debug("Marked %s as deleted", self.model.__name__)

    # ------------------------------------------------------------------
    # 페이지네이션 — Pagination
    # ------------------------------------------------------------------
    def paginate(
        self,
        page_index: int,
        page_size: int,
        key_selector: Any | None = None,
        predicate: ColumnElement[bool] | None = None,
        *include_properties: InstrumentedAttribute,
    ) -> PaginatedList:
        """오름차순 정렬된 페이지를 조회합니다.

        Retrieve one page ordered ascending by ``key_selector``
        (default: the identifier attribute), optionally filtered by ``predicate``.

        Args:
            page_index: 페이지 번호, 1부터 시작 (Page number, 1-based)
            page_size: 페이지당 항목 수 (Number of entities per page)
            key_selector: 정렬 기준 속성 (Attribute to order by)
            predicate: 필터 조건식 (Optional filter criterion)
            *include_properties: 즉시 로딩할 관계 속성 (Relationship attributes to eager-load)

        Returns:
            PaginatedList: 페이지 항목과 전체 개수 (Page items and total count)
        """
        return self._paginate(
            page_index,
            page_size,
            key_selector,
            predicate,
            OrderByType.ASCENDING,
            *include_properties,
        )

    def paginate_descending(
        self,
        page_index: int,
        page_size: int,
        key_selector: Any | None = None,
        predicate: ColumnElement[bool] | None = None,
        *include_properties: InstrumentedAttribute,
    ) -> PaginatedList:
        """내림차순 정렬된 페이지를 조회합니다.

        Same as ``paginate`` but ordered descending by ``key_selector``.
        """
        return self._paginate(
            page_index,
            page_size,
            key_selector,
            predicate,
            OrderByType.DESCENDING,
            *include_properties,
        )

    # ------------------------------------------------------------------
    # 커밋 — Commit
    # ------------------------------------------------------------------
    def save(self) -> int:
        """대기 중인 변경 사항을 커밋합니다.

        Commit pending creates, updates and deletes through the context.

        Returns:
            int: 영향받은 엔티티 수 (Number of affected entities)

        Raises:
            ValidationFailureError: 컨텍스트가 필드 검증 실패를 보고할 때
                                    (When the context reports field validation failures)
        """
        try:
            return self._context.save_changes()
        except EntityValidationError as exc:
            # 개별 검증 실패를 하나의 메시지로 집계 — Aggregate failures into one message
            raise ValidationFailureError(exc.errors) from exc

    # ------------------------------------------------------------------
    # 헬퍼 — Helpers
    # ------------------------------------------------------------------
    def _paginate(
        self,
        page_index: int,
        page_size: int,
        key_selector: Any | None,
        predicate: ColumnElement[bool] | None,
        order_by_type: OrderByType,
        *include_properties: InstrumentedAttribute,
    ) -> PaginatedList:
        identifier = self._property(self.id_attribute)
        if key_selector is None:
            key_selector = identifier
        # 같은 키 값의 행은 식별자로 순서 고정 — Ties on the key are broken by the identifier
        keys = [key_selector] if key_selector is identifier else [key_selector, identifier]

        query = self.get_all_including(*include_properties)

        # 필터 후 정렬 — Filter, then order
        if predicate is not None:
            query = query.filter(predicate)
        query = query.order_by(
            *(key.asc() if order_by_type is OrderByType.ASCENDING else key.desc() for key in keys)
        )

        page: PaginatedList = to_paginated_list(query, page_index, page_size)
        logger.debug(
            "Paginated %s: page %d, %d of %d",
            self.model.__name__,
            page_index,
            len(page.items),
            page.total_count,
        )
        return page

    def _property(self, property_name: str) -> InstrumentedAttribute:
        attribute = getattr(self.model, property_name, None)
        if not isinstance(attribute, InstrumentedAttribute):
            raise ValueError("Property expected")
        return attribute

    def _filter(self, query: "Query[ModelType]", property_name: str, value: Any) -> "Query[ModelType]":
        # 동적 동등 비교 조건 생성 — Build the equality criterion dynamically
        criterion = self._property(property_name) == value
        return query.filter(criterion)
