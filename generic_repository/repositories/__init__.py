"""레포지토리 패키지 — 데이터 접근 계층.

Repository package — Data-access layer.
Contains the generic EntityRepository that forwards CRUD and pagination
to a persistence context. Domain repositories extend it and add
entity-specific queries.
"""

from generic_repository.repositories.base import EntityRepository, OrderByType

__all__ = ["EntityRepository", "OrderByType"]
