"""엔티티 공통 정의 — 식별자를 가진 레코드의 구조적 타입과 믹스인.

Entity definitions shared by every repository-managed model.

Includes:
    - Entity: 비교 가능한 id를 노출하는 구조적 타입 (Structural type exposing a comparable id)
    - EntityMixin: 자동 증가 정수 기본키 믹스인 (Auto-increment integer primary key mixin)
"""

from typing import Any, Protocol, runtime_checkable

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column


@runtime_checkable
class Entity(Protocol):
    """식별자를 가진 레코드 — Any record exposing a comparable identifier.

    Identifier uniqueness is enforced by the database, not by the repository.
    """

    id: Any


class EntityMixin:
    """정수 기본키를 제공하는 모델 믹스인.

    Mixin giving a declarative model an auto-increment integer ``id``.

    Usage:
        class Person(EntityMixin, Base):
            __tablename__ = "people"
    """

    # 고유 식별자 — Unique identifier (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
